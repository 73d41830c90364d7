from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup

# (local file name inside the resource store, recorded MIME type)
ImageRef = Tuple[str, Optional[str]]


@dataclass
class ArticleMetadata:
    title: str
    byline: Optional[str] = None


@dataclass
class Article:
    url: str
    metadata: ArticleMetadata
    document: BeautifulSoup
    images: List[ImageRef] = field(default_factory=list)


class HeadingLevel(IntEnum):
    H1 = 1
    H2 = 2
    H3 = 3
    H4 = 4


@dataclass
class Heading:
    level: HeadingLevel
    text: str
    anchor_id: str


@dataclass
class TocNode:
    label: str
    target: str
    # Level of the heading this entry was built from
    level: int
    children: List["TocNode"] = field(default_factory=list)


class ErrorKind(str, Enum):
    CONTAINER_INIT = "ContainerInitError"
    CONTENT_SERIALIZATION = "ContentSerializationError"
    METADATA = "MetadataError"
    MISSING_IMAGE_RESOURCE = "MissingImageResource"
    FINALIZE = "FinalizeError"


@dataclass
class ErrorRecord:
    source: str
    kind: ErrorKind
    message: str = ""


@dataclass
class ResultsTable:
    header: Optional[str] = None
    rows: List[str] = field(default_factory=list)

    def set_header(self, header: str) -> None:
        self.header = header

    def add_row(self, row: str) -> None:
        self.rows.append(row)
