import uuid
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Dict, List, Union

from ebooklib import epub

from .errors import ContainerInitError, FinalizeError, MetadataError
from .models import TocNode
from .utils import unescape_xml_text

TocEntry = Union[epub.Link, tuple]


@dataclass
class EpubContent:
    url: str
    body: bytes
    # Markup-escaped, like every text handed to the writer
    title: str
    children: List[TocNode] = field(default_factory=list)

    def child(self, node: TocNode) -> "EpubContent":
        self.children.append(node)
        return self


class EpubWriter:
    """
    Thin sink over an ebooklib book: metadata, content items with their
    table of contents, binary resources and a final write to a stream.

    Text arrives markup-escaped. ebooklib escapes on its own when it
    serializes, so the writer turns it back into plain text first.
    """

    def __init__(self, language: str = "en"):
        try:
            self.book = epub.EpubBook()
            self.book.set_identifier(str(uuid.uuid4()))
            self.book.set_language(language)
        except Exception as exc:  # noqa: BLE001
            raise ContainerInitError(f"Unable to create epub container: {exc}") from exc
        self._toc: List[TocEntry] = []
        self._spine: List[epub.EpubHtml] = []
        self._inline_toc = False
        self._nav_ids = 0
        self._resources: Dict[str, epub.EpubItem] = {}

    def inline_toc(self) -> None:
        """Show the navigation page as the first page of the book."""
        self._inline_toc = True

    def metadata(self, key: str, value: str) -> None:
        text = unescape_xml_text(value)
        if key == "title":
            self.book.title = text
            self.book.set_unique_metadata("DC", "title", text)
        elif key == "author":
            self.book.add_author(text)
        elif key == "lang":
            self.book.set_language(text)
        else:
            raise MetadataError(f"Invalid metadata key: {key}")

    def add_content(self, content: EpubContent) -> None:
        title = unescape_xml_text(content.title)
        item = epub.EpubHtml(
            uid=f"content_{len(self._spine)}",
            file_name=content.url,
            title=title,
        )
        item.content = content.body
        self.book.add_item(item)
        self._spine.append(item)
        if content.children:
            self._toc.append(
                (epub.Section(title, content.url), [self._toc_entry(node) for node in content.children])
            )
        else:
            self._toc.append(epub.Link(content.url, title, self._next_nav_id()))

    def add_resource(self, name: str, data: bytes, media_type: str) -> None:
        # Images shared between articles are stored once
        if name in self._resources:
            return
        item = epub.EpubItem(
            uid=f"resource_{len(self._resources)}",
            file_name=name,
            media_type=media_type,
            content=data,
        )
        self._resources[name] = item
        self.book.add_item(item)

    def generate(self, stream: BinaryIO) -> None:
        try:
            self.book.toc = self._toc
            self.book.add_item(epub.EpubNcx())
            self.book.add_item(epub.EpubNav())
            self.book.spine = (["nav"] if self._inline_toc else []) + self._spine
            writer = epub.EpubWriter(stream, self.book, {"epub3_pages": False})
            writer.process()
            writer.write()
        except Exception as exc:  # noqa: BLE001
            raise FinalizeError(f"Unable to write epub: {exc}") from exc

    def _next_nav_id(self) -> str:
        self._nav_ids += 1
        return f"nav_{self._nav_ids}"

    def _toc_entry(self, node: TocNode) -> TocEntry:
        label = unescape_xml_text(node.label)
        if not node.children:
            return epub.Link(node.target, label, self._next_nav_id())
        return (epub.Section(label, node.target), [self._toc_entry(child) for child in node.children])


# Takes the book language
WriterFactory = Callable[[str], EpubWriter]


def create_writer(language: str = "en") -> EpubWriter:
    return EpubWriter(language)
