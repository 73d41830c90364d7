import hashlib
from typing import List

from bs4 import BeautifulSoup, Tag

from .config import HEADING_TAGS
from .models import Heading, HeadingLevel


def heading_level(tag_name: str) -> HeadingLevel:
    name = tag_name.lower()
    if name == "h1":
        return HeadingLevel.H1
    if name == "h2":
        return HeadingLevel.H2
    if name == "h3":
        return HeadingLevel.H3
    if name == "h4":
        return HeadingLevel.H4
    raise ValueError(f"Not a table of contents heading: {tag_name}")


def heading_anchor_id(text: str) -> str:
    # Hex digests may start with a digit, which is not a valid id for selectors
    return "_" + hashlib.md5(text.encode("utf-8")).hexdigest()


def generate_header_ids(document: BeautifulSoup) -> None:
    """
    Give every h1-h4 without an id attribute an id derived from the hash of its text.

    Headings that already carry an id are left as they are. The extractor drops
    headings without text, so every heading here has something to hash.
    Headings with identical text get identical ids.
    """
    for heading in document.find_all(HEADING_TAGS):
        if heading.has_attr("id"):
            continue
        heading["id"] = heading_anchor_id(heading.get_text())


def collect_headings(document: BeautifulSoup) -> List[Heading]:
    headings: List[Heading] = []
    for tag in document.find_all(HEADING_TAGS):
        if not isinstance(tag, Tag):
            continue
        headings.append(
            Heading(
                level=heading_level(tag.name),
                text=tag.get_text(),
                anchor_id=str(tag.get("id", "")),
            )
        )
    return headings
