from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from .headings import collect_headings, generate_header_ids
from .models import Heading, TocNode
from .utils import escape_xml_text


def _attach(root: TocNode, node: TocNode) -> None:
    # Walk down the most recent branch while the new heading is deeper than its tip
    parent = root
    while parent.children and node.level > parent.children[-1].level:
        parent = parent.children[-1]
    parent.children.append(node)


def build_toc(content_url: str, headings: Iterable[Heading]) -> List[TocNode]:
    """
    Turn headings in document order into a forest of TocNode.

    A heading at or above the level of the last top-level entry starts a new
    top-level entry. A deeper heading goes under the latest top-level entry,
    nested below the last child whose level it exceeds. Only top-level entries
    move the remembered level.
    """
    roots: List[TocNode] = []
    last_level: Optional[int] = None

    for heading in headings:
        node = TocNode(
            label=escape_xml_text(heading.text),
            target=f"{content_url}#{heading.anchor_id}",
            level=int(heading.level),
        )
        if last_level is None or node.level <= last_level:
            last_level = node.level
            roots.append(node)
        else:
            _attach(roots[-1], node)
    return roots


def header_level_toc(content_url: str, document: BeautifulSoup) -> List[TocNode]:
    """Assign heading anchors in the document and build its table of contents."""
    generate_header_ids(document)
    return build_toc(content_url, collect_headings(document))
