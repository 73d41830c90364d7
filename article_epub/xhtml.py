from bs4 import BeautifulSoup

from .config import XHTML_TEMPLATE
from .errors import ContentSerializationError


def serialize_to_xhtml(document: BeautifulSoup) -> bytes:
    """Serialize the body of an article tree as a UTF-8 XHTML document."""
    try:
        body = document.body or document
        inner = body.decode_contents(formatter="minimal")
        return XHTML_TEMPLATE.format(body=inner).encode("utf-8")
    except (AttributeError, TypeError, ValueError) as exc:
        raise ContentSerializationError(f"Unable to serialize to xhtml: {exc}") from exc
