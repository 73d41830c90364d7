import mimetypes
import os
from typing import Optional

from .config import DEFAULT_MEDIA_TYPE, XML_ESCAPES


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def escape_xml_text(text: str) -> str:
    """Escape the characters that have to be escaped before adding text to the epub."""
    escaped = text
    for key, val in XML_ESCAPES:
        escaped = escaped.replace(key, val)
    return escaped


def unescape_xml_text(text: str) -> str:
    # Reverse order of escape_xml_text so "&amp;lt;" comes back as "&lt;"
    unescaped = text
    for key, val in reversed(XML_ESCAPES):
        unescaped = unescaped.replace(val, key)
    return unescaped


def epub_filename_from_title(title: str) -> str:
    cleaned = title.replace("/", " ").replace("\\", " ")
    if not cleaned.strip():
        cleaned = "article"
    return f"{cleaned}.epub"


def guess_media_type(file_name: str, recorded: Optional[str] = None) -> str:
    if recorded:
        return recorded
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or DEFAULT_MEDIA_TYPE
