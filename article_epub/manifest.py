import json
import os
from typing import List

from bs4 import BeautifulSoup

from .models import Article, ArticleMetadata, ImageRef


def _parse_images(raw: object, url: str) -> List[ImageRef]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"images for {url} must be a list")
    images: List[ImageRef] = []
    for entry in raw:
        if isinstance(entry, str):
            images.append((entry, None))
        elif isinstance(entry, list) and 1 <= len(entry) <= 2:
            media_type = entry[1] if len(entry) == 2 else None
            images.append((str(entry[0]), media_type))
        else:
            raise ValueError(f"Invalid image entry for {url}: {entry!r}")
    return images


def load_manifest(path: str) -> List[Article]:
    """
    Load already-extracted articles from a JSON manifest.

    The manifest is a list of objects with "url", "title", optional "byline",
    "html" (path of the cleaned article, relative to the manifest) and
    optional "images" ([file, mime] pairs in the resource directory).
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            entries = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Manifest {path} is not valid JSON: {exc}") from exc
    if not isinstance(entries, list):
        raise ValueError(f"Manifest {path} must contain a list of articles")

    base_dir = os.path.dirname(os.path.abspath(path))
    articles: List[Article] = []
    for entry in entries:
        if not isinstance(entry, dict) or "url" not in entry or "html" not in entry:
            raise ValueError(f"Manifest entries need at least url and html: {entry!r}")
        url = entry["url"]
        html_path = os.path.join(base_dir, entry["html"])
        with open(html_path, "r", encoding="utf-8") as f:
            document = BeautifulSoup(f.read(), "html.parser")
        articles.append(
            Article(
                url=url,
                metadata=ArticleMetadata(title=entry.get("title") or "", byline=entry.get("byline")),
                document=document,
                images=_parse_images(entry.get("images"), url),
            )
        )
    return articles
