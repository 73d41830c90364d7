from typing import Iterable

from .config import XHTML_TEMPLATE
from .models import Article
from .utils import escape_xml_text


def generate_appendix(articles: Iterable[Article]) -> str:
    """Build the page linking back to where each article came from."""
    link_tags = []
    for article in articles:
        article_name = article.metadata.title or article.url
        link_tags.append(
            f'<a href="{escape_xml_text(article.url)}">{escape_xml_text(article_name)}</a><br></br>'
        )
    body = "<h2>Appendix</h2><h3>Article sources</h3>\n        " + "".join(link_tags)
    return XHTML_TEMPLATE.format(body=body)
