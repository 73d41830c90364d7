import tempfile
from dataclasses import dataclass, field
from typing import Optional

# Order matters: "&" must be replaced first so generated entities are not escaped again
XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)

HEADING_TAGS = ["h1", "h2", "h3", "h4"]

# Standalone archives hold a single document, so its name is fixed
STANDALONE_CONTENT_URL = "index.xhtml"
MERGED_CONTENT_URL = "article_{idx}.xhtml"
APPENDIX_CONTENT_URL = "appendix.xhtml"

MERGED_APPENDIX_TITLE = "Article Sources"
STANDALONE_APPENDIX_TITLE = "Article Source"

MERGED_TABLE_HEADER = "Table of Contents"
STANDALONE_TABLE_HEADER = "Downloaded articles"

DEFAULT_MEDIA_TYPE = "application/octet-stream"

XHTML_TEMPLATE = """<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
    <head>
    </head>
    <body>
        {body}
    </body>
</html>"""


@dataclass
class AppConfig:
    # Presence of a merged name selects merged mode
    merged: Optional[str] = None
    disable_progress: bool = False
    output_dir: str = "."
    # Filled by the download phase before generation starts
    resource_dir: str = field(default_factory=tempfile.gettempdir)
    language: str = "en"

    @property
    def is_merged(self) -> bool:
        return self.merged is not None
