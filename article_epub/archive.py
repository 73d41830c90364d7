import os
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from .appendix import generate_appendix
from .config import (
    APPENDIX_CONTENT_URL,
    MERGED_APPENDIX_TITLE,
    MERGED_CONTENT_URL,
    MERGED_TABLE_HEADER,
    STANDALONE_APPENDIX_TITLE,
    STANDALONE_CONTENT_URL,
    STANDALONE_TABLE_HEADER,
    AppConfig,
)
from .container import EpubContent, EpubWriter, WriterFactory, create_writer
from .errors import ContainerInitError, ContentSerializationError, EpubGenerationError, FinalizeError, MetadataError, MissingImageResource
from .models import Article, ErrorRecord, ResultsTable
from .toc import header_level_toc
from .utils import ensure_dir, epub_filename_from_title, escape_xml_text, guess_media_type
from .xhtml import serialize_to_xhtml

SerializeFn = Callable[[BeautifulSoup], bytes]
# (name inside the archive, bytes, media type)
ImageResource = Tuple[str, bytes, str]


@dataclass
class PreparedArticle:
    article: Article
    content: EpubContent
    resources: List[ImageResource] = field(default_factory=list)


@dataclass
class ArticleOutcome:
    article: Article
    error: Optional[EpubGenerationError] = None
    # Whatever the step produced: the output path or the writer it was handed
    result: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _noop_log(_: str) -> None:
    return None


def _noop_progress(_: float, __: str) -> None:
    return None


class ArchiveAssembler:
    def __init__(
        self,
        config: AppConfig,
        results_table: ResultsTable,
        log_fn: Callable[[str], None] = _noop_log,
        progress_fn: Callable[[float, str], None] = _noop_progress,
        serialize_fn: SerializeFn = serialize_to_xhtml,
        writer_factory: WriterFactory = create_writer,
    ):
        self.config = config
        self.results_table = results_table
        self.log_fn = log_fn
        self.progress_fn = _noop_progress if config.disable_progress else progress_fn
        self.serialize_fn = serialize_fn
        self.writer_factory = writer_factory

    # ---- per-article steps ----
    def create_writer(self) -> EpubWriter:
        try:
            return self.writer_factory(self.config.language)
        except ContainerInitError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ContainerInitError(f"Unable to create epub container: {exc}") from exc

    def serialize(self, article: Article) -> bytes:
        try:
            return self.serialize_fn(article.document)
        except ContentSerializationError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ContentSerializationError(f"Unable to serialize to xhtml: {exc}") from exc

    def load_images(self, article: Article) -> List[ImageResource]:
        resources: List[ImageResource] = []
        for file_name, media_type in article.images:
            path = os.path.join(self.config.resource_dir, file_name)
            try:
                with open(path, "rb") as img_file:
                    data = img_file.read()
            except OSError as exc:
                raise MissingImageResource(f"Can't read image {file_name}: {exc}") from exc
            name = os.path.basename(file_name)
            resources.append((name, data, guess_media_type(name, media_type)))
        return resources

    def prepare_article(self, article: Article, content_url: str) -> PreparedArticle:
        """
        Build everything an article contributes to an archive without touching a writer.

        Anchors go into the tree before it is serialized so the table of
        contents targets exist in the content. Images are read up front so a
        missing one drops the whole article rather than part of it.
        """
        toc = header_level_toc(content_url, article.document)
        body = self.serialize(article)
        content = EpubContent(content_url, body, escape_xml_text(article.metadata.title))
        for node in toc:
            content.child(node)
        return PreparedArticle(article, content, self.load_images(article))

    def add_prepared(self, epub: EpubWriter, prepared: PreparedArticle) -> EpubWriter:
        epub.add_content(prepared.content)
        self.log_fn(f"Adding images for {prepared.article.url}")
        for name, data, media_type in prepared.resources:
            epub.add_resource(name, data, media_type)
        return epub

    def finalize(self, epub: EpubWriter, path: str) -> None:
        try:
            ensure_dir(os.path.dirname(path) or ".")
            with open(path, "wb") as out_file:
                epub.generate(out_file)
        except (OSError, ValueError, FinalizeError) as exc:
            if os.path.exists(path):
                os.remove(path)
            if isinstance(exc, FinalizeError):
                raise
            raise FinalizeError(f"Unable to write {path}: {exc}") from exc

    def run_article(self, article: Article, step: Callable[..., Any], *args) -> ArticleOutcome:
        try:
            result = step(*args)
        except EpubGenerationError as exc:
            exc.set_article_source(article.url)
            self.log_fn(f"Failed {article.url}: {exc.message}")
            return ArticleOutcome(article, error=exc)
        return ArticleOutcome(article, result=result)

    def _advance(self, done: int, total: int, text: str) -> None:
        self.progress_fn(done / total if total else 1.0, text)

    # ---- merged mode ----
    def _add_merged_article(self, epub: EpubWriter, idx: int, article: Article, name: str) -> EpubWriter:
        prepared = self.prepare_article(article, MERGED_CONTENT_URL.format(idx=idx))
        epub.metadata("title", escape_xml_text(name))
        return self.add_prepared(epub, prepared)

    def generate_merged(self, name: str, articles: Sequence[Article]) -> List[ErrorRecord]:
        errors: List[ErrorRecord] = []
        self.results_table.set_header(MERGED_TABLE_HEADER)

        try:
            epub = self.create_writer()
            epub.metadata("title", escape_xml_text(name))
        except (ContainerInitError, MetadataError) as exc:
            errors.append(exc.set_article_source(name).to_record())
            return errors
        self.log_fn(f"Creating {name}")
        epub.inline_toc()

        succeeded: List[Article] = []
        for idx, article in enumerate(articles):
            outcome = self.run_article(article, self._add_merged_article, epub, idx, article, name)
            if outcome.ok:
                epub = outcome.result
                succeeded.append(article)
            else:
                errors.append(outcome.error.to_record())
            self._advance(idx + 1, len(articles), "Generating epubs")

        output_path = os.path.join(self.config.output_dir, name)
        try:
            epub.add_content(
                EpubContent(
                    APPENDIX_CONTENT_URL,
                    generate_appendix(articles).encode("utf-8"),
                    escape_xml_text(MERGED_APPENDIX_TITLE),
                )
            )
            self.finalize(epub, output_path)
        except EpubGenerationError as exc:
            errors.append(exc.set_article_source(name).to_record())
            return errors

        for article in succeeded:
            self.results_table.add_row(article.metadata.title)
        self.progress_fn(1.0, "Generated epub")
        self.log_fn(f"Created {output_path}")
        return errors

    # ---- standalone mode ----
    def _write_standalone(self, article: Article) -> str:
        epub = self.create_writer()
        file_name = epub_filename_from_title(article.metadata.title)
        self.log_fn(f"Creating {file_name}")
        prepared = self.prepare_article(article, STANDALONE_CONTENT_URL)

        if article.metadata.byline:
            epub.metadata("author", escape_xml_text(article.metadata.byline))
        epub.metadata("title", escape_xml_text(article.metadata.title))
        epub = self.add_prepared(epub, prepared)
        epub.add_content(
            EpubContent(
                APPENDIX_CONTENT_URL,
                generate_appendix([article]).encode("utf-8"),
                escape_xml_text(STANDALONE_APPENDIX_TITLE),
            )
        )

        output_path = os.path.join(self.config.output_dir, file_name)
        self.finalize(epub, output_path)
        self.log_fn(f"Created {output_path}")
        return output_path

    def generate_standalone(self, articles: Sequence[Article]) -> List[ErrorRecord]:
        errors: List[ErrorRecord] = []
        self.results_table.set_header(STANDALONE_TABLE_HEADER)

        for idx, article in enumerate(articles):
            outcome = self.run_article(article, self._write_standalone, article)
            if outcome.ok:
                self.results_table.add_row(article.metadata.title)
            else:
                errors.append(outcome.error.to_record())
            self._advance(idx + 1, len(articles), "Generating epubs")

        self.progress_fn(1.0, "Generated epubs")
        return errors
