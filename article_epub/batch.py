from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .archive import ArchiveAssembler, SerializeFn
from .config import AppConfig
from .container import WriterFactory, create_writer
from .models import Article, ErrorRecord, ResultsTable
from .xhtml import serialize_to_xhtml


@dataclass
class BatchResult:
    total: int
    results_table: ResultsTable
    errors: List[ErrorRecord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class BatchRunner:
    """
    Runs archive generation for a whole batch of extracted articles.

    Articles are handled one at a time in input order. A failing article is
    recorded against its URL and the batch moves on; only a merged archive
    that cannot be created or written stops early.
    """

    def __init__(
        self,
        config: AppConfig,
        log_fn: Callable[[str], None] = lambda *_: None,
        progress_fn: Callable[[float, str], None] = lambda *_: None,
        serialize_fn: SerializeFn = serialize_to_xhtml,
        writer_factory: WriterFactory = create_writer,
    ):
        self.config = config
        self.log_fn = log_fn
        self.progress_fn = progress_fn
        self.serialize_fn = serialize_fn
        self.writer_factory = writer_factory
        self.errors: List[ErrorRecord] = []

    def run(self, articles: Sequence[Article], results_table: Optional[ResultsTable] = None) -> BatchResult:
        table = results_table if results_table is not None else ResultsTable()
        assembler = ArchiveAssembler(
            self.config,
            table,
            log_fn=self.log_fn,
            progress_fn=self.progress_fn,
            serialize_fn=self.serialize_fn,
            writer_factory=self.writer_factory,
        )
        if self.config.is_merged:
            self.errors.extend(assembler.generate_merged(self.config.merged, articles))
        else:
            self.errors.extend(assembler.generate_standalone(articles))
        return BatchResult(total=len(articles), results_table=table, errors=list(self.errors))
