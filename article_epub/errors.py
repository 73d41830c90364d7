from typing import Optional

from .models import ErrorKind, ErrorRecord


class EpubGenerationError(RuntimeError):
    """Base error for archive generation; carries the kind and the source it failed on."""

    kind: ErrorKind

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source

    def set_article_source(self, source: str) -> "EpubGenerationError":
        self.source = source
        return self

    def to_record(self) -> ErrorRecord:
        return ErrorRecord(source=self.source or "", kind=self.kind, message=self.message)


class ContainerInitError(EpubGenerationError):
    kind = ErrorKind.CONTAINER_INIT


class ContentSerializationError(EpubGenerationError):
    kind = ErrorKind.CONTENT_SERIALIZATION


class MetadataError(EpubGenerationError):
    kind = ErrorKind.METADATA


class MissingImageResource(EpubGenerationError):
    kind = ErrorKind.MISSING_IMAGE_RESOURCE


class FinalizeError(EpubGenerationError):
    kind = ErrorKind.FINALIZE
