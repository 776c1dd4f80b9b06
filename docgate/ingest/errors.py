"""
Error taxonomy for document ingestion.

Every failure the ingestor can report carries an ``ErrorKind`` so callers
can branch on the category without parsing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from docgate.config.models import BYTES_PER_MB


class ErrorKind(str, Enum):
    SIZE_EXCEEDED = "size_exceeded"
    UNSUPPORTED_FORMAT = "unsupported_format"
    FETCH_TIMEOUT = "fetch_timeout"
    FETCH_FAILED = "fetch_failed"
    IO_FAILURE = "io_failure"


class IngestError(RuntimeError):
    """Base class for categorized ingestion failures."""

    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SizeExceededError(IngestError):
    """Payload is larger than the configured cap."""

    kind = ErrorKind.SIZE_EXCEEDED

    def __init__(self, size_bytes: Optional[int], max_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        limit_mb = max_bytes / BYTES_PER_MB
        super().__init__(
            f"File exceeds the maximum allowed size ({limit_mb:.2f}MB, {max_bytes} bytes)"
        )


class UnsupportedFormatError(IngestError):
    """Resolved extension is not in the accepted set."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, extension: str, accepted: frozenset[str] | set[str]) -> None:
        self.extension = extension
        self.accepted = frozenset(accepted)
        shown = extension or "unknown"
        super().__init__(
            f"Unsupported file format ({shown}). "
            f"Allowed formats: {', '.join(sorted(self.accepted))}"
        )


class InvalidIdentityError(IngestError):
    """Requester or message identity cannot be used in a file name."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid identity for {field}: {value!r}")


class FetchTimeoutError(IngestError):
    """Remote download exceeded its timeout."""

    kind = ErrorKind.FETCH_TIMEOUT

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            f"Timed out downloading the file after {timeout:g}s. The file may be too large."
        )


class FetchFailedError(IngestError):
    """Any other transport-level download failure."""

    kind = ErrorKind.FETCH_FAILED

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Download failed: {detail}")


class StorageIOError(IngestError):
    """Local filesystem failure while storing, listing or removing files."""

    kind = ErrorKind.IO_FAILURE

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Storage error: {detail}")


class ScratchDirectoryError(StorageIOError):
    """The scratch directory could not be created."""


class DeleteFailedError(StorageIOError):
    """A file exists but could not be removed."""
