"""
Document ingestor configuration model.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Union

from docgate.paths import resolve_scratch_path

from .constants import (
    BYTES_PER_MB,
    DEFAULT_ACCEPTED_FORMATS,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_RETENTION_SECONDS,
)


def normalize_format(value: object) -> str:
    """Normalize an extension to lowercase without a leading dot.

    ``".JPG"``, ``"jpg"`` and ``" Jpg "`` all become ``"jpg"``; ``None``
    becomes the empty string.
    """
    if value is None:
        return ""
    ext = str(value).strip()
    if ext.startswith("."):
        ext = ext[1:]
    return ext.lower()


@dataclass(frozen=True)
class IngestorConfig:
    """
    Configuration for a ``DocumentIngestor``.

    Immutable once built. Paths and formats are normalized in
    ``__post_init__``; call ``validate()`` to check value ranges.
    """

    scratch_path: Path
    """Directory accepted files are written to. Resolved to an absolute path."""

    max_file_size_bytes: int
    """Inclusive upper bound on accepted payload size."""

    accepted_formats: FrozenSet[str] = DEFAULT_ACCEPTED_FORMATS
    """Lowercase extensions without a leading dot, e.g. ``"jpg"``."""

    retention_seconds: int = DEFAULT_RETENTION_SECONDS
    """Advisory age threshold for ``cleanup_expired_files``. 0 = expire immediately."""

    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    """Timeout applied to remote downloads."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "scratch_path", resolve_scratch_path(self.scratch_path))
        formats = self.accepted_formats
        if isinstance(formats, str):
            formats = formats.split(",")
        normalized = frozenset(
            ext for ext in (normalize_format(f) for f in formats) if ext
        )
        object.__setattr__(self, "accepted_formats", normalized)

    @classmethod
    def from_mb(
        cls,
        scratch_path: Union[str, Path],
        max_file_size_mb: float,
        accepted_formats: Optional[Iterable[str]] = None,
        retention_seconds: int = DEFAULT_RETENTION_SECONDS,
        fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    ) -> "IngestorConfig":
        """Build a config with the size cap given in megabytes (1 MB = 1,048,576 bytes)."""
        return cls(
            scratch_path=Path(scratch_path),
            max_file_size_bytes=int(max_file_size_mb * BYTES_PER_MB),
            accepted_formats=frozenset(accepted_formats) if accepted_formats is not None else DEFAULT_ACCEPTED_FORMATS,
            retention_seconds=retention_seconds,
            fetch_timeout_seconds=fetch_timeout_seconds,
        )

    @property
    def max_file_size_mb(self) -> float:
        """Size cap in megabytes."""
        return self.max_file_size_bytes / BYTES_PER_MB

    def accepts(self, extension: str) -> bool:
        """Return True if *extension* (any case, dot optional) is accepted."""
        ext = normalize_format(extension)
        return bool(ext) and ext in self.accepted_formats

    def validate(self) -> None:
        """Validate ingestor configuration."""
        if self.max_file_size_bytes < 1:
            raise ValueError(
                f"max_file_size_bytes must be positive, got {self.max_file_size_bytes}"
            )

        if not self.accepted_formats:
            raise ValueError("At least one accepted format is required")

        invalid = sorted(ext for ext in self.accepted_formats if not ext.isalnum() or not ext.isascii())
        if invalid:
            raise ValueError(f"accepted_formats must be alphanumeric extensions, got {invalid}")

        if self.retention_seconds < 0:
            raise ValueError(
                f"retention_seconds must be non-negative, got {self.retention_seconds}"
            )

        if self.fetch_timeout_seconds <= 0:
            raise ValueError(
                f"fetch_timeout_seconds must be positive, got {self.fetch_timeout_seconds}"
            )
