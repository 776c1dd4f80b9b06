from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from docgate.config.models import BYTES_PER_MB

from .errors import ErrorKind


# -----------------------------
# Ingest Results
# -----------------------------
@dataclass(frozen=True)
class StorageResult:
    """Outcome of a single ingest call.

    Exactly one payload shape is populated: ``stored_path``/``stored_name``
    on success, ``error_message``/``error_kind`` on failure. Use ``ok()`` and
    ``fail()`` rather than the constructor.
    """

    success: bool
    """Whether the payload was accepted and written."""

    stored_path: Optional[Path] = None
    """Absolute path of the written file."""

    stored_name: Optional[str] = None
    """Basename of the written file."""

    error_message: Optional[str] = None
    """Human-readable, categorized reason for rejection."""

    error_kind: Optional[ErrorKind] = None
    """Category of the failure."""

    def __post_init__(self) -> None:
        success_fields = (self.stored_path, self.stored_name)
        failure_fields = (self.error_message, self.error_kind)
        if self.success:
            if any(value is None for value in success_fields) or any(
                value is not None for value in failure_fields
            ):
                raise ValueError("successful StorageResult requires only stored_path and stored_name")
        elif any(value is None for value in failure_fields) or any(
            value is not None for value in success_fields
        ):
            raise ValueError("failed StorageResult requires only error_message and error_kind")

    @classmethod
    def ok(cls, stored_path: Path) -> "StorageResult":
        return cls(success=True, stored_path=stored_path, stored_name=stored_path.name)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "StorageResult":
        return cls(success=False, error_message=message, error_kind=kind)

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase wire form consumed downstream."""
        if self.success:
            return {
                "success": True,
                "storedPath": str(self.stored_path),
                "storedName": self.stored_name,
            }
        return {"success": False, "errorMessage": self.error_message}


# -----------------------------
# Inventory
# -----------------------------
@dataclass(frozen=True)
class StorageStats:
    """Aggregate view of the scratch directory."""

    file_count: int = 0
    """Regular files directly inside the scratch directory."""

    total_size_bytes: int = 0
    """Sum of those files' sizes."""

    oldest_file_age_seconds: float = 0.0
    """Age of the least recently modified file."""

    @property
    def total_size_mb(self) -> float:
        """Total size in megabytes (1 MB = 1,048,576 bytes)."""
        return self.total_size_bytes / BYTES_PER_MB

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileCount": self.file_count,
            "totalSizeMB": self.total_size_mb,
            "oldestFileAgeSeconds": self.oldest_file_age_seconds,
        }


@dataclass(frozen=True)
class CleanupReport:
    """Result of an on-demand expiry sweep."""

    deleted: List[Path] = field(default_factory=list)
    """Paths removed by the sweep."""

    skipped: int = 0
    """Entries that vanished before they could be examined or removed."""

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)
