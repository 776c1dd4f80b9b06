from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from docgate.logging import format_exception_summary, get_logger

from .errors import DeleteFailedError, ScratchDirectoryError, StorageIOError
from .models import StorageStats

logger = get_logger(__name__)

PART_PREFIX = "."
PART_SUFFIX = ".part"


# -----------------------------
# Directory
# -----------------------------
def ensure_directory(path: Path) -> Path:
    """Create *path* and its parents if missing. Safe to call concurrently."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ScratchDirectoryError(
            f"cannot create scratch directory {path}: {format_exception_summary(exc)}"
        ) from exc
    return path


def is_partial(name: str) -> bool:
    """True for in-flight write files, which are not yet stored files."""
    return name.startswith(PART_PREFIX) and name.endswith(PART_SUFFIX)


# -----------------------------
# Write
# -----------------------------
def write_complete(directory: Path, name: str, data: bytes) -> Path:
    """
    Write *data* to ``directory / name`` so the final name only ever holds complete content.

    Bytes go to a hidden ``.<name>.part`` sibling which is flushed, fsynced
    and then atomically renamed. The partial file is removed on failure.

    Raises:
        StorageIOError: if any step fails.
    """
    ensure_directory(directory)
    target = directory / name
    partial = directory / f"{PART_PREFIX}{name}{PART_SUFFIX}"
    try:
        with open(partial, "xb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(partial, target)
    except OSError as exc:
        try:
            partial.unlink(missing_ok=True)
        except OSError as cleanup_exc:
            logger.warning("Could not remove partial file %s: %s", partial, cleanup_exc)
        raise StorageIOError(
            f"cannot write {name}: {format_exception_summary(exc)}"
        ) from exc
    return target


# -----------------------------
# Delete
# -----------------------------
def remove_file(path: Path) -> bool:
    """
    Remove *path*.

    Returns:
        True if a file was removed, False if it was already gone.

    Raises:
        DeleteFailedError: for any error other than "not found".
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise DeleteFailedError(
            f"cannot delete {path}: {format_exception_summary(exc)}"
        ) from exc
    return True


# -----------------------------
# Listing
# -----------------------------
def iter_stored_files(directory: Path) -> Iterable[Tuple[Path, os.stat_result]]:
    """Yield ``(path, stat)`` for regular files directly inside *directory*.

    A missing directory yields nothing. Entries that vanish between listing
    and stat are skipped, as are symlinks, subdirectories and partial writes.
    """
    try:
        with os.scandir(directory) as listing:
            entries = list(listing)
    except FileNotFoundError:
        return
    except OSError as exc:
        raise StorageIOError(
            f"cannot list {directory}: {format_exception_summary(exc)}"
        ) from exc

    for entry in entries:
        if is_partial(entry.name):
            continue
        try:
            if not entry.is_file(follow_symlinks=False):
                continue
            stat = entry.stat(follow_symlinks=False)
        except FileNotFoundError:
            logger.debug("Entry vanished during listing: %s", entry.name)
            continue
        except OSError as exc:
            raise StorageIOError(
                f"cannot stat {entry.name}: {format_exception_summary(exc)}"
            ) from exc
        yield Path(entry.path), stat


def compute_stats(directory: Path, now: Optional[float] = None) -> StorageStats:
    """Count and size the stored files in *directory*."""
    now = time.time() if now is None else now
    count = 0
    total = 0
    oldest_mtime: Optional[float] = None
    for _path, stat in iter_stored_files(directory):
        count += 1
        total += stat.st_size
        if oldest_mtime is None or stat.st_mtime < oldest_mtime:
            oldest_mtime = stat.st_mtime

    oldest_age = max(0.0, now - oldest_mtime) if oldest_mtime is not None else 0.0
    return StorageStats(
        file_count=count,
        total_size_bytes=total,
        oldest_file_age_seconds=oldest_age,
    )


def find_expired(directory: Path, max_age_seconds: float, now: Optional[float] = None) -> List[Path]:
    """Return stored files whose modification age exceeds *max_age_seconds*.

    With ``max_age_seconds == 0`` every stored file is returned.
    """
    now = time.time() if now is None else now
    expired: List[Path] = []
    for path, stat in iter_stored_files(directory):
        if max_age_seconds <= 0 or now - stat.st_mtime > max_age_seconds:
            expired.append(path)
    return expired
