"""
Document ingestor: the gate untrusted bytes pass through before downstream processing.

Accepts payloads from a URL or an in-memory buffer, enforces the size cap,
identifies the true type from magic bytes, and writes accepted payloads
under a unique name in the scratch directory. Also inspects and purges that
directory on request. Nothing runs in the background.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlsplit

from docgate.config.models import BYTES_PER_MB, IngestorConfig
from docgate.logging import exception_exc_info, format_exception_summary, get_logger

from .errors import FetchFailedError, IngestError, StorageIOError
from .fetch import Fetcher, HttpFetcher
from .fs import compute_stats, ensure_directory, find_expired, remove_file, write_complete
from .models import CleanupReport, StorageResult, StorageStats
from .naming import Identity, build_stored_name
from .policy import extension_hint_from_url, validate_payload

Payload = Union[bytes, bytearray, memoryview]


def _redact_url(url: str) -> str:
    # File URLs often embed access tokens in the path; log the host only
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<url>"
    if not parts.scheme or not parts.netloc:
        return "<url>"
    return f"{parts.scheme}://{parts.netloc}/..."


class DocumentIngestor:
    """
    Validate, name, persist, enumerate and delete transient files.

    The scratch directory exists by the time the constructor returns, and
    every write re-ensures it. Ingest operations never raise; failures come
    back as ``StorageResult.fail``. All public operations are coroutines and
    run blocking I/O in worker threads.

    Example:
        >>> ingestor = DocumentIngestor(IngestorConfig.from_mb("/tmp/scratch", 10))
        >>> result = asyncio.run(ingestor.store_buffer(data, 42, 7, ".jpg"))
        >>> result.stored_name
        'user_42_msg_7_1718000000000000000_9f2c4a1b.jpg'
    """

    def __init__(
        self,
        config: IngestorConfig,
        logger: Optional[logging.Logger] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        """
        Args:
            config: Validated on construction.
            logger: Logger to report through (defaults to the module logger).
            fetcher: Callable ``url -> bytes`` used by ``download_and_store``.
                Defaults to an ``HttpFetcher`` bounded by the config's
                timeout and size cap.

        Raises:
            ValueError: if the configuration is invalid.
            ScratchDirectoryError: if the scratch directory cannot be created.
        """
        config.validate()
        self.config = config
        self.logger = logger or get_logger(__name__)
        self.fetcher: Fetcher = fetcher or HttpFetcher(
            max_bytes=config.max_file_size_bytes,
            timeout=config.fetch_timeout_seconds,
        )
        ensure_directory(config.scratch_path)
        self.logger.info("Scratch directory ready: %s", config.scratch_path)

    @property
    def scratch_path(self) -> Path:
        return self.config.scratch_path

    async def ensure_scratch_directory(self) -> Path:
        """Create the scratch directory if it is missing. Idempotent."""
        return await asyncio.to_thread(ensure_directory, self.config.scratch_path)

    # -----------------------------
    # Ingest
    # -----------------------------
    async def download_and_store(
        self,
        url: str,
        requester_id: Identity,
        message_id: Identity,
    ) -> StorageResult:
        """
        Fetch *url* and store the body if it passes validation.

        The extension hint comes from the URL's last path segment and is only
        used when the content signature is unknown.
        """
        self.logger.debug("Downloading file from %s", _redact_url(url))
        try:
            hint = extension_hint_from_url(url)
        except ValueError as exc:
            return self._failure(
                FetchFailedError(f"invalid URL: {format_exception_summary(exc)}")
            )

        try:
            data = bytes(await asyncio.to_thread(self.fetcher, url))
        except IngestError as exc:
            return self._failure(exc)
        except Exception as exc:
            self.logger.error(
                "Fetcher raised unexpectedly for %s", _redact_url(url),
                exc_info=exception_exc_info(exc),
            )
            return self._failure(FetchFailedError(format_exception_summary(exc)))

        return await self._store(data, requester_id, message_id, hint)

    async def store_buffer(
        self,
        data: Payload,
        requester_id: Identity,
        message_id: Identity,
        extension_hint: Optional[str] = None,
    ) -> StorageResult:
        """Validate and store bytes the caller already holds.

        *extension_hint* may be given with or without a leading dot and in
        any case (``".JPG"``, ``"jpg"``).
        """
        return await self._store(bytes(data), requester_id, message_id, extension_hint)

    async def _store(
        self,
        data: bytes,
        requester_id: Identity,
        message_id: Identity,
        hint: Optional[str],
    ) -> StorageResult:
        try:
            resolved = validate_payload(data, hint, self.config)
            name = build_stored_name(requester_id, message_id, resolved.extension)
            path = await asyncio.to_thread(
                write_complete, self.config.scratch_path, name, data
            )
        except IngestError as exc:
            return self._failure(exc)
        except OSError as exc:
            return self._failure(StorageIOError(format_exception_summary(exc)))

        self.logger.info(
            "File stored: %s (%.2fMB%s)",
            name,
            len(data) / BYTES_PER_MB,
            ", detected" if resolved.detected else ", by hint",
        )
        return StorageResult.ok(path)

    def _failure(self, exc: IngestError) -> StorageResult:
        if isinstance(exc, StorageIOError):
            self.logger.error("Ingest failed: %s", exc.message)
        else:
            self.logger.warning("Ingest rejected: %s", exc.message)
        return StorageResult.fail(exc.kind, exc.message)

    # -----------------------------
    # Lifecycle
    # -----------------------------
    async def delete_file(self, path: Union[str, Path]) -> bool:
        """
        Delete a stored file.

        Returns:
            True if removed, False if it did not exist (not an error).

        Raises:
            DeleteFailedError: on any other filesystem error.
        """
        target = Path(path)
        removed = await asyncio.to_thread(remove_file, target)
        if removed:
            self.logger.info("File deleted: %s", target.name)
        else:
            self.logger.debug("Delete skipped, already gone: %s", target.name)
        return removed

    async def get_storage_stats(self) -> StorageStats:
        """Count and size the files in the scratch directory. Missing directory gives zeros."""
        return await asyncio.to_thread(compute_stats, self.config.scratch_path)

    async def cleanup_expired_files(
        self,
        max_age_seconds: Optional[float] = None,
    ) -> CleanupReport:
        """
        Delete stored files older than *max_age_seconds*.

        Defaults to ``config.retention_seconds``; 0 removes every stored file.
        Only runs when called.

        Raises:
            ValueError: if *max_age_seconds* is negative.
            DeleteFailedError: if an expired file cannot be removed.
        """
        threshold = self.config.retention_seconds if max_age_seconds is None else max_age_seconds
        if threshold < 0:
            raise ValueError(f"max_age_seconds must be non-negative, got {threshold}")

        expired = await asyncio.to_thread(find_expired, self.config.scratch_path, threshold)
        deleted = []
        skipped = 0
        for path in expired:
            if await asyncio.to_thread(remove_file, path):
                deleted.append(path)
            else:
                skipped += 1

        if deleted:
            self.logger.info("Cleanup completed: %d files deleted", len(deleted))
        return CleanupReport(deleted=deleted, skipped=skipped)
