"""
Shared pytest fixtures for docgate tests.

Provides isolated scratch directories, ingestor configurations and sample
payloads whose leading bytes match known signatures.
"""

import logging
import pytest
from pathlib import Path

from docgate.config.models import IngestorConfig
from docgate.ingest.ingestor import DocumentIngestor

from tests.payloads import JPEG_BYTES, PDF_BYTES, PNG_BYTES


# -----------------------------------------------------------------------------
# Payload Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def pdf_bytes() -> bytes:
    return PDF_BYTES


# -----------------------------------------------------------------------------
# Ingestor Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    """Scratch directory path that does not exist yet."""
    return tmp_path / "scratch"


@pytest.fixture
def ingestor_config(scratch_dir: Path) -> IngestorConfig:
    return IngestorConfig(
        scratch_path=scratch_dir,
        max_file_size_bytes=10 * 1024 * 1024,
        accepted_formats=frozenset({"jpg", "jpeg", "png", "pdf", "docx", "xlsx"}),
        retention_seconds=3600,
    )


@pytest.fixture
def fake_fetcher():
    """Fetcher stub that serves bytes from a dict and records requested URLs."""

    class FakeFetcher:
        def __init__(self) -> None:
            self.responses: dict[str, object] = {}
            self.calls: list[str] = []

        def __call__(self, url: str) -> bytes:
            self.calls.append(url)
            value = self.responses[url]
            if isinstance(value, BaseException):
                raise value
            return value

    return FakeFetcher()


@pytest.fixture
def ingestor(ingestor_config: IngestorConfig, fake_fetcher) -> DocumentIngestor:
    return DocumentIngestor(
        ingestor_config,
        logger=logging.getLogger("docgate.tests"),
        fetcher=fake_fetcher,
    )
