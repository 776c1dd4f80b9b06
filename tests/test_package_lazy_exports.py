from __future__ import annotations

import importlib

import pytest


def test_docgate_lazy_exports_and_errors() -> None:
    pkg = importlib.import_module("docgate")
    assert pkg.DocumentIngestor.__name__ == "DocumentIngestor"
    assert pkg.IngestorConfig.__name__ == "IngestorConfig"
    assert pkg.StorageResult is not None
    assert pkg.StorageStats is not None
    with pytest.raises(AttributeError):
        _ = pkg.not_a_real_export


def test_ingest_package_exports() -> None:
    ipkg = importlib.import_module("docgate.ingest")
    assert callable(ipkg.detect_extension)
    assert ipkg.ErrorKind.SIZE_EXCEEDED.value == "size_exceeded"
