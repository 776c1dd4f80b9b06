"""
Document ingestion for docgate.

Public API:
    DocumentIngestor: validate, store, inspect and purge transient files
    StorageResult, StorageStats, CleanupReport: operation outputs
    ErrorKind: failure categories reported in ``StorageResult``
"""

from docgate.ingest.errors import ErrorKind, IngestError
from docgate.ingest.ingestor import DocumentIngestor
from docgate.ingest.models import CleanupReport, StorageResult, StorageStats
from docgate.ingest.signatures import detect_extension

__all__ = [
    "CleanupReport",
    "DocumentIngestor",
    "ErrorKind",
    "IngestError",
    "StorageResult",
    "StorageStats",
    "detect_extension",
]
