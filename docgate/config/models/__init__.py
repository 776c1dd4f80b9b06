"""
Configuration data models for docgate.

This package provides typed dataclasses for configuration options and defaults.
"""

from .constants import (
    BYTES_PER_MB,
    DEFAULT_ACCEPTED_FORMATS,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_MAX_FILE_SIZE_MB,
    DEFAULT_RETENTION_SECONDS,
    DEFAULT_SCRATCH_PATH,
)
from .ingestor import IngestorConfig, normalize_format

__all__ = [
    "BYTES_PER_MB",
    "DEFAULT_ACCEPTED_FORMATS",
    "DEFAULT_FETCH_TIMEOUT_SECONDS",
    "DEFAULT_MAX_FILE_SIZE_MB",
    "DEFAULT_RETENTION_SECONDS",
    "DEFAULT_SCRATCH_PATH",
    "IngestorConfig",
    "normalize_format",
]
