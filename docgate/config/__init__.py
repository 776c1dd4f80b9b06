"""
Configuration management for docgate.

This package provides the typed ingestor configuration model and its loaders.
"""

from .models import IngestorConfig
from .loader import (
    build_ingestor_config,
    ingestor_config_from_env,
    load_ingestor_config,
)

__all__ = [
    "IngestorConfig",
    "build_ingestor_config",
    "ingestor_config_from_env",
    "load_ingestor_config",
]
