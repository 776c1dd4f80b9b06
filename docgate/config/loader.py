"""
Configuration loader for docgate.

Builds ``IngestorConfig`` values from JSON/YAML files or from environment
variables. The ingestor itself never reads configuration; callers load it
here and pass the resulting value in.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from docgate.paths import resolve_scratch_path

from .models import (
    BYTES_PER_MB,
    DEFAULT_ACCEPTED_FORMATS,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_MAX_FILE_SIZE_MB,
    DEFAULT_RETENTION_SECONDS,
    DEFAULT_SCRATCH_PATH,
    IngestorConfig,
)
from .models.constants import (
    ENV_ACCEPTED_FORMATS,
    ENV_FETCH_TIMEOUT_SECONDS,
    ENV_MAX_FILE_SIZE_MB,
    ENV_RETENTION_SECONDS,
    ENV_SCRATCH_PATH,
)


def parse_config_text(content: str, path: Path | str) -> Dict[str, Any]:
    """
    Parse raw configuration content from JSON or YAML.

    Args:
        content: Config file content
        path: Path or filename used for extension detection
    """
    if isinstance(path, str):
        path = Path(path)

    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return yaml.safe_load(content) or {}
    if suffix == ".json":
        return json.loads(content)
    raise ValueError(
        f"Unsupported config format: {suffix}. "
        f"Use .json, .yaml, or .yml"
    )


def load_raw_config(path: Path) -> Dict[str, Any]:
    """
    Load raw configuration from JSON or YAML file.

    Also loads environment variables from .env file if present.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported
    """
    load_dotenv()

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    return parse_config_text(path.read_text(encoding="utf-8"), path)


def _split_formats(value: Any) -> list[str]:
    if value is None:
        return sorted(DEFAULT_ACCEPTED_FORMATS)
    if isinstance(value, str):
        return [part for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(part) for part in value]
    raise ValueError(f"accepted_formats must be a list or comma-separated string, got {type(value).__name__}")


def _max_size_bytes(raw: Mapping[str, Any]) -> int:
    if raw.get("max_file_size_bytes") is not None:
        return int(raw["max_file_size_bytes"])
    size_mb = float(raw.get("max_file_size_mb", DEFAULT_MAX_FILE_SIZE_MB))
    return int(size_mb * BYTES_PER_MB)


def build_ingestor_config(
    raw: Mapping[str, Any],
    base_dir: Optional[Path] = None,
) -> IngestorConfig:
    """
    Build a validated IngestorConfig from raw configuration.

    Accepts either a flat mapping or one nested under an ``"ingestor"`` key.
    The size cap may be given as ``max_file_size_bytes`` or
    ``max_file_size_mb`` (1 MB = 1,048,576 bytes). Relative ``scratch_path``
    values resolve against *base_dir*.

    Raises:
        ValueError: If any value is missing, malformed or out of range
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"Config root must be a mapping, got {type(raw).__name__}")

    section = raw.get("ingestor", raw)
    if not isinstance(section, Mapping):
        raise ValueError("Config 'ingestor' section must be a mapping")

    try:
        config = IngestorConfig(
            scratch_path=resolve_scratch_path(
                section.get("scratch_path", DEFAULT_SCRATCH_PATH), base=base_dir
            ),
            max_file_size_bytes=_max_size_bytes(section),
            accepted_formats=frozenset(_split_formats(section.get("accepted_formats"))),
            retention_seconds=int(section.get("retention_seconds", DEFAULT_RETENTION_SECONDS)),
            fetch_timeout_seconds=float(
                section.get("fetch_timeout_seconds", DEFAULT_FETCH_TIMEOUT_SECONDS)
            ),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid ingestor configuration: {exc}") from exc

    config.validate()
    return config


def load_ingestor_config(path: Path | str) -> IngestorConfig:
    """
    Load and validate ingestor configuration from a JSON or YAML file.

    Example:
        >>> config = load_ingestor_config("docgate.yaml")
        >>> config.scratch_path
        PosixPath('/srv/app/temp')
    """
    if isinstance(path, str):
        path = Path(path)

    path = path.expanduser().resolve()
    raw = load_raw_config(path)
    return build_ingestor_config(raw, base_dir=path.parent)


def ingestor_config_from_env(
    environ: Optional[Mapping[str, str]] = None,
    load_env_file: bool = True,
) -> IngestorConfig:
    """
    Build ingestor configuration from ``DOCGATE_*`` environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``.
        load_env_file: Load a ``.env`` file first (only when reading ``os.environ``).
    """
    if environ is None:
        if load_env_file:
            load_dotenv()
        environ = os.environ

    raw: Dict[str, Any] = {
        "scratch_path": environ.get(ENV_SCRATCH_PATH) or DEFAULT_SCRATCH_PATH,
        "max_file_size_mb": environ.get(ENV_MAX_FILE_SIZE_MB) or DEFAULT_MAX_FILE_SIZE_MB,
        "accepted_formats": environ.get(ENV_ACCEPTED_FORMATS) or None,
        "retention_seconds": environ.get(ENV_RETENTION_SECONDS) or DEFAULT_RETENTION_SECONDS,
        "fetch_timeout_seconds": environ.get(ENV_FETCH_TIMEOUT_SECONDS) or DEFAULT_FETCH_TIMEOUT_SECONDS,
    }
    return build_ingestor_config(raw)
