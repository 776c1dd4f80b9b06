"""
Path helpers for the docgate scratch area.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


HOME_ENV_VAR = "DOCGATE_HOME"
DEFAULT_SCRATCH_DIRNAME = "temp"


def get_base_folder(override: Optional[str | Path] = None) -> Path:
    """
    Resolve the folder that relative scratch paths are anchored to.

    Priority:
    1. Explicit override argument
    2. DOCGATE_HOME environment variable
    3. Current working directory
    """
    candidate: str | Path | None = override
    if candidate is None:
        candidate = os.environ.get(HOME_ENV_VAR)
    if candidate is None:
        candidate = Path.cwd()
    return Path(candidate).expanduser().resolve()


def resolve_scratch_path(
    value: Optional[str | Path] = None,
    base: Optional[str | Path] = None,
) -> Path:
    """
    Resolve a scratch directory setting to an absolute path.

    Absolute values are returned resolved; relative values (including the
    default ``temp``) are joined onto :func:`get_base_folder`.
    """
    path = Path(value if value not in (None, "") else DEFAULT_SCRATCH_DIRNAME).expanduser()
    if path.is_absolute():
        return path.resolve()
    return (get_base_folder(base) / path).resolve()
