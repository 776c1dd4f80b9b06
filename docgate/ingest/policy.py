"""
Size and format policy applied to every payload before it is written.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import unquote, urlsplit

from docgate.config.models import IngestorConfig, normalize_format

from .errors import SizeExceededError, UnsupportedFormatError
from .signatures import Signature, describe_signature, resolve_detected


normalize_extension = normalize_format


@dataclass(frozen=True)
class ResolvedFormat:
    """Extension chosen for a payload and how it was chosen."""

    extension: str
    signature: Optional[Signature]

    @property
    def detected(self) -> bool:
        return self.signature is not None


def check_size(size_bytes: int, config: IngestorConfig) -> None:
    """Raise SizeExceededError when *size_bytes* is over the inclusive cap."""
    if size_bytes > config.max_file_size_bytes:
        raise SizeExceededError(size_bytes, config.max_file_size_bytes)


def resolve_extension(data: bytes, hint: Optional[str]) -> ResolvedFormat:
    """Prefer the detected signature; fall back to the normalized hint."""
    normalized = normalize_extension(hint)
    signature = describe_signature(data)
    if signature is not None:
        return ResolvedFormat(resolve_detected(signature, normalized), signature)
    return ResolvedFormat(normalized, None)


def validate_payload(data: bytes, hint: Optional[str], config: IngestorConfig) -> ResolvedFormat:
    """
    Apply the full policy to a payload.

    Size is checked first and independently of content. The resolved
    extension must then be one of ``config.accepted_formats``; an empty
    extension is never accepted.

    Raises:
        SizeExceededError: payload larger than ``max_file_size_bytes``
        UnsupportedFormatError: resolved extension not accepted
    """
    check_size(len(data), config)
    resolved = resolve_extension(data, hint)
    if not config.accepts(resolved.extension):
        raise UnsupportedFormatError(resolved.extension, config.accepted_formats)
    return resolved


def extension_hint_from_url(url: str) -> str:
    """Take the extension of the URL's last path segment, ignoring query and fragment.

    Returns an empty string when the segment has no extension.
    """
    path = unquote(urlsplit(url).path)
    return normalize_extension(PurePosixPath(path).suffix)
