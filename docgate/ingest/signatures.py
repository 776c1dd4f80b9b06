"""
Magic-byte signature detection.

Identifies the true type of a payload from its leading bytes, independent of
any filename or claimed extension.

Known limitation: several container formats share one signature. ZIP-based
Office documents (docx/xlsx/pptx) are indistinguishable from a plain ZIP
archive, and OLE2 documents (doc/xls/ppt) from each other, without parsing
the container. ``resolve_detected`` keeps the caller's hint when it names a
member of the detected family, and otherwise falls back to the canonical
extension of the matching entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Signature:
    """A byte prefix and the canonical extension it identifies."""

    extension: str
    """Canonical extension, lowercase, without a leading dot."""

    magic: bytes
    """Prefix the payload must start with."""

    family: Tuple[str, ...] = ()
    """Other extensions that share this signature."""

    def matches(self, data: bytes) -> bool:
        return len(data) >= len(self.magic) and data[: len(self.magic)] == self.magic


_ZIP_FAMILY = ("docx", "xlsx", "pptx", "zip")
_OLE_FAMILY = ("doc", "xls", "ppt")

# Order matters: first match wins.
SIGNATURES: Tuple[Signature, ...] = (
    # Images
    Signature("jpg", b"\xFF\xD8\xFF", family=("jpg", "jpeg")),
    Signature("png", b"\x89PNG\r\n\x1a\n"),
    Signature("gif", b"GIF8"),
    Signature("webp", b"RIFF"),
    Signature("bmp", b"BM"),
    Signature("tiff", b"II*\x00", family=("tiff", "tif")),
    Signature("tiff", b"MM\x00*", family=("tiff", "tif")),
    Signature("ico", b"\x00\x00\x01\x00"),
    # Documents
    Signature("pdf", b"%PDF"),
    Signature("docx", b"PK\x03\x04", family=_ZIP_FAMILY),
    Signature("doc", b"\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1", family=_OLE_FAMILY),
    # Archives
    Signature("zip", b"PK\x05\x06", family=_ZIP_FAMILY),
    Signature("rar", b"Rar!"),
    Signature("7z", b"7z\xBC\xAF\x27\x1C"),
)


def describe_signature(data: bytes) -> Optional[Signature]:
    """Return the first table entry whose magic prefixes *data*, if any."""
    if not data:
        return None
    for signature in SIGNATURES:
        if signature.matches(data):
            return signature
    return None


def detect_extension(data: bytes) -> Optional[str]:
    """Return the canonical extension for *data*, or None when unknown."""
    signature = describe_signature(data)
    return signature.extension if signature else None


def resolve_detected(signature: Signature, hint: str) -> str:
    """Pick the extension for a detected payload.

    *hint* must already be normalized. It is honoured only when it belongs to
    the signature's family, so a JPEG claimed as ``exe`` still resolves to
    ``jpg`` while a ZIP container claimed as ``xlsx`` stays ``xlsx``.
    """
    if hint and hint in signature.family:
        return hint
    return signature.extension
