"""
Collision-resistant names for stored files.

Names have the shape ``user_<requester>_msg_<message>_<time_ns>_<nonce>.<ext>``.
Identities appear verbatim, so ``-42`` stays ``-42``. The random nonce keeps
names distinct when two ingestors sharing a directory hit the same clock tick.
"""

from __future__ import annotations

import re
import secrets
import time
from typing import Optional, Union

from .errors import InvalidIdentityError

Identity = Union[int, str]

_IDENTITY_RE = re.compile(r"-?[A-Za-z0-9_]+")
_EXTENSION_RE = re.compile(r"[a-z0-9]+")
NONCE_BYTES = 4


def render_identity(field: str, value: Identity) -> str:
    """Render an identity for use in a basename, rejecting anything path-like."""
    if isinstance(value, bool):
        raise InvalidIdentityError(field, value)
    text = str(value)
    if not _IDENTITY_RE.fullmatch(text):
        raise InvalidIdentityError(field, value)
    return text


def build_stored_name(
    requester_id: Identity,
    message_id: Identity,
    extension: str,
    timestamp_ns: Optional[int] = None,
    nonce: Optional[str] = None,
) -> str:
    """
    Build a unique basename for a stored payload.

    Args:
        requester_id: Identity of the user who supplied the payload.
        message_id: Conversation/message identity.
        extension: Resolved extension, lowercase without a dot.
        timestamp_ns: Override for ``time.time_ns()`` (tests).
        nonce: Override for the random suffix (tests).

    Raises:
        InvalidIdentityError: an identity contains anything but
            letters, digits, underscores and a leading minus sign.
        ValueError: the extension is not a plain lowercase token.
    """
    requester = render_identity("requester_id", requester_id)
    message = render_identity("message_id", message_id)
    if not _EXTENSION_RE.fullmatch(extension or ""):
        raise ValueError(f"Invalid extension for stored name: {extension!r}")

    stamp = time.time_ns() if timestamp_ns is None else int(timestamp_ns)
    suffix = secrets.token_hex(NONCE_BYTES) if nonce is None else nonce
    return f"user_{requester}_msg_{message}_{stamp}_{suffix}.{extension}"
