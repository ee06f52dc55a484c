"""Base64URL encoding helpers for compact token segments."""

from __future__ import annotations

import base64
import binascii

from webhook_verifier.errors import DecodeError


def encode(data: bytes) -> str:
    """Encode *data* as URL-safe base64 without ``=`` padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def decode(text: str) -> bytes:
    """
    Decode URL-safe base64, restoring any stripped padding.

    The standard alphabet is accepted as well, since ``-``/``_`` are simply
    translated to ``+``/``/`` before decoding.

    Args:
        text: Base64url (or base64) text, padded or not.

    Returns:
        The decoded bytes.

    Raises:
        DecodeError: If *text* contains characters outside the alphabet or
            has a length that no amount of padding can make valid.
    """
    if not isinstance(text, str):
        raise DecodeError("base64url input must be a string")

    standard = text.replace("-", "+").replace("_", "/").rstrip("=")
    # A single leftover character can never encode a whole byte.
    if len(standard) % 4 == 1:
        raise DecodeError("invalid base64url length")
    standard += "=" * (-len(standard) % 4)

    try:
        return base64.b64decode(standard, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(str(exc)) from exc
