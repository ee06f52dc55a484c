"""
Compact JWS token decoding.

Splits ``header.payload.signature`` into its parts without trusting any of
them.  The header algorithm is checked here, before any key is loaded or any
signature is examined, so that ``"none"`` and other algorithm-confusion
attempts are rejected deterministically.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from webhook_verifier import base64url
from webhook_verifier.der import RAW_SIGNATURE_SIZE
from webhook_verifier.errors import (
    DecodeError,
    MalformedTokenError,
    UnsupportedAlgorithmError,
)

SUPPORTED_ALGORITHM = "ES256"


@dataclass(frozen=True)
class DecodedToken:
    """
    The decoded parts of a compact token.

    ``signing_input`` holds the header and payload segments exactly as
    received, joined by ``.``; those are the bytes the signer signed.
    """

    header: dict[str, Any]
    payload: dict[str, Any]
    raw_signature: bytes
    signing_input: bytes


def _decode_segment(segment: str, name: str) -> bytes:
    try:
        return base64url.decode(segment)
    except DecodeError as exc:
        raise MalformedTokenError(f"{name} segment is not valid base64url") from exc


def _parse_json_object(raw: bytes, name: str) -> dict[str, Any]:
    try:
        value = json.loads(raw.decode("utf-8", errors="replace"))
    except (ValueError, RecursionError) as exc:
        raise MalformedTokenError(f"{name} segment is not valid JSON") from exc
    if not isinstance(value, dict):
        raise MalformedTokenError(f"{name} segment is not a JSON object")
    return value


def decode_token(token: str) -> DecodedToken:
    """
    Split and decode a compact token.

    Args:
        token: The ``header.payload.signature`` string.

    Returns:
        A :class:`DecodedToken`.

    Raises:
        MalformedTokenError: If the token does not have exactly three
            non-empty segments, a segment is not base64url, the header or
            payload is not a JSON object, or the signature is not 64 bytes.
        UnsupportedAlgorithmError: If the header ``alg`` is not ``ES256``.
    """
    segments = token.split(".")
    if len(segments) != 3 or not all(segments):
        raise MalformedTokenError("token must have three non-empty segments")
    header_b64, payload_b64, signature_b64 = segments

    header = _parse_json_object(_decode_segment(header_b64, "header"), "header")
    payload = _parse_json_object(_decode_segment(payload_b64, "payload"), "payload")
    raw_signature = _decode_segment(signature_b64, "signature")

    algorithm = header.get("alg")
    if algorithm != SUPPORTED_ALGORITHM:
        raise UnsupportedAlgorithmError(f"unsupported algorithm: {algorithm!r}")

    if len(raw_signature) != RAW_SIGNATURE_SIZE:
        raise MalformedTokenError(
            f"signature must be {RAW_SIGNATURE_SIZE} bytes, got {len(raw_signature)}"
        )

    return DecodedToken(
        header=header,
        payload=payload,
        raw_signature=raw_signature,
        # Segments already passed base64 validation, so they are ASCII.
        signing_input=f"{header_b64}.{payload_b64}".encode("ascii"),
    )
