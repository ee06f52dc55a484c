"""
Raw ECDSA signature to DER conversion.

JWS carries ES256 signatures as the fixed-length concatenation ``r || s``
(RFC 7518 section 3.4), while ``cryptography`` verifiers expect the ASN.1 DER
``SEQUENCE { INTEGER r, INTEGER s }`` form.  DER integers are signed and must
be minimal, so each component is trimmed of leading zero bytes and given back
a single ``0x00`` when its top bit is set.
"""

from __future__ import annotations

# P-256: two 32-byte big-endian integers.
COMPONENT_SIZE = 32
RAW_SIGNATURE_SIZE = 2 * COMPONENT_SIZE

DER_INTEGER = 0x02
DER_SEQUENCE = 0x30


def _encode_length(length: int) -> bytes:
    # Short form covers every P-256 record.
    if length < 0x80:
        return bytes([length])
    size = (length.bit_length() + 7) // 8
    return bytes([0x80 | size]) + length.to_bytes(size, "big")


def _minimal_integer(component: bytes) -> bytes:
    """Strip leading zeros, keep at least one byte, re-add the sign byte."""
    index = 0
    while index < len(component) - 1 and component[index] == 0:
        index += 1
    trimmed = component[index:]
    if trimmed[0] & 0x80:
        trimmed = b"\x00" + trimmed
    return trimmed


def _tlv(tag: int, value: bytes) -> bytes:
    return bytes([tag]) + _encode_length(len(value)) + value


def raw_to_der(raw: bytes) -> bytes:
    """
    Re-encode a 64-byte raw ``r || s`` signature as DER.

    Args:
        raw: Exactly 64 bytes, ``r`` followed by ``s``.

    Returns:
        The DER ``SEQUENCE`` of the two ``INTEGER`` records.

    Raises:
        ValueError: If *raw* is not exactly 64 bytes long.
    """
    if len(raw) != RAW_SIGNATURE_SIZE:
        raise ValueError(
            f"raw ES256 signature must be {RAW_SIGNATURE_SIZE} bytes, got {len(raw)}"
        )

    r = _minimal_integer(raw[:COMPONENT_SIZE])
    s = _minimal_integer(raw[COMPONENT_SIZE:])
    return _tlv(DER_SEQUENCE, _tlv(DER_INTEGER, r) + _tlv(DER_INTEGER, s))
