"""
Request body canonicalization and hashing.

The sender hashed its body *after* re-serializing it with JavaScript's
``JSON.stringify(value, null, 2)``, not the bytes it put on the wire.  This
module reproduces that serialization byte for byte so that formatting-only
differences in transit do not change the digest:

- numbers are IEEE-754 doubles rendered with ECMAScript Number-to-String
  rules (``1.0`` -> ``1``, ``1e21`` -> ``1e+21``, ``1.5e-7`` -> ``1.5e-7``)
- array-index keys (``"0"``, ``"7"``) come first in numeric order, all other
  keys keep their parsed order
- non-ASCII text is emitted raw, control characters are escaped
"""

from __future__ import annotations

import hashlib
import hmac
import json
import math
import re
from collections.abc import Iterator
from decimal import Decimal
from typing import Any

from webhook_verifier import base64url
from webhook_verifier.errors import DecodeError, MalformedBodyError

DEFAULT_DIGEST_CLAIM = "request_body_sha256"
INDENT = "  "

_ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")
_MAX_ARRAY_INDEX = 2**32 - 2
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _is_array_index(key: str) -> bool:
    return bool(_ARRAY_INDEX.fullmatch(key)) and int(key) <= _MAX_ARRAY_INDEX


def _ordered_keys(obj: dict[str, Any]) -> list[str]:
    indices = sorted((key for key in obj if _is_array_index(key)), key=int)
    return indices + [key for key in obj if not _is_array_index(key)]


def _format_string(value: str) -> str:
    encoded = json.dumps(value, ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda match: f"\\u{ord(match.group()):04x}", encoded)


def _format_number(value: float) -> str:
    """Render a double the way ECMAScript ``Number.prototype.toString`` does."""
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() yields the shortest digit string that round-trips.
    parts = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in parts.digits).rstrip("0")
    exponent = parts.exponent + (len(parts.digits) - len(digits))

    k = len(digits)
    n = exponent + k
    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        text = f"{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"
    return sign + text


def _format_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return _format_number(float(value))
    if isinstance(value, str):
        return _format_string(value)
    raise TypeError(f"cannot serialize {type(value).__name__}")


def _children(value: list[Any] | dict[str, Any], inner: str) -> Iterator[tuple[str, Any]]:
    """Yield ``(prefix, child)`` pairs; the prefix holds separator, indent and key."""
    if isinstance(value, list):
        for position, item in enumerate(value):
            yield ("," if position else "") + "\n" + inner, item
    else:
        for position, key in enumerate(_ordered_keys(value)):
            yield f"{',' if position else ''}\n{inner}{_format_string(key)}: ", value[key]


def _serialize(value: Any) -> str:
    """
    Serialize a parsed JSON value like ``JSON.stringify(value, null, 2)``.

    Containers are walked with an explicit stack, so nesting depth is bounded
    only by what the parser accepted.
    """
    out: list[str] = []
    # (remaining children, closing bracket, indent of the closing bracket)
    stack: list[tuple[Iterator[tuple[str, Any]], str, str]] = []

    def emit(node: Any, indent: str) -> None:
        if isinstance(node, (list, dict)):
            if not node:
                out.append("[]" if isinstance(node, list) else "{}")
                return
            opening, closing = ("[", "]") if isinstance(node, list) else ("{", "}")
            out.append(opening)
            stack.append((_children(node, indent + INDENT), closing, indent))
        else:
            out.append(_format_scalar(node))

    emit(value, "")
    while stack:
        children, closing, indent = stack[-1]
        entry = next(children, None)
        if entry is None:
            stack.pop()
            out.append("\n" + indent + closing)
            continue
        prefix, child = entry
        out.append(prefix)
        emit(child, indent + INDENT)
    return "".join(out)


def canonicalize(text: str) -> str:
    """
    Parse JSON *text* and re-serialize it with two-space indentation.

    Raises:
        MalformedBodyError: If *text* is not JSON.
    """
    try:
        value = json.loads(text, parse_int=float, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise MalformedBodyError("body is not valid JSON") from exc
    return _serialize(value)


def canonical_body(raw_body_b64: str) -> str:
    """
    Decode a base64 request body and return its canonical form.

    Raises:
        MalformedBodyError: If the body is not base64 or not JSON.
    """
    try:
        decoded = base64url.decode(raw_body_b64)
    except DecodeError as exc:
        raise MalformedBodyError("body is not valid base64") from exc
    return canonicalize(decoded.decode("utf-8", errors="replace"))


def sha256_hex(data: bytes) -> str:
    """Return the lowercase hexadecimal SHA-256 digest of *data*."""
    return hashlib.sha256(data).hexdigest()


def actual_digest(raw_body_b64: str) -> str:
    """Hash the canonical form of a base64-encoded request body."""
    return sha256_hex(canonical_body(raw_body_b64).encode("utf-8"))


def expected_digest(payload: dict[str, Any], claim: str = DEFAULT_DIGEST_CLAIM) -> Any:
    """Read the signed body digest claim out of a decoded token payload."""
    return payload.get(claim)


def digests_match(expected: Any, actual: str) -> bool:
    """
    Compare digests as exact, case-sensitive strings in constant time.

    A missing or non-string *expected* value never matches.
    """
    if not isinstance(expected, str):
        return False
    return hmac.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))
