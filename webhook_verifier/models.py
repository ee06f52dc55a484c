"""
Value objects returned by the verification pipeline.

A :class:`VerificationOutcome` is created exactly once per verification call
and is the only thing the core hands back to its caller.  The HTTP layer turns
it into a JSON response with :meth:`VerificationOutcome.to_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Reason(str, Enum):
    """Enumeration of verification outcomes other than acceptance."""

    MISSING_FIELD = "missing_field"
    MALFORMED_TOKEN = "malformed_token"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    INVALID_KEY_MATERIAL = "invalid_key_material"
    INVALID_SIGNATURE = "invalid_signature"
    MALFORMED_BODY = "malformed_body"
    BODY_HASH_MISMATCH = "body_hash_mismatch"
    INTERNAL_ERROR = "internal_error"


# HTTP status class reported for each rejection reason.
REASON_STATUS: dict[Reason, int] = {
    Reason.MISSING_FIELD: 400,
    Reason.MALFORMED_TOKEN: 400,
    Reason.UNSUPPORTED_ALGORITHM: 400,
    Reason.MALFORMED_BODY: 400,
    Reason.INVALID_SIGNATURE: 401,
    Reason.BODY_HASH_MISMATCH: 401,
    Reason.INVALID_KEY_MATERIAL: 500,
    Reason.INTERNAL_ERROR: 500,
}

# Human-readable messages surfaced to callers.  These never include
# exception text.
REASON_MESSAGES: dict[Reason, str] = {
    Reason.MISSING_FIELD: "Missing token, publicKey, or body",
    Reason.MALFORMED_TOKEN: "Malformed JWT",
    Reason.UNSUPPORTED_ALGORITHM: "Unsupported JWT algorithm",
    Reason.MALFORMED_BODY: "Request body is not valid base64-encoded JSON",
    Reason.INVALID_SIGNATURE: "Invalid JWT signature",
    Reason.BODY_HASH_MISMATCH: "Request body hash mismatch",
    Reason.INVALID_KEY_MATERIAL: "Verification failed",
    Reason.INTERNAL_ERROR: "Verification failed",
}


@dataclass(frozen=True)
class VerificationOutcome:
    """
    Result of a single verification call.

    Attributes:
        valid: ``True`` only when both the signature and the body hash check.
        reason: Why the request was rejected, or ``None`` when accepted.
        http_status: Status code the transport layer should answer with.
    """

    valid: bool
    reason: Reason | None
    http_status: int

    @classmethod
    def accepted(cls) -> "VerificationOutcome":
        """Build the single successful outcome."""
        return cls(valid=True, reason=None, http_status=200)

    @classmethod
    def rejected(cls, reason: Reason) -> "VerificationOutcome":
        """Build a rejection with the status class mapped from *reason*."""
        return cls(valid=False, reason=reason, http_status=REASON_STATUS[reason])

    @property
    def message(self) -> str | None:
        """Caller-facing description of the rejection, if any."""
        if self.reason is None:
            return None
        return REASON_MESSAGES[self.reason]

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the outcome to its JSON response representation.

        Returns:
            ``{"valid": True}`` on acceptance, otherwise ``valid``,
            ``reason`` and ``error`` keys.
        """
        if self.valid:
            return {"valid": True}
        return {
            "valid": False,
            "reason": self.reason.value,
            "error": self.message,
        }
