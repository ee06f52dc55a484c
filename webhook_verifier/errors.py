"""
Exception hierarchy for webhook verification.

Every anticipated failure of the verification pipeline is represented by a
subclass of :class:`WebhookVerificationError` that carries the machine-readable
``Reason`` the orchestrator reports to the caller.  Anything that is *not* one
of these classes is treated as an internal fault.
"""

from __future__ import annotations

from webhook_verifier.models import Reason


class DecodeError(ValueError):
    """Raised when text is not valid (URL-safe) base64."""


class WebhookVerificationError(Exception):
    """Base exception for all expected verification failures."""

    reason: Reason = Reason.INTERNAL_ERROR


class MissingFieldError(WebhookVerificationError):
    """Raised when token, public key, or body is absent from the request."""

    reason = Reason.MISSING_FIELD


class MalformedTokenError(WebhookVerificationError):
    """Raised when the compact token cannot be split or decoded."""

    reason = Reason.MALFORMED_TOKEN


class UnsupportedAlgorithmError(WebhookVerificationError):
    """Raised when the token header declares anything other than ES256."""

    reason = Reason.UNSUPPORTED_ALGORITHM


class InvalidKeyMaterialError(WebhookVerificationError):
    """Raised when the public key is not a usable P-256 JWK."""

    reason = Reason.INVALID_KEY_MATERIAL


class InvalidSignatureError(WebhookVerificationError):
    """Raised when the token signature does not verify."""

    reason = Reason.INVALID_SIGNATURE


class MalformedBodyError(WebhookVerificationError):
    """Raised when the supplied body is not base64-encoded JSON."""

    reason = Reason.MALFORMED_BODY


class BodyHashMismatchError(WebhookVerificationError):
    """Raised when the body digest differs from the signed claim."""

    reason = Reason.BODY_HASH_MISMATCH
