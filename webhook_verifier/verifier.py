"""
Webhook verification pipeline.

Runs the stages in a fixed order and stops at the first failure:

1. required fields present        -> ``missing_field``
2. token decoded, ``alg`` checked  -> ``malformed_token`` / ``unsupported_algorithm``
3. raw signature re-encoded as DER
4. signature verified              -> ``invalid_key_material`` / ``invalid_signature``
5. body digest compared            -> ``malformed_body`` / ``body_hash_mismatch``

Each stage raises a :class:`~webhook_verifier.errors.WebhookVerificationError`
carrying its reason.  :func:`verify_webhook` is the single boundary where
those are turned into a :class:`~webhook_verifier.models.VerificationOutcome`
and where any other exception is logged and reported as ``internal_error``.
The function keeps no state and is safe to call from any number of threads.
"""

from __future__ import annotations

import logging
from typing import Any

from webhook_verifier.body import (
    DEFAULT_DIGEST_CLAIM,
    canonical_body,
    digests_match,
    expected_digest,
    sha256_hex,
)
from webhook_verifier.der import raw_to_der
from webhook_verifier.errors import (
    BodyHashMismatchError,
    InvalidSignatureError,
    MissingFieldError,
    WebhookVerificationError,
)
from webhook_verifier.models import Reason, VerificationOutcome
from webhook_verifier.signature import load_public_key, verify_signature
from webhook_verifier.token import decode_token

logger = logging.getLogger(__name__)


def _require_fields(token: Any, public_key: Any, body: Any) -> None:
    """Token and key must be non-empty strings; the body must be a string."""
    if not isinstance(token, str) or not token:
        raise MissingFieldError("token is required")
    if not isinstance(public_key, str) or not public_key:
        raise MissingFieldError("publicKey is required")
    if not isinstance(body, str):
        raise MissingFieldError("body is required")


def _run_pipeline(
    token: Any,
    public_key: Any,
    body: Any,
    digest_claim: str,
    log: logging.Logger,
) -> VerificationOutcome:
    _require_fields(token, public_key, body)

    decoded = decode_token(token)
    der_signature = raw_to_der(decoded.raw_signature)

    key = load_public_key(public_key)
    if not verify_signature(decoded.signing_input, der_signature, key):
        raise InvalidSignatureError("signature does not match public key")

    expected = expected_digest(decoded.payload, digest_claim)
    canonical = canonical_body(body)
    actual = sha256_hex(canonical.encode("utf-8"))
    log.debug("Normalized body for hashing:\n%s", canonical)
    log.debug("Expected hash: %s", expected)
    log.debug("Actual hash: %s", actual)

    if not digests_match(expected, actual):
        raise BodyHashMismatchError("request body hash mismatch")

    return VerificationOutcome.accepted()


def verify_webhook(
    token: Any,
    public_key: Any,
    body: Any,
    *,
    digest_claim: str = DEFAULT_DIGEST_CLAIM,
    log: logging.Logger | None = None,
) -> VerificationOutcome:
    """
    Verify a signed webhook delivery.

    Args:
        token: Compact ES256 JWS whose payload carries the body digest.
        public_key: Base64-encoded JSON JWK of the signer's P-256 key.
        body: Base64-encoded request body as delivered.
        digest_claim: Payload claim holding the expected SHA-256 hex digest.
        log: Logger supplied by the host; defaults to this module's logger.

    Returns:
        The :class:`VerificationOutcome`.  This function never raises.
    """
    log = log or logger
    try:
        outcome = _run_pipeline(token, public_key, body, digest_claim, log)
    except WebhookVerificationError as exc:
        if exc.reason is Reason.INVALID_KEY_MATERIAL:
            log.error("Webhook rejected: %s (%s)", exc.reason.value, exc)
        else:
            log.info("Webhook rejected: %s (%s)", exc.reason.value, exc)
        return VerificationOutcome.rejected(exc.reason)
    except Exception:
        log.exception("Unexpected error while verifying webhook")
        return VerificationOutcome.rejected(Reason.INTERNAL_ERROR)

    log.info("Webhook verified")
    return outcome
