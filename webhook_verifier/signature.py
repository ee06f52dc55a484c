"""
ES256 signature verification.

Public keys arrive as base64-encoded JWK documents.  PyJWT's
``ECAlgorithm.from_jwk`` builds the ``cryptography`` key object; the actual
ECDSA check is delegated to ``cryptography`` with the DER signature produced
by :func:`webhook_verifier.der.raw_to_der`.
"""

from __future__ import annotations

import json

import jwt
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from jwt.algorithms import ECAlgorithm

from webhook_verifier import base64url
from webhook_verifier.errors import DecodeError, InvalidKeyMaterialError

SUPPORTED_CURVE = "P-256"


def load_public_key(public_key_b64: str) -> ec.EllipticCurvePublicKey:
    """
    Build a P-256 public key from base64(JSON JWK).

    Args:
        public_key_b64: Base64 (standard or URL-safe) encoding of a JWK.

    Returns:
        The ``cryptography`` public key.

    Raises:
        InvalidKeyMaterialError: If the text is not base64, the document is
            not a JSON object, or it does not describe a valid P-256 point.
    """
    try:
        jwk = json.loads(base64url.decode(public_key_b64).decode("utf-8"))
    except (DecodeError, ValueError) as exc:
        raise InvalidKeyMaterialError("public key is not base64-encoded JSON") from exc

    if not isinstance(jwk, dict):
        raise InvalidKeyMaterialError("public key JWK must be a JSON object")
    if jwk.get("kty") != "EC" or jwk.get("crv") != SUPPORTED_CURVE:
        raise InvalidKeyMaterialError("public key must be an EC P-256 JWK")

    try:
        key = ECAlgorithm.from_jwk(jwk)
    except (jwt.InvalidKeyError, ValueError, TypeError) as exc:
        raise InvalidKeyMaterialError("public key JWK is invalid") from exc

    # A JWK carrying "d" yields a private key; only its public half is used.
    if isinstance(key, ec.EllipticCurvePrivateKey):
        key = key.public_key()
    return key


def verify_signature(
    signing_input: bytes,
    der_signature: bytes,
    public_key: ec.EllipticCurvePublicKey,
) -> bool:
    """
    Check an ECDSA P-256 / SHA-256 signature.

    Returns:
        ``True`` if the signature is valid, ``False`` on any mismatch.
    """
    try:
        public_key.verify(der_signature, signing_input, ec.ECDSA(hashes.SHA256()))
    except InvalidSignature:
        return False
    return True
