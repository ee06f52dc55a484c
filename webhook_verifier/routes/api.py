"""
Webhook verifier API endpoints.

All routes are mounted on the ``api`` blueprint and served under the
``/api`` URL prefix by the application factory.

Endpoints:
    GET  /api/health           -- Liveness / readiness probe.
    POST /api/webhooks/verify  -- Verify a signed webhook delivery.
    POST /api/verifyJWT        -- Legacy alias of /api/webhooks/verify.

The verify endpoints accept ``{"token", "publicKey", "body"}``; the legacy
names ``jwt`` and ``rawBody`` are accepted as well.
"""

from __future__ import annotations

import hmac
import logging
import os
from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Blueprint, Response, current_app, jsonify, request

from webhook_verifier.verifier import verify_webhook

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

FUNCTION_KEY_HEADER = "x-functions-key"


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def _json_error(message: str, status_code: int) -> tuple[Response, int]:
    """Build a standardised ``{"error": ...}`` JSON error response."""
    return jsonify({"error": message}), status_code


def _first_present(data: dict[str, Any], *names: str) -> Any:
    """Return the value of the first key in *names* present in *data*."""
    for name in names:
        if name in data:
            return data[name]
    return None


def require_function_key(view_func: Callable[..., tuple[Response, int]]):
    """
    Decorator that enforces the shared function key when one is configured.

    The key is read from the ``x-functions-key`` header or the ``code``
    query parameter and compared in constant time.  With no
    ``FUNCTION_KEY`` configured the wrapped view is open.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        expected = current_app.config.get("FUNCTION_KEY") or ""
        if expected:
            supplied = request.headers.get(FUNCTION_KEY_HEADER) or request.args.get("code", "")
            if not hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8")):
                return _json_error("Missing or invalid function key", 401)
        return view_func(*args, **kwargs)

    return wrapper


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({
        "status": "healthy",
        "service": "webhook-verifier",
        "environment": os.getenv("ENVIRONMENT", "unknown"),
        "version": os.getenv("APP_VERSION", "unknown"),
    }), 200


@api_bp.route("/webhooks/verify", methods=["POST"])
@api_bp.route("/verifyJWT", methods=["POST"])
@require_function_key
def verify() -> tuple[Response, int]:
    """
    Verify a signed webhook delivery.

    Returns:
        200 ``{"valid": true}`` when the signature and body hash check.
        400 for missing fields, malformed tokens or bodies, or an
        unsupported algorithm.
        401 for an invalid signature or a body hash mismatch.
        500 for unusable key material or an internal fault.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    outcome = verify_webhook(
        _first_present(data, "token", "jwt"),
        _first_present(data, "publicKey"),
        _first_present(data, "body", "rawBody"),
        digest_claim=current_app.config["BODY_HASH_CLAIM"],
        log=logger,
    )
    return jsonify(outcome.to_dict()), outcome.http_status


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(400)
def bad_request(error: Exception) -> tuple[Response, int]:
    """Handle 400 Bad Request errors."""
    return _json_error("Bad request", 400)


@api_bp.errorhandler(413)
def payload_too_large(error: Exception) -> tuple[Response, int]:
    """Handle request bodies larger than ``MAX_CONTENT_LENGTH``."""
    return _json_error("Request body too large", 413)


@api_bp.app_errorhandler(404)
def not_found(error: Exception) -> tuple[Response, int]:
    """Handle 404 Not Found errors."""
    return _json_error("Resource not found", 404)


@api_bp.app_errorhandler(405)
def method_not_allowed(error: Exception) -> tuple[Response, int]:
    """Handle 405 Method Not Allowed errors."""
    return _json_error("Method not allowed", 405)


@api_bp.errorhandler(500)
def internal_error(error: Exception) -> tuple[Response, int]:
    """Handle 500 Internal Server errors."""
    logger.error("Internal server error: %s", error)
    return _json_error("Internal server error", 500)
