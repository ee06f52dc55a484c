"""
Webhook verifier Flask application factory.

Provides the ``create_app`` factory used to build the HTTP front end of the
verification pipeline.  The core itself (:func:`verify_webhook`) is a plain
function and can be used without Flask.
"""

from __future__ import annotations

import logging

from flask import Flask

from config import get_config
from webhook_verifier.models import Reason, VerificationOutcome
from webhook_verifier.verifier import verify_webhook

__version__ = "0.1.0"

__all__ = ["create_app", "verify_webhook", "Reason", "VerificationOutcome"]

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the webhook verifier application.

    Args:
        config_name: Configuration environment name (``"development"``,
            ``"testing"``, ``"production"``).  When ``None``, the value is
            resolved from ``FLASK_ENV``, defaulting to ``"development"``.

    Returns:
        A configured :class:`~flask.Flask` application with the API
        blueprint mounted under ``/api``.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logging.getLogger("webhook_verifier").setLevel(app.config["LOG_LEVEL"].upper())
    logger.info("Creating webhook verifier app with config: %s", config_class.__name__)

    # Import inside the factory so the blueprint module can use current_app
    # without a circular import at package load time.
    from webhook_verifier.routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
