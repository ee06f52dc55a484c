"""
Configuration for the webhook verifier service.

Provides environment-aware configuration classes that follow Flask's
recommended pattern: a shared ``Config`` base class holds defaults, and
environment-specific subclasses (``DevelopmentConfig``, ``TestingConfig``,
``ProductionConfig``) override only what differs.  The ``get_config``
factory resolves the correct class at runtime based on ``FLASK_ENV`` or an
explicit argument.
"""

from __future__ import annotations

import os


class Config:
    """
    Base configuration shared by all environments.

    Every setting can be controlled via an environment variable so that
    container orchestrators can inject values at deploy time.
    """

    # Payload claim that carries the SHA-256 hex digest of the canonical body
    BODY_HASH_CLAIM: str = os.environ.get("BODY_HASH_CLAIM", "request_body_sha256")

    # Flask rejects larger request bodies with 413 before the view runs
    MAX_CONTENT_LENGTH: int = int(os.environ.get("MAX_CONTENT_LENGTH", str(1024 * 1024)))

    # Shared key required in ``x-functions-key`` (or ``?code=``); empty disables the gate
    FUNCTION_KEY: str = os.environ.get("FUNCTION_KEY", "")

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG: bool = True
    TESTING: bool = False
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    """
    Configuration for the automated test suite.

    The function-key gate is always off here; tests that exercise it set
    ``FUNCTION_KEY`` on the app config explicitly.
    """

    DEBUG: bool = True
    TESTING: bool = True
    FUNCTION_KEY: str = ""
    BODY_HASH_CLAIM: str = "request_body_sha256"


class ProductionConfig(Config):
    """Configuration for production deployments."""

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Resolve a configuration class by environment name.

    Args:
        env: One of ``"development"``, ``"testing"``, or ``"production"``.
            When ``None``, the ``FLASK_ENV`` environment variable is
            consulted, falling back to ``"development"`` if unset.

    Returns:
        The configuration class (not an instance).  Unrecognised names
        resolve to ``DevelopmentConfig``.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
