"""WSGI entry point for the webhook verifier service."""

import os

from webhook_verifier import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
