"""
Shared pytest fixtures for the webhook verifier test suite.

Fixtures follow the Arrange-Act-Assert (AAA) pattern: the application and
client are built once per session or test, and webhook bodies are generated
fresh with Faker so no test depends on a hard-coded payload.
"""

import os
from collections.abc import Callable
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from shared.test_helpers import verify_request_payload
from webhook_verifier import create_app


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def webhook_body_factory() -> Callable[..., dict[str, Any]]:
    """
    Factory fixture for realistic webhook event bodies.

    Example:
        def test_something(webhook_body_factory):
            body = webhook_body_factory(event="invoice.paid")
    """

    def _create_body(event: str | None = None, **overrides: Any) -> dict[str, Any]:
        body: dict[str, Any] = {
            "id": fake.uuid4(),
            "event": event or fake.random_element(["order.created", "order.shipped", "refund.issued"]),
            "created": fake.iso8601(),
            "attempt": fake.random_int(min=1, max=5),
            "livemode": fake.boolean(),
            "data": {
                "customer": {"name": fake.name(), "email": fake.email()},
                "amount_cents": fake.random_int(min=100, max=100_000),
                "currency": "EUR",
                "items": [fake.word() for _ in range(3)],
                "note": None,
            },
        }
        body.update(overrides)
        return body

    return _create_body


@pytest.fixture
def webhook_body(webhook_body_factory) -> dict[str, Any]:
    """A single webhook body for tests that need just one."""
    return webhook_body_factory()


@pytest.fixture
def signed_request(webhook_body) -> dict[str, str]:
    """A complete, valid verify request for ``webhook_body``."""
    return verify_request_payload(webhook_body)


@pytest.fixture
def api_headers() -> dict[str, str]:
    """Provide common headers for API requests."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
