"""
Smoke tests for a deployed webhook verifier.

Smoke tests are lightweight, fast checks against a running service: is
it up, and does the critical path (verify a genuine webhook, reject a
tampered one) work end to end over real HTTP?

Nothing is mocked; requests go through ``requests`` to whatever
``TEST_BASE_URL`` points at.  The whole module is skipped when no service
is reachable.

Key SDET Concepts Demonstrated:
- Smoke testing against a running deployment
- Health-endpoint verification
- Critical-path validation with freshly generated keys and bodies
"""

import pytest
import requests

from shared.test_helpers import encode_body, verify_request_payload

pytestmark = pytest.mark.smoke


def _headers(function_key: str) -> dict[str, str]:
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if function_key:
        headers["x-functions-key"] = function_key
    return headers


def test_service_health(smoke_base_url):
    """Test that the health endpoint reports the verifier healthy."""
    # Act
    response = requests.get(f"{smoke_base_url}/api/health", timeout=5)

    # Assert
    assert response.status_code == 200
    assert response.json().get("service") == "webhook-verifier"


def test_genuine_webhook_is_accepted(smoke_base_url, smoke_function_key, webhook_body):
    """Test the critical path: a correctly signed webhook verifies."""
    # Act
    response = requests.post(
        f"{smoke_base_url}/api/webhooks/verify",
        json=verify_request_payload(webhook_body),
        headers=_headers(smoke_function_key),
        timeout=5,
    )

    # Assert
    assert response.status_code == 200
    assert response.json() == {"valid": True}


def test_tampered_webhook_is_rejected(smoke_base_url, smoke_function_key, webhook_body):
    """Test that changing the body after signing is caught."""
    # Arrange
    data = verify_request_payload(webhook_body)
    data["body"] = encode_body(dict(webhook_body, livemode=not webhook_body["livemode"]))

    # Act
    response = requests.post(
        f"{smoke_base_url}/api/webhooks/verify",
        json=data,
        headers=_headers(smoke_function_key),
        timeout=5,
    )

    # Assert
    assert response.status_code == 401
    assert response.json()["reason"] == "body_hash_mismatch"
