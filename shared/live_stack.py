"""Live-service helpers for the smoke suite."""

from __future__ import annotations

import os
import time
from collections.abc import Generator

import pytest
import requests


def is_service_ready(url: str, timeout: int = 2) -> bool:
    """Return True when the verifier health endpoint responds with 200."""
    try:
        response = requests.get(f"{url}/api/health", timeout=timeout)
    except requests.RequestException:
        return False
    return response.status_code == 200


def wait_for_service_healthy(url: str, timeout: int = 30, interval: int = 1) -> None:
    """Poll the health endpoint until ready or timeout."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_service_ready(url):
            return
        time.sleep(interval)
    raise RuntimeError(f"Webhook verifier at {url} not healthy after {timeout}s")


def live_service_url(
    *,
    base_url_env: str,
    wait_env: str,
    suite_name: str,
    base_url_default: str = "http://localhost:5000",
) -> Generator[str, None, None]:
    """
    Yield the base URL of a running verifier, or skip the suite.

    When ``wait_env`` is set to a number of seconds the helper waits that
    long for the service to come up (useful right after ``docker run``);
    otherwise a single probe decides.
    """
    url = os.getenv(base_url_env, base_url_default).rstrip("/")
    wait_seconds = int(os.getenv(wait_env, "0") or "0")

    if wait_seconds > 0:
        try:
            wait_for_service_healthy(url, timeout=wait_seconds)
        except RuntimeError as exc:
            pytest.skip(f"{suite_name} suite skipped: {exc}")
    elif not is_service_ready(url):
        pytest.skip(f"{suite_name} suite skipped: no webhook verifier reachable at {url}")

    yield url
