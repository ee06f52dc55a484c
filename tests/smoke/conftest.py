"""
Smoke-test fixtures for a deployed webhook verifier.

Provides the ``smoke_base_url`` session-scoped fixture shared across the
smoke suite.  URL resolution is delegated to
:func:`shared.live_stack.live_service_url`, which skips the suite when no
service answers at ``TEST_BASE_URL``.
"""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest

from shared.live_stack import live_service_url


@pytest.fixture(scope="session")
def smoke_base_url() -> Generator[str, None, None]:
    """Yield a healthy verifier URL for smoke tests."""
    yield from live_service_url(
        base_url_env="TEST_BASE_URL",
        wait_env="SMOKE_WAIT_SECONDS",
        suite_name="smoke",
    )


@pytest.fixture(scope="session")
def smoke_function_key() -> str:
    """Function key to send, if the deployment requires one."""
    return os.getenv("TEST_FUNCTION_KEY", "")
