"""
Pytest bridge for LaborantTest classes.

Runs each test's setup/teardown hooks around every collected test_*
method, sync or async.
"""

import os

import pytest

from shared.tests import LaborantTest

# Required settings for modules that read global configuration
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret-key-0123456789")
os.environ.setdefault("SERVICE_API_KEY", "test-service-key-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture(autouse=True)
async def laborant_hooks(request):
    """Run LaborantTest per-test hooks."""
    instance = request.instance
    if not isinstance(instance, LaborantTest):
        yield
        return

    await instance.run_setup_hooks()
    try:
        yield
    finally:
        await instance.run_teardown_hooks()
