"""Pytest configuration shared across the suite."""

import pytest

from _drive_fake import FakeDrive


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def drive() -> FakeDrive:
    """In-memory Drive reachable through an httpx mock transport."""
    return FakeDrive()
