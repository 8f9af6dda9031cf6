"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set environment before any app imports so Settings picks it up
os.environ.setdefault("APP_ENV", "testing")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["STORAGE_BACKEND"] = "synthetic"
os.environ["TRUST_USER_ID_HEADER"] = "true"

# ruff: noqa: E402 - Imports must be after env var setup
from unittest.mock import AsyncMock

import pytest

from src.circuitweb.core.config import get_settings
from tests.helpers import FakeIdentityProvider, InMemoryStorageBackend

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    """In-memory identity provider with no accounts."""
    return FakeIdentityProvider()


@pytest.fixture
def storage_backend() -> InMemoryStorageBackend:
    """In-memory object storage."""
    return InMemoryStorageBackend()


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session
