"""Integration test fixtures for database and HTTP client operations.

The API runs against an in-memory SQLite database with the schema created
from the SQLModel metadata. The identity provider and object storage are
replaced with in-memory doubles through `app.dependency_overrides`.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.circuitweb.api.dependencies import (
    get_db_session,
    get_identity_provider,
    get_storage_backend,
)
from src.circuitweb.core.db import get_session
from src.circuitweb.main import create_app
from src.circuitweb.models import Project, User
from tests.factories import ProjectFactory, UserFactory
from tests.helpers import OWNER_UID, FakeIdentityProvider, InMemoryStorageBackend

pytestmark = pytest.mark.integration


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a fresh in-memory database with all tables."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for arranging and inspecting data.

    Tests must call `await session.commit()` to make rows visible to the API.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
def app(
    engine: AsyncEngine,
    identity_provider: FakeIdentityProvider,
    storage_backend: InMemoryStorageBackend,
) -> FastAPI:
    """Create the app wired to the test database and provider doubles."""
    app = create_app()

    async def _get_test_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = _get_test_session
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_storage_backend] = lambda: storage_backend
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create test client for the wired app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def owner_project(db_session: AsyncSession) -> Project:
    """A project owned by OWNER_UID."""
    project = ProjectFactory.build(owner_id=OWNER_UID)
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


@pytest.fixture
async def local_user(db_session: AsyncSession, identity_provider: FakeIdentityProvider) -> User:
    """A user known to both the identity provider and the users table."""
    user = UserFactory.build(firebase_uid=OWNER_UID, email="owner@example.com")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    identity_provider.add_user(
        OWNER_UID,
        token="owner-token",
        email="owner@example.com",
        display_name=user.display_name,
        email_verified=True,
    )
    return user
