"""
Pytest configuration and fixtures for Content Admin tests
"""

import os
import sys
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from content_admin.config import Settings
from content_admin.database import Base, get_db
from content_admin.models import ContentNode, ContentTranslation, User, Version  # noqa: F401
from content_admin.row_store import RowStore
from main import create_app
from utils.mock_utils import create_test_user

# Test database URL (SQLite in-memory for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """
    Create a fresh in-memory database for each test function.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests that need it."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(test_db: AsyncSession) -> RowStore:
    """Row store with no backoff delay"""
    return RowStore(test_db, max_attempts=3, base_delay=0)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        secret_key="test-secret-key",
        debug=False,
        environment="test",
        allow_initial_register=False,
        store_base_delay_ms=0,
    )


@pytest.fixture
def app(test_settings, session_factory):
    """FastAPI application bound to the per-test database"""
    application = create_app(test_settings)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_manager(app):
    return app.state.auth_manager


@pytest.fixture
async def test_user(store, auth_manager) -> dict:
    """Create a test user with 'user' role"""
    return await create_test_user(store, auth_manager, "testuser@example.com", "testpassword", role="user")


@pytest.fixture
async def test_admin(store, auth_manager) -> dict:
    """Create a test admin user"""
    return await create_test_user(store, auth_manager, "admin@example.com", "adminpassword", role="admin")


def get_auth_headers(auth_manager, user: dict) -> dict:
    token = auth_manager.create_access_token({"id": user["id"], "email": user["email"], "role": user["role"]})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(auth_manager, test_user: dict) -> dict:
    """Generate authentication headers for test user"""
    return get_auth_headers(auth_manager, test_user)


@pytest.fixture
def admin_auth_headers(auth_manager, test_admin: dict) -> dict:
    """Generate authentication headers for test admin"""
    return get_auth_headers(auth_manager, test_admin)
