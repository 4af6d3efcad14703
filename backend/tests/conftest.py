"""
Notes API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment is pointed at a throwaway SQLite database BEFORE any app
       module is imported; endpoint tests create and drop the tables around
       every test.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── db_tables: Creates/drops all tables in the SQLite test database
    ├── app_instance: Fresh FastAPI app from create_app()
    ├── test_client: HTTPX AsyncClient bound to app_instance
    ├── create_user / fetch_user / count_notes: direct database helpers
    └── auth_header: Builds `Authorization: Bearer <token>` for a user
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='notes_api_test_')}/test.db"
)
os.environ["SECRET"] = "test-secret-not-real-0123456789abcdef"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["NOTES_REQUIRE_AUTH"] = "true"
os.environ["PRUNE_USER_NOTES_ON_DELETE"] = "false"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402

from app.database import Base, async_session_factory, engine  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models import Note, User  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
            result = await note_service.get_note(mock_db_session, note_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_tables():
    """Creates every table before the test and drops them afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def app_instance():
    """A fresh app per test, so app.state tweaks don't leak."""
    return create_app()


@pytest_asyncio.fixture
async def test_client(app_instance, db_tables):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def create_user(db_tables):
    """Inserts a user in its own committed transaction and returns it."""
    async def _create(username="mluukkai", name="Matti Luukkainen", note_ids=None):
        async with async_session_factory() as session:
            user = User(username=username, name=name, note_ids=list(note_ids or []))
            session.add(user)
            await session.commit()
            return user
    return _create


@pytest.fixture
def fetch_user(db_tables):
    """Reads a user back in a fresh session (sees committed state only)."""
    async def _fetch(user_id):
        async with async_session_factory() as session:
            return await session.get(User, user_id)
    return _fetch


@pytest.fixture
def count_notes(db_tables):
    async def _count():
        async with async_session_factory() as session:
            result = await session.execute(select(func.count(Note.id)))
            return result.scalar_one()
    return _count


@pytest.fixture
def auth_header(app_instance):
    """Signs a token for `user` with the app's authenticator."""
    def _header(user):
        token = app_instance.state.authenticator.issue_token(user.id, user.username)
        return {"Authorization": f"Bearer {token}"}
    return _header
