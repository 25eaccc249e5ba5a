"""
Notes API - Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (service unit tests, no DB)
    ├── sample_note_data: Field values for a stored note
    ├── fresh_db: Empty notes table in the temporary SQLite file
    └── test_client: HTTPX AsyncClient wired to the app over a fresh_db
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Point the app at a throwaway database BEFORE any notes_api import:
# the engine is created from settings at import time.
_TEST_DIR = tempfile.mkdtemp(prefix="notes_api_test_")
os.environ["SQLITE_DB"] = str(Path(_TEST_DIR) / "test.db")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from notes_api import database  # noqa: E402
from notes_api.models.note import Note  # noqa: E402,F401


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
            result = await note_service.get_note(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note_data():
    """Field values matching a stored Note row."""
    return {
        "id": 7,
        "title": "Groceries",
        "content": "Milk, eggs",
        "created_at": "2026-01-19T12:34:56.789Z",
    }


@pytest_asyncio.fixture
async def fresh_db():
    """
    Empties the test database by recreating the schema.

    The engine is disposed afterwards so no pooled connection outlives
    the event loop of the test that opened it.
    """
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.drop_all)
        await conn.run_sync(database.Base.metadata.create_all)
    yield database.engine
    await database.engine.dispose()


@pytest_asyncio.fixture
async def test_client(fresh_db):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests straight into the app; the
    lifespan does not run, fresh_db has already created the schema.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from notes_api.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
