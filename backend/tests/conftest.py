"""
Song Manager Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_song_repository: AsyncMock standing in for SongRepository
    ├── sample_song_data: Field values for a song
    ├── clean_database: Drops and recreates the schema on the test SQLite file
    ├── db_session: Real AsyncSession on the clean database
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os
import tempfile
from unittest.mock import AsyncMock

# Override settings for testing BEFORE any song_manager imports
# Why: Prevents tests from touching a real PostgreSQL database
_test_db_dir = tempfile.mkdtemp(prefix="song_manager_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_db_dir}/test.db"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from song_manager.database import Base, async_session_factory, engine  # noqa: E402
from song_manager.models.song import Song  # noqa: E402
from song_manager.repositories.song_repository import SongRepository  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Mock Fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_song_repository():
    """
    Provides a mock SongRepository.

    Usage:
        async def test_get(mock_song_repository):
            mock_song_repository.find_by_id.return_value = song
            result = await SongService(mock_song_repository).get_by_id(1)
    """
    return AsyncMock(spec=SongRepository)


@pytest.fixture
def sample_song_data():
    """Field values matching the Song model (no id)."""
    return {
        "title": "Imagine",
        "artist": "John Lennon",
        "album": "Imagine",
        "year": 1971,
    }


@pytest.fixture
def make_song():
    """
    Factory for transient Song instances.

    Usage:
        song = make_song("Numb", "Linkin Park", "Meteora", 2003, song_id=7)
    """
    def _make(title, artist, album, year, song_id=None):
        song = Song(title=title, artist=artist, album=album, year=year)
        song.id = song_id
        return song
    return _make


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures (throwaway SQLite file)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def clean_database():
    """
    Recreates the schema before each test.

    Dropping the table also drops its AUTOINCREMENT counter, so ids
    start at 1 in every test.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(clean_database):
    """A real AsyncSession; the test decides when to commit."""
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_client(clean_database):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app; every request
    gets its own session through the real dependency chain.
    """
    from song_manager.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
