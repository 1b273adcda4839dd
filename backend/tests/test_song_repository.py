"""
Song Manager Backend — Song Repository Tests
=============================================

What:  Tests SongRepository against a real (throwaway SQLite) database.
Why:   Identifier assignment and delete semantics live in the store and cannot
       be checked with mocks.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from song_manager.exceptions import DatabaseError
from song_manager.models.song import Song
from song_manager.repositories.song_repository import SongRepository


def _song(title, artist, album, year):
    return Song(title=title, artist=artist, album=album, year=year)


class TestSongRepository:

    @pytest.mark.asyncio
    async def test_save_assigns_id(self, db_session):
        repo = SongRepository(db_session)
        song = _song("Skyfall", "Adele", "Skyfall", 2012)
        assert song.id is None

        saved = await repo.save(song)

        assert saved.id is not None

    @pytest.mark.asyncio
    async def test_ids_increase(self, db_session):
        repo = SongRepository(db_session)
        first = await repo.save(_song("Imagine", "John Lennon", "Imagine", 1971))
        second = await repo.save(
            _song("Bohemian Rhapsody", "Queen", "A Night at the Opera", 1975)
        )

        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, db_session):
        repo = SongRepository(db_session)
        first = await repo.save(_song("Hallelujah", "Leonard Cohen", "Various Positions", 1984))
        first_id = first.id
        await db_session.commit()

        await repo.delete_by_id(first_id)
        await db_session.commit()
        second = await repo.save(_song("Yesterday", "The Beatles", "Help!", 1965))

        assert second.id > first_id

    @pytest.mark.asyncio
    async def test_find_by_id(self, db_session):
        repo = SongRepository(db_session)
        saved = await repo.save(_song("Yesterday", "The Beatles", "Help!", 1965))

        found = await repo.find_by_id(saved.id)

        assert found is not None
        assert found.id == saved.id
        assert found.title == "Yesterday"

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, db_session):
        repo = SongRepository(db_session)

        assert await repo.find_by_id(404) is None

    @pytest.mark.asyncio
    async def test_find_all(self, db_session):
        repo = SongRepository(db_session)
        await repo.save(_song("Imagine", "John Lennon", "Imagine", 1971))
        await repo.save(_song("Space Oddity", "David Bowie", "Space Oddity", 1969))

        titles = [song.title for song in await repo.find_all()]

        assert sorted(titles) == ["Imagine", "Space Oddity"]

    @pytest.mark.asyncio
    async def test_find_all_empty(self, db_session):
        assert await SongRepository(db_session).find_all() == []

    @pytest.mark.asyncio
    async def test_delete_by_id(self, db_session):
        repo = SongRepository(db_session)
        saved = await repo.save(_song("Hallelujah", "Leonard Cohen", "Various Positions", 1984))
        song_id = saved.id
        await db_session.commit()

        await repo.delete_by_id(song_id)

        db_session.expunge_all()
        assert await repo.find_by_id(song_id) is None
        assert await repo.exists_by_id(song_id) is False

    @pytest.mark.asyncio
    async def test_delete_missing_id_is_silent(self, db_session):
        repo = SongRepository(db_session)

        await repo.delete_by_id(999)

        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_exists_by_id(self, db_session):
        repo = SongRepository(db_session)
        saved = await repo.save(_song("Song Title", "Artist", "Album", 2025))

        assert await repo.exists_by_id(saved.id) is True
        assert await repo.exists_by_id(saved.id + 100) is False

    @pytest.mark.asyncio
    async def test_count(self, db_session):
        repo = SongRepository(db_session)
        before = await repo.count()

        await repo.save(_song("New Song", "Artist", "Album", 2025))

        assert await repo.count() == before + 1

    @pytest.mark.asyncio
    async def test_find_first_by_title(self, db_session):
        repo = SongRepository(db_session)
        first = await repo.save(_song("Imagine", "John Lennon", "Imagine", 1971))
        await repo.save(_song("Imagine", "A Perfect Circle", "eMOTIVe", 2004))
        await repo.save(_song("Bohemian Rhapsody", "Queen", "A Night at the Opera", 1975))

        found = await repo.find_first_by_title("Imagine")

        assert found is not None
        assert found.id == first.id
        assert found.artist == "John Lennon"
        assert await repo.find_first_by_title("Unknown") is None

    @pytest.mark.asyncio
    async def test_save_accepts_empty_title(self, db_session):
        """No validation beyond existence: empty strings are stored as-is."""
        saved = await SongRepository(db_session).save(
            _song("", "Unknown Artist", "Unknown Album", 2000)
        )

        assert saved.title == ""

    @pytest.mark.asyncio
    async def test_save_existing_updates_in_place(self, db_session):
        repo = SongRepository(db_session)
        saved = await repo.save(_song("Old", "A", "B", 1990))
        song_id = saved.id

        saved.title = "New"
        await repo.save(saved)
        db_session.expunge_all()

        reloaded = await repo.find_by_id(song_id)
        assert reloaded.title == "New"
        assert await repo.count() == 1


class TestSongRepositoryFailures:
    """Driver errors surface as DatabaseError tagged with the operation."""

    @pytest.fixture
    def failing_session(self):
        session = AsyncMock()
        session.add = MagicMock()
        error = OperationalError("SELECT", {}, Exception("database is locked"))
        session.execute.side_effect = error
        session.flush.side_effect = error
        return session

    @pytest.mark.asyncio
    async def test_find_by_id_wraps_driver_error(self, failing_session):
        repo = SongRepository(failing_session)

        with pytest.raises(DatabaseError) as exc_info:
            await repo.find_by_id(7)

        assert exc_info.value.context["operation"] == "find_by_id"
        assert exc_info.value.context["original_error"] == "OperationalError"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_find_all_wraps_driver_error(self, failing_session):
        with pytest.raises(DatabaseError) as exc_info:
            await SongRepository(failing_session).find_all()

        assert exc_info.value.context["operation"] == "find_all"

    @pytest.mark.asyncio
    async def test_save_wraps_flush_error(self, failing_session):
        repo = SongRepository(failing_session)

        with pytest.raises(DatabaseError) as exc_info:
            await repo.save(_song("Imagine", "John Lennon", "Imagine", 1971))

        assert exc_info.value.context["operation"] == "save"
        failing_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_delete_wraps_driver_error(self, failing_session):
        with pytest.raises(DatabaseError) as exc_info:
            await SongRepository(failing_session).delete_by_id(7)

        assert exc_info.value.context["operation"] == "delete_by_id"
