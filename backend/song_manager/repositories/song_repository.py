"""
Song Manager Backend — Song Repository
=======================================

What:  Persists and retrieves Song records through an AsyncSession.
Why:   Keeps SQL out of the service layer.
How:   Each instance wraps the session of a single request. Writes are
       flushed (so the store assigns ids) but committed by get_db_session.

Identifier assignment:
    The store assigns the integer key on first flush. Keys increase
    monotonically and are never reused after a delete.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from song_manager.exceptions import DatabaseError
from song_manager.models.song import Song

logger = logging.getLogger(__name__)


class SongRepository:
    """
    Storage gateway for Song records.

    Error Handling Strategy:
        SQLAlchemyError is logged with the failing operation and re-raised
        as DatabaseError, so driver details never reach the client.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> List[Song]:
        """All songs, ordered by id."""
        try:
            result = await self.session.execute(select(Song).order_by(Song.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._database_error("find_all", e) from e

    async def find_by_id(self, song_id: int) -> Optional[Song]:
        try:
            result = await self.session.execute(
                select(Song).where(Song.id == song_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("find_by_id", e, song_id=song_id) from e

    async def find_first_by_title(self, title: str) -> Optional[Song]:
        """The lowest-id song whose title matches exactly, or None."""
        try:
            result = await self.session.execute(
                select(Song).where(Song.title == title).order_by(Song.id).limit(1)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("find_first_by_title", e) from e

    async def save(self, song: Song) -> Song:
        """
        Insert a new song or persist changes to a managed one.

        Returns the same instance; after the flush its id is populated.
        """
        try:
            self.session.add(song)
            await self.session.flush()
            return song
        except SQLAlchemyError as e:
            raise self._database_error("save", e, song_id=song.id) from e

    async def delete_by_id(self, song_id: int) -> None:
        """Delete the song with this id. No-op when no row matches."""
        try:
            await self.session.execute(delete(Song).where(Song.id == song_id))
        except SQLAlchemyError as e:
            raise self._database_error("delete_by_id", e, song_id=song_id) from e

    async def exists_by_id(self, song_id: int) -> bool:
        try:
            result = await self.session.execute(
                select(Song.id).where(Song.id == song_id)
            )
            return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise self._database_error("exists_by_id", e, song_id=song_id) from e

    async def count(self) -> int:
        try:
            result = await self.session.execute(select(func.count(Song.id)))
            return result.scalar() or 0
        except SQLAlchemyError as e:
            raise self._database_error("count", e) from e

    @staticmethod
    def _database_error(operation: str, error: Exception, **context) -> DatabaseError:
        logger.error(
            "Database error in SongRepository.%s: %s", operation, str(error),
            exc_info=True,
        )
        return DatabaseError(
            context={
                "operation": operation,
                "original_error": type(error).__name__,
                **context,
            },
        )
