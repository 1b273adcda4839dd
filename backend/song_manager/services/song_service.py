"""
Song Manager Backend — Song Service (Business Logic)
=====================================================

What:  Existence checks and field-update semantics for songs.
Why:   Keeps business rules independent of HTTP (routes) and SQL (repository).
How:   Wraps a SongRepository; every call reconstructs what it needs from its
       arguments, so a fresh instance per request carries no shared state.
Who:   Called by the /songs route handlers through dependencies.get_song_service.

Error Handling Strategy:
    Domain errors (NotFoundError, InvalidArgumentError) are raised here and
    never caught or retried; they propagate to the global handlers in main.py.
    DatabaseError comes from the repository and propagates the same way.
"""

import logging
from typing import List, Optional

from song_manager.exceptions import InvalidArgumentError, NotFoundError
from song_manager.models.song import Song
from song_manager.repositories.song_repository import SongRepository
from song_manager.schemas.song import SongPayload

logger = logging.getLogger(__name__)


class SongService:
    """
    Business logic layer for song operations.

    Responsibilities:
        - list_all(): pass-through full scan
        - get_by_id(): lookup with not-found handling
        - create(): persist a new song, store assigns the id
        - update(): fetch, overwrite the four content fields, persist
        - delete_by_id(): validated delete, no existence check
    """

    def __init__(self, repository: SongRepository):
        self.repository = repository

    async def list_all(self) -> List[Song]:
        return await self.repository.find_all()

    async def get_by_id(self, song_id: int) -> Song:
        """
        Retrieve a single song.

        Raises:
            NotFoundError: no song has this id (→ 404)
        """
        song = await self.repository.find_by_id(song_id)
        if song is None:
            raise NotFoundError(message="Song not found", resource_id=song_id)
        return song

    async def create(self, payload: SongPayload) -> Song:
        """
        Persist a new song built from the payload.

        No duplicate detection: two identical payloads create two songs.
        """
        song = Song(
            title=payload.title,
            artist=payload.artist,
            album=payload.album,
            year=payload.year,
        )
        saved = await self.repository.save(song)
        logger.info("Song created: %s", saved.id)
        return saved

    async def update(self, song_id: int, payload: SongPayload) -> Song:
        """
        Overwrite title, artist, album and year of an existing song.

        The fetched instance keeps its id. When the song does not exist,
        NotFoundError propagates and nothing is saved.

        Raises:
            NotFoundError: no song has this id (→ 404)
        """
        song = await self.get_by_id(song_id)
        song.title = payload.title
        song.artist = payload.artist
        song.album = payload.album
        song.year = payload.year
        saved = await self.repository.save(song)
        logger.info("Song updated: %s", saved.id)
        return saved

    async def delete_by_id(self, song_id: Optional[int]) -> None:
        """
        Delete a song by id without checking that it exists.

        Raises:
            InvalidArgumentError: song_id is None (storage is not touched)
        """
        if song_id is None:
            raise InvalidArgumentError(
                message="Song id must not be null", argument="song_id"
            )
        await self.repository.delete_by_id(song_id)
        logger.info("Song deleted: %s", song_id)
