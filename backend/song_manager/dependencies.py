"""
Song Manager Backend — Request-Scoped Wiring
=============================================

What:  FastAPI dependencies that assemble session → repository → service.
Why:   Routes depend on SongService only; they never see the session or the
       repository. Tests swap any link via app.dependency_overrides.
When:  Resolved once per request; nothing is cached between requests.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from song_manager.database import get_db_session
from song_manager.repositories.song_repository import SongRepository
from song_manager.services.song_service import SongService


def get_song_repository(
    db: AsyncSession = Depends(get_db_session),
) -> SongRepository:
    return SongRepository(db)


def get_song_service(
    repository: SongRepository = Depends(get_song_repository),
) -> SongService:
    return SongService(repository)
