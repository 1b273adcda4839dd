"""
Song Manager Backend — Songs Route Handlers
============================================

What:  CRUD endpoints for the /songs resource.
Why:   Translates HTTP requests into SongService calls and results into responses.
How:   Path ids and bodies are decoded by FastAPI (failures → 400 decode_error);
       domain errors raised by the service are mapped by the global handlers
       in main.py (NotFoundError → 404, InvalidArgumentError → 400).

Endpoints:
    GET    /songs          list all songs           200
    GET    /songs/{id}     single song              200 | 404
    POST   /songs          create                   201 | 400
    PUT    /songs/{id}     replace content fields   200 | 404 | 400
    DELETE /songs/{id}     delete (idempotent)      204
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response

from song_manager.dependencies import get_song_service
from song_manager.schemas.song import (
    SONG_ID_MAX,
    SONG_ID_MIN,
    ErrorResponse,
    SongPayload,
    SongResponse,
)
from song_manager.services.song_service import SongService

router = APIRouter(prefix="/songs", tags=["Songs"])


@router.get(
    "",
    response_model=List[SongResponse],
    responses={
        200: {"description": "All songs"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all songs",
)
async def list_songs(
    response: Response,
    service: SongService = Depends(get_song_service),
) -> List[SongResponse]:
    """
    Returns every song in storage order (ascending id). Always succeeds with
    an empty list when no songs exist.

    The X-Total-Count header carries the number of songs returned.
    """
    songs = await service.list_all()
    response.headers["X-Total-Count"] = str(len(songs))
    return songs


@router.get(
    "/{song_id}",
    response_model=SongResponse,
    responses={
        200: {"description": "The song", "model": SongResponse},
        404: {"description": "Song not found", "model": ErrorResponse},
    },
    summary="Get a single song by ID",
)
async def get_song(
    song_id: int = Path(
        ge=SONG_ID_MIN, le=SONG_ID_MAX,
        description="Song identifier (64-bit). Out-of-range values are rejected with 400.",
    ),
    service: SongService = Depends(get_song_service),
) -> SongResponse:
    return await service.get_by_id(song_id)


@router.post(
    "",
    status_code=201,
    response_model=SongResponse,
    responses={
        201: {"description": "Song created", "model": SongResponse},
        400: {"description": "Malformed request body", "model": ErrorResponse},
    },
    summary="Create a song",
)
async def create_song(
    payload: SongPayload,
    service: SongService = Depends(get_song_service),
) -> SongResponse:
    """Persists a new song; the response carries the store-assigned id."""
    return await service.create(payload)


@router.put(
    "/{song_id}",
    response_model=SongResponse,
    responses={
        200: {"description": "Song updated", "model": SongResponse},
        400: {"description": "Malformed request body", "model": ErrorResponse},
        404: {"description": "Song not found", "model": ErrorResponse},
    },
    summary="Replace the fields of a song",
)
async def update_song(
    payload: SongPayload,
    song_id: int = Path(
        ge=SONG_ID_MIN, le=SONG_ID_MAX,
        description="Song identifier (64-bit). Out-of-range values are rejected with 400.",
    ),
    service: SongService = Depends(get_song_service),
) -> SongResponse:
    """Overwrites title, artist, album and year; the id never changes."""
    return await service.update(song_id, payload)


@router.delete(
    "/{song_id}",
    status_code=204,
    response_class=Response,
    responses={204: {"description": "Song deleted (or did not exist)"}},
    summary="Delete a song",
)
async def delete_song(
    song_id: int = Path(
        ge=SONG_ID_MIN, le=SONG_ID_MAX,
        description="Song identifier (64-bit). Out-of-range values are rejected with 400.",
    ),
    service: SongService = Depends(get_song_service),
) -> Response:
    """
    Deletes the song if it exists.

    Returns 204 whether or not a matching record existed, so clients can
    retry a delete safely.
    """
    await service.delete_by_id(song_id)
    return Response(status_code=204)
