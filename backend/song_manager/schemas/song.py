"""
Song Manager Backend — Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the API contract of the /songs resource.
Why:   Structural decoding of request bodies, serialization of responses,
       and OpenAPI doc generation.
How:   FastAPI validates request bodies against SongPayload (failures become
       400 decode_error) and serializes ORM instances through SongResponse.

Design Decision:
    Schemas are separate from the SQLAlchemy model so that the identifier is
    never accepted from a client: SongPayload has no `id`, and any `id` key
    in the body is ignored.
"""

from typing import Optional

from pydantic import BaseModel, Field


# Identifiers are 64-bit store keys; years are 32-bit integers. Values outside
# these ranges are rejected while decoding (400) instead of reaching the driver.
SONG_ID_MIN = -(2**63)
SONG_ID_MAX = 2**63 - 1
YEAR_MIN = -(2**31)
YEAR_MAX = 2**31 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SongPayload(BaseModel):
    """
    What:  Field values for a song, without identifier.
    Who:   Body of POST /songs and PUT /songs/{id}.
    """
    title: str = Field(description="Track title")
    artist: str = Field(description="Performing artist")
    album: str = Field(description="Album the track appears on")
    year: int = Field(ge=YEAR_MIN, le=YEAR_MAX, description="Release year")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"title": "Imagine", "artist": "John Lennon", "album": "Imagine", "year": 1971}
            ]
        }
    }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SongResponse(BaseModel):
    """Full representation of a song, built from the ORM instance."""
    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    title: str
    artist: str
    album: str
    year: int

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "not_found", "decode_error")
        message: Human-readable description
        details: Optional extra context (e.g., which field failed decoding)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "not_found",
            "message": "Song not found",
            "details": {"resource": "song", "resource_id": 42},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
