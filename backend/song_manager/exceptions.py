"""
Song Manager Backend — Custom Exception Hierarchy
==================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Typed exceptions let the global handlers in main.py map each failure
       to a precise HTTP status without inspecting messages.
How:   Each exception class carries a message and optional context dict.
Who:   Raised by services and repositories; caught by global handlers.

Exception Hierarchy:
    SongManagerError (base)      → 500 Internal Server Error
    ├── NotFoundError            → 404 Not Found
    ├── InvalidArgumentError     → 400 Bad Request
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class SongManagerError(Exception):
    """
    Base exception for all Song Manager application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, not necessarily returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(SongManagerError):
    """
    Raised when a requested record does not exist.

    When:    GET or PUT /songs/{id} with an id that has no matching row.
    HTTP:    404 Not Found

    The repository returns None for missing rows; the service converts
    None into this exception so HTTP concerns stay out of the service.
    """

    def __init__(
        self,
        message: str = "Song not found",
        resource: str = "song",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class InvalidArgumentError(SongManagerError):
    """
    Raised when a service operation receives an unusable argument,
    e.g. delete_by_id(None).

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Invalid argument",
        argument: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if argument:
            ctx["argument"] = argument
        super().__init__(message=message, context=ctx)
        self.argument = argument


class DatabaseError(SongManagerError):
    """
    Raised when database operations fail unexpectedly.

    What:    A query, insert, update or delete failed in the driver.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    error type and operation are kept in context and logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
