"""
Song Manager Backend — Application Package Initializer
======================================================

What: Marks the `song_manager` directory as a Python package.
Why:  Enables module imports like `from song_manager.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a strict layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP decoding/encoding only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Existence checks, field updates
    ├─────────────────────────────────────┤
    │      Repositories (Storage Gateway) │  ← Queries against the session
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Calls only flow downwards. tests/test_architecture.py enforces this
    by inspecting the imports of every module in the package.
"""

__version__ = "1.0.0"
