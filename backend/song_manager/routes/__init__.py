# Routes package init
"""
Song Manager Backend — API Routes Package
==========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - songs.py:   GET/POST       /songs
                  GET/PUT/DELETE /songs/{id}
    - health.py:  GET            /health

Design Principle:
    Routes are THIN — they handle HTTP concerns only:
    - Decode path parameters and bodies
    - Call SongService (injected via dependencies.py)
    - Pick the status code and headers

    Routes never import repositories or ORM models.
"""
