# Services package init
"""
Song Manager Backend — Services Layer
======================================

What:  Business logic layer sitting between routes (HTTP) and repositories (storage).
Why:   Separation of concerns — routes handle HTTP, services handle business rules.
How:   Services receive a repository, apply existence checks and field updates,
       and return ORM instances that routes serialize through response models.

Service Inventory:
    - SongService: list, get, create, update and delete songs

Why services are separate from routes:
    1. Testability: Services are unit-tested against a mocked repository
    2. Reusability: Same service can be used by different routes or CLI tools
    3. Single responsibility: Routes handle HTTP; services handle logic
"""
