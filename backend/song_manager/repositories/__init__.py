# Repositories package init
"""
Song Manager Backend — Storage Gateway
=======================================

What:  Data-access layer between services and the async SQLAlchemy session.
Why:   Services state WHAT to persist; repositories own HOW it is queried.
       Swapping the store only touches this package.

Repository Inventory:
    - SongRepository: find_all, find_by_id, save, delete_by_id, exists_by_id,
      count, find_first_by_title

Repositories never commit. The transaction belongs to the per-request
session opened by database.get_db_session().
"""
