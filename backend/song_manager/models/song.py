"""
Song Manager Backend — Song SQLAlchemy Model
=============================================

What:  ORM model representing the `songs` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Built by SongService, persisted and queried by SongRepository.

Table Design Rationale:
    - Integer surrogate key assigned by the store on first insert. The key is
      never reused: SQLite gets AUTOINCREMENT (sqlite_autoincrement), PostgreSQL
      a BIGSERIAL sequence.
    - title / artist / album: free text, no uniqueness constraint
    - year: 32-bit integer, no business range check
"""

from typing import Optional

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from song_manager.database import Base


class Song(Base):
    """
    A single music track record.

    Lifecycle:
        1. Constructed with all four fields; id is None
        2. Flushed by SongRepository.save(); the store assigns id
        3. Updated in place (four fields overwritten, id kept)
        4. Deleted by id
    """

    __tablename__ = "songs"
    __table_args__ = {"sqlite_autoincrement": True}

    # BIGINT (BIGSERIAL) elsewhere; SQLite only autoincrements an INTEGER PRIMARY KEY
    id: Mapped[Optional[int]] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist: Mapped[str] = mapped_column(String(255), nullable=False)
    album: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Song(id={self.id}, title='{self.title}', "
            f"artist='{self.artist}', year={self.year})>"
        )
