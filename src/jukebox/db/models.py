"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Alembic migrations mirror these definitions.

Key concepts:
- Integer autoincrement primary keys (ids show up in URLs: /tracks/3)
- playlist_tracks is a plain association Table; neither side owns it
- created_at is filled in Python (utcnow) so freshly inserted rows can be
  serialized without a refresh round-trip
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Ids are int4 columns; anything outside this range cannot name a row.
MAX_ID = 2**31 - 1


def is_valid_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


playlist_tracks = Table(
    "playlist_tracks",
    Base.metadata,
    Column(
        "playlist_id",
        Integer,
        ForeignKey("playlists.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "track_id",
        Integer,
        ForeignKey("tracks.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class User(Base):
    """A registered listener. Owns playlists.

    Learn: Only the bcrypt hash is stored. The plaintext password never
    reaches the database or the logs.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    # Relationships
    playlists: Mapped[list["Playlist"]] = relationship(back_populates="owner")


class Track(Base):
    """A piece of music. Public: anyone may list or fetch tracks."""

    __tablename__ = "tracks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    artist: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    album: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    duration_seconds: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    # Relationships
    playlists: Mapped[list["Playlist"]] = relationship(
        secondary=playlist_tracks, back_populates="tracks"
    )


class Playlist(Base):
    """A named set of tracks with exactly one owner.

    Learn: owner_id is the access boundary. Only the owner can see a
    playlist, either in a listing or by id.
    """

    __tablename__ = "playlists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="playlists")
    tracks: Mapped[list["Track"]] = relationship(
        secondary=playlist_tracks, back_populates="playlists", order_by="Track.id"
    )
