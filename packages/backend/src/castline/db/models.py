"""SQLAlchemy ORM models — single source of truth for the database schema.

Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Alembic migrations mirror these models.

Key points:
- Integer primary keys that are never reused (AUTOINCREMENT on SQLite,
  sequences on PostgreSQL), so a deleted podcast's id can't come back.
- Episodes hang off a podcast and are always addressed by the pair
  (podcast_id, episode_id).
- No database-level cascades: PodcastService deletes episodes explicitly
  before their podcast so behaviour is the same on every backend.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Primary keys are int4 on PostgreSQL; nothing outside this range is stored.
MAX_ID = 2**31 - 1


def storable_id(value: int) -> bool:
    return 0 < value <= MAX_ID


class UserRole(str, enum.Enum):
    LISTENER = "Listener"
    HOST = "Host"


class User(Base):
    """An account. Hosts own podcasts; listeners browse them."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.LISTENER.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=utcnow
    )

    podcasts: Mapped[list["Podcast"]] = relationship(back_populates="owner")


class Podcast(Base):
    """A show. ``owner_id`` is set at creation and never changes."""

    __tablename__ = "podcasts"
    __table_args__ = (
        Index("ix_podcasts_owner", "owner_id"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=utcnow
    )

    owner: Mapped["User"] = relationship(back_populates="podcasts")
    episodes: Mapped[list["Episode"]] = relationship(
        back_populates="podcast",
        order_by="Episode.id",
        passive_deletes=True,
    )


class Episode(Base):
    """An episode of exactly one podcast."""

    __tablename__ = "episodes"
    __table_args__ = (
        Index("ix_episodes_podcast", "podcast_id", "id"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    podcast_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("podcasts.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=utcnow
    )

    podcast: Mapped["Podcast"] = relationship(back_populates="episodes")
