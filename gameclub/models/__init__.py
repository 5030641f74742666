"""
GameClub Database Models

SQLAlchemy models for games, tournaments and club members.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Canonical Base class for all database models."""

    pass


class TimestampMixin:
    """Mixin for timestamp fields."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class GameModel(Base, TimestampMixin):
    """Board game catalogue entry."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    number_of_players: Mapped[int] = mapped_column(Integer, nullable=False)
    min_players: Mapped[int] = mapped_column(Integer, default=2, nullable=False)
    max_players: Mapped[int] = mapped_column(Integer, default=4, nullable=False)
    playtime_minutes: Mapped[int] = mapped_column(Integer, default=30, nullable=False)
    min_age: Mapped[int] = mapped_column(Integer, default=8, nullable=False)
    complexity: Mapped[str] = mapped_column(String(20), default="Medium")
    category: Mapped[str] = mapped_column(String(30), default="Strategy")
    publisher: Mapped[str] = mapped_column(String(100), default="")
    year_published: Mapped[int] = mapped_column(Integer, default=2024)
    rating: Mapped[float] = mapped_column(Float, default=0.0)

    # Relationships
    tournaments: Mapped[list["TournamentModel"]] = relationship(
        "TournamentModel", back_populates="game", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<GameModel(id={self.id}, name={self.name})>"


class TournamentModel(Base, TimestampMixin):
    """Tournament played on a single game."""

    __tablename__ = "tournaments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    base_prize_pool: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), default=0.0
    )
    calculated_prize_pool: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), default=0.0
    )
    bonus_type: Mapped[str] = mapped_column(String(50), default="Normal")
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    status: Mapped[str] = mapped_column(String(20), default="Upcoming")

    # Foreign keys
    game_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    game: Mapped["GameModel"] = relationship(
        "GameModel", back_populates="tournaments", lazy="selectin"
    )

    @property
    def game_name(self) -> str:
        return self.game.name if self.game is not None else ""

    def __repr__(self) -> str:
        return f"<TournamentModel(id={self.id}, name={self.name})>"


class UserModel(Base, TimestampMixin):
    """Club member account."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"


__all__ = ["Base", "TimestampMixin", "GameModel", "TournamentModel", "UserModel"]
