"""
Domain Entities

Pydantic entities returned by every Store. They are the shapes held in the
cache, so they stay free of ORM state and round-trip through JSON.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Store and cache-key identifier; URL paths supply strings, entities ints
EntityId = Union[int, str]


class GameComplexity(str, Enum):
    """How hard a game is to learn."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXPERT = "Expert"


class GameCategory(str, Enum):
    """Board-game category."""

    STRATEGY = "Strategy"
    PARTY = "Party"
    FAMILY = "Family"
    CARD = "Card"
    DICE = "Dice"
    COOPERATIVE = "Cooperative"


class TournamentStatus(str, Enum):
    """Tournament lifecycle status."""

    ACTIVE = "Active"
    UPCOMING = "Upcoming"
    COMPLETED = "Completed"


class Game(BaseModel):
    """
    Board game entity.

    ``id`` is None until the store has persisted the game.
    ``number_of_players`` falls back to ``max_players`` when left at zero.
    """

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    name: str
    description: str = ""
    number_of_players: int = 0
    min_players: int = 2
    max_players: int = 4
    playtime_minutes: int = 30
    min_age: int = 8
    complexity: GameComplexity = GameComplexity.MEDIUM
    category: GameCategory = GameCategory.STRATEGY
    publisher: str = ""
    year_published: int = 2024
    rating: float = 0.0

    def model_post_init(self, __context) -> None:
        if self.number_of_players == 0:
            self.number_of_players = self.max_players


class Tournament(BaseModel):
    """Tournament entity with its computed prize pool."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    name: str
    game_id: int
    game_name: str = ""
    base_prize_pool: float = Field(default=0.0, ge=0)
    calculated_prize_pool: float = 0.0
    bonus_type: str = "Normal"
    start_date: datetime
    status: TournamentStatus = TournamentStatus.UPCOMING

    @property
    def prize_pool_bonus(self) -> float:
        """Effective multiplier applied to the base prize pool."""
        if self.base_prize_pool == 0:
            return 1.0
        return self.calculated_prize_pool / self.base_prize_pool


class Member(BaseModel):
    """Club member, used as a notification recipient."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    email: str
    first_name: str
    last_name: Optional[str] = None
