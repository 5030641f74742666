"""
Game Repository

SQL store for the board-game catalogue.
"""

from ..constants import GAME_KIND
from ..domain.entities import Game
from ..models import GameModel
from .base import SqlRepository


class GameRepository(SqlRepository[GameModel, Game]):
    """Game store; game names are unique, so duplicates raise a conflict."""

    model = GameModel
    entity_type = Game
    kind = GAME_KIND
