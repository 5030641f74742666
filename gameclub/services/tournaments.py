"""
Tournament Service

Tournament workflows that span more than one store: game lookup, prize pool
strategy and creation notifications.
"""

from datetime import datetime
from typing import Any, Dict, Optional

import structlog

from ..domain.entities import Game, Tournament, TournamentStatus
from ..repositories.exceptions import EntityNotFoundException
from ..repositories.interfaces import EntityId, Store
from .notifications import TournamentNotifications
from .prize_pool import strategy_for_date

logger = structlog.get_logger()


class TournamentValidationException(Exception):
    """Raised when a tournament request references invalid data."""

    def __init__(
        self,
        message: str,
        error_code: str = "TOURNAMENT_INVALID",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class TournamentService:
    """
    Tournament use cases.

    Args:
        tournaments: Tournament store (usually cached)
        games: Game store used to validate ``game_id`` (usually cached)
    """

    def __init__(self, tournaments: Store[Tournament], games: Store[Game]):
        self.tournaments = tournaments
        self.games = games

    async def list_tournaments(self) -> list[Tournament]:
        return await self.tournaments.find_all()

    async def get_tournament(self, tournament_id: EntityId) -> Tournament:
        return await self.tournaments.find_by_id(tournament_id)

    async def create_tournament(
        self,
        name: str,
        game_id: int,
        prize_pool: float,
        start_date: datetime,
        notifications: Optional[TournamentNotifications] = None,
    ) -> Tournament:
        """
        Create a tournament and notify observers.

        Observers run synchronously after the tournament is stored, so the
        caller waits for delivery.

        Raises:
            TournamentValidationException: If the game does not exist
        """
        game = await self._require_game(game_id)
        strategy = strategy_for_date(start_date)

        tournament = Tournament(
            name=name,
            game_id=game.id,
            game_name=game.name,
            base_prize_pool=prize_pool,
            calculated_prize_pool=strategy.calculate(prize_pool),
            bonus_type=strategy.name,
            start_date=start_date,
            status=TournamentStatus.UPCOMING,
        )
        created = await self.tournaments.create(tournament)

        logger.info(
            "Tournament created",
            tournament_id=created.id,
            game_id=game.id,
            bonus_type=strategy.name,
        )

        if notifications is not None:
            notifications.notify_created(created)

        return created

    async def update_tournament(
        self,
        tournament_id: EntityId,
        name: str,
        game_id: int,
        prize_pool: float,
        start_date: datetime,
    ) -> Tournament:
        """
        Replace a tournament's details, re-selecting its prize pool strategy.

        Raises:
            EntityNotFoundException: If the tournament does not exist
            TournamentValidationException: If the game does not exist
        """
        existing = await self.tournaments.find_by_id(tournament_id)
        game = await self._require_game(game_id)
        strategy = strategy_for_date(start_date)

        updated = existing.model_copy(
            update={
                "name": name,
                "game_id": game.id,
                "game_name": game.name,
                "base_prize_pool": prize_pool,
                "calculated_prize_pool": strategy.calculate(prize_pool),
                "bonus_type": strategy.name,
                "start_date": start_date,
            }
        )
        return await self.tournaments.update(updated)

    async def delete_tournament(self, tournament_id: EntityId) -> None:
        await self.tournaments.delete(tournament_id)

    async def _require_game(self, game_id: int) -> Game:
        try:
            return await self.games.find_by_id(game_id)
        except EntityNotFoundException:
            raise TournamentValidationException(
                "Game not found",
                error_code="GAME_NOT_FOUND",
                details={"game_id": game_id},
            ) from None
