"""
Unit tests for TournamentService.
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from gameclub.domain.entities import Game, Tournament, TournamentStatus
from gameclub.repositories.exceptions import EntityNotFoundException
from gameclub.services.tournaments import (
    TournamentService,
    TournamentValidationException,
)


def _echo_id(entity):
    return entity.model_copy(update={"id": entity.id or 10})


class TestTournamentService:
    """Test TournamentService with mocked stores."""

    @pytest.fixture
    def games(self):
        games = AsyncMock()
        games.find_by_id.return_value = Game(id=1, name="Catan")
        return games

    @pytest.fixture
    def tournaments(self):
        tournaments = AsyncMock()
        tournaments.create.side_effect = _echo_id
        tournaments.update.side_effect = _echo_id
        return tournaments

    @pytest.fixture
    def service(self, tournaments, games):
        return TournamentService(tournaments, games)

    @pytest.mark.asyncio
    async def test_create_applies_summer_bonus(self, service, tournaments):
        created = await service.create_tournament(
            name="Summer Cup",
            game_id=1,
            prize_pool=1000.0,
            start_date=datetime(2025, 7, 15, 10, 0),
        )

        assert created.id == 10
        assert created.game_name == "Catan"
        assert created.base_prize_pool == 1000.0
        assert created.calculated_prize_pool == pytest.approx(1200.0)
        assert created.bonus_type == "Summer Bonus (20%)"
        assert created.status == TournamentStatus.UPCOMING
        tournaments.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_notifies_after_store(self, service, tournaments):
        notifications = MagicMock()

        created = await service.create_tournament(
            name="Spring Open",
            game_id=1,
            prize_pool=100.0,
            start_date=datetime(2025, 4, 1, 10, 0),
            notifications=notifications,
        )

        notifications.notify_created.assert_called_once_with(created)

    @pytest.mark.asyncio
    async def test_create_with_unknown_game(self, service, games, tournaments):
        games.find_by_id.side_effect = EntityNotFoundException("game", 99)
        notifications = MagicMock()

        with pytest.raises(TournamentValidationException) as exc_info:
            await service.create_tournament(
                name="Ghost Cup",
                game_id=99,
                prize_pool=100.0,
                start_date=datetime(2025, 4, 1),
                notifications=notifications,
            )

        assert exc_info.value.error_code == "GAME_NOT_FOUND"
        assert exc_info.value.message == "Game not found"
        tournaments.create.assert_not_awaited()
        notifications.notify_created.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_reapplies_strategy(self, service, tournaments, sample_tournament):
        tournaments.find_by_id.return_value = sample_tournament

        updated = await service.update_tournament(
            sample_tournament.id,
            name="Christmas Cup",
            game_id=1,
            prize_pool=500.0,
            start_date=datetime(2025, 12, 24, 18, 0),
        )

        assert updated.id == sample_tournament.id
        assert updated.name == "Christmas Cup"
        assert updated.calculated_prize_pool == pytest.approx(1100.0)
        assert updated.bonus_type == "Christmas Bonus (120%)"
        assert updated.status == sample_tournament.status

    @pytest.mark.asyncio
    async def test_update_missing_tournament(self, service, tournaments):
        tournaments.find_by_id.side_effect = EntityNotFoundException("tournament", 5)

        with pytest.raises(EntityNotFoundException):
            await service.update_tournament(
                5,
                name="x",
                game_id=1,
                prize_pool=1.0,
                start_date=datetime(2025, 4, 1),
            )

        tournaments.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_get_delete_delegate(self, service, tournaments, sample_tournament):
        tournaments.find_all.return_value = [sample_tournament]
        tournaments.find_by_id.return_value = sample_tournament

        assert await service.list_tournaments() == [sample_tournament]
        assert await service.get_tournament(7) == sample_tournament
        await service.delete_tournament(7)

        tournaments.delete.assert_awaited_once_with(7)


class TestTournamentEntity:
    def test_prize_pool_bonus(self, sample_tournament):
        bonus = sample_tournament.model_copy(update={"calculated_prize_pool": 1200.0})
        assert bonus.prize_pool_bonus == pytest.approx(1.2)

    def test_prize_pool_bonus_with_zero_base(self):
        tournament = Tournament(
            name="Free", game_id=1, start_date=datetime(2025, 4, 1)
        )
        assert tournament.prize_pool_bonus == 1.0
