"""
Unit tests for the SQL stores on an in-memory SQLite database.
"""

from datetime import datetime

import pytest
import pytest_asyncio

from gameclub.domain.entities import Game, GameComplexity, Tournament
from gameclub.models import UserModel
from gameclub.repositories import (
    EntityConflictException,
    EntityNotFoundException,
    GameRepository,
    TournamentRepository,
    UserRepository,
)


class TestGameRepository:
    """Test GameRepository against SQLite."""

    @pytest.fixture
    def games(self, session):
        return GameRepository(session)

    def test_rejects_non_session(self):
        with pytest.raises(TypeError):
            GameRepository(object())

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, games):
        created = await games.create(
            Game(name="Catan", max_players=4, complexity=GameComplexity.EASY)
        )

        assert created.id is not None
        assert created.name == "Catan"
        assert created.number_of_players == 4
        assert created.complexity == GameComplexity.EASY

    @pytest.mark.asyncio
    async def test_find_all_orders_by_id(self, games):
        await games.create(Game(name="Catan"))
        await games.create(Game(name="Azul"))

        result = await games.find_all()

        assert [g.name for g in result] == ["Catan", "Azul"]

    @pytest.mark.asyncio
    async def test_find_all_empty(self, games):
        assert await games.find_all() == []

    @pytest.mark.asyncio
    async def test_find_by_id_accepts_string_id(self, games):
        created = await games.create(Game(name="Catan"))

        found = await games.find_by_id(str(created.id))

        assert found == created

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing_id", [999, "999", "abc"])
    async def test_find_by_id_missing(self, games, missing_id):
        with pytest.raises(EntityNotFoundException) as exc_info:
            await games.find_by_id(missing_id)

        assert exc_info.value.kind == "game"

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, games):
        await games.create(Game(name="Catan"))

        with pytest.raises(EntityConflictException):
            await games.create(Game(name="Catan"))

        # Session is usable again after the rollback
        assert len(await games.find_all()) == 1

    @pytest.mark.asyncio
    async def test_update_overwrites_fields(self, games):
        created = await games.create(Game(name="Catan", rating=7.0))

        updated = await games.update(
            created.model_copy(update={"name": "Catan Deluxe", "rating": 8.5})
        )

        assert updated.id == created.id
        assert updated.name == "Catan Deluxe"
        assert (await games.find_by_id(created.id)).rating == 8.5

    @pytest.mark.asyncio
    async def test_update_missing(self, games):
        with pytest.raises(EntityNotFoundException):
            await games.update(Game(id=999, name="Ghost"))

    @pytest.mark.asyncio
    async def test_update_requires_id(self, games):
        with pytest.raises(ValueError):
            await games.update(Game(name="No id"))

    @pytest.mark.asyncio
    async def test_delete(self, games):
        created = await games.create(Game(name="Catan"))

        await games.delete(created.id)

        with pytest.raises(EntityNotFoundException):
            await games.find_by_id(created.id)

    @pytest.mark.asyncio
    async def test_delete_missing(self, games):
        with pytest.raises(EntityNotFoundException):
            await games.delete(999)


class TestTournamentRepository:
    """Test TournamentRepository against SQLite."""

    @pytest_asyncio.fixture
    async def game(self, session):
        return await GameRepository(session).create(Game(name="Catan"))

    @pytest.fixture
    def tournaments(self, session):
        return TournamentRepository(session)

    def _tournament(self, game_id: int, **overrides) -> Tournament:
        values = dict(
            name="Spring Open",
            game_id=game_id,
            base_prize_pool=1000.0,
            calculated_prize_pool=1000.0,
            start_date=datetime(2025, 4, 12, 18, 30),
        )
        values.update(overrides)
        return Tournament(**values)

    @pytest.mark.asyncio
    async def test_create_exposes_game_name(self, tournaments, game):
        created = await tournaments.create(self._tournament(game.id))

        assert created.id is not None
        assert created.game_name == "Catan"
        assert created.base_prize_pool == 1000.0

    @pytest.mark.asyncio
    async def test_find_all_exposes_game_name(self, tournaments, game):
        await tournaments.create(self._tournament(game.id))

        result = await tournaments.find_all()

        assert [t.game_name for t in result] == ["Catan"]

    @pytest.mark.asyncio
    async def test_update_switches_game(self, session, tournaments, game):
        other = await GameRepository(session).create(Game(name="Azul"))
        created = await tournaments.create(self._tournament(game.id))

        updated = await tournaments.update(
            created.model_copy(update={"game_id": other.id, "name": "Azul Cup"})
        )

        assert updated.game_id == other.id
        assert updated.game_name == "Azul"
        assert updated.name == "Azul Cup"

    @pytest.mark.asyncio
    async def test_delete(self, tournaments, game):
        created = await tournaments.create(self._tournament(game.id))

        await tournaments.delete(created.id)

        assert await tournaments.find_all() == []


class TestUserRepository:
    """Test UserRepository against SQLite."""

    @pytest.mark.asyncio
    async def test_email_directory(self, session):
        session.add_all(
            [
                UserModel(email="ana@example.com", first_name="Ana"),
                UserModel(email="ivo@example.com", first_name="Ivo", last_name="K"),
            ]
        )
        await session.commit()

        directory = await UserRepository(session).email_directory()

        assert directory == {"ana@example.com": "Ana", "ivo@example.com": "Ivo"}

    @pytest.mark.asyncio
    async def test_email_directory_empty(self, session):
        assert await UserRepository(session).email_directory() == {}
