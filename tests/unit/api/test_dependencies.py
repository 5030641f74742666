"""
Unit tests for store wiring: cached when a cache exists, plain otherwise.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from gameclub.api.dependencies import (
    get_cache,
    get_game_store,
    get_tournament_notifications,
    get_tournament_store,
)
from gameclub.core.config import get_settings
from gameclub.repositories import CachedRepository, GameRepository, TournamentRepository
from gameclub.services.notifications import EmailNotifier, LogNotifier


class TestStoreWiring:
    @pytest.fixture
    def session(self):
        return AsyncSession()

    def test_plain_game_store_without_cache(self, session):
        assert isinstance(get_game_store(session=session, cache=None), GameRepository)

    def test_cached_game_store_with_cache(self, session):
        store = get_game_store(session=session, cache=AsyncMock())

        assert isinstance(store, CachedRepository)
        assert store.kind == "game"
        assert store.ttl == get_settings().cache_ttl
        assert store.dependents == ("tournament",)

    def test_cached_tournament_store_with_cache(self, session):
        store = get_tournament_store(session=session, cache=AsyncMock())

        assert isinstance(store, CachedRepository)
        assert store.kind == "tournament"

    def test_plain_tournament_store_without_cache(self, session):
        store = get_tournament_store(session=session, cache=None)

        assert isinstance(store, TournamentRepository)

    def test_get_cache_reads_app_state(self):
        request = MagicMock()
        request.app.state.cache = "cache"

        assert get_cache(request) == "cache"


class TestNotificationWiring:
    @pytest.mark.asyncio
    async def test_email_then_log_notifier(self):
        users = AsyncMock()
        users.email_directory.return_value = {"ana@example.com": "Ana"}

        notifications = await get_tournament_notifications(users=users)

        email, log = notifications.observers
        assert isinstance(email, EmailNotifier)
        assert email.recipients == {"ana@example.com": "Ana"}
        assert isinstance(log, LogNotifier)
