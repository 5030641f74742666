"""
API Dependencies

Request-scoped wiring of stores and services. Stores are wrapped in the
cache-aside decorator when the application holds a cache; otherwise the SQL
store is handed out directly.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..constants import GAME_KIND, TOURNAMENT_KIND
from ..core.config import get_settings
from ..core.database import get_database_session
from ..domain.cache.interfaces import Cache
from ..domain.entities import Game, Tournament
from ..repositories.cached import CachedRepository
from ..repositories.game import GameRepository
from ..repositories.interfaces import Store
from ..repositories.tournament import TournamentRepository
from ..repositories.user import UserRepository
from ..services.notifications import (
    EmailNotifier,
    LogNotifier,
    TournamentNotifications,
)
from ..services.tournaments import TournamentService


def get_cache(request: Request) -> Optional[Cache]:
    """Cache set up by the application lifespan, or None when disabled."""
    return getattr(request.app.state, "cache", None)


def get_game_store(
    session: AsyncSession = Depends(get_database_session),
    cache: Optional[Cache] = Depends(get_cache),
) -> Store[Game]:
    store = GameRepository(session)
    if cache is None:
        return store
    return CachedRepository(
        store,
        cache,
        kind=GAME_KIND,
        entity_type=Game,
        ttl=get_settings().cache_ttl,
        dependents=(TOURNAMENT_KIND,),
    )


def get_tournament_store(
    session: AsyncSession = Depends(get_database_session),
    cache: Optional[Cache] = Depends(get_cache),
) -> Store[Tournament]:
    store = TournamentRepository(session)
    if cache is None:
        return store
    return CachedRepository(
        store,
        cache,
        kind=TOURNAMENT_KIND,
        entity_type=Tournament,
        ttl=get_settings().cache_ttl,
    )


def get_user_repository(
    session: AsyncSession = Depends(get_database_session),
) -> UserRepository:
    return UserRepository(session)


def get_tournament_service(
    tournaments: Store[Tournament] = Depends(get_tournament_store),
    games: Store[Game] = Depends(get_game_store),
) -> TournamentService:
    return TournamentService(tournaments, games)


async def get_tournament_notifications(
    users: UserRepository = Depends(get_user_repository),
) -> TournamentNotifications:
    """Observers for tournament creation: every member by email, plus audit log."""
    notifications = TournamentNotifications()
    notifications.attach(EmailNotifier(await users.email_directory()))
    notifications.attach(LogNotifier())
    return notifications
