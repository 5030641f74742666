"""
Main pytest configuration for all GameClub tests.

Test settings are exported before any ``gameclub`` module is imported, so the
cached settings object never points at a real database or Redis.
"""

import fnmatch
import os
from datetime import datetime, timezone
from typing import Any, Dict

import pytest
import pytest_asyncio
from pydantic import TypeAdapter
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["CACHE_ENABLED"] = "false"
os.environ["CACHE_TTL_SECONDS"] = "300"
os.environ["LOG_LEVEL"] = "DEBUG"

from gameclub.core.database import enable_sqlite_foreign_keys  # noqa: E402
from gameclub.domain.cache import CacheMissException  # noqa: E402
from gameclub.domain.entities import Game, Tournament  # noqa: E402
from gameclub.models import Base  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without external services")
    config.addinivalue_line("markers", "integration: tests exercising the HTTP API")


class InMemoryCache:
    """Cache double storing JSON payloads like RedisCache does."""

    def __init__(self):
        self.data: Dict[str, bytes] = {}

    async def get(self, key, shape):
        if key not in self.data:
            raise CacheMissException(key)
        return TypeAdapter(shape).validate_json(self.data[key])

    async def set(self, key, value, ttl):
        self.data[key] = TypeAdapter(Any).dump_json(value)

    async def delete(self, *keys):
        for key in keys:
            self.data.pop(key, None)

    async def delete_by_pattern(self, pattern):
        for key in fnmatch.filter(list(self.data), pattern):
            del self.data[key]


@pytest.fixture
def memory_cache():
    """Cache double shared by every store in a test."""
    return InMemoryCache()


@pytest_asyncio.fixture
async def session():
    """Fresh SQLite schema per test, foreign keys enforced."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def sample_games():
    """Two persisted games."""
    return [
        Game(id=1, name="Catan", min_players=3, max_players=4),
        Game(id=2, name="Carcassonne", min_players=2, max_players=5),
    ]


@pytest.fixture
def sample_tournament():
    """A persisted tournament outside every bonus period."""
    return Tournament(
        id=7,
        name="Spring Open",
        game_id=1,
        game_name="Catan",
        base_prize_pool=1000.0,
        calculated_prize_pool=1000.0,
        bonus_type="Normal",
        start_date=datetime(2025, 4, 12, 18, 30, tzinfo=timezone.utc),
    )
