"""
Cached Repository

Cache-aside decorator over any ``Store``. It exposes the same contract as the
store it wraps, so callers are unaware of the cache.

Reads:  cache hit -> return; miss/transport error -> store -> populate cache.
Writes: store first; on success invalidate the collection key (and the
        per-id key for update/delete). Update and delete also drop every
        entry of the dependent kinds, whose cached entities embed this one.

The cache is fail-open. Cache errors are logged and never reach the caller.
Store errors always propagate unchanged. If an invalidation is lost, readers
may see a stale value for at most one TTL.
"""

from datetime import timedelta
from typing import Awaitable, Callable, Generic, Iterable, TypeVar

import structlog
from prometheus_client import Counter

from ..domain.cache.interfaces import Cache
from ..domain.cache.keys import collection_key, entity_key, entity_pattern
from ..domain.cache.exceptions import CacheException, CacheMissException
from .interfaces import EntityId, EntityT, Store

logger = structlog.get_logger()

T = TypeVar("T")

CACHE_LOOKUPS = Counter(
    "gameclub_cache_lookups_total",
    "Cache-aside read lookups by outcome",
    ["kind", "outcome"],
)
CACHE_ERRORS = Counter(
    "gameclub_cache_errors_total",
    "Cache operations that failed and were bypassed",
    ["kind", "operation"],
)


class CachedRepository(Generic[EntityT]):
    """
    Read-through / write-invalidate decorator for a ``Store``.

    Holds only immutable references after construction and is safe to share
    between concurrent tasks as long as the cache and store clients are.

    Args:
        store: Authoritative store
        cache: Cache backend
        kind: Key namespace, e.g. ``"game"``
        entity_type: Entity class, used to deserialize cached values
        ttl: Expiry applied to every populated entry
        dependents: Kinds whose cached entities embed this kind (a tournament
            carries its game name and is deleted with its game)
    """

    def __init__(
        self,
        store: Store[EntityT],
        cache: Cache,
        *,
        kind: str,
        entity_type: type[EntityT],
        ttl: timedelta,
        dependents: Iterable[str] = (),
    ):
        if ttl <= timedelta(0):
            raise ValueError(f"ttl must be positive, got {ttl}")

        self._store = store
        self._cache = cache
        self._kind = kind
        self._entity_type = entity_type
        self._ttl = ttl
        self._collection_key = collection_key(kind)
        self._dependents = tuple(dependents)
        # Built eagerly so an invalid kind fails at construction
        self._dependent_keys = tuple(collection_key(d) for d in self._dependents)
        self._dependent_patterns = tuple(entity_pattern(d) for d in self._dependents)

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def dependents(self) -> tuple[str, ...]:
        return self._dependents

    # Read path

    async def find_all(self) -> list[EntityT]:
        return await self._read_through(
            self._collection_key,
            list[self._entity_type],
            self._store.find_all,
        )

    async def find_by_id(self, id: EntityId) -> EntityT:
        return await self._read_through(
            entity_key(self._kind, id),
            self._entity_type,
            lambda: self._store.find_by_id(id),
        )

    # Write path

    async def create(self, entity: EntityT) -> EntityT:
        created = await self._store.create(entity)
        # A new entity has no per-id entry yet; only membership changed
        await self._invalidate(self._collection_key)
        return created

    async def update(self, entity: EntityT) -> EntityT:
        updated = await self._store.update(entity)
        await self._invalidate(entity_key(self._kind, entity.id), self._collection_key)
        await self._invalidate_dependents()
        return updated

    async def delete(self, id: EntityId) -> None:
        await self._store.delete(id)
        await self._invalidate(entity_key(self._kind, id), self._collection_key)
        await self._invalidate_dependents()

    # Internals

    async def _read_through(
        self, key: str, shape: type, load: Callable[[], Awaitable[T]]
    ) -> T:
        try:
            value = await self._cache.get(key, shape)
        except CacheMissException:
            CACHE_LOOKUPS.labels(self._kind, "miss").inc()
            logger.debug("Cache miss", key=key)
        except CacheException as e:
            CACHE_LOOKUPS.labels(self._kind, "error").inc()
            CACHE_ERRORS.labels(self._kind, "get").inc()
            logger.warning("Cache get error", key=key, error=str(e))
        else:
            CACHE_LOOKUPS.labels(self._kind, "hit").inc()
            return value

        # Store errors propagate; nothing is cached for a failed load
        value = await load()

        try:
            await self._cache.set(key, value, self._ttl)
        except CacheException as e:
            CACHE_ERRORS.labels(self._kind, "set").inc()
            logger.warning("Cache set error", key=key, error=str(e))

        return value

    async def _invalidate(self, *keys: str) -> None:
        try:
            await self._cache.delete(*keys)
        except CacheException as e:
            CACHE_ERRORS.labels(self._kind, "delete").inc()
            logger.warning("Cache invalidation error", keys=list(keys), error=str(e))

    async def _invalidate_dependents(self) -> None:
        if not self._dependents:
            return

        await self._invalidate(*self._dependent_keys)
        for pattern in self._dependent_patterns:
            try:
                await self._cache.delete_by_pattern(pattern)
            except CacheException as e:
                CACHE_ERRORS.labels(self._kind, "delete_by_pattern").inc()
                logger.warning(
                    "Cache dependent invalidation error", pattern=pattern, error=str(e)
                )
