"""
Redis Cache

Cache implementation over ``redis.asyncio``. Values are stored as JSON
produced by pydantic, and read back by validating against the caller's
requested shape.
"""

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import TypeAdapter
from redis.asyncio import Redis
from redis.exceptions import RedisError

from ...domain.cache.exceptions import CacheMissException, CacheTransportException

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

T = TypeVar("T")

# Keys removed per DEL round-trip during pattern invalidation
DELETE_BATCH_SIZE = 500

_any_adapter = TypeAdapter(Any)


@lru_cache(maxsize=128)
def _adapter_for(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


class RedisCache:
    """
    Redis-backed cache.

    Every client error is wrapped in ``CacheTransportException``; a missing
    key raises ``CacheMissException``. The client is shared and never closed
    here; its lifecycle belongs to ``connect_redis``/``close_redis``.
    """

    def __init__(self, client: Redis):
        self._client = client

    async def get(self, key: str, shape: type[T]) -> T:
        with tracer.start_as_current_span("cache.get") as span:
            span.set_attribute("cache.key", key)

            try:
                raw = await self._client.get(key)
            except RedisError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise CacheTransportException("get", key, e) from e

            if raw is None:
                span.set_attribute("cache.hit", False)
                raise CacheMissException(key)

            try:
                value = _adapter_for(shape).validate_json(raw)
            except ValueError as e:
                # Covers pydantic ValidationError: the stored payload no
                # longer matches the entity schema.
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise CacheTransportException("get", key, e) from e

            span.set_attribute("cache.hit", True)
            return value

    async def set(self, key: str, value: Any, ttl: timedelta) -> None:
        with tracer.start_as_current_span("cache.set") as span:
            span.set_attribute("cache.key", key)
            span.set_attribute("cache.ttl_seconds", int(ttl.total_seconds()))

            try:
                payload = _any_adapter.dump_json(value)
            except ValueError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise CacheTransportException("set", key, e) from e

            try:
                await self._client.set(key, payload, ex=ttl)
            except RedisError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise CacheTransportException("set", key, e) from e

    async def delete(self, *keys: str) -> None:
        if not keys:
            return

        with tracer.start_as_current_span("cache.delete") as span:
            span.set_attribute("cache.keys", list(keys))
            try:
                await self._client.delete(*keys)
            except RedisError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise CacheTransportException("delete", ", ".join(keys), e) from e

    async def delete_by_pattern(self, pattern: str) -> None:
        with tracer.start_as_current_span("cache.delete_by_pattern") as span:
            span.set_attribute("cache.pattern", pattern)
            deleted = 0
            batch: list = []

            try:
                # SCAN instead of KEYS so a large keyspace never blocks the server
                async for key in self._client.scan_iter(
                    match=pattern, count=DELETE_BATCH_SIZE
                ):
                    batch.append(key)
                    if len(batch) >= DELETE_BATCH_SIZE:
                        deleted += await self._client.delete(*batch)
                        batch = []
                if batch:
                    deleted += await self._client.delete(*batch)
            except RedisError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise CacheTransportException("delete_by_pattern", pattern, e) from e

            span.set_attribute("cache.deleted", deleted)
            logger.debug(f"Deleted {deleted} keys matching {pattern}")
