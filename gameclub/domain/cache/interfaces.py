"""
Cache Capability Interface

Structural contract for a key-value store with expiry. Anything with these
coroutines is a Cache; ``RedisCache`` is the production implementation.
"""

from datetime import timedelta
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Cache(Protocol):
    """
    Key-value cache with expiry.

    Error contract:
    - ``get`` raises ``CacheMissException`` when the key is absent or expired
    - every operation raises ``CacheTransportException`` on connectivity or
      (de)serialization failures
    """

    async def get(self, key: str, shape: type[T]) -> T:
        """Deserialize the value stored at ``key`` into ``shape``."""
        ...

    async def set(self, key: str, value: Any, ttl: timedelta) -> None:
        """Store ``value`` at ``key`` with expiry ``ttl``, overwriting silently."""
        ...

    async def delete(self, *keys: str) -> None:
        """Remove zero or more keys. Absent keys are not an error."""
        ...

    async def delete_by_pattern(self, pattern: str) -> None:
        """Remove every key matching a glob-style pattern."""
        ...
