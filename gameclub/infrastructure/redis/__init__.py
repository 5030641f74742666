"""
Redis Infrastructure Module

Redis-backed implementation of the cache capability.

This module provides:
- RedisCache: Cache implementation with JSON serialization and TTL
- connect_redis / close_redis: client lifecycle with fail-open startup
"""

from .cache import RedisCache
from .connection import connect_redis, close_redis

__all__ = [
    # Cache implementation
    "RedisCache",
    # Connection management
    "connect_redis",
    "close_redis",
]
