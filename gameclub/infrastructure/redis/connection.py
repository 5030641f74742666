"""
Redis Connection Management

Creates the shared ``redis.asyncio`` client. Startup is fail-open: when Redis
cannot be reached the application runs without caching instead of refusing
to start.
"""

import asyncio
import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ...core.config import Settings, get_settings

logger = logging.getLogger(__name__)


async def connect_redis(settings: Optional[Settings] = None) -> Optional[Redis]:
    """
    Connect to Redis and verify the connection with PING.

    Args:
        settings: Application settings (defaults to the global settings)

    Returns:
        Connected client, or None when Redis is unreachable (caching disabled)
    """
    settings = settings or get_settings()

    client = Redis.from_url(
        settings.REDIS_URL,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        socket_connect_timeout=settings.REDIS_CONNECTION_TIMEOUT,
        socket_timeout=settings.REDIS_CONNECTION_TIMEOUT,
        retry_on_timeout=True,
        health_check_interval=30,
    )

    try:
        await asyncio.wait_for(
            client.ping(), timeout=settings.REDIS_CONNECTION_TIMEOUT
        )
    except (RedisError, OSError, asyncio.TimeoutError) as e:
        logger.warning(f"Failed to connect to Redis: {e}. Caching disabled.")
        await client.aclose()
        return None

    logger.info("Redis connected successfully")
    return client


async def close_redis(client: Optional[Redis]) -> None:
    """Close the shared client; a None client is a no-op."""
    if client is None:
        return

    try:
        await client.aclose()
    except RedisError as e:
        logger.error(f"Error closing Redis connection: {e}")
