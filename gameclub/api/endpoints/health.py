"""
Health check endpoint.

Reports database connectivity and whether the cache is active. A missing or
unreachable cache degrades nothing but latency, so it never makes the
service unhealthy.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request, Response, status
from redis.exceptions import RedisError

from ...constants import APP_NAME, APP_VERSION
from ...core.config import get_settings
from ...core.database import database_manager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


async def _cache_status(request: Request) -> str:
    client = getattr(request.app.state, "redis", None)
    if client is None:
        return "disabled"
    try:
        await client.ping()
        return "healthy"
    except (RedisError, OSError) as e:
        logger.warning(f"Cache health check failed: {e}")
        return "unhealthy"


@router.get("/health")
async def health_check(request: Request, response: Response) -> Dict[str, Any]:
    """
    Service health.

    Returns 503 when the database is unreachable.
    """
    database = await database_manager.health_check()
    if database["status"] != "healthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": database["status"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": APP_NAME,
        "version": APP_VERSION,
        "environment": get_settings().ENVIRONMENT,
        "database": database,
        "cache": await _cache_status(request),
    }
