"""
GameClub API - Main application entry point

FastAPI application for the board-game club: games and tournaments backed by
SQL, with a Redis cache-aside layer that is used when Redis is reachable.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.endpoints.games import router as games_router
from .api.endpoints.health import router as health_router
from .api.endpoints.tournaments import router as tournaments_router
from .api.endpoints.users import router as users_router
from .constants import APP_NAME, APP_VERSION
from .core.config import get_settings
from .core.database import database_manager
from .core.logging import configure_logging
from .infrastructure.redis import RedisCache, close_redis, connect_redis
from .middleware import SecurityHeadersMiddleware
from .repositories.exceptions import (
    EntityConflictException,
    EntityNotFoundException,
    RepositoryException,
)
from .services.tournaments import TournamentValidationException

logger = structlog.get_logger()
settings = get_settings()


# Application lifecycle management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the database and, when enabled and reachable, the cache."""
    configure_logging()
    logger.info(f"Starting {APP_NAME} API", version=APP_VERSION)

    try:
        await database_manager.initialize()
    except Exception:
        logger.exception("Failed to initialize application")
        raise

    app.state.redis = None
    app.state.cache = None
    if settings.CACHE_ENABLED:
        app.state.redis = await connect_redis(settings)
        if app.state.redis is not None:
            app.state.cache = RedisCache(app.state.redis)

    logger.info(
        f"{APP_NAME} API started",
        environment=settings.ENVIRONMENT,
        cache_enabled=app.state.cache is not None,
        cache_ttl_seconds=settings.CACHE_TTL_SECONDS,
    )

    yield

    logger.info(f"Shutting down {APP_NAME} API")
    try:
        await close_redis(app.state.redis)
        await database_manager.close()
        logger.info("Application shutdown completed")
    except Exception as e:
        logger.error("Error during application shutdown", error=str(e))


# Create FastAPI application
app = FastAPI(
    title=f"{APP_NAME} API",
    description="Board-game club backend: games and tournaments",
    version=APP_VERSION,
    lifespan=lifespan,
    # Interactive docs are not served in production
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_url=None if settings.is_production else "/openapi.json",
)

# Security headers first so they wrap every response
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
)

app.include_router(health_router)
app.include_router(games_router, prefix="/api", tags=["games"])
app.include_router(tournaments_router, prefix="/api", tags=["tournaments"])
app.include_router(users_router, prefix="/api", tags=["users"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(EntityNotFoundException)
async def not_found_handler(request: Request, exc: EntityNotFoundException):
    return _error(status.HTTP_404_NOT_FOUND, exc.message)


@app.exception_handler(EntityConflictException)
async def conflict_handler(request: Request, exc: EntityConflictException):
    return _error(status.HTTP_409_CONFLICT, exc.message)


@app.exception_handler(TournamentValidationException)
async def tournament_validation_handler(
    request: Request, exc: TournamentValidationException
):
    return _error(status.HTTP_400_BAD_REQUEST, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(RepositoryException)
async def repository_exception_handler(request: Request, exc: RepositoryException):
    logger.error(
        "Repository failure",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_code=exc.error_code,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Last-resort handler; details stay in the log."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gameclub.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.ENVIRONMENT == "development",
    )
