"""
Games API endpoints

CRUD for board games. Reads go through the cache-aside store when caching is
enabled; store errors are mapped to HTTP responses by the application
exception handlers.
"""

from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...domain.entities import Game, GameCategory, GameComplexity
from ...repositories.interfaces import Store
from ..dependencies import get_game_store

logger = structlog.get_logger()
router = APIRouter()


# Pydantic schemas for API
class GameCreate(BaseModel):
    """
    Request body for creating or replacing a game.

    Zero (or omitted) numeric fields and empty strings keep the entity
    defaults.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255, description="Game name")
    description: str = ""
    number_of_players: int = Field(0, ge=0)
    min_players: int = Field(0, ge=0)
    max_players: int = Field(0, ge=0)
    playtime_minutes: int = Field(0, ge=0)
    min_age: int = Field(0, ge=0)
    complexity: Optional[GameComplexity] = None
    category: Optional[GameCategory] = None
    publisher: str = ""
    year_published: int = Field(0, ge=0, le=2100)
    rating: float = Field(0.0, ge=0, le=10)


class GameResponse(BaseModel):
    """Game as returned by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    description: str
    number_of_players: int
    min_players: int
    max_players: int
    playtime_minutes: int
    min_age: int
    complexity: GameComplexity
    category: GameCategory
    publisher: str
    year_published: int
    rating: float

    @classmethod
    def from_entity(cls, game: Game) -> "GameResponse":
        return cls.model_validate(game.model_dump())


def build_game(request: GameCreate, game_id: Optional[int] = None) -> Game:
    """
    Map a request onto a Game entity.

    A complete player range wins over ``number_of_players``; a bare player
    count becomes the range ``2..count``.
    """
    values = {"name": request.name, "description": request.description}

    if request.min_players > 0 and request.max_players > 0:
        values.update(
            min_players=request.min_players,
            max_players=request.max_players,
            number_of_players=request.max_players,
        )
    elif request.number_of_players > 0:
        values.update(
            min_players=2,
            max_players=request.number_of_players,
            number_of_players=request.number_of_players,
        )

    if request.playtime_minutes > 0:
        values["playtime_minutes"] = request.playtime_minutes
    if request.min_age > 0:
        values["min_age"] = request.min_age
    if request.complexity is not None:
        values["complexity"] = request.complexity
    if request.category is not None:
        values["category"] = request.category
    if request.publisher:
        values["publisher"] = request.publisher
    if request.year_published > 0:
        values["year_published"] = request.year_published
    if request.rating > 0:
        values["rating"] = request.rating

    return Game(id=game_id, **values)


@router.get("/games", response_model=List[GameResponse])
async def list_games(games: Store[Game] = Depends(get_game_store)):
    """List all games."""
    return [GameResponse.from_entity(game) for game in await games.find_all()]


@router.get("/games/{game_id}", response_model=GameResponse)
async def get_game(game_id: int, games: Store[Game] = Depends(get_game_store)):
    """Get a game by id."""
    return GameResponse.from_entity(await games.find_by_id(game_id))


@router.post(
    "/games", response_model=GameResponse, status_code=status.HTTP_201_CREATED
)
async def create_game(
    request: GameCreate, games: Store[Game] = Depends(get_game_store)
):
    """Create a game."""
    created = await games.create(build_game(request))
    logger.info("Game created", game_id=created.id, name=created.name)
    return GameResponse.from_entity(created)


@router.put("/games/{game_id}", response_model=GameResponse)
async def update_game(
    game_id: int,
    request: GameCreate,
    games: Store[Game] = Depends(get_game_store),
):
    """Replace a game's details."""
    # 404 before touching anything
    await games.find_by_id(game_id)

    updated = await games.update(build_game(request, game_id))
    logger.info("Game updated", game_id=game_id)
    return GameResponse.from_entity(updated)


@router.delete("/games/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(game_id: int, games: Store[Game] = Depends(get_game_store)):
    """Delete a game and its tournaments."""
    await games.delete(game_id)
    logger.info("Game deleted", game_id=game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
