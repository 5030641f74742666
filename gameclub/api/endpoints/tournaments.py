"""
Tournaments API endpoints

Tournament CRUD. Creation and update run through ``TournamentService`` so the
prize pool strategy is applied and the referenced game is validated.
"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...domain.entities import Tournament, TournamentStatus
from ...services.notifications import TournamentNotifications
from ...services.tournaments import TournamentService
from ..dependencies import get_tournament_notifications, get_tournament_service

router = APIRouter()


class TournamentCreate(BaseModel):
    """Request body for creating or replacing a tournament."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    game_id: int = Field(..., gt=0)
    prize_pool: float = Field(..., ge=0)
    start_date: datetime


class TournamentResponse(BaseModel):
    """Tournament as returned by the API; ``prize_pool`` is the calculated pool."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    game: str
    base_prize_pool: float
    calculated_prize_pool: float
    prize_pool: float
    bonus_type: str
    bonus_multiplier: float
    start_date: datetime
    status: TournamentStatus

    @classmethod
    def from_entity(cls, tournament: Tournament) -> "TournamentResponse":
        return cls(
            id=tournament.id,
            name=tournament.name,
            game=tournament.game_name,
            base_prize_pool=tournament.base_prize_pool,
            calculated_prize_pool=tournament.calculated_prize_pool,
            prize_pool=tournament.calculated_prize_pool,
            bonus_type=tournament.bonus_type,
            bonus_multiplier=tournament.prize_pool_bonus,
            start_date=tournament.start_date,
            status=tournament.status,
        )


@router.get("/tournaments", response_model=List[TournamentResponse])
async def list_tournaments(
    service: TournamentService = Depends(get_tournament_service),
):
    return [
        TournamentResponse.from_entity(t) for t in await service.list_tournaments()
    ]


@router.get("/tournaments/{tournament_id}", response_model=TournamentResponse)
async def get_tournament(
    tournament_id: int,
    service: TournamentService = Depends(get_tournament_service),
):
    return TournamentResponse.from_entity(await service.get_tournament(tournament_id))


@router.post(
    "/tournaments",
    response_model=TournamentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_tournament(
    request: TournamentCreate,
    service: TournamentService = Depends(get_tournament_service),
    notifications: TournamentNotifications = Depends(get_tournament_notifications),
):
    """Create a tournament and notify club members."""
    created = await service.create_tournament(
        name=request.name,
        game_id=request.game_id,
        prize_pool=request.prize_pool,
        start_date=request.start_date,
        notifications=notifications,
    )
    return TournamentResponse.from_entity(created)


@router.put("/tournaments/{tournament_id}", response_model=TournamentResponse)
async def update_tournament(
    tournament_id: int,
    request: TournamentCreate,
    service: TournamentService = Depends(get_tournament_service),
):
    updated = await service.update_tournament(
        tournament_id,
        name=request.name,
        game_id=request.game_id,
        prize_pool=request.prize_pool,
        start_date=request.start_date,
    )
    return TournamentResponse.from_entity(updated)


@router.delete(
    "/tournaments/{tournament_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_tournament(
    tournament_id: int,
    service: TournamentService = Depends(get_tournament_service),
):
    await service.delete_tournament(tournament_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
