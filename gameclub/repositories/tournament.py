"""
Tournament Repository

SQL store for tournaments. Entities carry the name of their game, read
through the ``game`` relationship.
"""

from ..constants import TOURNAMENT_KIND
from ..domain.entities import Tournament
from ..models import Base, TournamentModel
from .base import SqlRepository


class TournamentRepository(SqlRepository[TournamentModel, Tournament]):
    """Tournament store."""

    model = TournamentModel
    entity_type = Tournament
    kind = TOURNAMENT_KIND
    read_only_fields = frozenset({"game_name"})

    async def _load_relationships(self, row: Base) -> None:
        # Relationships are not reloaded by a plain refresh and async
        # sessions cannot lazy-load on attribute access.
        await self.session.refresh(row, attribute_names=["game"])
