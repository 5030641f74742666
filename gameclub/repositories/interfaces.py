"""
Store Interface

Structural CRUD contract shared by the SQL repositories and the caching
decorator. Callers depend on ``Store`` and cannot tell which one they hold.
"""

from typing import Optional, Protocol, TypeVar, runtime_checkable

from ..domain.entities import EntityId


class Identifiable(Protocol):
    """Anything with a stable identifier."""

    id: Optional[int]


EntityT = TypeVar("EntityT", bound=Identifiable)


@runtime_checkable
class Store(Protocol[EntityT]):
    """
    Persistent collection of entities.

    ``find_by_id``, ``update`` and ``delete`` raise ``EntityNotFoundException``
    for an unknown id; ``create`` and ``update`` raise
    ``EntityConflictException`` on constraint violations.
    """

    async def find_all(self) -> list[EntityT]: ...

    async def find_by_id(self, id: EntityId) -> EntityT: ...

    async def create(self, entity: EntityT) -> EntityT: ...

    async def update(self, entity: EntityT) -> EntityT: ...

    async def delete(self, id: EntityId) -> None: ...
