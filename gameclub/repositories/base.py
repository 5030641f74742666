"""
Base SQL Repository

Generic SQLAlchemy implementation of the ``Store`` contract. Subclasses bind
an ORM model to a pydantic entity; rows never leave the repository, callers
only see entities.

Errors are translated, never swallowed:
- missing row -> EntityNotFoundException
- IntegrityError -> EntityConflictException
- any other SQLAlchemyError -> RepositoryException (cause preserved)
"""

from enum import Enum
from typing import Any, ClassVar, Dict, Generic, Type, TypeVar

import structlog
from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Base
from .exceptions import (
    EntityConflictException,
    EntityNotFoundException,
    RepositoryException,
)
from .interfaces import EntityId

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=Base)
EntityT = TypeVar("EntityT", bound=BaseModel)


class SqlRepository(Generic[ModelT, EntityT]):
    """
    Base repository over an ``AsyncSession``.

    Subclasses set ``model``, ``entity_type`` and ``kind``. Entity fields
    listed in ``read_only_fields`` are derived from joins and never written.

    Every write commits before returning, so the write is durable by the
    time a caching decorator invalidates its keys. Failed writes roll back.
    """

    model: ClassVar[Type[Base]]
    entity_type: ClassVar[Type[BaseModel]]
    kind: ClassVar[str]
    read_only_fields: ClassVar[frozenset] = frozenset()

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with strict input validation.

        Args:
            session: AsyncSession for database operations

        Raises:
            TypeError: If session is not an AsyncSession
        """
        if not isinstance(session, AsyncSession):
            raise TypeError(
                f"session must be AsyncSession instance, got {type(session).__name__}"
            )

        self.session = session

    async def find_all(self) -> list[EntityT]:
        """
        List every entity ordered by id.

        Returns:
            List of entities (empty when the table is empty)
        """
        try:
            stmt = select(self.model).order_by(self.model.id)
            result = await self.session.execute(stmt)
            entities = [self._to_entity(row) for row in result.scalars().all()]

            logger.debug(
                "Repository: Entities listed",
                model=self.model.__name__,
                count=len(entities),
            )

            return entities

        except SQLAlchemyError as e:
            logger.error(
                "Repository: Failed to list entities",
                model=self.model.__name__,
                error=str(e),
                exc_info=True,
            )
            raise RepositoryException(
                f"Failed to list {self.kind}", original_error=e
            ) from e

    async def find_by_id(self, id: EntityId) -> EntityT:
        """
        Get entity by ID.

        Args:
            id: Entity id; numeric strings from URL paths are accepted

        Returns:
            The entity

        Raises:
            EntityNotFoundException: If no entity has this id
        """
        row = await self._get_row(id)
        logger.debug(
            "Repository: Entity retrieved",
            model=self.model.__name__,
            entity_id=str(id),
        )
        return self._to_entity(row)

    async def create(self, entity: EntityT) -> EntityT:
        """
        Persist a new entity.

        Args:
            entity: Entity to create (its id is ignored)

        Returns:
            Created entity with id populated

        Raises:
            EntityConflictException: On unique/foreign key violations
        """
        if entity is None:
            raise ValueError("Entity object is required (cannot be None)")

        row = self.model(**self._to_row(entity))

        try:
            self.session.add(row)
            await self.session.commit()
            await self.session.refresh(row)
            await self._load_relationships(row)

        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(
                "Repository: Create conflicts with existing data",
                model=self.model.__name__,
                error=str(e),
            )
            raise EntityConflictException(self.kind, original_error=e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Repository: Failed to create entity",
                model=self.model.__name__,
                error=str(e),
                exc_info=True,
            )
            raise RepositoryException(
                f"Failed to create {self.kind}", original_error=e
            ) from e

        logger.info(
            "Repository: Entity created",
            model=self.model.__name__,
            entity_id=str(row.id),
        )
        return self._to_entity(row)

    async def update(self, entity: EntityT) -> EntityT:
        """
        Overwrite an existing entity with the given field values.

        Raises:
            ValueError: If entity has no id
            EntityNotFoundException: If the entity does not exist
            EntityConflictException: On unique/foreign key violations
        """
        if entity is None or entity.id is None:
            raise ValueError("Entity must have id set (cannot be None)")

        row = await self._get_row(entity.id)

        try:
            for field, value in self._to_row(entity).items():
                setattr(row, field, value)
            await self.session.commit()
            await self.session.refresh(row)
            await self._load_relationships(row)

        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(
                "Repository: Update conflicts with existing data",
                model=self.model.__name__,
                entity_id=str(entity.id),
                error=str(e),
            )
            raise EntityConflictException(self.kind, original_error=e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Repository: Failed to update entity",
                model=self.model.__name__,
                entity_id=str(entity.id),
                error=str(e),
                exc_info=True,
            )
            raise RepositoryException(
                f"Failed to update {self.kind}", original_error=e
            ) from e

        logger.info(
            "Repository: Entity updated",
            model=self.model.__name__,
            entity_id=str(row.id),
        )
        return self._to_entity(row)

    async def delete(self, id: EntityId) -> None:
        """
        Delete entity by ID.

        Raises:
            EntityNotFoundException: If nothing was deleted
        """
        pk = self._coerce_id(id)

        try:
            result = await self.session.execute(
                delete(self.model).where(self.model.id == pk)
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise EntityConflictException(self.kind, original_error=e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Repository: Failed to delete entity",
                model=self.model.__name__,
                entity_id=str(id),
                error=str(e),
                exc_info=True,
            )
            raise RepositoryException(
                f"Failed to delete {self.kind}", original_error=e
            ) from e

        # Database-side cascades may have removed other rows held by this session
        self.session.expire_all()

        if result.rowcount == 0:
            logger.warning(
                "Repository: Entity not found for deletion",
                model=self.model.__name__,
                entity_id=str(id),
            )
            raise EntityNotFoundException(self.kind, id)

        logger.info(
            "Repository: Entity deleted",
            model=self.model.__name__,
            entity_id=str(id),
        )

    # Internals

    def _coerce_id(self, id: EntityId) -> int:
        # Non-numeric ids cannot match an integer primary key
        try:
            return int(id)
        except (TypeError, ValueError):
            raise EntityNotFoundException(self.kind, id) from None

    async def _get_row(self, id: EntityId) -> Base:
        pk = self._coerce_id(id)

        try:
            row = await self.session.get(self.model, pk)
        except SQLAlchemyError as e:
            logger.error(
                "Repository: Failed to get entity",
                model=self.model.__name__,
                entity_id=str(id),
                error=str(e),
                exc_info=True,
            )
            raise RepositoryException(
                f"Failed to get {self.kind}", original_error=e
            ) from e

        if row is None:
            raise EntityNotFoundException(self.kind, id)
        return row

    async def _load_relationships(self, row: Base) -> None:
        """Hook for subclasses whose entities read from related rows."""
        return None

    def _to_row(self, entity: BaseModel) -> Dict[str, Any]:
        values = entity.model_dump(exclude={"id"} | set(self.read_only_fields))
        return {
            field: value.value if isinstance(value, Enum) else value
            for field, value in values.items()
        }

    def _to_entity(self, row: Base) -> EntityT:
        return self.entity_type.model_validate(row)
