"""
Base Repository Implementation

Generic SQLAlchemy persistence for single-table entities keyed by a string id.
"""

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from turnos.models.db import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class SQLAlchemyRepository(Generic[ModelT]):
    """
    SQLAlchemy implementation of the basic CRUD operations.

    Subclasses set ``model`` and ``id_column`` and add their own queries.
    """

    model: type[ModelT]
    id_column: str

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, entity_id: str) -> ModelT | None:
        """Find entity by ID."""
        result = await self.session.execute(
            select(self.model).where(getattr(self.model, self.id_column) == entity_id)
        )
        return result.scalar_one_or_none()

    async def save(self, entity: ModelT) -> ModelT:
        """Insert or update entity."""
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: ModelT, values: dict[str, Any]) -> ModelT:
        """Apply a partial update (column name -> value) and persist."""
        for column, value in values.items():
            setattr(entity, column, value)
        return await self.save(entity)

    async def delete(self, entity: ModelT) -> None:
        """Delete entity."""
        await self.session.delete(entity)
        await self.session.commit()
