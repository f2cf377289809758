"""
Study Repository Implementation
"""

from sqlalchemy import select

from turnos.models.db import Study
from turnos.repositories.base import SQLAlchemyRepository


class SQLAlchemyStudyRepository(SQLAlchemyRepository[Study]):
    """Persistence for studies."""

    model = Study
    id_column = "study_id"

    async def list_all(self, include_inactive: bool = False) -> list[Study]:
        """List studies sorted by name, only active ones unless asked otherwise."""
        query = select(Study).order_by(Study.name)
        if not include_inactive:
            query = query.where(Study.active.is_(True))
        result = await self.session.execute(query)
        return list(result.scalars().all())
