"""
ObraSocial Repository Implementation
"""

from sqlalchemy import select

from turnos.models.db import ObraSocial
from turnos.repositories.base import SQLAlchemyRepository


class SQLAlchemyObraSocialRepository(SQLAlchemyRepository[ObraSocial]):
    """Persistence for obras sociales."""

    model = ObraSocial
    id_column = "obra_social_id"

    async def list_all(self, include_inactive: bool = True) -> list[ObraSocial]:
        """List obras sociales sorted by nombre."""
        query = select(ObraSocial).order_by(ObraSocial.nombre)
        if not include_inactive:
            query = query.where(ObraSocial.activa.is_(True))
        result = await self.session.execute(query)
        return list(result.scalars().all())
