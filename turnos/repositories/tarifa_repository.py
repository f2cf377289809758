"""
Tarifa Repository Implementation
"""

from sqlalchemy import select

from turnos.models.db import Tarifa
from turnos.repositories.base import SQLAlchemyRepository


class SQLAlchemyTarifaRepository(SQLAlchemyRepository[Tarifa]):
    """Persistence for tarifas."""

    model = Tarifa
    id_column = "tarifa_id"

    async def list_all(self) -> list[Tarifa]:
        result = await self.session.execute(select(Tarifa).order_by(Tarifa.created_at))
        return list(result.scalars().all())

    async def find_by_pair(
        self,
        estudio_id: str,
        obra_social_id: str,
        exclude_id: str | None = None,
    ) -> Tarifa | None:
        """
        Find a tarifa for a (study, obra social) pair using the secondary index.

        Args:
            estudio_id: Study id
            obra_social_id: Obra social id
            exclude_id: Tarifa to ignore (the one being updated)
        """
        query = select(Tarifa).where(
            Tarifa.estudio_id == estudio_id,
            Tarifa.obra_social_id == obra_social_id,
        )
        if exclude_id:
            query = query.where(Tarifa.tarifa_id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalars().first()
