"""
Doctor Repository Implementation
"""

from sqlalchemy import select

from turnos.models.db import Doctor
from turnos.repositories.base import SQLAlchemyRepository


class SQLAlchemyDoctorRepository(SQLAlchemyRepository[Doctor]):
    """Persistence for doctors."""

    model = Doctor
    id_column = "doctor_id"

    async def list_all(self, include_inactive: bool = False) -> list[Doctor]:
        """List doctors sorted by name, only active ones unless asked otherwise."""
        query = select(Doctor).order_by(Doctor.name)
        if not include_inactive:
            query = query.where(Doctor.active.is_(True))
        result = await self.session.execute(query)
        return list(result.scalars().all())
