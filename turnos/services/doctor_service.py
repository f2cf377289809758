"""
Doctor Service

CRUD operations for doctors.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from turnos.core.exceptions import InvalidRequestError, NotFoundError
from turnos.domain.time_utils import utc_now_iso
from turnos.models.db import Doctor
from turnos.repositories import SQLAlchemyDoctorRepository
from turnos.services.base import allocate_short_id, build_update, clean_text

logger = logging.getLogger(__name__)


class DoctorService:
    """Manage doctors."""

    UPDATABLE_FIELDS = ("name", "specialty", "active")

    def __init__(self, session: AsyncSession):
        self.repository = SQLAlchemyDoctorRepository(session)

    async def _get_or_404(self, doctor_id: str) -> Doctor:
        doctor = await self.repository.find_by_id(doctor_id)
        if doctor is None:
            raise NotFoundError("Doctor not found")
        return doctor

    async def list_doctors(self, include_inactive: bool = False) -> dict[str, Any]:
        doctors = await self.repository.list_all(include_inactive=include_inactive)
        return {"doctors": [doctor.to_dict() for doctor in doctors], "count": len(doctors)}

    async def get_doctor(self, doctor_id: str) -> dict[str, Any]:
        return (await self._get_or_404(doctor_id)).to_dict()

    async def create_doctor(self, fields: dict[str, Any]) -> dict[str, Any]:
        name = clean_text(fields.get("name"))
        if not name:
            raise InvalidRequestError("Missing required field: name")

        doctor = Doctor(
            doctor_id=await allocate_short_id(self.repository),
            name=name,
            specialty=clean_text(fields.get("specialty")),
            active=True,
            created_at=utc_now_iso(),
        )
        doctor = await self.repository.save(doctor)
        logger.info(f"Doctor created: {doctor.doctor_id}")
        return {"message": "Doctor created successfully", "doctor": doctor.to_dict()}

    async def update_doctor(self, doctor_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        doctor = await self._get_or_404(doctor_id)
        values = build_update(fields, self.UPDATABLE_FIELDS, required=("name", "active"))
        values["updated_at"] = utc_now_iso()

        doctor = await self.repository.update(doctor, values)
        logger.info(f"Doctor updated: {doctor_id}")
        return {"message": "Doctor updated successfully", "doctor": doctor.to_dict()}

    async def delete_doctor(self, doctor_id: str) -> dict[str, Any]:
        doctor = await self._get_or_404(doctor_id)
        await self.repository.delete(doctor)
        logger.info(f"Doctor deleted: {doctor_id}")
        return {"message": "Doctor deleted successfully", "doctorId": doctor_id}
