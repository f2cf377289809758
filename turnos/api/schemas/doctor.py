"""
Doctor API Schemas
"""

from turnos.api.schemas.base import CamelModel


class DoctorCreateRequest(CamelModel):
    name: str | None = None
    specialty: str | None = None


class DoctorUpdateRequest(CamelModel):
    name: str | None = None
    specialty: str | None = None
    active: bool | None = None
