"""
ObraSocial API Schemas
"""

from turnos.api.schemas.base import CamelModel


class ObraSocialCreateRequest(CamelModel):
    nombre: str | None = None
    codigo: str | None = None
    activa: bool | None = None


class ObraSocialUpdateRequest(CamelModel):
    nombre: str | None = None
    codigo: str | None = None
    activa: bool | None = None
