"""
Tarifa API Schemas
"""

from pydantic import Field

from turnos.api.schemas.base import CamelModel


class TarifaCreateRequest(CamelModel):
    estudio_id: str | None = None
    obra_social_id: str | None = None
    precio: float | None = Field(None, ge=0)


class TarifaUpdateRequest(CamelModel):
    estudio_id: str | None = None
    obra_social_id: str | None = None
    precio: float | None = Field(None, ge=0)
