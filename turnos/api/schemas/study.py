"""
Study API Schemas
"""

from pydantic import Field

from turnos.api.schemas.base import CamelModel


class StudyCreateRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    duration_minutes: int | None = Field(None, gt=0)
    honorario: float | None = Field(None, ge=0)


class StudyUpdateRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    duration_minutes: int | None = Field(None, gt=0)
    honorario: float | None = Field(None, ge=0)
    active: bool | None = None
