"""
Study SQLAlchemy Model
"""

from typing import Any

from sqlalchemy import Boolean, Column, Float, Integer, String, Text

from turnos.models.db.base import Base, TimestampMixin


class Study(Base, TimestampMixin):
    """Estudio médico ofrecido (ecografía, radiografía, etc.)."""

    __tablename__ = "studies"

    study_id = Column(String(16), primary_key=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=False, default=30)
    # Honorario fijo del estudio, independiente de la obra social
    honorario = Column(Float, nullable=True)
    active = Column(Boolean, nullable=False, default=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to API dictionary (camelCase)."""
        data: dict[str, Any] = {
            "studyId": self.study_id,
            "name": self.name,
            "description": self.description,
            "durationMinutes": self.duration_minutes,
            "honorario": self.honorario,
            "active": self.active,
            "createdAt": self.created_at,
        }
        if self.updated_at:
            data["updatedAt"] = self.updated_at
        return data
