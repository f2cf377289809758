"""
Doctor SQLAlchemy Model
"""

from typing import Any

from sqlalchemy import Boolean, Column, String

from turnos.models.db.base import Base, TimestampMixin


class Doctor(Base, TimestampMixin):
    """Médico que atiende turnos."""

    __tablename__ = "doctors"

    doctor_id = Column(String(16), primary_key=True)
    name = Column(String(200), nullable=False, index=True)
    specialty = Column(String(200), nullable=True)
    active = Column(Boolean, nullable=False, default=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to API dictionary (camelCase)."""
        data: dict[str, Any] = {
            "doctorId": self.doctor_id,
            "name": self.name,
            "specialty": self.specialty,
            "active": self.active,
            "createdAt": self.created_at,
        }
        if self.updated_at:
            data["updatedAt"] = self.updated_at
        return data
