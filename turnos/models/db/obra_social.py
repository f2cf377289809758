"""
ObraSocial SQLAlchemy Model
"""

from typing import Any

from sqlalchemy import Boolean, Column, String

from turnos.models.db.base import Base, TimestampMixin


class ObraSocial(Base, TimestampMixin):
    """Obra social (cobertura de salud) aceptada."""

    __tablename__ = "obras_sociales"

    obra_social_id = Column(String(36), primary_key=True)
    nombre = Column(String(200), nullable=False, index=True)
    codigo = Column(String(50), nullable=True)
    activa = Column(Boolean, nullable=False, default=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to API dictionary (camelCase)."""
        data: dict[str, Any] = {
            "obraSocialId": self.obra_social_id,
            "nombre": self.nombre,
            "codigo": self.codigo,
            "activa": self.activa,
            "createdAt": self.created_at,
        }
        if self.updated_at:
            data["updatedAt"] = self.updated_at
        return data
