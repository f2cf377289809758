"""
Tarifa SQLAlchemy Model
"""

from typing import Any

from sqlalchemy import Column, Float, Index, String

from turnos.models.db.base import Base, TimestampMixin


class Tarifa(Base, TimestampMixin):
    """
    Precio de un estudio para una obra social.

    La unicidad del par (estudio, obra social) se valida en el servicio antes
    de escribir; el índice no es único.
    """

    __tablename__ = "tarifas"

    tarifa_id = Column(String(36), primary_key=True)
    estudio_id = Column(String(36), nullable=False)
    obra_social_id = Column(String(36), nullable=False)
    precio = Column(Float, nullable=False)

    __table_args__ = (Index("ix_tarifas_estudio_obra_social", "estudio_id", "obra_social_id"),)

    def to_dict(self) -> dict[str, Any]:
        """Convert to API dictionary (camelCase)."""
        data: dict[str, Any] = {
            "tarifaId": self.tarifa_id,
            "estudioId": self.estudio_id,
            "obraSocialId": self.obra_social_id,
            "precio": self.precio,
            "createdAt": self.created_at,
        }
        if self.updated_at:
            data["updatedAt"] = self.updated_at
        return data
