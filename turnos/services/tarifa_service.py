"""
Tarifa Service

CRUD operations for tarifas. A tarifa is unique per (estudio, obra social);
uniqueness is checked with a lookup before writing, so two concurrent
creations of the same pair can both succeed.
"""

import asyncio
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from turnos.core.exceptions import ConflictError, InvalidRequestError, NotFoundError
from turnos.domain.time_utils import utc_now_iso
from turnos.models.db import Tarifa
from turnos.repositories import (
    SQLAlchemyObraSocialRepository,
    SQLAlchemyStudyRepository,
    SQLAlchemyTarifaRepository,
)
from turnos.services.base import build_update, clean_text
from turnos.services.enrichment import resolve_names
from turnos.utils.ids import generate_uuid

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = 'Los campos "estudioId", "obraSocialId" y "precio" son obligatorios'
NO_FIELDS_MESSAGE = "No se proporcionaron campos para actualizar"
CONFLICT_KEY = "tarifaExistente"


class TarifaService:
    """Manage tarifas."""

    UPDATABLE_FIELDS = ("estudio_id", "obra_social_id", "precio")

    def __init__(self, session: AsyncSession, session_factory: async_sessionmaker[AsyncSession]):
        """
        Args:
            session: Request session for reads and writes
            session_factory: Factory for the independent sessions used by list enrichment
        """
        self.repository = SQLAlchemyTarifaRepository(session)
        self._session_factory = session_factory

    async def _get_or_404(self, tarifa_id: str) -> Tarifa:
        tarifa = await self.repository.find_by_id(tarifa_id)
        if tarifa is None:
            raise NotFoundError("Tarifa no encontrada")
        return tarifa

    async def list_tarifas(self) -> dict[str, Any]:
        """List tarifas with ``nombreEstudio`` and ``nombreObraSocial`` resolved."""
        tarifas = await self.repository.list_all()

        study_names, obra_names = await asyncio.gather(
            resolve_names(
                self._session_factory,
                SQLAlchemyStudyRepository,
                (tarifa.estudio_id for tarifa in tarifas),
                "name",
            ),
            resolve_names(
                self._session_factory,
                SQLAlchemyObraSocialRepository,
                (tarifa.obra_social_id for tarifa in tarifas),
                "nombre",
            ),
        )

        items = []
        for tarifa in tarifas:
            item = tarifa.to_dict()
            item["nombreEstudio"] = study_names.get(tarifa.estudio_id)
            item["nombreObraSocial"] = obra_names.get(tarifa.obra_social_id)
            items.append(item)
        return {"tarifas": items, "count": len(items)}

    async def get_tarifa(self, tarifa_id: str) -> dict[str, Any]:
        return (await self._get_or_404(tarifa_id)).to_dict()

    async def create_tarifa(self, fields: dict[str, Any]) -> dict[str, Any]:
        estudio_id = clean_text(fields.get("estudio_id"))
        obra_social_id = clean_text(fields.get("obra_social_id"))
        precio = fields.get("precio")
        if not estudio_id or not obra_social_id or precio is None:
            raise InvalidRequestError(REQUIRED_FIELDS_MESSAGE)

        existing = await self.repository.find_by_pair(estudio_id, obra_social_id)
        if existing is not None:
            raise ConflictError(
                "Ya existe una tarifa para esta combinación de estudio y obra social",
                key=CONFLICT_KEY,
                record=existing.to_dict(),
            )

        tarifa = Tarifa(
            tarifa_id=generate_uuid(),
            estudio_id=estudio_id,
            obra_social_id=obra_social_id,
            precio=precio,
            created_at=utc_now_iso(),
        )
        tarifa = await self.repository.save(tarifa)
        logger.info(f"Tarifa created: {tarifa.tarifa_id}")
        return {"message": "Tarifa creada correctamente", "tarifa": tarifa.to_dict()}

    async def update_tarifa(self, tarifa_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        values = build_update(
            fields, self.UPDATABLE_FIELDS, required=self.UPDATABLE_FIELDS, empty_message=NO_FIELDS_MESSAGE
        )
        tarifa = await self._get_or_404(tarifa_id)

        if "estudio_id" in values or "obra_social_id" in values:
            new_estudio_id = values.get("estudio_id", tarifa.estudio_id)
            new_obra_social_id = values.get("obra_social_id", tarifa.obra_social_id)
            conflict = await self.repository.find_by_pair(new_estudio_id, new_obra_social_id, exclude_id=tarifa_id)
            if conflict is not None:
                raise ConflictError(
                    "Ya existe otra tarifa para esta combinación de estudio y obra social",
                    key=CONFLICT_KEY,
                    record=conflict.to_dict(),
                )

        values["updated_at"] = utc_now_iso()
        tarifa = await self.repository.update(tarifa, values)
        logger.info(f"Tarifa updated: {tarifa_id}")
        return {"message": "Tarifa actualizada correctamente", "tarifa": tarifa.to_dict()}

    async def delete_tarifa(self, tarifa_id: str) -> dict[str, Any]:
        tarifa = await self._get_or_404(tarifa_id)
        await self.repository.delete(tarifa)
        logger.info(f"Tarifa deleted: {tarifa_id}")
        return {"message": "Tarifa eliminada correctamente", "tarifaId": tarifa_id}
