"""
ObraSocial Service

CRUD operations for obras sociales. Messages are in Spanish, as the
back-office consuming these endpoints shows them verbatim.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from turnos.core.exceptions import InvalidRequestError, NotFoundError
from turnos.domain.time_utils import utc_now_iso
from turnos.models.db import ObraSocial
from turnos.repositories import SQLAlchemyObraSocialRepository
from turnos.services.base import build_update, clean_text
from turnos.utils.ids import generate_uuid

logger = logging.getLogger(__name__)

NO_FIELDS_MESSAGE = "No se proporcionaron campos para actualizar"


class ObraSocialService:
    """Manage obras sociales."""

    UPDATABLE_FIELDS = ("nombre", "codigo", "activa")

    def __init__(self, session: AsyncSession):
        self.repository = SQLAlchemyObraSocialRepository(session)

    async def _get_or_404(self, obra_social_id: str) -> ObraSocial:
        obra_social = await self.repository.find_by_id(obra_social_id)
        if obra_social is None:
            raise NotFoundError("Obra social no encontrada")
        return obra_social

    async def list_obras_sociales(self, include_inactive: bool = True) -> dict[str, Any]:
        obras = await self.repository.list_all(include_inactive=include_inactive)
        return {"obrasSociales": [obra.to_dict() for obra in obras], "count": len(obras)}

    async def get_obra_social(self, obra_social_id: str) -> dict[str, Any]:
        return (await self._get_or_404(obra_social_id)).to_dict()

    async def create_obra_social(self, fields: dict[str, Any]) -> dict[str, Any]:
        nombre = clean_text(fields.get("nombre"))
        if not nombre:
            raise InvalidRequestError('El campo "nombre" es obligatorio')

        activa = fields.get("activa")
        obra_social = ObraSocial(
            obra_social_id=generate_uuid(),
            nombre=nombre,
            codigo=clean_text(fields.get("codigo")),
            activa=True if activa is None else activa,
            created_at=utc_now_iso(),
        )
        obra_social = await self.repository.save(obra_social)
        logger.info(f"Obra social created: {obra_social.obra_social_id}")
        return {"message": "Obra social creada correctamente", "obraSocial": obra_social.to_dict()}

    async def update_obra_social(self, obra_social_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        obra_social = await self._get_or_404(obra_social_id)
        values = build_update(
            fields, self.UPDATABLE_FIELDS, required=("nombre", "activa"), empty_message=NO_FIELDS_MESSAGE
        )
        values["updated_at"] = utc_now_iso()

        obra_social = await self.repository.update(obra_social, values)
        logger.info(f"Obra social updated: {obra_social_id}")
        return {"message": "Obra social actualizada correctamente", "obraSocial": obra_social.to_dict()}

    async def delete_obra_social(self, obra_social_id: str) -> dict[str, Any]:
        obra_social = await self._get_or_404(obra_social_id)
        await self.repository.delete(obra_social)
        logger.info(f"Obra social deleted: {obra_social_id}")
        return {"message": "Obra social eliminada correctamente", "obraSocialId": obra_social_id}
