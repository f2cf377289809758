"""
Study Service

CRUD operations for studies.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from turnos.core.exceptions import InvalidRequestError, NotFoundError
from turnos.domain.time_utils import utc_now_iso
from turnos.models.db import Study
from turnos.repositories import SQLAlchemyStudyRepository
from turnos.services.base import allocate_short_id, build_update, clean_text

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 30


class StudyService:
    """Manage studies."""

    UPDATABLE_FIELDS = ("name", "description", "duration_minutes", "honorario", "active")

    def __init__(self, session: AsyncSession):
        self.repository = SQLAlchemyStudyRepository(session)

    async def _get_or_404(self, study_id: str) -> Study:
        study = await self.repository.find_by_id(study_id)
        if study is None:
            raise NotFoundError("Study not found")
        return study

    async def list_studies(self, include_inactive: bool = False) -> dict[str, Any]:
        studies = await self.repository.list_all(include_inactive=include_inactive)
        return {"studies": [study.to_dict() for study in studies], "count": len(studies)}

    async def get_study(self, study_id: str) -> dict[str, Any]:
        return (await self._get_or_404(study_id)).to_dict()

    async def create_study(self, fields: dict[str, Any]) -> dict[str, Any]:
        name = clean_text(fields.get("name"))
        if not name:
            raise InvalidRequestError("Missing required field: name")

        study = Study(
            study_id=await allocate_short_id(self.repository),
            name=name,
            description=clean_text(fields.get("description")),
            duration_minutes=fields.get("duration_minutes") or DEFAULT_DURATION_MINUTES,
            honorario=fields.get("honorario"),
            active=True,
            created_at=utc_now_iso(),
        )
        study = await self.repository.save(study)
        logger.info(f"Study created: {study.study_id}")
        return {"message": "Study created successfully", "study": study.to_dict()}

    async def update_study(self, study_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        study = await self._get_or_404(study_id)
        values = build_update(fields, self.UPDATABLE_FIELDS, required=("name", "duration_minutes", "active"))
        values["updated_at"] = utc_now_iso()

        study = await self.repository.update(study, values)
        logger.info(f"Study updated: {study_id}")
        return {"message": "Study updated successfully", "study": study.to_dict()}

    async def delete_study(self, study_id: str) -> dict[str, Any]:
        study = await self._get_or_404(study_id)
        await self.repository.delete(study)
        logger.info(f"Study deleted: {study_id}")
        return {"message": "Study deleted successfully", "studyId": study_id}
