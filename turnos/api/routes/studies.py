"""
Study API Routes
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from turnos.api.dependencies import get_study_service, operation_errors
from turnos.api.schemas import StudyCreateRequest, StudyUpdateRequest
from turnos.services import StudyService

router = APIRouter(prefix="/studies", tags=["Studies"])

StudyServiceDep = Annotated[StudyService, Depends(get_study_service)]


@router.get("")
async def list_studies(
    service: StudyServiceDep,
    include_inactive: Annotated[bool, Query(alias="includeInactive")] = False,
) -> dict[str, Any]:
    with operation_errors("Failed to list studies"):
        return await service.list_studies(include_inactive=include_inactive)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_study(request: StudyCreateRequest, service: StudyServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to create study"):
        return await service.create_study(request.provided_fields())


@router.get("/{study_id}")
async def get_study(study_id: str, service: StudyServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to get study"):
        return await service.get_study(study_id)


@router.put("/{study_id}")
async def update_study(study_id: str, request: StudyUpdateRequest, service: StudyServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to update study"):
        return await service.update_study(study_id, request.provided_fields())


@router.delete("/{study_id}")
async def delete_study(study_id: str, service: StudyServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to delete study"):
        return await service.delete_study(study_id)
