"""
ObraSocial API Routes
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from turnos.api.dependencies import get_obra_social_service, operation_errors
from turnos.api.schemas import ObraSocialCreateRequest, ObraSocialUpdateRequest
from turnos.services import ObraSocialService

router = APIRouter(prefix="/obras-sociales", tags=["Obras Sociales"])

ObraSocialServiceDep = Annotated[ObraSocialService, Depends(get_obra_social_service)]

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


@router.get("")
async def list_obras_sociales(
    service: ObraSocialServiceDep,
    include_inactive: Annotated[bool, Query(alias="includeInactive")] = True,
) -> dict[str, Any]:
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.list_obras_sociales(include_inactive=include_inactive)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_obra_social(request: ObraSocialCreateRequest, service: ObraSocialServiceDep) -> dict[str, Any]:
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.create_obra_social(request.provided_fields())


@router.get("/{obra_social_id}")
async def get_obra_social(obra_social_id: str, service: ObraSocialServiceDep) -> dict[str, Any]:
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.get_obra_social(obra_social_id)


@router.put("/{obra_social_id}")
async def update_obra_social(
    obra_social_id: str, request: ObraSocialUpdateRequest, service: ObraSocialServiceDep
) -> dict[str, Any]:
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.update_obra_social(obra_social_id, request.provided_fields())


@router.delete("/{obra_social_id}")
async def delete_obra_social(obra_social_id: str, service: ObraSocialServiceDep) -> dict[str, Any]:
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.delete_obra_social(obra_social_id)
