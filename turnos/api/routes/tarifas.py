"""
Tarifa API Routes
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from turnos.api.dependencies import get_tarifa_service, operation_errors
from turnos.api.schemas import TarifaCreateRequest, TarifaUpdateRequest
from turnos.services import TarifaService

router = APIRouter(prefix="/tarifas", tags=["Tarifas"])

TarifaServiceDep = Annotated[TarifaService, Depends(get_tarifa_service)]

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


@router.get("")
async def list_tarifas(service: TarifaServiceDep) -> dict[str, Any]:
    """List tarifas with the study and obra social names resolved."""
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.list_tarifas()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_tarifa(request: TarifaCreateRequest, service: TarifaServiceDep) -> dict[str, Any]:
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.create_tarifa(request.provided_fields())


@router.get("/{tarifa_id}")
async def get_tarifa(tarifa_id: str, service: TarifaServiceDep) -> dict[str, Any]:
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.get_tarifa(tarifa_id)


@router.put("/{tarifa_id}")
async def update_tarifa(tarifa_id: str, request: TarifaUpdateRequest, service: TarifaServiceDep) -> dict[str, Any]:
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.update_tarifa(tarifa_id, request.provided_fields())


@router.delete("/{tarifa_id}")
async def delete_tarifa(tarifa_id: str, service: TarifaServiceDep) -> dict[str, Any]:
    with operation_errors(INTERNAL_ERROR_MESSAGE):
        return await service.delete_tarifa(tarifa_id)
