"""
Doctor API Routes
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from turnos.api.dependencies import get_doctor_service, operation_errors
from turnos.api.schemas import DoctorCreateRequest, DoctorUpdateRequest
from turnos.services import DoctorService

router = APIRouter(prefix="/doctors", tags=["Doctors"])

DoctorServiceDep = Annotated[DoctorService, Depends(get_doctor_service)]


@router.get("")
async def list_doctors(
    service: DoctorServiceDep,
    include_inactive: Annotated[bool, Query(alias="includeInactive")] = False,
) -> dict[str, Any]:
    """List doctors sorted by name. Inactive ones only with ``includeInactive=true``."""
    with operation_errors("Failed to list doctors"):
        return await service.list_doctors(include_inactive=include_inactive)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_doctor(request: DoctorCreateRequest, service: DoctorServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to create doctor"):
        return await service.create_doctor(request.provided_fields())


@router.get("/{doctor_id}")
async def get_doctor(doctor_id: str, service: DoctorServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to get doctor"):
        return await service.get_doctor(doctor_id)


@router.put("/{doctor_id}")
async def update_doctor(doctor_id: str, request: DoctorUpdateRequest, service: DoctorServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to update doctor"):
        return await service.update_doctor(doctor_id, request.provided_fields())


@router.delete("/{doctor_id}")
async def delete_doctor(doctor_id: str, service: DoctorServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to delete doctor"):
        return await service.delete_doctor(doctor_id)
