"""
Appointment API Routes
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from turnos.api.dependencies import get_appointment_service, operation_errors
from turnos.api.schemas import AppointmentCreateRequest
from turnos.services import AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])

AppointmentServiceDep = Annotated[AppointmentService, Depends(get_appointment_service)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_appointment(request: AppointmentCreateRequest, service: AppointmentServiceDep) -> dict[str, Any]:
    """
    Create a tentative appointment and its Google Calendar event.

    Accepts the direct shape (``startTime``) or the Google Form shape
    (``date`` + ``time``). The end time is always start + 30 minutes.
    """
    with operation_errors("Failed to create appointment"):
        return await service.create_appointment(request.to_payload())


@router.get("")
async def list_appointments(
    service: AppointmentServiceDep,
    from_date: Annotated[str | None, Query(alias="from", description="YYYY-MM-DD")] = None,
    to_date: Annotated[str | None, Query(alias="to", description="YYYY-MM-DD")] = None,
    doctor_id: Annotated[str | None, Query(alias="doctorId")] = None,
) -> dict[str, Any]:
    """List appointments between two dates (inclusive, UTC-3), sorted by start time."""
    with operation_errors("Error al listar turnos"):
        return await service.list_appointments(from_date, to_date, doctor_id)


@router.get("/{appointment_id}")
async def get_appointment(appointment_id: str, service: AppointmentServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to get appointment"):
        return await service.get_appointment(appointment_id)


@router.delete("/{appointment_id}")
async def delete_appointment(appointment_id: str, service: AppointmentServiceDep) -> dict[str, Any]:
    with operation_errors("Failed to delete appointment"):
        return await service.delete_appointment(appointment_id)
