"""
Appointment Service

Creation (with Google Calendar sync), range listing and deletion of appointments.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from turnos.core.exceptions import IntegrationError, InvalidRequestError, NotFoundError
from turnos.domain.appointment_request import (
    GOOGLE_FORM_SOURCE,
    AppointmentInput,
    GoogleFormAppointmentInput,
    is_valid_email,
    resolve_appointment_input,
)
from turnos.domain.appointment_status import AppointmentStatus
from turnos.domain.time_utils import day_range_bounds, parse_iso_datetime, parse_query_date, utc_now_iso
from turnos.integrations.google import CalendarService
from turnos.models.db import Appointment
from turnos.repositories import SQLAlchemyAppointmentRepository, SQLAlchemyDoctorRepository
from turnos.services.enrichment import resolve_names
from turnos.utils.ids import generate_uuid

logger = logging.getLogger(__name__)

# Los turnos se borran 30 días después de su inicio
APPOINTMENT_TTL_SECONDS = 30 * 24 * 60 * 60

MISSING_RANGE_MESSAGE = (
    "Query params 'from' y 'to' son requeridos (formato YYYY-MM-DD). "
    "Ej: /appointments?from=2024-02-01&to=2024-02-28&doctorId=abc1"
)


class AppointmentService:
    """Manage appointments."""

    def __init__(
        self,
        session: AsyncSession,
        calendar: CalendarService,
        session_factory: async_sessionmaker[AsyncSession],
    ):
        self.repository = SQLAlchemyAppointmentRepository(session)
        self._calendar = calendar
        self._session_factory = session_factory

    def _build_event_body(self, appointment_input: AppointmentInput) -> dict[str, Any]:
        attendee = appointment_input.attendee_email
        if attendee and not is_valid_email(attendee):
            logger.info(f"Email provided but invalid, skipping attendee: {attendee}")
            attendee = None

        return self._calendar.build_event_body(
            summary=f"Turno: {appointment_input.patient_name}",
            description=appointment_input.description or f"Turno médico para {appointment_input.patient_name}",
            start_time=appointment_input.start_time,
            end_time=appointment_input.end_time,
            attendee_email=attendee,
            attendee_name=appointment_input.patient_name,
        )

    def _build_record(
        self,
        appointment_id: str,
        appointment_input: AppointmentInput,
        calendar_event_id: str,
        calendar_link: str | None,
    ) -> Appointment:
        expires_at = int(parse_iso_datetime(appointment_input.start_time).timestamp()) + APPOINTMENT_TTL_SECONDS
        appointment = Appointment(
            appointment_id=appointment_id,
            patient_name=appointment_input.patient_name,
            patient_phone=appointment_input.patient_phone,
            start_time=appointment_input.start_time,
            end_time=appointment_input.end_time,
            description=appointment_input.description,
            calendar_event_id=calendar_event_id,
            calendar_link=calendar_link,
            status=AppointmentStatus.TENTATIVE.value,
            reminder_sent=False,
            created_at=utc_now_iso(),
            expires_at=expires_at,
        )
        if isinstance(appointment_input, GoogleFormAppointmentInput):
            appointment.email = appointment_input.email
            appointment.study = appointment_input.study
            appointment.insurance = appointment_input.insurance
            appointment.doctor_id = appointment_input.doctor_id
            appointment.source = appointment_input.source or GOOGLE_FORM_SOURCE
        return appointment

    async def create_appointment(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Create a tentative appointment and its calendar event.

        Args:
            payload: Raw camelCase body (direct or Google Form shape)

        Returns:
            ``{appointmentId, calendarEventId, status, calendarLink?}``

        Raises:
            InvalidRequestError: If the body is missing required fields
            IntegrationError: If the calendar, secret store or database fail.
                A calendar event already created is not rolled back.
        """
        appointment_input = resolve_appointment_input(payload)
        appointment_id = generate_uuid()
        logger.info(
            f"Creating appointment {appointment_id} ({appointment_input.kind}) at {appointment_input.start_time}"
        )

        try:
            event = await self._calendar.create_event(self._build_event_body(appointment_input))
            appointment = self._build_record(appointment_id, appointment_input, event.event_id, event.html_link)
            await self.repository.save(appointment)
        except Exception as e:
            logger.error(f"Error creating appointment {appointment_id}: {e}", exc_info=True)
            raise IntegrationError("Failed to create appointment", details=str(e)) from e

        response: dict[str, Any] = {
            "appointmentId": appointment_id,
            "calendarEventId": event.event_id,
            "status": AppointmentStatus.TENTATIVE.value,
        }
        if event.html_link:
            response["calendarLink"] = event.html_link
        return response

    async def list_appointments(
        self,
        from_date: str | None,
        to_date: str | None,
        doctor_id: str | None = None,
    ) -> dict[str, Any]:
        """
        List appointments starting within whole days ``from_date``..``to_date`` (UTC-3).

        Raises:
            InvalidRequestError: If the range is missing, malformed or inverted
        """
        if not from_date or not to_date:
            raise InvalidRequestError(MISSING_RANGE_MESSAGE)
        try:
            start_day = parse_query_date(from_date)
            end_day = parse_query_date(to_date)
        except ValueError as e:
            raise InvalidRequestError("'from' y 'to' deben tener formato YYYY-MM-DD", details=str(e)) from e
        if start_day > end_day:
            raise InvalidRequestError("'from' no puede ser mayor que 'to'")

        range_start, range_end = day_range_bounds(from_date, to_date)
        appointments = await self.repository.find_in_range(range_start, range_end, doctor_id=doctor_id or None)

        doctor_names = await resolve_names(
            self._session_factory,
            SQLAlchemyDoctorRepository,
            (appointment.doctor_id for appointment in appointments),
            "name",
        )

        items = []
        for appointment in appointments:
            item = appointment.to_dict()
            item["doctorName"] = doctor_names.get(appointment.doctor_id) if appointment.doctor_id else None
            items.append(item)

        filters: dict[str, Any] = {"from": from_date, "to": to_date}
        if doctor_id:
            filters["doctorId"] = doctor_id

        return {"appointments": items, "count": len(items), "filters": filters}

    async def get_appointment(self, appointment_id: str) -> dict[str, Any]:
        appointment = await self.repository.find_by_id(appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")
        return appointment.to_dict()

    async def delete_appointment(self, appointment_id: str) -> dict[str, Any]:
        appointment = await self.repository.find_by_id(appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")

        await self.repository.delete(appointment)
        logger.info(f"Appointment deleted: {appointment_id}")
        return {"message": "Appointment deleted successfully", "appointmentId": appointment_id}
