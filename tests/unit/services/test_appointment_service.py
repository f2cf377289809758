import pytest
from sqlalchemy import select

from turnos.core.exceptions import CalendarError, IntegrationError, InvalidRequestError, NotFoundError
from turnos.domain.time_utils import parse_iso_datetime
from turnos.models.db import Appointment, Doctor
from turnos.services import AppointmentService
from turnos.services.appointment_service import APPOINTMENT_TTL_SECONDS


@pytest.fixture
def appointment_service(db_session, mock_calendar, session_factory) -> AppointmentService:
    return AppointmentService(db_session, calendar=mock_calendar, session_factory=session_factory)


class TestCreateAppointment:
    """Pruebas de creación de turnos"""

    @pytest.mark.asyncio
    async def test_direct_shape(self, appointment_service, mock_calendar, session_factory):
        result = await appointment_service.create_appointment(
            {"patientName": "Juan", "patientPhone": "+5491112345678", "startTime": "2026-02-13T10:00:00-03:00"}
        )

        assert result["status"] == "TENTATIVE"
        assert result["calendarEventId"] == "evt-123"
        assert result["calendarLink"].startswith("https://calendar.google.com")

        body = mock_calendar.create_event.await_args.args[0]
        assert body["summary"] == "Turno: Juan"
        assert body["description"] == "Turno médico para Juan"
        assert body["end"]["dateTime"] == "2026-02-13T10:30:00-03:00"
        assert body["status"] == "tentative"
        assert "attendees" not in body

        async with session_factory() as session:
            stored = await session.get(Appointment, result["appointmentId"])
        assert stored.reminder_sent is False
        assert stored.expires_at == int(parse_iso_datetime(stored.start_time).timestamp()) + APPOINTMENT_TTL_SECONDS

    @pytest.mark.asyncio
    async def test_google_form_shape(self, appointment_service, mock_calendar, session_factory):
        result = await appointment_service.create_appointment(
            {
                "patientName": "María",
                "phone": "351 444 5555",
                "email": "maria@example.com",
                "study": "Ecografía",
                "doctorId": "ab12",
                "date": "2026-02-13",
                "time": "23:45",
                "source": "google_form",
            }
        )

        body = mock_calendar.create_event.await_args.args[0]
        assert body["attendees"] == [{"email": "maria@example.com", "displayName": "María"}]
        assert body["end"]["dateTime"] == "2026-02-14T00:15:00-03:00"

        async with session_factory() as session:
            stored = await session.get(Appointment, result["appointmentId"])
        assert stored.source == "google_form"
        assert stored.doctor_id == "ab12"
        assert stored.patient_phone == "351 444 5555"

    @pytest.mark.asyncio
    async def test_invalid_email_is_not_invited(self, appointment_service, mock_calendar):
        await appointment_service.create_appointment(
            {"patientName": "María", "email": "maria-at-example", "date": "2026-02-13", "time": "10:00"}
        )

        assert "attendees" not in mock_calendar.create_event.await_args.args[0]

    @pytest.mark.asyncio
    async def test_missing_fields(self, appointment_service, mock_calendar):
        with pytest.raises(InvalidRequestError):
            await appointment_service.create_appointment({"patientName": "Juan"})
        mock_calendar.create_event.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_calendar_failure(self, appointment_service, mock_calendar, session_factory):
        mock_calendar.create_event.side_effect = CalendarError("Google Calendar rejected the event")

        with pytest.raises(IntegrationError) as exc_info:
            await appointment_service.create_appointment(
                {"patientName": "Juan", "startTime": "2026-02-13T10:00:00-03:00"}
            )

        assert exc_info.value.message == "Failed to create appointment"
        async with session_factory() as session:
            stored = (await session.execute(select(Appointment))).scalars().all()
        assert stored == []


class TestListAppointments:
    """Pruebas del listado de turnos por rango"""

    @pytest.mark.asyncio
    async def test_range_sorting_and_doctor_name(self, appointment_service, make_appointment, add_rows):
        await add_rows(
            Doctor(doctor_id="ab12", name="Dra. Gómez", active=True),
            make_appointment(appointment_id="late", start_time="2026-02-28T18:00:00-03:00", doctor_id="ab12"),
            make_appointment(appointment_id="early", start_time="2026-02-01T00:00:00-03:00"),
            make_appointment(appointment_id="outside", start_time="2026-03-01T00:00:00-03:00"),
        )

        result = await appointment_service.list_appointments("2026-02-01", "2026-02-28")

        assert [item["appointmentId"] for item in result["appointments"]] == ["early", "late"]
        assert result["count"] == 2
        assert result["filters"] == {"from": "2026-02-01", "to": "2026-02-28"}
        assert result["appointments"][0]["doctorName"] is None
        assert result["appointments"][1]["doctorName"] == "Dra. Gómez"

    @pytest.mark.asyncio
    async def test_doctor_filter(self, appointment_service, make_appointment, add_rows):
        await add_rows(
            make_appointment(appointment_id="mine", doctor_id="ab12"),
            make_appointment(appointment_id="other", doctor_id="cd34"),
        )

        result = await appointment_service.list_appointments("2026-02-13", "2026-02-13", doctor_id="ab12")

        assert [item["appointmentId"] for item in result["appointments"]] == ["mine"]
        assert result["filters"]["doctorId"] == "ab12"
        assert result["appointments"][0]["doctorName"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "from_date,to_date",
        [(None, "2026-02-28"), ("2026-02-01", None), ("01/02/2026", "2026-02-28"), ("2026-02-28", "2026-02-01")],
    )
    async def test_invalid_range(self, appointment_service, from_date, to_date):
        with pytest.raises(InvalidRequestError):
            await appointment_service.list_appointments(from_date, to_date)


class TestGetAndDelete:
    @pytest.mark.asyncio
    async def test_delete_then_get(self, appointment_service, make_appointment, add_rows):
        await add_rows(make_appointment(appointment_id="gone"))

        assert (await appointment_service.get_appointment("gone"))["appointmentId"] == "gone"
        result = await appointment_service.delete_appointment("gone")

        assert result == {"message": "Appointment deleted successfully", "appointmentId": "gone"}
        with pytest.raises(NotFoundError):
            await appointment_service.get_appointment("gone")

    @pytest.mark.asyncio
    async def test_delete_missing(self, appointment_service):
        with pytest.raises(NotFoundError):
            await appointment_service.delete_appointment("missing")
