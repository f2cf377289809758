"""
Appointment creation inputs.

Two request shapes are accepted by ``POST /appointments``: the direct shape
(``startTime`` given by the caller) and the Google Form shape (``date`` +
``time`` plus study/insurance/doctor metadata). The raw body is resolved into
one variant of a tagged union so the rest of the flow never inspects
optional fields to guess which one it got.
"""

import re
from dataclasses import dataclass
from typing import Literal

from turnos.core.exceptions import InvalidRequestError
from turnos.domain.time_utils import end_time_from_start, form_start_time, normalize_start_time

GOOGLE_FORM_SOURCE = "google_form"
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MISSING_FIELDS_MESSAGE = "Missing required fields: patientName, startTime (o date + time para formato Google Form)"


@dataclass(frozen=True)
class DirectAppointmentInput:
    kind: Literal["direct"]
    patient_name: str
    patient_phone: str
    start_time: str
    end_time: str
    description: str | None = None

    @property
    def attendee_email(self) -> str | None:
        # The direct shape has no email field; some callers send it as the phone
        return self.patient_phone if "@" in self.patient_phone else None


@dataclass(frozen=True)
class GoogleFormAppointmentInput:
    kind: Literal["google_form"]
    patient_name: str
    patient_phone: str
    start_time: str
    end_time: str
    description: str | None = None
    email: str | None = None
    study: str | None = None
    insurance: str | None = None
    doctor_id: str | None = None
    source: str | None = None

    @property
    def attendee_email(self) -> str | None:
        return self.email


AppointmentInput = DirectAppointmentInput | GoogleFormAppointmentInput


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def is_google_form_payload(payload: dict) -> bool:
    """A body is in Google Form shape if it says so or carries both date and time."""
    return payload.get("source") == GOOGLE_FORM_SOURCE or bool(payload.get("date") and payload.get("time"))


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _build_form_description(payload: dict) -> str | None:
    parts = []
    if payload.get("study"):
        parts.append(f"Estudio: {payload['study']}")
    if payload.get("insurance"):
        parts.append(f"Obra social: {payload['insurance']}")
    if payload.get("doctorId"):
        parts.append(f"Doctor ID: {payload['doctorId']}")
    if payload.get("email"):
        parts.append(f"Email: {payload['email']}")
    return "\n".join(parts) if parts else None


def resolve_appointment_input(payload: dict) -> AppointmentInput:
    """
    Resolve a raw creation body (camelCase keys) into its tagged variant.

    Args:
        payload: Request body with ``None`` for absent fields

    Returns:
        ``GoogleFormAppointmentInput`` or ``DirectAppointmentInput`` with the
        start time normalized to ``-03:00`` and the end time set to start + 30 min

    Raises:
        InvalidRequestError: If the name or a start time is missing, or the
            date/time values are malformed
    """
    patient_name = _clean(payload.get("patientName"))

    if is_google_form_payload(payload):
        date_str, time_str = payload.get("date"), payload.get("time")
        if not patient_name or not (date_str and time_str):
            raise InvalidRequestError(MISSING_FIELDS_MESSAGE)
        try:
            start_time = form_start_time(date_str, time_str)
        except ValueError as e:
            raise InvalidRequestError("Invalid date/time for appointment", details=str(e)) from e

        return GoogleFormAppointmentInput(
            kind="google_form",
            patient_name=patient_name,
            patient_phone=_clean(payload.get("phone")) or _clean(payload.get("patientPhone")) or "",
            start_time=start_time,
            end_time=end_time_from_start(start_time),
            description=_build_form_description(payload),
            email=_clean(payload.get("email")),
            study=_clean(payload.get("study")),
            insurance=_clean(payload.get("insurance")),
            doctor_id=_clean(payload.get("doctorId")),
            source=_clean(payload.get("source")),
        )

    raw_start = _clean(payload.get("startTime"))
    if not patient_name or not raw_start:
        raise InvalidRequestError(MISSING_FIELDS_MESSAGE)
    try:
        start_time = normalize_start_time(raw_start)
    except ValueError as e:
        raise InvalidRequestError("Invalid startTime, expected ISO-8601", details=str(e)) from e

    return DirectAppointmentInput(
        kind="direct",
        patient_name=patient_name,
        patient_phone=_clean(payload.get("patientPhone")) or "",
        start_time=start_time,
        end_time=end_time_from_start(start_time),
        description=payload.get("description") or None,
    )
