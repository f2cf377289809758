"""
Appointment API Schemas
"""

from pydantic import Field

from turnos.api.schemas.base import CamelModel


class AppointmentCreateRequest(CamelModel):
    """
    Body for ``POST /appointments``.

    Accepts both the direct shape and the Google Form shape; which one applies
    is decided by ``turnos.domain.appointment_request.resolve_appointment_input``.
    """

    patient_name: str | None = None

    # Formato directo
    patient_phone: str | None = None
    start_time: str | None = None
    end_time: str | None = Field(None, description="Ignorado: siempre se calcula como inicio + 30 min")
    description: str | None = None

    # Formato Google Form
    phone: str | None = None
    email: str | None = None
    study: str | None = None
    insurance: str | None = None
    doctor_id: str | None = None
    date: str | None = Field(None, description="YYYY-MM-DD")
    time: str | None = Field(None, description="HH:mm")
    source: str | None = None

    def to_payload(self) -> dict:
        """Raw camelCase payload consumed by the input resolver."""
        return self.model_dump(by_alias=True)
