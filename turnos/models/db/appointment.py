"""
Appointment SQLAlchemy Model
"""

from typing import Any

from sqlalchemy import BigInteger, Boolean, Column, Index, String, Text

from turnos.domain.appointment_status import AppointmentStatus
from turnos.domain.time_utils import utc_now_iso
from turnos.models.db.base import Base


class Appointment(Base):
    """Turno médico sincronizado con Google Calendar."""

    __tablename__ = "appointments"

    appointment_id = Column(String(36), primary_key=True)

    # Paciente
    patient_name = Column(String(200), nullable=False)
    patient_phone = Column(String(40), nullable=False, default="")
    email = Column(String(255), nullable=True)

    # Horario (ISO-8601 con offset fijo -03:00)
    start_time = Column(String(32), nullable=False)
    end_time = Column(String(32), nullable=False)
    description = Column(Text, nullable=True)

    # Datos del formulario de Google
    study = Column(String(200), nullable=True)
    insurance = Column(String(200), nullable=True)
    doctor_id = Column(String(36), nullable=True, index=True)
    source = Column(String(50), nullable=True)

    # Estado y calendario
    status = Column(String(16), nullable=False, default=AppointmentStatus.TENTATIVE.value)
    calendar_event_id = Column(String(255), nullable=True)
    calendar_link = Column(Text, nullable=True)

    # Recordatorio y respuesta del paciente
    reminder_sent = Column(Boolean, nullable=True, default=False)
    reminder_sent_at = Column(String(32), nullable=True)
    confirmed_at = Column(String(32), nullable=True)
    cancelled_at = Column(String(32), nullable=True)

    created_at = Column(String(32), nullable=False, default=utc_now_iso)
    # Epoch en segundos; el barrido de vencidos borra filas con expires_at < ahora
    expires_at = Column(BigInteger, nullable=False, index=True)

    __table_args__ = (Index("ix_appointments_status_start_time", "status", "start_time"),)

    def to_dict(self) -> dict[str, Any]:
        """Convert to API dictionary (camelCase)."""
        data: dict[str, Any] = {
            "appointmentId": self.appointment_id,
            "patientName": self.patient_name,
            "patientPhone": self.patient_phone,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "description": self.description,
            "calendarEventId": self.calendar_event_id,
            "status": self.status,
            "createdAt": self.created_at,
            "expiresAt": self.expires_at,
            "reminderSent": bool(self.reminder_sent),
        }
        optional = {
            "email": self.email,
            "study": self.study,
            "insurance": self.insurance,
            "doctorId": self.doctor_id,
            "source": self.source,
            "calendarLink": self.calendar_link,
            "reminderSentAt": self.reminder_sent_at,
            "confirmedAt": self.confirmed_at,
            "cancelledAt": self.cancelled_at,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data
