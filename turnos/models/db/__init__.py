from turnos.models.db.appointment import Appointment
from turnos.models.db.base import Base, TimestampMixin
from turnos.models.db.doctor import Doctor
from turnos.models.db.obra_social import ObraSocial
from turnos.models.db.study import Study
from turnos.models.db.tarifa import Tarifa

__all__ = [
    "Base",
    "TimestampMixin",
    "Appointment",
    "Doctor",
    "ObraSocial",
    "Study",
    "Tarifa",
]
