from turnos.repositories.appointment_repository import SQLAlchemyAppointmentRepository
from turnos.repositories.doctor_repository import SQLAlchemyDoctorRepository
from turnos.repositories.obra_social_repository import SQLAlchemyObraSocialRepository
from turnos.repositories.study_repository import SQLAlchemyStudyRepository
from turnos.repositories.tarifa_repository import SQLAlchemyTarifaRepository

__all__ = [
    "SQLAlchemyAppointmentRepository",
    "SQLAlchemyDoctorRepository",
    "SQLAlchemyObraSocialRepository",
    "SQLAlchemyStudyRepository",
    "SQLAlchemyTarifaRepository",
]
