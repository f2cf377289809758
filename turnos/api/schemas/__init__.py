from turnos.api.schemas.appointment import AppointmentCreateRequest
from turnos.api.schemas.doctor import DoctorCreateRequest, DoctorUpdateRequest
from turnos.api.schemas.obra_social import ObraSocialCreateRequest, ObraSocialUpdateRequest
from turnos.api.schemas.study import StudyCreateRequest, StudyUpdateRequest
from turnos.api.schemas.tarifa import TarifaCreateRequest, TarifaUpdateRequest

__all__ = [
    "AppointmentCreateRequest",
    "DoctorCreateRequest",
    "DoctorUpdateRequest",
    "ObraSocialCreateRequest",
    "ObraSocialUpdateRequest",
    "StudyCreateRequest",
    "StudyUpdateRequest",
    "TarifaCreateRequest",
    "TarifaUpdateRequest",
]
