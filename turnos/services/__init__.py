from turnos.services.appointment_service import AppointmentService
from turnos.services.doctor_service import DoctorService
from turnos.services.expiry_service import ExpiryService
from turnos.services.obra_social_service import ObraSocialService
from turnos.services.reminder_service import ReminderRunSummary, ReminderService
from turnos.services.study_service import StudyService
from turnos.services.tarifa_service import TarifaService
from turnos.services.whatsapp_webhook_service import WhatsAppWebhookService

__all__ = [
    "AppointmentService",
    "DoctorService",
    "ExpiryService",
    "ObraSocialService",
    "ReminderRunSummary",
    "ReminderService",
    "StudyService",
    "TarifaService",
    "WhatsAppWebhookService",
]
