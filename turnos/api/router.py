from fastapi import APIRouter

from turnos.api.routes import appointments, doctors, obras_sociales, studies, tarifas, whatsapp_webhook

api_router = APIRouter()

api_router.include_router(appointments.router)
api_router.include_router(doctors.router)
api_router.include_router(studies.router)
api_router.include_router(obras_sociales.router)
api_router.include_router(tarifas.router)
api_router.include_router(whatsapp_webhook.router)
