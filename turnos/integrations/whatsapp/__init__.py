from turnos.integrations.whatsapp.http_client import WhatsAppHttpClient
from turnos.integrations.whatsapp.messenger import WhatsAppMessenger

__all__ = ["WhatsAppHttpClient", "WhatsAppMessenger"]
