"""Turnos API: turnos médicos con Google Calendar y recordatorios por WhatsApp."""

__version__ = "0.1.0"
