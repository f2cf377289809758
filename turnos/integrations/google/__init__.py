from turnos.integrations.google.calendar_client import CalendarEvent, CalendarService

__all__ = ["CalendarEvent", "CalendarService"]
