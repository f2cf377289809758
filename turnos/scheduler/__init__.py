from turnos.scheduler.reminder_scheduler import ReminderScheduler

__all__ = ["ReminderScheduler"]
