"""Appointment Status Value Object.

Defines the possible states of an appointment and their valid transitions.
"""

from enum import Enum


class AppointmentStatus(str, Enum):
    """Estados del turno con máquina de estados."""

    TENTATIVE = "TENTATIVE"  # Creado, pendiente de confirmación del paciente
    CONFIRMED = "CONFIRMED"  # Confirmado por WhatsApp
    CANCELLED = "CANCELLED"  # Cancelado por WhatsApp

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Validar si la transición de estado es válida.

        State machine:
        - TENTATIVE -> CONFIRMED, CANCELLED
        - CONFIRMED -> (final state)
        - CANCELLED -> (final state)
        """
        transitions: dict[str, list[str]] = {
            "TENTATIVE": ["CONFIRMED", "CANCELLED"],
            "CONFIRMED": [],  # Estado final
            "CANCELLED": [],  # Estado final
        }
        return new_status.value in transitions.get(self.value, [])
