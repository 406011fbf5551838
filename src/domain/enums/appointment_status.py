"""Appointment lifecycle states.

State Machine:
    CREATED → CANCELLED (cancel)
    CREATED → CONVERTED (visit confirmed)
    CREATED → ABANDONED

    CANCELLED and CONVERTED are terminal.
"""

from enum import Enum


class AppointmentStatus(str, Enum):
    """Appointment lifecycle states."""

    CREATED = "created"
    """Booked and awaiting the customer's arrival."""

    ABANDONED = "abandoned"
    """Customer never showed up."""

    CANCELLED = "cancelled"
    """Explicitly cancelled (terminal)."""

    CONVERTED = "converted"
    """A visit created from this appointment was confirmed (terminal)."""

    def is_terminal(self) -> bool:
        """Check if no further transition is allowed.

        Returns:
            True for CANCELLED and CONVERTED.
        """
        return self in (AppointmentStatus.CANCELLED, AppointmentStatus.CONVERTED)
