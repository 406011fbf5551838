"""AppointmentColorRepository protocol (calendar colors)."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.appointment_color import AppointmentColor


class AppointmentColorRepository(Protocol):
    """Appointment color repository protocol (port)."""

    async def find_by_id(
        self, color_id: UUID, studio_id: UUID
    ) -> AppointmentColor | None:
        """Find color by ID within a studio."""
        ...

    async def find_by_ids(
        self, color_ids: set[UUID], studio_id: UUID
    ) -> list[AppointmentColor]:
        """Batch lookup used by list queries."""
        ...
