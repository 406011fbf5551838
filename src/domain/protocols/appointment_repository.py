"""AppointmentRepository protocol for appointment persistence.

Port (interface) for hexagonal architecture. Every method is scoped by
``studio_id``: an appointment belonging to another studio is reported
exactly like a missing one.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.appointment import Appointment
from src.domain.enums import AppointmentStatus


class AppointmentRepository(Protocol):
    """Appointment repository protocol (port).

    Methods:
        find_by_id: Retrieve appointment by ID within a studio
        list_by_studio: Page through a studio's appointments
        count_by_studio: Count a studio's appointments
        save: Create or update appointment (optimistic version check)
    """

    async def find_by_id(
        self, appointment_id: UUID, studio_id: UUID
    ) -> Appointment | None:
        """Find appointment by ID within a studio.

        Args:
            appointment_id: Appointment's unique identifier.
            studio_id: Requesting studio.

        Returns:
            Appointment if found under the studio, None otherwise.
        """
        ...

    async def list_by_studio(
        self,
        studio_id: UUID,
        *,
        status: AppointmentStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Appointment]:
        """List appointments ordered by schedule start, newest first.

        Args:
            studio_id: Requesting studio.
            status: Optional status filter.
            offset: Rows to skip.
            limit: Maximum rows to return.

        Returns:
            Appointments (empty list if none).
        """
        ...

    async def count_by_studio(
        self, studio_id: UUID, *, status: AppointmentStatus | None = None
    ) -> int:
        """Count appointments matching the list filter."""
        ...

    async def save(self, appointment: Appointment) -> None:
        """Create or update appointment.

        Updates require the stored version to equal ``appointment.version``;
        the version is then incremented on the entity.

        Args:
            appointment: Appointment to persist.

        Raises:
            StaleAggregateError: If the appointment changed since it was loaded.
        """
        ...
