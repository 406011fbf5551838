"""VisitRepository protocol for visit persistence.

Port (interface) for hexagonal architecture. Every method is scoped by
``studio_id``.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.visit import Visit
from src.domain.enums import VisitStatus


class VisitRepository(Protocol):
    """Visit repository protocol (port).

    Methods:
        find_by_id: Retrieve visit by ID within a studio
        exists_for_appointment: Check if an appointment was already converted
        find_latest_visit_number: Highest visit number of a year
        list_by_studio: Page through a studio's visits
        count_by_studio: Count a studio's visits
        save: Create or update visit (optimistic version check)
        delete: Hard-delete a visit with its items and photos
    """

    async def find_by_id(self, visit_id: UUID, studio_id: UUID) -> Visit | None:
        """Find visit by ID within a studio.

        Args:
            visit_id: Visit's unique identifier.
            studio_id: Requesting studio.

        Returns:
            Visit if found under the studio, None otherwise.
        """
        ...

    async def exists_for_appointment(
        self, appointment_id: UUID, studio_id: UUID
    ) -> bool:
        """Check if any visit references the appointment."""
        ...

    async def find_latest_visit_number(self, studio_id: UUID, year: int) -> str | None:
        """Find the highest visit number issued in a year.

        Args:
            studio_id: Requesting studio.
            year: Calendar year of the "VIS-{year}-" prefix.

        Returns:
            Latest visit number, or None if the year has none.
        """
        ...

    async def list_by_studio(
        self,
        studio_id: UUID,
        *,
        status: VisitStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Visit]:
        """List visits ordered by creation time, newest first."""
        ...

    async def count_by_studio(
        self, studio_id: UUID, *, status: VisitStatus | None = None
    ) -> int:
        """Count visits matching the list filter."""
        ...

    async def save(self, visit: Visit) -> None:
        """Create or update visit.

        Args:
            visit: Visit to persist.

        Raises:
            StaleAggregateError: If the visit changed since it was loaded.
            DuplicateVisitError: If a new visit reuses a visit number or an
                appointment already converted in the studio.
        """
        ...

    async def delete(self, visit_id: UUID, studio_id: UUID) -> bool:
        """Hard-delete a visit.

        Returns:
            True if a row was deleted.
        """
        ...
