"""VehicleRepository protocol (booking and conversion collaborator)."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.vehicle import Vehicle


class VehicleRepository(Protocol):
    """Vehicle repository protocol (port)."""

    async def find_by_id(self, vehicle_id: UUID, studio_id: UUID) -> Vehicle | None:
        """Find vehicle by ID within a studio."""
        ...

    async def find_by_ids(
        self, vehicle_ids: set[UUID], studio_id: UUID
    ) -> list[Vehicle]:
        """Batch lookup used by list queries (missing ids are skipped)."""
        ...

    async def save(self, vehicle: Vehicle) -> None:
        """Create or update vehicle."""
        ...
