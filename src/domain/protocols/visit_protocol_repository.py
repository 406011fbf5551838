"""VisitProtocolRepository protocol for visit protocol persistence."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.visit_protocol import VisitProtocol
from src.domain.enums import ProtocolStage


class VisitProtocolRepository(Protocol):
    """Visit protocol repository protocol (port).

    Methods:
        find_by_id: Retrieve protocol instance by ID within a studio
        find_by_visit: All instances of a visit, optionally for one stage
        save: Create or update instance
        save_all: Persist a generated batch
        delete_by_visit: Remove every instance of a visit
    """

    async def find_by_id(
        self, protocol_id: UUID, studio_id: UUID
    ) -> VisitProtocol | None:
        """Find protocol instance by ID within a studio."""
        ...

    async def find_by_visit(
        self,
        visit_id: UUID,
        studio_id: UUID,
        *,
        stage: ProtocolStage | None = None,
    ) -> list[VisitProtocol]:
        """List a visit's protocol instances.

        Args:
            visit_id: Owning visit.
            studio_id: Requesting studio.
            stage: Optional stage filter.

        Returns:
            Instances ordered by version then creation time.
        """
        ...

    async def save(self, protocol: VisitProtocol) -> None:
        """Create or update instance."""
        ...

    async def save_all(self, protocols: list[VisitProtocol]) -> None:
        """Create a batch of instances."""
        ...

    async def delete_by_visit(self, visit_id: UUID, studio_id: UUID) -> int:
        """Delete every instance of a visit.

        Returns:
            Number of deleted rows.
        """
        ...
