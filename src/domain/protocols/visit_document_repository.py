"""VisitDocumentRepository protocol (documents attached to visits)."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.visit_document import VisitDocument


class VisitDocumentRepository(Protocol):
    """Visit document repository protocol (port)."""

    async def find_by_visit(
        self, visit_id: UUID, studio_id: UUID
    ) -> list[VisitDocument]:
        """List a visit's documents."""
        ...

    async def delete_by_visit(self, visit_id: UUID, studio_id: UUID) -> int:
        """Delete a visit's document rows.

        Returns:
            Number of deleted rows.
        """
        ...
