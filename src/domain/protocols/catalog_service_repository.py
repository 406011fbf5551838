"""CatalogServiceRepository protocol (service catalog lookups)."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.catalog_service import CatalogService


class CatalogServiceRepository(Protocol):
    """Service catalog repository protocol (port)."""

    async def find_by_ids(
        self, service_ids: set[UUID], studio_id: UUID
    ) -> list[CatalogService]:
        """Batch lookup of catalog services within a studio.

        Args:
            service_ids: Services to load.
            studio_id: Requesting studio.

        Returns:
            Services found (missing ids are skipped).
        """
        ...
