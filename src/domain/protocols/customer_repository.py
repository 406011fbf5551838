"""CustomerRepository protocol (booking collaborator)."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.customer import Customer


class CustomerRepository(Protocol):
    """Customer repository protocol (port)."""

    async def find_by_id(self, customer_id: UUID, studio_id: UUID) -> Customer | None:
        """Find customer by ID within a studio."""
        ...

    async def find_by_ids(
        self, customer_ids: set[UUID], studio_id: UUID
    ) -> list[Customer]:
        """Batch lookup used by list queries (missing ids are skipped)."""
        ...

    async def exists_by_email(
        self, studio_id: UUID, email: str, *, exclude_id: UUID | None = None
    ) -> bool:
        """Check if another customer of the studio uses this email.

        Args:
            studio_id: Owning studio.
            email: Address, compared trimmed and case-insensitively.
            exclude_id: Customer whose own address does not count.
        """
        ...

    async def exists_by_phone(self, studio_id: UUID, phone: str) -> bool:
        """Check if a customer of the studio uses this phone (trimmed)."""
        ...

    async def save(self, customer: Customer) -> None:
        """Create or update customer."""
        ...
