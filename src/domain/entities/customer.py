"""Customer entity (boundary collaborator of the booking flow)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class Customer:
    """Studio customer.

    Attributes:
        id: Unique identifier.
        studio_id: Owning tenant.
        first_name: Given name.
        last_name: Family name.
        phone: Phone number, if known.
        email: Email address, if known.
    """

    id: UUID
    studio_id: UUID
    first_name: str
    last_name: str
    phone: str | None = None
    email: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def full_name(self) -> str:
        """First and last name joined by a space."""
        return f"{self.first_name} {self.last_name}".strip()

    def has_contact_info(self) -> bool:
        """Check if the customer can be reached by phone or email."""
        return bool(self.phone and self.phone.strip()) or bool(
            self.email and self.email.strip()
        )

    def update_details(
        self,
        *,
        first_name: str,
        last_name: str,
        phone: str | None,
        email: str | None,
    ) -> None:
        """Replace name and contact details."""
        self.first_name = first_name
        self.last_name = last_name
        self.phone = phone
        self.email = email
        self.updated_at = datetime.now(UTC)
