"""Vehicle entity (boundary collaborator of booking and conversion)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class Vehicle:
    """Customer vehicle.

    Attributes:
        id: Unique identifier.
        studio_id: Owning tenant.
        customer_id: Owner.
        brand: Manufacturer.
        model: Model name.
        year_of_production: Model year, if known.
        license_plate: Registration plate, if known.
        vin: Vehicle identification number, if known.
        color: Paint color, if known.
    """

    id: UUID
    studio_id: UUID
    customer_id: UUID
    brand: str
    model: str
    year_of_production: int | None = None
    license_plate: str | None = None
    vin: str | None = None
    color: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate vehicle data.

        Raises:
            ValueError: If brand or model is empty.
        """
        if not self.brand or not self.model:
            raise ValueError("Vehicle brand and model are required")

    @property
    def display_name(self) -> str:
        """Brand and model, with the plate when known."""
        label = f"{self.brand} {self.model}"
        return f"{label} ({self.license_plate})" if self.license_plate else label

    def update_details(
        self,
        *,
        brand: str,
        model: str,
        year_of_production: int | None,
        license_plate: str | None,
        vin: str | None,
        color: str | None,
    ) -> None:
        """Replace descriptive vehicle attributes."""
        self.brand = brand
        self.model = model
        self.year_of_production = year_of_production
        self.license_plate = license_plate
        self.vin = vin
        self.color = color
        self.updated_at = datetime.now(UTC)
