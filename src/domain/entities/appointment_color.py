"""Calendar color tag for appointments."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class AppointmentColor:
    """Named calendar color.

    Attributes:
        id: Unique identifier.
        studio_id: Owning tenant.
        name: Display name.
        hex_color: CSS hex color, e.g. "#3B82F6".
    """

    id: UUID
    studio_id: UUID
    name: str
    hex_color: str
