"""Service catalog entry used to price appointment line items."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.value_objects import Money, VatRate


@dataclass
class CatalogService:
    """Detailing service offered by a studio.

    Attributes:
        id: Unique identifier.
        studio_id: Owning tenant.
        name: Display name.
        base_price_net: List net price.
        vat_rate: VAT rate applied to the service.
        requires_manual_price: Price is agreed per booking (SET_NET/SET_GROSS only).
        is_active: Inactive services cannot be booked.
    """

    id: UUID
    studio_id: UUID
    name: str
    base_price_net: Money
    vat_rate: VatRate
    requires_manual_price: bool = False
    is_active: bool = True
