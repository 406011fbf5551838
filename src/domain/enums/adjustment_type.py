"""Price adjustment instruction types.

Each type carries one signed integer value whose unit depends on the type:
basis points for PERCENT, cents for every other type.

Usage:
    from src.domain.enums import AdjustmentType

    item = ServiceLineItem.price(
        service_name="Ceramic coating",
        base_price_net=Money.from_cents(10000),
        vat_rate=VatRate.VAT_23,
        adjustment_type=AdjustmentType.PERCENT,
        adjustment_value=-2000,
    )
"""

from enum import Enum


class AdjustmentType(str, Enum):
    """How a base net price is turned into a final net price.

    String Enum:
        Inherits from str for easy serialization and database storage.
    """

    PERCENT = "percent"
    """Relative change in basis points (-2000 = -20%)."""

    FIXED_NET = "fixed_net"
    """Signed cent delta applied to the net price."""

    FIXED_GROSS = "fixed_gross"
    """Signed cent delta applied to the gross price, net backed out."""

    SET_NET = "set_net"
    """Absolute net price override in cents."""

    SET_GROSS = "set_gross"
    """Absolute gross price override in cents, net backed out."""

    @property
    def is_absolute(self) -> bool:
        """True for overrides that ignore the base price."""
        return self in (AdjustmentType.SET_NET, AdjustmentType.SET_GROSS)
