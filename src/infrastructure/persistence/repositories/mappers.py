"""Row ↔ value object mapping shared by appointment and visit repositories.

Line items are rebuilt through the ServiceLineItem constructor, so a row
whose gross does not match VAT applied to its net raises
FinancialIntegrityError (a ValueError) on load.
"""

from typing import Any

from src.domain.enums import AdjustmentType
from src.domain.value_objects import Money, ServiceLineItem, VatRate
from src.infrastructure.persistence.models.pricing import PricedLineMixin


def line_item_columns(item: ServiceLineItem, position: int) -> dict[str, Any]:
    """Column values of a line item row.

    Args:
        item: Line item to store.
        position: Order within the parent.

    Returns:
        Keyword arguments for a PricedLineMixin model.
    """
    return {
        "position": position,
        "service_id": item.service_id,
        "service_name": item.service_name,
        "base_price_net": item.base_price_net.amount,
        "vat_rate": item.vat_rate.value,
        "adjustment_type": item.adjustment_type.value,
        "adjustment_value": item.adjustment_value,
        "final_price_net": item.final_price_net.amount,
        "final_price_gross": item.final_price_gross.amount,
        "custom_note": item.custom_note,
    }


def line_item_from_row(row: PricedLineMixin) -> ServiceLineItem:
    """Rebuild a line item from its row.

    Raises:
        ValueError: Unknown VAT code or adjustment type, or broken
            financial integrity.
    """
    return ServiceLineItem(
        service_id=row.service_id,
        service_name=row.service_name,
        base_price_net=Money.from_cents(row.base_price_net),
        vat_rate=VatRate(row.vat_rate),
        adjustment_type=AdjustmentType(row.adjustment_type),
        adjustment_value=row.adjustment_value,
        final_price_net=Money.from_cents(row.final_price_net),
        final_price_gross=Money.from_cents(row.final_price_gross),
        custom_note=row.custom_note,
    )
