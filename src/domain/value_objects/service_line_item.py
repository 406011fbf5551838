"""Priced service line item and the price adjustment engine.

A line item records a service, its base net price and VAT rate, the
adjustment instruction applied to it, and the resulting final net and gross
prices. The final gross is never taken from the caller: it is always
``vat_rate.to_gross(final_price_net)``.

Adjustment algorithm (results clamped at zero, fractions truncated):
    PERCENT:     final_net = base_net * (1 + value / 10000)
    FIXED_NET:   final_net = base_net + value
    FIXED_GROSS: final_net = (to_gross(base_net) + value) / (1 + rate / 100)
    SET_NET:     final_net = value
    SET_GROSS:   final_net = value / (1 + rate / 100)

For FIXED_GROSS and SET_GROSS the requested gross is honored only up to the
truncation of the net back-out; the stored gross is re-derived from the net.

Usage:
    item = ServiceLineItem.price(
        service_id=service.id,
        service_name=service.name,
        base_price_net=Money.from_cents(10000),
        vat_rate=VatRate.VAT_23,
        adjustment_type=AdjustmentType.PERCENT,
        adjustment_value=-2000,
    )
    item.final_price_net    # Money(amount=8000)
    item.final_price_gross  # Money(amount=9840)
"""

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal
from typing import Self, assert_never
from uuid import UUID

from src.core.result import Failure, Result, Success
from src.domain.enums import AdjustmentType
from src.domain.errors import LineItemError
from src.domain.value_objects.money import Money
from src.domain.value_objects.vat_rate import VatRate

_BASIS_POINTS = Decimal(10000)
_HUNDRED = Decimal(100)


class FinancialIntegrityError(ValueError):
    """Raised when a line item's gross does not match VAT applied to its net."""

    def __init__(self, final_net: Money, final_gross: Money, expected_gross: Money):
        """Initialize financial integrity error.

        Args:
            final_net: Supplied final net.
            final_gross: Supplied final gross.
            expected_gross: Gross derived from the net.
        """
        super().__init__(
            f"{LineItemError.FINANCIAL_INTEGRITY_VIOLATION}: "
            f"net={final_net.amount} gross={final_gross.amount} "
            f"expected_gross={expected_gross.amount}"
        )
        self.final_net = final_net
        self.final_gross = final_gross
        self.expected_gross = expected_gross


def _truncate(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_DOWN))


def _back_out_net(gross_cents: int, vat_rate: VatRate) -> int:
    # VAT_ZW contributes percent 0 here, so its divisor is 1 (not 0.99)
    divisor = 1 + Decimal(vat_rate.percent) / _HUNDRED
    return _truncate(Decimal(gross_cents) / divisor)


def compute_final_net(
    base_price_net: Money,
    vat_rate: VatRate,
    adjustment_type: AdjustmentType,
    adjustment_value: int,
) -> Money:
    """Apply an adjustment instruction to a base net price.

    Args:
        base_price_net: Catalog (or ad-hoc) net price.
        vat_rate: VAT rate of the service, used by the gross-based types.
        adjustment_type: Which adjustment to apply.
        adjustment_value: Basis points for PERCENT, cents otherwise.

    Returns:
        Final net price, never negative.

    Example:
        >>> compute_final_net(
        ...     Money.from_cents(3000), VatRate.VAT_23, AdjustmentType.FIXED_NET, -4919
        ... )
        Money(amount=0)
    """
    base = base_price_net.amount
    match adjustment_type:
        case AdjustmentType.PERCENT:
            multiplier = 1 + Decimal(adjustment_value) / _BASIS_POINTS
            final_net = _truncate(Decimal(base) * multiplier)
        case AdjustmentType.FIXED_NET:
            final_net = base + adjustment_value
        case AdjustmentType.FIXED_GROSS:
            new_gross = max(vat_rate.to_gross(base_price_net).amount + adjustment_value, 0)
            final_net = _back_out_net(new_gross, vat_rate)
        case AdjustmentType.SET_NET:
            final_net = adjustment_value
        case AdjustmentType.SET_GROSS:
            final_net = _back_out_net(max(adjustment_value, 0), vat_rate)
        case _:
            assert_never(adjustment_type)

    return Money.from_cents(max(final_net, 0))


@dataclass(frozen=True, kw_only=True)
class ServiceLineItem:
    """One priced service on an appointment (and, frozen, on a visit).

    Construction enforces the financial-integrity invariant and raises
    FinancialIntegrityError when it does not hold. Use ``price()`` to run the
    adjustment engine, or ``create()`` to validate caller-supplied prices
    without raising.

    Attributes:
        service_id: Catalog service, or None for an ad-hoc custom service.
        service_name: Display name.
        base_price_net: Price before adjustment.
        vat_rate: VAT rate of the service.
        adjustment_type: Adjustment instruction type.
        adjustment_value: Adjustment value (basis points or cents).
        final_price_net: Net after adjustment.
        final_price_gross: ``vat_rate.to_gross(final_price_net)``.
        custom_note: Optional free text.
    """

    service_id: UUID | None
    service_name: str
    base_price_net: Money
    vat_rate: VatRate
    adjustment_type: AdjustmentType
    adjustment_value: int
    final_price_net: Money
    final_price_gross: Money
    custom_note: str | None = None

    def __post_init__(self) -> None:
        """Enforce the financial-integrity invariant.

        Raises:
            ValueError: If service name is empty.
            FinancialIntegrityError: If gross does not match VAT applied to net.
        """
        if not self.service_name or not self.service_name.strip():
            raise ValueError(LineItemError.EMPTY_SERVICE_NAME)
        expected_gross = self.vat_rate.to_gross(self.final_price_net)
        if self.final_price_gross != expected_gross:
            raise FinancialIntegrityError(
                self.final_price_net, self.final_price_gross, expected_gross
            )

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def price(
        cls,
        *,
        service_id: UUID | None,
        service_name: str,
        base_price_net: Money,
        vat_rate: VatRate,
        adjustment_type: AdjustmentType,
        adjustment_value: int,
        custom_note: str | None = None,
    ) -> Self:
        """Run the adjustment engine and build the line item.

        Returns:
            Line item whose final prices are derived from the adjustment.
        """
        final_net = compute_final_net(
            base_price_net, vat_rate, adjustment_type, adjustment_value
        )
        return cls(
            service_id=service_id,
            service_name=service_name,
            base_price_net=base_price_net,
            vat_rate=vat_rate,
            adjustment_type=adjustment_type,
            adjustment_value=adjustment_value,
            final_price_net=final_net,
            final_price_gross=vat_rate.to_gross(final_net),
            custom_note=custom_note,
        )

    @classmethod
    def create(
        cls,
        *,
        service_id: UUID | None,
        service_name: str,
        base_price_net: Money,
        vat_rate: VatRate,
        adjustment_type: AdjustmentType,
        adjustment_value: int,
        final_price_net: Money,
        final_price_gross: Money,
        custom_note: str | None = None,
    ) -> Result[Self, str]:
        """Build a line item from already computed prices.

        Returns:
            Success(line item), or Failure(LineItemError.*) when the name is
            empty or the gross does not match the net.
        """
        if not service_name or not service_name.strip():
            return Failure(error=LineItemError.EMPTY_SERVICE_NAME)
        if final_price_gross != vat_rate.to_gross(final_price_net):
            return Failure(error=LineItemError.FINANCIAL_INTEGRITY_VIOLATION)

        return Success(
            value=cls(
                service_id=service_id,
                service_name=service_name,
                base_price_net=base_price_net,
                vat_rate=vat_rate,
                adjustment_type=adjustment_type,
                adjustment_value=adjustment_value,
                final_price_net=final_price_net,
                final_price_gross=final_price_gross,
                custom_note=custom_note,
            )
        )

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    @property
    def vat_amount(self) -> Money:
        """VAT part of the final price."""
        return self.final_price_gross - self.final_price_net

    @property
    def is_custom(self) -> bool:
        """True for ad-hoc services outside the catalog."""
        return self.service_id is None
