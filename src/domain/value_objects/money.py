"""Immutable Money value object in integer minor units (cents).

Amounts are exact integers: there is no floating point anywhere in the
stored value, and all arithmetic is integer arithmetic. Money is never
negative; producing a negative amount is a programming error.

Error Handling:
    Constructing a negative or non-integer amount raises NegativeMoneyError
    / ValueError. Price adjustments clamp at zero before constructing Money,
    so these exceptions never surface during correct operation.

Usage:
    from src.domain.value_objects import Money

    base = Money.from_cents(10000)  # 100.00
    fee = Money.from_cents(999)
    total = base + fee  # Money(amount=10999)
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Self


class NegativeMoneyError(ValueError):
    """Raised when an operation would produce a negative amount."""

    def __init__(self, amount: int) -> None:
        """Initialize negative money error.

        Args:
            amount: The offending amount in cents.
        """
        super().__init__(f"Money cannot be negative: {amount}")
        self.amount = amount


@dataclass(frozen=True, order=True)
class Money:
    """Non-negative monetary amount in cents.

    Attributes:
        amount: Integer amount in minor currency units.

    Example:
        >>> Money.from_cents(8000) + Money.from_cents(1840)
        Money(amount=9840)
        >>> str(Money.from_cents(9840))
        '98.40'
    """

    amount: int

    def __post_init__(self) -> None:
        """Validate amount after initialization.

        Raises:
            ValueError: If amount is not an integer.
            NegativeMoneyError: If amount is negative.
        """
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError(f"Money amount must be integer cents: {self.amount!r}")
        if self.amount < 0:
            raise NegativeMoneyError(self.amount)

    # -------------------------------------------------------------------------
    # Arithmetic Operations
    # -------------------------------------------------------------------------

    def __add__(self, other: "Money") -> "Money":
        """Add two Money values.

        Args:
            other: Money to add.

        Returns:
            New Money with sum of amounts.
        """
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money values.

        Args:
            other: Money to subtract.

        Returns:
            New Money with difference of amounts.

        Raises:
            NegativeMoneyError: If other is larger than self.
        """
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount - other.amount)

    def plus(self, other: "Money") -> "Money":
        """Named alias of ``+``."""
        return self + other

    def minus(self, other: "Money") -> "Money":
        """Named alias of ``-``."""
        return self - other

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self.amount == 0

    def to_decimal(self) -> Decimal:
        """Amount in major units for display (never for arithmetic).

        Returns:
            Decimal with two fractional digits, e.g. Decimal("98.40").
        """
        return (Decimal(self.amount) / Decimal(100)).quantize(Decimal("0.01"))

    def __str__(self) -> str:
        """Major-unit representation, e.g. '98.40'."""
        return str(self.to_decimal())

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> Self:
        """Create zero Money.

        Returns:
            Money with zero amount.
        """
        return cls(0)

    @classmethod
    def from_cents(cls, cents: int) -> Self:
        """Create Money from an integer cent amount.

        Args:
            cents: Amount in minor units.

        Returns:
            Money instance.
        """
        return cls(cents)

    @classmethod
    def sum(cls, amounts: "list[Money]") -> Self:
        """Sum a list of Money values (zero for an empty list).

        Args:
            amounts: Values to add.

        Returns:
            Money with the total amount.
        """
        return cls(sum(money.amount for money in amounts))
