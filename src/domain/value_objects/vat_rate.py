"""VAT rate value type with net to gross conversion.

A closed set of rates. Conversions truncate toward zero:

    vat(net)   = trunc(net * rate / 100)
    gross(net) = net + vat(net)

so ``gross(n) - n == vat(n)`` holds for every rate and every n >= 0.
VAT_ZW ("zwolniony", exempt) carries code -1 and behaves as a 0% rate.

Usage:
    from src.domain.value_objects import Money, VatRate

    VatRate.VAT_23.to_gross(Money.from_cents(8000))  # Money(amount=9840)
"""

from enum import Enum

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success
from src.domain.value_objects.money import Money


class VatRate(int, Enum):
    """Supported VAT rates, valued by their integer code."""

    VAT_23 = 23
    VAT_8 = 8
    VAT_5 = 5
    VAT_0 = 0
    VAT_ZW = -1

    @property
    def percent(self) -> int:
        """Effective percentage used in calculations (0 for exempt)."""
        # Exempt counts as 0%, not its -1 code
        return 0 if self is VatRate.VAT_ZW else int(self.value)

    def to_vat(self, net: Money) -> Money:
        """VAT amount for a net price, truncated toward zero.

        Args:
            net: Net amount.

        Returns:
            VAT amount.
        """
        return Money.from_cents(net.amount * self.percent // 100)

    def to_gross(self, net: Money) -> Money:
        """Gross amount for a net price.

        Args:
            net: Net amount.

        Returns:
            Net plus truncated VAT.
        """
        return net + self.to_vat(net)

    @classmethod
    def from_code(cls, code: int) -> Result["VatRate", ValidationError]:
        """Resolve a VAT rate from its integer code.

        Args:
            code: Rate code (23, 8, 5, 0 or -1 for exempt).

        Returns:
            Success(VatRate) or Failure(ValidationError) for unknown codes.
        """
        try:
            return Success(value=cls(code))
        except ValueError:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_VAT_RATE,
                    message=f"Unsupported VAT rate: {code}",
                    field="vat_rate",
                )
            )
