"""Unit tests for Money and VatRate value objects.

Tests cover:
- Money creation with validation (integer cents, never negative)
- Arithmetic and ordering
- Display formatting
- VAT and gross derivation with truncation
- VAT rate code lookup

Architecture:
- Unit tests for domain value objects (no dependencies)
"""

from decimal import Decimal

import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.value_objects import Money, NegativeMoneyError, VatRate


# =============================================================================
# Money Creation Tests
# =============================================================================


@pytest.mark.unit
class TestMoneyCreation:
    """Test Money construction rules."""

    def test_from_cents_keeps_exact_amount(self):
        """Test amounts are stored as exact integer cents."""
        money = Money.from_cents(9840)

        assert money.amount == 9840

    def test_zero_factory(self):
        """Test zero() creates an empty amount."""
        assert Money.zero().is_zero()
        assert Money.zero() == Money.from_cents(0)

    def test_negative_amount_raises(self):
        """Test negative amounts raise NegativeMoneyError."""
        with pytest.raises(NegativeMoneyError) as exc_info:
            Money.from_cents(-1)

        assert exc_info.value.amount == -1

    def test_negative_money_error_is_value_error(self):
        """Test NegativeMoneyError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Money(-500)

    def test_float_amount_rejected(self):
        """Test floating point amounts are rejected."""
        with pytest.raises(ValueError, match="integer cents"):
            Money(10.5)  # type: ignore[arg-type]

    def test_bool_amount_rejected(self):
        """Test bool is not accepted as an integer amount."""
        with pytest.raises(ValueError):
            Money(True)  # type: ignore[arg-type]

    def test_money_is_immutable(self):
        """Test Money cannot be modified after creation."""
        money = Money.from_cents(100)

        with pytest.raises(AttributeError):
            money.amount = 200  # type: ignore[misc]


# =============================================================================
# Money Arithmetic Tests
# =============================================================================


@pytest.mark.unit
class TestMoneyArithmetic:
    """Test Money arithmetic and comparison."""

    def test_add(self):
        """Test adding two amounts."""
        assert Money(8000) + Money(1840) == Money(9840)

    def test_subtract(self):
        """Test subtracting a smaller amount."""
        assert Money(9840) - Money(8000) == Money(1840)

    def test_subtract_below_zero_raises(self):
        """Test subtraction that would go negative raises."""
        with pytest.raises(NegativeMoneyError):
            Money(100) - Money(101)

    def test_named_aliases(self):
        """Test plus/minus behave like the operators."""
        assert Money(100).plus(Money(50)) == Money(150)
        assert Money(100).minus(Money(50)) == Money(50)

    def test_add_non_money_raises_type_error(self):
        """Test adding a plain int is not supported."""
        with pytest.raises(TypeError):
            Money(100) + 5  # type: ignore[operator]

    def test_sum_of_list(self):
        """Test sum() over several amounts."""
        assert Money.sum([Money(100), Money(250), Money(1)]) == Money(351)

    def test_sum_of_empty_list_is_zero(self):
        """Test sum() of nothing is zero."""
        assert Money.sum([]) == Money.zero()

    def test_ordering(self):
        """Test amounts compare by value."""
        assert Money(100) < Money(200)
        assert Money(200) >= Money(200)
        assert max(Money(5), Money(50), Money(20)) == Money(50)


@pytest.mark.unit
class TestMoneyDisplay:
    """Test major-unit formatting."""

    @pytest.mark.parametrize(
        "cents,expected",
        [(9840, "98.40"), (0, "0.00"), (5, "0.05"), (123456, "1234.56")],
    )
    def test_str(self, cents, expected):
        """Test str() renders two fractional digits."""
        assert str(Money(cents)) == expected

    def test_to_decimal(self):
        """Test to_decimal() returns major units."""
        assert Money(9840).to_decimal() == Decimal("98.40")


# =============================================================================
# VAT Rate Tests
# =============================================================================


@pytest.mark.unit
class TestVatRateConversion:
    """Test VAT and gross derivation."""

    def test_vat_23_on_80_00(self):
        """Test 23% of 80.00 is 18.40 and gross is 98.40."""
        net = Money(8000)

        assert VatRate.VAT_23.to_vat(net) == Money(1840)
        assert VatRate.VAT_23.to_gross(net) == Money(9840)

    def test_vat_truncates_fractions(self):
        """Test fractional VAT cents are truncated."""
        # 99 * 23 / 100 = 22.77
        assert VatRate.VAT_23.to_vat(Money(99)) == Money(22)
        # 1 * 8 / 100 = 0.08
        assert VatRate.VAT_8.to_vat(Money(1)) == Money(0)

    def test_exempt_rate_behaves_as_zero(self):
        """Test VAT_ZW adds no VAT."""
        net = Money(12345)

        assert VatRate.VAT_ZW.percent == 0
        assert VatRate.VAT_ZW.to_vat(net) == Money.zero()
        assert VatRate.VAT_ZW.to_gross(net) == net

    def test_zero_rate(self):
        """Test VAT_0 adds no VAT."""
        assert VatRate.VAT_0.to_gross(Money(5000)) == Money(5000)

    @pytest.mark.parametrize("rate", list(VatRate))
    def test_gross_minus_net_equals_vat(self, rate):
        """Test gross(n) - n == vat(n) for every rate."""
        for cents in (0, 1, 7, 99, 101, 4919, 10000, 123457):
            net = Money(cents)
            assert rate.to_gross(net) - net == rate.to_vat(net)

    def test_percent_values(self):
        """Test effective percentages."""
        assert [r.percent for r in VatRate] == [23, 8, 5, 0, 0]


@pytest.mark.unit
class TestVatRateFromCode:
    """Test VAT rate lookup by integer code."""

    @pytest.mark.parametrize(
        "code,rate",
        [
            (23, VatRate.VAT_23),
            (8, VatRate.VAT_8),
            (5, VatRate.VAT_5),
            (0, VatRate.VAT_0),
            (-1, VatRate.VAT_ZW),
        ],
    )
    def test_known_codes(self, code, rate):
        """Test supported codes resolve to their rate."""
        result = VatRate.from_code(code)

        assert isinstance(result, Success)
        assert result.value is rate

    @pytest.mark.parametrize("code", [7, 22, 100, -2])
    def test_unknown_code_fails(self, code):
        """Test unsupported codes return a validation failure."""
        result = VatRate.from_code(code)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_VAT_RATE
        assert result.error.field == "vat_rate"
