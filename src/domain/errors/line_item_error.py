"""Service line item pricing errors.

Usage:
    from src.domain.errors import LineItemError

    return Failure(error=LineItemError.FINANCIAL_INTEGRITY_VIOLATION)
"""


class LineItemError:
    """Line item error constants.

    FINANCIAL_INTEGRITY_VIOLATION is an invariant violation: it signals a
    defect in the caller, never a user-correctable condition.
    """

    FINANCIAL_INTEGRITY_VIOLATION = (
        "Final gross price does not match VAT applied to final net price"
    )
    """final_price_gross must equal vat_rate.to_gross(final_price_net)."""

    EMPTY_SERVICE_NAME = "Service name cannot be empty"
    """Every line item needs a display name."""

    NEGATIVE_BASE_PRICE = "Base price cannot be negative"
    """Ad-hoc services must carry a non-negative base price."""

    INVALID_VAT_RATE = "Unsupported VAT rate"
    """VAT rate code outside the supported set."""
