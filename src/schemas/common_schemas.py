"""Common schemas used across multiple API endpoints.

Provides reusable schema components for pagination metadata and the priced
service line / totals blocks shared by appointments and visits.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from src.application.dtos import LineItemResult, TotalsResult


class PaginatedMeta(BaseModel):
    """Pagination metadata for list responses.

    Attributes:
        page: Current page number.
        page_size: Items per page.
        total_count: Total items available.
        total_pages: Total number of pages.
    """

    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    total_count: int = Field(..., description="Total items available")
    total_pages: int = Field(..., description="Total number of pages")

    @classmethod
    def from_pagination(
        cls, page: int, page_size: int, total_count: int
    ) -> "PaginatedMeta":
        """Create pagination metadata from parameters.

        Args:
            page: Current page number.
            page_size: Items per page.
            total_count: Total items available.

        Returns:
            PaginatedMeta instance.
        """
        total_pages = (total_count + page_size - 1) // page_size if page_size > 0 else 0
        return cls(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
        )


class TotalsResponse(BaseModel):
    """Net, gross and VAT totals in cents."""

    net_cents: int = Field(..., description="Total net", examples=[20000])
    gross_cents: int = Field(..., description="Total gross", examples=[24600])
    vat_cents: int = Field(..., description="Total VAT", examples=[4600])

    @classmethod
    def from_dto(cls, dto: TotalsResult) -> "TotalsResponse":
        """Convert application DTO to response schema."""
        return cls(
            net_cents=dto.net_cents,
            gross_cents=dto.gross_cents,
            vat_cents=dto.vat_cents,
        )


class LineItemResponse(BaseModel):
    """Priced service line.

    Attributes:
        service_id: Catalog service (None for ad-hoc services).
        service_name: Display name.
        base_price_net_cents: Price before adjustment.
        vat_rate: VAT rate code (23, 8, 5, 0, -1 for exempt).
        adjustment_type: Adjustment instruction.
        adjustment_value: Basis points (percent) or cents.
        final_price_net_cents: Net after adjustment.
        final_price_gross_cents: Gross after adjustment.
        vat_amount_cents: Gross minus net.
        custom_note: Optional note.
    """

    service_id: UUID | None = Field(None, description="Catalog service")
    service_name: str = Field(..., description="Service name")
    base_price_net_cents: int = Field(..., description="Base net price")
    vat_rate: int = Field(..., description="VAT rate code", examples=[23, -1])
    adjustment_type: str = Field(..., description="Adjustment type")
    adjustment_value: int = Field(..., description="Basis points or cents")
    final_price_net_cents: int = Field(..., description="Final net price")
    final_price_gross_cents: int = Field(..., description="Final gross price")
    vat_amount_cents: int = Field(..., description="VAT amount")
    custom_note: str | None = Field(None, description="Note")

    @classmethod
    def from_dto(cls, dto: LineItemResult) -> "LineItemResponse":
        """Convert application DTO to response schema."""
        return cls(
            service_id=dto.service_id,
            service_name=dto.service_name,
            base_price_net_cents=dto.base_price_net_cents,
            vat_rate=dto.vat_rate,
            adjustment_type=dto.adjustment_type,
            adjustment_value=dto.adjustment_value,
            final_price_net_cents=dto.final_price_net_cents,
            final_price_gross_cents=dto.final_price_gross_cents,
            vat_amount_cents=dto.vat_amount_cents,
            custom_note=dto.custom_note,
        )
