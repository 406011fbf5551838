"""Visit request and response schemas.

Pydantic schemas for conversion, lifecycle transitions and visit reads.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.application.dtos import (
    ConvertToVisitResult,
    VisitListResult,
    VisitResult,
    VisitServiceItemResult,
    VisitSummaryResult,
    VisitTransitionResult,
)
from src.schemas.common_schemas import LineItemResponse, PaginatedMeta, TotalsResponse
from src.schemas.protocol_schemas import VisitProtocolResponse


# =============================================================================
# Request Schemas
# =============================================================================


class VisitConvertRequest(BaseModel):
    """Check-in details recorded when an appointment becomes a visit.

    Attributes:
        mileage_at_arrival: Odometer reading.
        keys_handed_over: Keys received from the customer.
        documents_handed_over: Vehicle documents received.
        technical_notes: Initial notes.
    """

    mileage_at_arrival: int | None = Field(None, ge=0, description="Odometer reading")
    keys_handed_over: bool = Field(False, description="Keys received")
    documents_handed_over: bool = Field(False, description="Documents received")
    technical_notes: str | None = Field(None, max_length=5000)


class VisitRejectRequest(BaseModel):
    """Optional rejection reason, appended to the technical notes."""

    reason: str | None = Field(None, max_length=2000)


# =============================================================================
# Response Schemas
# =============================================================================


class VisitConvertResponse(BaseModel):
    """Response after converting an appointment."""

    visit_id: UUID = Field(..., description="New DRAFT visit")
    visit_number: str = Field(..., examples=["VIS-2025-00001"])

    @classmethod
    def from_dto(cls, dto: ConvertToVisitResult) -> "VisitConvertResponse":
        """Convert application DTO to response schema."""
        return cls(visit_id=dto.visit_id, visit_number=dto.visit_number)


class VisitStatusResponse(BaseModel):
    """Visit status after a lifecycle transition."""

    visit_id: UUID
    status: str = Field(..., examples=["in_progress"])

    @classmethod
    def from_dto(cls, dto: VisitTransitionResult) -> "VisitStatusResponse":
        """Convert application DTO to response schema."""
        return cls(visit_id=dto.visit_id, status=dto.status)


class VisitServiceItemResponse(BaseModel):
    """Service on a visit with its frozen pricing."""

    id: UUID
    status: str = Field(..., examples=["confirmed"])
    line_item: LineItemResponse

    @classmethod
    def from_dto(cls, dto: VisitServiceItemResult) -> "VisitServiceItemResponse":
        """Convert application DTO to response schema."""
        return cls(
            id=dto.id,
            status=dto.status,
            line_item=LineItemResponse.from_dto(dto.line_item),
        )


class VisitResponse(BaseModel):
    """Visit detail with totals and protocol summaries."""

    id: UUID
    visit_number: str
    status: str
    appointment_id: UUID | None = None
    customer_id: UUID
    customer_name: str | None = None
    vehicle_id: UUID
    vehicle_label: str
    license_plate: str | None = None
    vin: str | None = None
    year_of_production: int | None = None
    color: str | None = None
    scheduled_date: date
    completed_date: datetime | None = None
    mileage_at_arrival: int | None = None
    keys_handed_over: bool
    documents_handed_over: bool
    technical_notes: str | None = None
    damage_map_file_id: str | None = None
    service_items: list[VisitServiceItemResponse]
    totals: TotalsResponse
    protocols: list[VisitProtocolResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_dto(cls, dto: VisitResult) -> "VisitResponse":
        """Convert application DTO to response schema.

        Args:
            dto: VisitResult from handler.

        Returns:
            VisitResponse for API response.
        """
        return cls(
            id=dto.id,
            visit_number=dto.visit_number,
            status=dto.status,
            appointment_id=dto.appointment_id,
            customer_id=dto.customer_id,
            customer_name=dto.customer_name,
            vehicle_id=dto.vehicle_id,
            vehicle_label=dto.vehicle_label,
            license_plate=dto.license_plate,
            vin=dto.vin,
            year_of_production=dto.year_of_production,
            color=dto.color,
            scheduled_date=dto.scheduled_date,
            completed_date=dto.completed_date,
            mileage_at_arrival=dto.mileage_at_arrival,
            keys_handed_over=dto.keys_handed_over,
            documents_handed_over=dto.documents_handed_over,
            technical_notes=dto.technical_notes,
            damage_map_file_id=dto.damage_map_file_id,
            service_items=[
                VisitServiceItemResponse.from_dto(item) for item in dto.service_items
            ],
            totals=TotalsResponse.from_dto(dto.totals),
            protocols=[VisitProtocolResponse.from_dto(p) for p in dto.protocols],
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


class VisitSummaryResponse(BaseModel):
    """Visit row for list views."""

    id: UUID
    visit_number: str
    status: str
    customer_id: UUID
    customer_name: str | None = None
    vehicle_label: str
    scheduled_date: date
    totals: TotalsResponse

    @classmethod
    def from_dto(cls, dto: VisitSummaryResult) -> "VisitSummaryResponse":
        """Convert application DTO to response schema."""
        return cls(
            id=dto.id,
            visit_number=dto.visit_number,
            status=dto.status,
            customer_id=dto.customer_id,
            customer_name=dto.customer_name,
            vehicle_label=dto.vehicle_label,
            scheduled_date=dto.scheduled_date,
            totals=TotalsResponse.from_dto(dto.totals),
        )


class VisitListResponse(BaseModel):
    """Paginated visits."""

    visits: list[VisitSummaryResponse]
    meta: PaginatedMeta

    @classmethod
    def from_dto(cls, dto: VisitListResult) -> "VisitListResponse":
        """Convert application DTO to response schema."""
        return cls(
            visits=[VisitSummaryResponse.from_dto(v) for v in dto.items],
            meta=PaginatedMeta.from_pagination(
                page=dto.page, page_size=dto.page_size, total_count=dto.total
            ),
        )
