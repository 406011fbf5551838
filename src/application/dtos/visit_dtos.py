"""Visit DTOs.

DTOs:
    - ConvertToVisitResult: Result of ConvertAppointmentToVisit
    - VisitTransitionResult: Result of every lifecycle transition
    - VisitServiceItemResult: Service item with its pricing snapshot
    - VisitResult: Visit detail with totals and protocols
    - VisitSummaryResult / VisitListResult: Paginated list
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from src.application.dtos.appointment_dtos import LineItemResult, TotalsResult
from src.application.dtos.protocol_dtos import VisitProtocolResult


@dataclass
class ConvertToVisitResult:
    """Result of converting an appointment."""

    visit_id: UUID
    visit_number: str


@dataclass
class VisitTransitionResult:
    """Result of a lifecycle transition (status after the transition)."""

    visit_id: UUID
    status: str


@dataclass
class VisitServiceItemResult:
    """Service item on a visit."""

    id: UUID
    status: str
    line_item: LineItemResult


@dataclass
class VisitResult:
    """Visit detail.

    Attributes:
        id: Visit identifier.
        visit_number: Human-facing number.
        status: Lifecycle status value.
        customer_name: Customer display name (None if the customer is gone).
        vehicle_label: Snapshot brand/model/plate label.
        service_items: Services with frozen pricing.
        totals: Totals over billable items.
        protocols: Protocol instances of both stages.
    """

    id: UUID
    visit_number: str
    status: str
    appointment_id: UUID | None
    customer_id: UUID
    customer_name: str | None
    vehicle_id: UUID
    vehicle_label: str
    license_plate: str | None
    vin: str | None
    year_of_production: int | None
    color: str | None
    scheduled_date: date
    completed_date: datetime | None
    mileage_at_arrival: int | None
    keys_handed_over: bool
    documents_handed_over: bool
    technical_notes: str | None
    damage_map_file_id: str | None
    service_items: list[VisitServiceItemResult]
    totals: TotalsResult
    protocols: list[VisitProtocolResult]
    created_at: datetime
    updated_at: datetime


@dataclass
class VisitSummaryResult:
    """Visit row for list views."""

    id: UUID
    visit_number: str
    status: str
    customer_id: UUID
    customer_name: str | None
    vehicle_label: str
    scheduled_date: date
    totals: TotalsResult


@dataclass
class VisitListResult:
    """Paginated visits."""

    items: list[VisitSummaryResult] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20
