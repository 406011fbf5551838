"""Appointment DTOs (Data Transfer Objects).

Result dataclasses returned by appointment handlers. Money is exposed as
integer cents; VAT rates as their integer code.

DTOs:
    - TotalsResult: Net/gross/VAT totals
    - LineItemResult: One priced service
    - CreateAppointmentResult: Result of CreateAppointment
    - AppointmentResult: Appointment with display data
    - AppointmentListResult: Paginated appointments
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from src.domain.value_objects import Money, ServiceLineItem


@dataclass
class TotalsResult:
    """Aggregate totals in cents (vat = gross - net)."""

    net_cents: int
    gross_cents: int
    vat_cents: int

    @classmethod
    def from_money(cls, net: Money, gross: Money) -> "TotalsResult":
        """Build totals from net and gross Money."""
        return cls(
            net_cents=net.amount,
            gross_cents=gross.amount,
            vat_cents=(gross - net).amount,
        )


@dataclass
class LineItemResult:
    """One priced service line.

    Attributes:
        service_id: Catalog service, None for ad-hoc services.
        service_name: Display name.
        base_price_net_cents: Price before adjustment.
        vat_rate: VAT rate code (23, 8, 5, 0, -1).
        adjustment_type: Adjustment type value.
        adjustment_value: Basis points or cents.
        final_price_net_cents: Net after adjustment.
        final_price_gross_cents: Gross after adjustment.
        vat_amount_cents: Gross minus net.
        custom_note: Optional note.
    """

    service_id: UUID | None
    service_name: str
    base_price_net_cents: int
    vat_rate: int
    adjustment_type: str
    adjustment_value: int
    final_price_net_cents: int
    final_price_gross_cents: int
    vat_amount_cents: int
    custom_note: str | None

    @classmethod
    def from_line_item(cls, item: ServiceLineItem) -> "LineItemResult":
        """Map a line item value object to its DTO."""
        return cls(
            service_id=item.service_id,
            service_name=item.service_name,
            base_price_net_cents=item.base_price_net.amount,
            vat_rate=int(item.vat_rate.value),
            adjustment_type=item.adjustment_type.value,
            adjustment_value=item.adjustment_value,
            final_price_net_cents=item.final_price_net.amount,
            final_price_gross_cents=item.final_price_gross.amount,
            vat_amount_cents=item.vat_amount.amount,
            custom_note=item.custom_note,
        )


@dataclass
class CreateAppointmentResult:
    """Result of CreateAppointment.

    Attributes:
        appointment_id: New appointment.
        customer_id: Booked (possibly newly created) customer.
        vehicle_id: Booked (possibly newly created) vehicle.
        totals: Computed totals.
    """

    appointment_id: UUID
    customer_id: UUID
    vehicle_id: UUID | None
    totals: TotalsResult


@dataclass
class AppointmentResult:
    """Appointment enriched with totals and related display data."""

    id: UUID
    status: str
    title: str | None
    note: str | None
    customer_id: UUID
    customer_name: str | None
    customer_phone: str | None
    customer_email: str | None
    vehicle_id: UUID | None
    vehicle_label: str | None
    color_id: UUID | None
    color_name: str | None
    color_hex: str | None
    is_all_day: bool
    start_datetime: datetime
    end_datetime: datetime
    line_items: list[LineItemResult]
    totals: TotalsResult
    created_at: datetime
    updated_at: datetime


@dataclass
class AppointmentListResult:
    """Paginated appointments.

    Attributes:
        items: Appointments on this page.
        total: Total matching appointments.
        page: 1-based page number.
        page_size: Requested page size.
    """

    items: list[AppointmentResult] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20
