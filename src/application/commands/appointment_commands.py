"""Appointment commands (CQRS write operations).

All commands are immutable (frozen=True), keyword-only, and carry an
explicit StudioContext instead of relying on ambient request state.

Customer and vehicle identity are closed sets of variants: a booking either
references an existing record, creates a new one, or updates an existing
one before booking.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TypeAlias
from uuid import UUID

from src.domain.enums import AdjustmentType
from src.domain.value_objects import StudioContext

CUSTOM_SERVICE_NAME = "Custom Service"
CUSTOM_SERVICE_VAT_CODE = 23


# -----------------------------------------------------------------------------
# Customer identity variants
# -----------------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class ExistingCustomer:
    """Book for a customer already on file."""

    customer_id: UUID


@dataclass(frozen=True, kw_only=True)
class NewCustomer:
    """Create the customer as part of the booking."""

    first_name: str
    last_name: str
    phone: str | None = None
    email: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateCustomer:
    """Update an existing customer's details, then book."""

    customer_id: UUID
    first_name: str
    last_name: str
    phone: str | None = None
    email: str | None = None


CustomerIdentity: TypeAlias = ExistingCustomer | NewCustomer | UpdateCustomer


# -----------------------------------------------------------------------------
# Vehicle identity variants
# -----------------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class ExistingVehicle:
    """Book with a vehicle already on file."""

    vehicle_id: UUID


@dataclass(frozen=True, kw_only=True)
class NewVehicle:
    """Create the vehicle (owned by the booking's customer)."""

    brand: str
    model: str
    year_of_production: int | None = None
    license_plate: str | None = None
    vin: str | None = None
    color: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateVehicle:
    """Update an existing vehicle's details, then book."""

    vehicle_id: UUID
    brand: str
    model: str
    year_of_production: int | None = None
    license_plate: str | None = None
    vin: str | None = None
    color: str | None = None


VehicleIdentity: TypeAlias = ExistingVehicle | NewVehicle | UpdateVehicle


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class ServiceLineCommand:
    """One requested service with its price adjustment.

    Catalog services (``service_id`` set) take name, base price and VAT rate
    from the catalog. Ad-hoc services use the fields given here.

    Attributes:
        service_id: Catalog service, or None for an ad-hoc service.
        adjustment_type: Adjustment instruction.
        adjustment_value: Basis points (PERCENT) or cents.
        custom_note: Optional note on the line.
        service_name: Ad-hoc service name.
        base_price_net_cents: Ad-hoc base price.
        vat_rate_code: Ad-hoc VAT rate code.
    """

    service_id: UUID | None
    adjustment_type: AdjustmentType
    adjustment_value: int
    custom_note: str | None = None
    service_name: str | None = None
    base_price_net_cents: int | None = None
    vat_rate_code: int | None = None


@dataclass(frozen=True, kw_only=True)
class ScheduleCommand:
    """Requested appointment time window."""

    is_all_day: bool
    start_datetime: datetime
    end_datetime: datetime


@dataclass(frozen=True, kw_only=True)
class CreateAppointment:
    """Book an appointment.

    Attributes:
        context: Studio and acting user.
        customer: Customer identity variant.
        vehicle: Vehicle identity variant, or None.
        services: Requested services (at least one).
        schedule: Time window.
        title: Optional calendar title.
        color_id: Optional calendar color.
        note: Optional free text.

    Example:
        >>> command = CreateAppointment(
        ...     context=ctx,
        ...     customer=ExistingCustomer(customer_id=customer_id),
        ...     vehicle=ExistingVehicle(vehicle_id=vehicle_id),
        ...     services=[ServiceLineCommand(
        ...         service_id=wash_id,
        ...         adjustment_type=AdjustmentType.PERCENT,
        ...         adjustment_value=0,
        ...     )],
        ...     schedule=ScheduleCommand(is_all_day=False, start_datetime=s, end_datetime=e),
        ... )
    """

    context: StudioContext
    customer: CustomerIdentity
    vehicle: VehicleIdentity | None
    services: list[ServiceLineCommand]
    schedule: ScheduleCommand
    title: str | None = None
    color_id: UUID | None = None
    note: str | None = None


@dataclass(frozen=True, kw_only=True)
class CancelAppointment:
    """Cancel an appointment (fails once cancelled or converted)."""

    context: StudioContext
    appointment_id: UUID
