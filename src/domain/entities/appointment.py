"""Appointment aggregate.

A booking for a customer (and usually a vehicle) with a schedule and a list
of priced service line items. Totals are derived from the line items on
every read and never stored.

Architecture:
    - Pure domain entity (no infrastructure dependencies)
    - Uses Result types (railway-oriented programming)
    - NO event collection (handlers create events)

Usage:
    appointment = Appointment(
        id=uuid7(),
        studio_id=ctx.studio_id,
        customer_id=customer.id,
        vehicle_id=vehicle.id,
        line_items=[item],
        schedule=schedule,
        created_by=ctx.user_id,
        updated_by=ctx.user_id,
    )

    result = appointment.cancel(ctx.user_id)
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.core.result import Failure, Result, Success
from src.domain.enums import AppointmentStatus
from src.domain.errors import AppointmentError
from src.domain.value_objects import AppointmentSchedule, Money, ServiceLineItem


@dataclass
class Appointment:
    """Customer booking with priced services.

    State Machine:
        CREATED → CANCELLED | CONVERTED | ABANDONED
        CANCELLED and CONVERTED are terminal.

    Attributes:
        id: Unique identifier.
        studio_id: Owning tenant.
        customer_id: Booked customer.
        vehicle_id: Booked vehicle, if already known.
        line_items: Ordered priced services.
        schedule: Time window.
        title: Optional calendar title.
        color_id: Optional calendar color.
        note: Optional free text.
        status: Lifecycle status.
        created_by: Staff member who booked it.
        updated_by: Staff member who last changed it.
        version: Optimistic concurrency counter, bumped by the repository.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    id: UUID
    studio_id: UUID
    customer_id: UUID
    vehicle_id: UUID | None
    line_items: list[ServiceLineItem]
    schedule: AppointmentSchedule
    created_by: UUID
    updated_by: UUID
    title: str | None = None
    color_id: UUID | None = None
    note: str | None = None
    status: AppointmentStatus = AppointmentStatus.CREATED
    version: int = 1
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def total_net(self) -> Money:
        """Sum of line item final net prices."""
        return Money.sum([item.final_price_net for item in self.line_items])

    def total_gross(self) -> Money:
        """Sum of line item final gross prices."""
        return Money.sum([item.final_price_gross for item in self.line_items])

    def total_vat(self) -> Money:
        """Gross total minus net total."""
        return self.total_gross() - self.total_net()

    def has_services(self) -> bool:
        """Check if at least one line item is booked."""
        return bool(self.line_items)

    def has_vehicle(self) -> bool:
        """Check if a vehicle is assigned."""
        return self.vehicle_id is not None

    def service_ids(self) -> set[UUID]:
        """Catalog service ids of the booked line items (custom items excluded)."""
        return {item.service_id for item in self.line_items if item.service_id}

    # -------------------------------------------------------------------------
    # State Transitions
    # -------------------------------------------------------------------------

    def cancel(self, user_id: UUID) -> Result[None, str]:
        """Transition to CANCELLED.

        Args:
            user_id: Acting staff member.

        Returns:
            Success(None), or Failure(AppointmentError.*) when the appointment
            is already cancelled or converted.
        """
        if self.status == AppointmentStatus.CONVERTED:
            return Failure(error=AppointmentError.ALREADY_CONVERTED)
        if self.status == AppointmentStatus.CANCELLED:
            return Failure(error=AppointmentError.ALREADY_CANCELLED)

        self.status = AppointmentStatus.CANCELLED
        self._touch(user_id)
        return Success(value=None)

    def mark_converted(self, user_id: UUID) -> Result[None, str]:
        """Transition to CONVERTED (the visit created from it was confirmed).

        Already converted appointments are left as they are.

        Args:
            user_id: Acting staff member.

        Returns:
            Success(None), or Failure(AppointmentError.ALREADY_CANCELLED).
        """
        if self.status == AppointmentStatus.CANCELLED:
            return Failure(error=AppointmentError.ALREADY_CANCELLED)
        if self.status == AppointmentStatus.CONVERTED:
            return Success(value=None)

        self.status = AppointmentStatus.CONVERTED
        self._touch(user_id)
        return Success(value=None)

    def _touch(self, user_id: UUID) -> None:
        self.updated_by = user_id
        self.updated_at = datetime.now(UTC)
