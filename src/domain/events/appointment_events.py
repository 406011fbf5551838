"""Appointment domain events."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class AppointmentCreated(DomainEvent):
    """Appointment booked.

    Attributes:
        appointment_id: New appointment.
        studio_id: Owning tenant.
        customer_id: Booked customer.
        total_gross_cents: Gross total at booking time.
        created_by: Acting staff member.
    """

    appointment_id: UUID
    studio_id: UUID
    customer_id: UUID
    total_gross_cents: int
    created_by: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class AppointmentCancelled(DomainEvent):
    """Appointment cancelled."""

    appointment_id: UUID
    studio_id: UUID
    cancelled_by: UUID
