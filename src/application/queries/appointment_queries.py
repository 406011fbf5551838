"""Appointment queries (CQRS read operations).

Queries NEVER change state and do NOT emit domain events. A query for an
appointment of another studio behaves exactly like a query for a missing
appointment.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import AppointmentStatus
from src.domain.value_objects import StudioContext


@dataclass(frozen=True, kw_only=True)
class GetAppointment:
    """Get one appointment with totals and display data.

    Attributes:
        context: Studio and acting user.
        appointment_id: Appointment to retrieve.
    """

    context: StudioContext
    appointment_id: UUID


@dataclass(frozen=True, kw_only=True)
class ListAppointments:
    """Page through a studio's appointments.

    Attributes:
        context: Studio and acting user.
        page: 1-based page number.
        page_size: Items per page.
        status: Optional status filter.
    """

    context: StudioContext
    page: int = 1
    page_size: int = 20
    status: AppointmentStatus | None = None
