"""Visit commands (CQRS write operations).

Conversion creates a DRAFT visit from an appointment. Every lifecycle
transition is its own command identified by (visit_id, studio, acting user).
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.value_objects import StudioContext


@dataclass(frozen=True, kw_only=True)
class ConvertAppointmentToVisit:
    """Create a DRAFT visit from an appointment.

    Attributes:
        context: Studio and acting user.
        appointment_id: Appointment to convert.
        mileage_at_arrival: Odometer reading at check-in.
        keys_handed_over: Keys received.
        documents_handed_over: Vehicle documents received.
        technical_notes: Initial technical notes.
    """

    context: StudioContext
    appointment_id: UUID
    mileage_at_arrival: int | None = None
    keys_handed_over: bool = False
    documents_handed_over: bool = False
    technical_notes: str | None = None


@dataclass(frozen=True, kw_only=True)
class ConfirmVisit:
    """DRAFT → IN_PROGRESS, gated by signed check-in protocols."""

    context: StudioContext
    visit_id: UUID


@dataclass(frozen=True, kw_only=True)
class CancelDraftVisit:
    """Hard-delete a DRAFT visit with its protocols and documents."""

    context: StudioContext
    visit_id: UUID


@dataclass(frozen=True, kw_only=True)
class MarkVisitReadyForPickup:
    """IN_PROGRESS → READY_FOR_PICKUP."""

    context: StudioContext
    visit_id: UUID


@dataclass(frozen=True, kw_only=True)
class CompleteVisit:
    """READY_FOR_PICKUP → COMPLETED."""

    context: StudioContext
    visit_id: UUID


@dataclass(frozen=True, kw_only=True)
class RejectVisit:
    """Any non-terminal status → REJECTED."""

    context: StudioContext
    visit_id: UUID
    reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class ArchiveVisit:
    """Any status → ARCHIVED."""

    context: StudioContext
    visit_id: UUID
