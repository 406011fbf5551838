"""Visit lifecycle domain events."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import VisitStatus
from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class VisitCreatedFromAppointment(DomainEvent):
    """Draft visit created by converting an appointment.

    Attributes:
        visit_id: New visit.
        visit_number: Human-facing number.
        appointment_id: Source appointment.
        studio_id: Owning tenant.
        created_by: Acting staff member.
    """

    visit_id: UUID
    visit_number: str
    appointment_id: UUID
    studio_id: UUID
    created_by: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class VisitStatusChanged(DomainEvent):
    """Visit moved between lifecycle statuses."""

    visit_id: UUID
    studio_id: UUID
    old_status: VisitStatus
    new_status: VisitStatus
    changed_by: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class VisitConfirmed(DomainEvent):
    """Draft visit confirmed; its appointment (if any) is now converted."""

    visit_id: UUID
    studio_id: UUID
    appointment_id: UUID | None
    confirmed_by: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class VisitDraftCancelled(DomainEvent):
    """Draft visit hard-deleted together with its protocols and documents.

    Attributes:
        visit_id: Deleted visit.
        studio_id: Owning tenant.
        appointment_id: Source appointment, left available for re-conversion.
        deleted_protocols: Number of protocol rows removed.
        failed_blob_deletions: Storage keys whose deletion failed.
        cancelled_by: Acting staff member.
    """

    visit_id: UUID
    studio_id: UUID
    appointment_id: UUID | None
    deleted_protocols: int
    failed_blob_deletions: tuple[str, ...]
    cancelled_by: UUID
