"""Base domain event class.

Domain events record things that happened (past tense: VisitConfirmed,
AppointmentCancelled). Handlers publish them after the unit of work has
succeeded; subscribers must not influence the outcome of the operation.

Usage:
    @dataclass(frozen=True, kw_only=True, slots=True)
    class VisitConfirmed(DomainEvent):
        visit_id: UUID
        studio_id: UUID
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    Attributes:
        event_id: Unique identifier of this event instance.
        occurred_at: When the event occurred (UTC).
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
