"""Visit protocol domain events."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import ProtocolStage
from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class VisitProtocolSigned(DomainEvent):
    """Customer signed a visit protocol."""

    protocol_id: UUID
    visit_id: UUID
    studio_id: UUID
    stage: ProtocolStage
    signed_by: str
