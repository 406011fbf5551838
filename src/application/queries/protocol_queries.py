"""Protocol rule and visit protocol queries (CQRS read operations)."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import ProtocolStage
from src.domain.value_objects import StudioContext


@dataclass(frozen=True, kw_only=True)
class ListProtocolRules:
    """List a studio's protocol rules, optionally for one stage."""

    context: StudioContext
    stage: ProtocolStage | None = None


@dataclass(frozen=True, kw_only=True)
class ListVisitProtocols:
    """List a visit's protocol instances, optionally for one stage."""

    context: StudioContext
    visit_id: UUID
    stage: ProtocolStage | None = None
