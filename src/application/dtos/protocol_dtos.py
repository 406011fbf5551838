"""Protocol DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.entities import ProtocolRule, VisitProtocol


@dataclass
class ProtocolRuleResult:
    """Protocol rule for API responses."""

    id: UUID
    template_id: UUID
    trigger_type: str
    stage: str
    service_ids: list[UUID]
    is_mandatory: bool
    display_order: int

    @classmethod
    def from_entity(cls, rule: ProtocolRule) -> "ProtocolRuleResult":
        """Map a rule entity to its DTO (service ids sorted for stable output)."""
        return cls(
            id=rule.id,
            template_id=rule.template_id,
            trigger_type=rule.trigger_type.value,
            stage=rule.stage.value,
            service_ids=sorted(rule.service_ids, key=str),
            is_mandatory=rule.is_mandatory,
            display_order=rule.display_order,
        )


@dataclass
class VisitProtocolResult:
    """Visit protocol instance for API responses."""

    id: UUID
    visit_id: UUID
    template_id: UUID
    stage: str
    version: int
    is_mandatory: bool
    status: str
    filled_document_key: str | None
    signed_document_key: str | None
    signed_at: datetime | None
    signed_by: str | None
    notes: str | None

    @classmethod
    def from_entity(cls, protocol: VisitProtocol) -> "VisitProtocolResult":
        """Map a protocol instance to its DTO."""
        return cls(
            id=protocol.id,
            visit_id=protocol.visit_id,
            template_id=protocol.template_id,
            stage=protocol.stage.value,
            version=protocol.version,
            is_mandatory=protocol.is_mandatory,
            status=protocol.status.value,
            filled_document_key=protocol.filled_document_key,
            signed_document_key=protocol.signed_document_key,
            signed_at=protocol.signed_at,
            signed_by=protocol.signed_by,
            notes=protocol.notes,
        )
