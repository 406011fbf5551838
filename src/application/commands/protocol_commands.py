"""Protocol rule and visit protocol commands (CQRS write operations)."""

from dataclasses import dataclass, field
from uuid import UUID

from src.domain.enums import ProtocolStage, ProtocolTriggerType
from src.domain.value_objects import StudioContext


@dataclass(frozen=True, kw_only=True)
class CreateProtocolRule:
    """Define a protocol requirement for a stage.

    Attributes:
        context: Studio and acting user.
        template_id: Protocol template.
        trigger_type: GLOBAL_ALWAYS or SERVICE_SPECIFIC.
        stage: Visit stage.
        service_ids: Triggering services (SERVICE_SPECIFIC only).
        is_mandatory: Whether the protocol gates the stage.
        display_order: Position among the stage's protocols.
    """

    context: StudioContext
    template_id: UUID
    trigger_type: ProtocolTriggerType
    stage: ProtocolStage
    service_ids: frozenset[UUID] = field(default_factory=frozenset)
    is_mandatory: bool = True
    display_order: int = 0


@dataclass(frozen=True, kw_only=True)
class UpdateProtocolRule:
    """Reorder a rule and/or change whether it is mandatory."""

    context: StudioContext
    rule_id: UUID
    display_order: int | None = None
    is_mandatory: bool | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteProtocolRule:
    """Remove a rule. Existing visit protocol instances are kept."""

    context: StudioContext
    rule_id: UUID


@dataclass(frozen=True, kw_only=True)
class GenerateVisitProtocols:
    """Instantiate the protocols a visit needs at a stage (idempotent)."""

    context: StudioContext
    visit_id: UUID
    stage: ProtocolStage


@dataclass(frozen=True, kw_only=True)
class MarkProtocolReadyForSignature:
    """PENDING → READY_FOR_SIGNATURE once the filled document is stored."""

    context: StudioContext
    protocol_id: UUID
    filled_document_key: str


@dataclass(frozen=True, kw_only=True)
class SignVisitProtocol:
    """READY_FOR_SIGNATURE → SIGNED."""

    context: StudioContext
    protocol_id: UUID
    signed_document_key: str
    signed_by: str
    signature_image_key: str
    notes: str | None = None
