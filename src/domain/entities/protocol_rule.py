"""Protocol rule entity.

A rule tells the studio which protocol template must be filled (and
possibly signed) at a visit stage: either for every visit (GLOBAL_ALWAYS)
or only for visits that include one of the listed services
(SERVICE_SPECIFIC).

Usage:
    result = validate_rule_targets(
        ProtocolTriggerType.SERVICE_SPECIFIC, {ppf_service_id}, display_order=0
    )
    if isinstance(result, Failure):
        return result
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.core.result import Failure, Result, Success
from src.domain.enums import ProtocolStage, ProtocolTriggerType
from src.domain.errors import ProtocolError


def validate_rule_targets(
    trigger_type: ProtocolTriggerType,
    service_ids: frozenset[UUID] | set[UUID],
    display_order: int,
) -> Result[None, str]:
    """Check the trigger/service-set and display order constraints.

    Args:
        trigger_type: Rule trigger.
        service_ids: Services the rule targets.
        display_order: Position among the stage's protocols.

    Returns:
        Success(None) or Failure(ProtocolError.*).
    """
    if trigger_type == ProtocolTriggerType.SERVICE_SPECIFIC and not service_ids:
        return Failure(error=ProtocolError.SERVICE_IDS_REQUIRED)
    if trigger_type == ProtocolTriggerType.GLOBAL_ALWAYS and service_ids:
        return Failure(error=ProtocolError.SERVICE_IDS_NOT_ALLOWED)
    if display_order < 0:
        return Failure(error=ProtocolError.NEGATIVE_DISPLAY_ORDER)
    return Success(value=None)


@dataclass
class ProtocolRule:
    """Requirement linking a protocol template to a visit stage.

    Attributes:
        id: Unique identifier.
        studio_id: Owning tenant.
        template_id: Protocol template to instantiate.
        trigger_type: GLOBAL_ALWAYS or SERVICE_SPECIFIC.
        stage: Stage at which the protocol is required.
        service_ids: Triggering services (empty for global rules).
        is_mandatory: Unsigned instances block the stage's gated transition.
        display_order: Sort key among resolved protocols (>= 0).
    """

    id: UUID
    studio_id: UUID
    template_id: UUID
    trigger_type: ProtocolTriggerType
    stage: ProtocolStage
    service_ids: frozenset[UUID] = frozenset()
    is_mandatory: bool = True
    display_order: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate rule after initialization.

        Raises:
            ValueError: If the service set does not match the trigger type,
                or display order is negative.
        """
        self.service_ids = frozenset(self.service_ids)
        result = validate_rule_targets(
            self.trigger_type, self.service_ids, self.display_order
        )
        if isinstance(result, Failure):
            raise ValueError(result.error)

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def applies_to(self, stage: ProtocolStage, service_ids: set[UUID]) -> bool:
        """Check if the rule applies to a visit at a stage.

        Args:
            stage: Target stage.
            service_ids: Services on the visit.

        Returns:
            True for global rules of the stage, and for service rules of the
            stage sharing at least one service with the visit.
        """
        if self.stage != stage:
            return False
        match self.trigger_type:
            case ProtocolTriggerType.GLOBAL_ALWAYS:
                return True
            case ProtocolTriggerType.SERVICE_SPECIFIC:
                return not self.service_ids.isdisjoint(service_ids)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def update_order(self, display_order: int) -> Result[None, str]:
        """Move the rule to a new display position.

        Args:
            display_order: New position (>= 0).

        Returns:
            Success(None) or Failure(ProtocolError.NEGATIVE_DISPLAY_ORDER).
        """
        if display_order < 0:
            return Failure(error=ProtocolError.NEGATIVE_DISPLAY_ORDER)
        self.display_order = display_order
        self.updated_at = datetime.now(UTC)
        return Success(value=None)

    def toggle_mandatory(self) -> None:
        """Flip the mandatory flag."""
        self.is_mandatory = not self.is_mandatory
        self.updated_at = datetime.now(UTC)
