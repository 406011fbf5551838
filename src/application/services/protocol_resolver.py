"""Protocol rule resolution and the stage signature gate.

Architecture:
    - Application service (uses the rule repository)
    - Pure resolution/gate functions are exposed for reuse and testing

Resolution:
    applicable = GLOBAL_ALWAYS rules of the stage
               + SERVICE_SPECIFIC rules of the stage whose services
                 intersect the visit's services
    deduplicated by template (first rule wins), sorted by display order.

Gate:
    A stage is signed when every mandatory resolved rule has a SIGNED
    instance of its template, and no mandatory instance of the stage is
    left unsigned.

Usage:
    resolver = ProtocolResolver(rule_repo=rule_repo)
    rules = await resolver.resolve(studio_id, ProtocolStage.CHECK_IN, service_ids)
"""

from collections.abc import Iterable
from uuid import UUID

from src.domain.entities import ProtocolRule, VisitProtocol
from src.domain.enums import ProtocolStage
from src.domain.protocols.protocol_rule_repository import ProtocolRuleRepository


def resolve_applicable_rules(
    rules: Iterable[ProtocolRule],
    stage: ProtocolStage,
    service_ids: set[UUID],
) -> list[ProtocolRule]:
    """Select the rules that apply to a visit at a stage.

    Args:
        rules: Candidate rules of the studio.
        stage: Target stage.
        service_ids: Catalog services on the visit.

    Returns:
        Applicable rules, one per template, ordered by display order.
    """
    applicable = sorted(
        (rule for rule in rules if rule.applies_to(stage, service_ids)),
        key=lambda rule: rule.display_order,
    )
    seen_templates: set[UUID] = set()
    resolved: list[ProtocolRule] = []
    for rule in applicable:
        if rule.template_id in seen_templates:
            continue
        seen_templates.add(rule.template_id)
        resolved.append(rule)
    return resolved


def unsigned_mandatory_templates(
    rules: Iterable[ProtocolRule],
    protocols: Iterable[VisitProtocol],
) -> set[UUID]:
    """Templates of mandatory requirements that still lack a signature.

    Args:
        rules: Resolved rules of the stage.
        protocols: Existing instances of the stage.

    Returns:
        Template ids blocking the stage (empty when the gate passes).
    """
    instances = list(protocols)
    signed_templates = {p.template_id for p in instances if p.is_signed()}
    missing = {
        rule.template_id
        for rule in rules
        if rule.is_mandatory and rule.template_id not in signed_templates
    }
    missing.update(
        p.template_id
        for p in instances
        if p.is_mandatory and not p.is_signed() and p.template_id not in signed_templates
    )
    return missing


class ProtocolResolver:
    """Resolve protocol requirements for a visit.

    Dependencies (injected via constructor):
        - ProtocolRuleRepository: Studio's rules
    """

    def __init__(self, rule_repo: ProtocolRuleRepository) -> None:
        """Initialize resolver with dependencies.

        Args:
            rule_repo: Protocol rule repository.
        """
        self._rule_repo = rule_repo

    async def resolve(
        self, studio_id: UUID, stage: ProtocolStage, service_ids: set[UUID]
    ) -> list[ProtocolRule]:
        """Load the studio's rules for a stage and resolve them.

        Args:
            studio_id: Requesting studio.
            stage: Target stage.
            service_ids: Catalog services on the visit.

        Returns:
            Applicable rules, one per template, ordered by display order.
        """
        rules = await self._rule_repo.find_by_studio(studio_id, stage=stage)
        return resolve_applicable_rules(rules, stage, service_ids)

