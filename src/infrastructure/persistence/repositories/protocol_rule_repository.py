"""ProtocolRuleRepository - SQLAlchemy implementation of ProtocolRuleRepository protocol."""

from typing import Any, cast
from uuid import UUID

from sqlalchemy import CursorResult, delete, select

from src.domain.entities.protocol_rule import ProtocolRule
from src.domain.enums import ProtocolStage, ProtocolTriggerType
from src.infrastructure.persistence.models.protocol_rule import ProtocolRuleModel
from src.infrastructure.persistence.repositories.base import SQLAlchemyRepository


class ProtocolRuleRepository(SQLAlchemyRepository):
    """SQLAlchemy implementation of ProtocolRuleRepository protocol."""

    async def find_by_id(self, rule_id: UUID, studio_id: UUID) -> ProtocolRule | None:
        """Find rule by ID within a studio."""
        stmt = select(ProtocolRuleModel).where(
            ProtocolRuleModel.id == rule_id,
            ProtocolRuleModel.studio_id == studio_id,
        )
        model = await self._scalar_one_or_none(stmt)
        if model is None:
            return None

        return self._to_domain(model)

    async def find_by_studio(
        self, studio_id: UUID, *, stage: ProtocolStage | None = None
    ) -> list[ProtocolRule]:
        """List a studio's rules ordered by display order."""
        stmt = select(ProtocolRuleModel).where(ProtocolRuleModel.studio_id == studio_id)
        if stage is not None:
            stmt = stmt.where(ProtocolRuleModel.stage == stage.value)
        stmt = stmt.order_by(ProtocolRuleModel.display_order, ProtocolRuleModel.created_at)
        models = await self._scalars(stmt)

        return [self._to_domain(model) for model in models]

    async def save(self, rule: ProtocolRule) -> None:
        """Create or update rule."""
        stmt = select(ProtocolRuleModel).where(
            ProtocolRuleModel.id == rule.id,
            ProtocolRuleModel.studio_id == rule.studio_id,
        )
        existing = await self._scalar_one_or_none(stmt)

        if existing is None:
            await self._add(self._to_model(rule))
            return

        existing.is_mandatory = rule.is_mandatory
        existing.display_order = rule.display_order
        existing.updated_at = rule.updated_at
        await self._flush()

    async def delete(self, rule_id: UUID, studio_id: UUID) -> bool:
        """Delete rule. Instances generated from it are kept.

        Returns:
            True if a row was deleted.
        """
        stmt = delete(ProtocolRuleModel).where(
            ProtocolRuleModel.id == rule_id,
            ProtocolRuleModel.studio_id == studio_id,
        )
        result = cast(CursorResult[Any], await self._execute(stmt))
        return result.rowcount > 0

    # =========================================================================
    # Entity ↔ Model Mapping (Private Methods)
    # =========================================================================

    def _to_domain(self, model: ProtocolRuleModel) -> ProtocolRule:
        """Convert database model to domain entity.

        Raises:
            ValueError: If the stored service set contradicts the trigger type.
        """
        return ProtocolRule(
            id=model.id,
            studio_id=model.studio_id,
            template_id=model.template_id,
            trigger_type=ProtocolTriggerType(model.trigger_type),
            stage=ProtocolStage(model.stage),
            service_ids=frozenset(model.service_ids or ()),
            is_mandatory=model.is_mandatory,
            display_order=model.display_order,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ProtocolRule) -> ProtocolRuleModel:
        return ProtocolRuleModel(
            id=entity.id,
            studio_id=entity.studio_id,
            template_id=entity.template_id,
            trigger_type=entity.trigger_type.value,
            stage=entity.stage.value,
            service_ids=sorted(entity.service_ids),
            is_mandatory=entity.is_mandatory,
            display_order=entity.display_order,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
