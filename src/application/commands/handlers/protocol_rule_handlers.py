"""Protocol rule command handlers.

Handlers:
    - CreateProtocolRuleHandler: define a requirement for a stage
    - UpdateProtocolRuleHandler: reorder and/or change the mandatory flag
    - DeleteProtocolRuleHandler: remove a rule (existing instances stay)
"""

from typing import cast

from uuid_extensions import uuid7

from src.application.commands.protocol_commands import (
    CreateProtocolRule,
    DeleteProtocolRule,
    UpdateProtocolRule,
)
from src.application.dtos import ProtocolRuleResult
from src.core.result import Failure, Result, Success
from src.domain.entities import ProtocolRule, validate_rule_targets
from src.domain.errors import ProtocolError
from src.domain.protocols import LoggerProtocol, ProtocolRuleRepository


class CreateProtocolRuleHandler:
    """Handler for CreateProtocolRule command."""

    def __init__(
        self, rule_repo: ProtocolRuleRepository, logger: LoggerProtocol
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            rule_repo: Protocol rule repository.
            logger: Logger for structured logging.
        """
        self._rule_repo = rule_repo
        self._logger = logger

    async def handle(self, cmd: CreateProtocolRule) -> Result[ProtocolRuleResult, str]:
        """Handle CreateProtocolRule command.

        Args:
            cmd: CreateProtocolRule command.

        Returns:
            Success(ProtocolRuleResult): Rule created.
            Failure(error): Service set does not match the trigger type, or
                display order is negative.
        """
        validation = validate_rule_targets(
            cmd.trigger_type, cmd.service_ids, cmd.display_order
        )
        if isinstance(validation, Failure):
            return cast(Result[ProtocolRuleResult, str], validation)

        rule = ProtocolRule(
            id=uuid7(),
            studio_id=cmd.context.studio_id,
            template_id=cmd.template_id,
            trigger_type=cmd.trigger_type,
            stage=cmd.stage,
            service_ids=cmd.service_ids,
            is_mandatory=cmd.is_mandatory,
            display_order=cmd.display_order,
        )
        await self._rule_repo.save(rule)
        self._logger.info(
            "protocol_rule_created",
            rule_id=str(rule.id),
            stage=rule.stage.value,
            trigger_type=rule.trigger_type.value,
        )

        return Success(value=ProtocolRuleResult.from_entity(rule))


class UpdateProtocolRuleHandler:
    """Handler for UpdateProtocolRule command."""

    def __init__(
        self, rule_repo: ProtocolRuleRepository, logger: LoggerProtocol
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            rule_repo: Protocol rule repository.
            logger: Logger for structured logging.
        """
        self._rule_repo = rule_repo
        self._logger = logger

    async def handle(self, cmd: UpdateProtocolRule) -> Result[ProtocolRuleResult, str]:
        """Handle UpdateProtocolRule command.

        Fields left as None are not changed.

        Args:
            cmd: UpdateProtocolRule command.

        Returns:
            Success(ProtocolRuleResult): Rule after the update.
            Failure(error): Rule not found or negative display order.
        """
        rule = await self._rule_repo.find_by_id(cmd.rule_id, cmd.context.studio_id)
        if rule is None:
            return cast(
                Result[ProtocolRuleResult, str],
                Failure(error=ProtocolError.RULE_NOT_FOUND),
            )

        if cmd.display_order is not None:
            reordered = rule.update_order(cmd.display_order)
            if isinstance(reordered, Failure):
                return cast(Result[ProtocolRuleResult, str], reordered)

        if cmd.is_mandatory is not None and cmd.is_mandatory != rule.is_mandatory:
            rule.toggle_mandatory()

        await self._rule_repo.save(rule)
        self._logger.info("protocol_rule_updated", rule_id=str(rule.id))

        return Success(value=ProtocolRuleResult.from_entity(rule))


class DeleteProtocolRuleHandler:
    """Handler for DeleteProtocolRule command."""

    def __init__(
        self, rule_repo: ProtocolRuleRepository, logger: LoggerProtocol
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            rule_repo: Protocol rule repository.
            logger: Logger for structured logging.
        """
        self._rule_repo = rule_repo
        self._logger = logger

    async def handle(self, cmd: DeleteProtocolRule) -> Result[None, str]:
        """Handle DeleteProtocolRule command.

        Returns:
            Success(None) or Failure(ProtocolError.RULE_NOT_FOUND).
        """
        deleted = await self._rule_repo.delete(cmd.rule_id, cmd.context.studio_id)
        if not deleted:
            return cast(Result[None, str], Failure(error=ProtocolError.RULE_NOT_FOUND))

        self._logger.info("protocol_rule_deleted", rule_id=str(cmd.rule_id))
        return Success(value=None)
