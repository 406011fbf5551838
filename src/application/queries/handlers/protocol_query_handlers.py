"""Protocol rule and visit protocol query handlers."""

from typing import cast

from src.application.dtos import ProtocolRuleResult, VisitProtocolResult
from src.application.queries.protocol_queries import (
    ListProtocolRules,
    ListVisitProtocols,
)
from src.core.result import Failure, Result, Success
from src.domain.errors import VisitError
from src.domain.protocols import (
    ProtocolRuleRepository,
    VisitProtocolRepository,
    VisitRepository,
)


class ListProtocolRulesHandler:
    """Handler for ListProtocolRules query.

    Rules are returned grouped by stage and ordered by display order.
    """

    def __init__(self, rule_repo: ProtocolRuleRepository) -> None:
        """Initialize handler with dependencies.

        Args:
            rule_repo: Protocol rule repository.
        """
        self._rule_repo = rule_repo

    async def handle(
        self, query: ListProtocolRules
    ) -> Result[list[ProtocolRuleResult], str]:
        """Handle ListProtocolRules query.

        Returns:
            Success(list[ProtocolRuleResult]): Possibly empty list.
        """
        rules = await self._rule_repo.find_by_studio(
            query.context.studio_id, stage=query.stage
        )
        ordered = sorted(rules, key=lambda r: (r.stage.value, r.display_order))
        return Success(value=[ProtocolRuleResult.from_entity(r) for r in ordered])


class ListVisitProtocolsHandler:
    """Handler for ListVisitProtocols query."""

    def __init__(
        self,
        visit_repo: VisitRepository,
        visit_protocol_repo: VisitProtocolRepository,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            visit_repo: Visit repository (tenant check).
            visit_protocol_repo: Visit protocol repository.
        """
        self._visit_repo = visit_repo
        self._visit_protocol_repo = visit_protocol_repo

    async def handle(
        self, query: ListVisitProtocols
    ) -> Result[list[VisitProtocolResult], str]:
        """Handle ListVisitProtocols query.

        Returns:
            Success(list[VisitProtocolResult]) or Failure(VisitError.NOT_FOUND).
        """
        studio_id = query.context.studio_id
        visit = await self._visit_repo.find_by_id(query.visit_id, studio_id)
        if visit is None:
            return cast(
                Result[list[VisitProtocolResult], str],
                Failure(error=VisitError.NOT_FOUND),
            )

        protocols = await self._visit_protocol_repo.find_by_visit(
            visit.id, studio_id, stage=query.stage
        )
        return Success(value=[VisitProtocolResult.from_entity(p) for p in protocols])
