"""Visit lifecycle transition handlers.

Ungated transitions share one flow: tenant-scoped load, pure transition on
the aggregate, save, publish VisitStatusChanged. None of them re-prices the
service items.

Handlers:
    - MarkVisitReadyForPickupHandler: IN_PROGRESS → READY_FOR_PICKUP
    - CompleteVisitHandler: READY_FOR_PICKUP → COMPLETED
    - RejectVisitHandler: non-terminal → REJECTED
    - ArchiveVisitHandler: any but ARCHIVED → ARCHIVED
"""

from collections.abc import Callable
from typing import TypeAlias, cast
from uuid import UUID

from src.application.commands.visit_commands import (
    ArchiveVisit,
    CompleteVisit,
    MarkVisitReadyForPickup,
    RejectVisit,
)
from src.application.dtos import VisitTransitionResult
from src.core.result import Failure, Result, Success
from src.domain.entities import Visit
from src.domain.errors import VisitError
from src.domain.events import VisitStatusChanged
from src.domain.protocols import EventBusProtocol, LoggerProtocol, VisitRepository
from src.domain.value_objects import StudioContext

VisitTransition: TypeAlias = Callable[[Visit], Result[None, str]]


class _VisitTransitionHandler:
    """Shared load → transition → save → publish flow."""

    def __init__(
        self,
        visit_repo: VisitRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            visit_repo: Visit repository.
            event_bus: Event bus for publishing domain events.
            logger: Logger for structured logging.
        """
        self._visit_repo = visit_repo
        self._event_bus = event_bus
        self._logger = logger

    async def _apply(
        self,
        context: StudioContext,
        visit_id: UUID,
        transition: VisitTransition,
    ) -> Result[VisitTransitionResult, str]:
        """Run one transition as a single unit of work.

        Args:
            context: Studio and acting user.
            visit_id: Visit to transition.
            transition: Aggregate method call to apply.

        Returns:
            Success(VisitTransitionResult) or Failure(VisitError.*).

        Raises:
            StaleAggregateError: Visit changed since it was loaded.
        """
        visit = await self._visit_repo.find_by_id(visit_id, context.studio_id)
        if visit is None:
            return cast(
                Result[VisitTransitionResult, str], Failure(error=VisitError.NOT_FOUND)
            )

        old_status = visit.status
        result = transition(visit)
        if isinstance(result, Failure):
            self._logger.warning(
                "visit_transition_rejected",
                visit_id=str(visit.id),
                status=old_status.value,
                reason=result.error,
            )
            return cast(Result[VisitTransitionResult, str], result)

        await self._visit_repo.save(visit)
        await self._event_bus.publish(
            VisitStatusChanged(
                visit_id=visit.id,
                studio_id=visit.studio_id,
                old_status=old_status,
                new_status=visit.status,
                changed_by=context.user_id,
            )
        )
        self._logger.info(
            "visit_status_changed",
            visit_id=str(visit.id),
            old_status=old_status.value,
            new_status=visit.status.value,
        )

        return Success(
            value=VisitTransitionResult(visit_id=visit.id, status=visit.status.value)
        )


class MarkVisitReadyForPickupHandler(_VisitTransitionHandler):
    """Handler for MarkVisitReadyForPickup command."""

    async def handle(
        self, cmd: MarkVisitReadyForPickup
    ) -> Result[VisitTransitionResult, str]:
        """IN_PROGRESS → READY_FOR_PICKUP."""
        return await self._apply(
            cmd.context,
            cmd.visit_id,
            lambda visit: visit.mark_ready_for_pickup(cmd.context.user_id),
        )


class CompleteVisitHandler(_VisitTransitionHandler):
    """Handler for CompleteVisit command."""

    async def handle(self, cmd: CompleteVisit) -> Result[VisitTransitionResult, str]:
        """READY_FOR_PICKUP → COMPLETED (stamps the pickup time)."""
        return await self._apply(
            cmd.context,
            cmd.visit_id,
            lambda visit: visit.complete(cmd.context.user_id),
        )


class RejectVisitHandler(_VisitTransitionHandler):
    """Handler for RejectVisit command."""

    async def handle(self, cmd: RejectVisit) -> Result[VisitTransitionResult, str]:
        """Non-terminal → REJECTED, appending the reason to technical notes."""
        return await self._apply(
            cmd.context,
            cmd.visit_id,
            lambda visit: visit.reject(cmd.context.user_id, cmd.reason),
        )


class ArchiveVisitHandler(_VisitTransitionHandler):
    """Handler for ArchiveVisit command."""

    async def handle(self, cmd: ArchiveVisit) -> Result[VisitTransitionResult, str]:
        """Any status except ARCHIVED → ARCHIVED."""
        return await self._apply(
            cmd.context,
            cmd.visit_id,
            lambda visit: visit.archive(cmd.context.user_id),
        )
