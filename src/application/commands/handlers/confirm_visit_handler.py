"""ConfirmVisit command handler.

DRAFT → IN_PROGRESS. The transition is gated by the CHECK_IN protocols:
every mandatory rule resolved for the visit's services must have a SIGNED
instance, and no mandatory CHECK_IN instance may be left unsigned.

On success the originating appointment (if any) becomes CONVERTED in the
same unit of work.
"""

import asyncio
from typing import cast

from src.application.commands.visit_commands import ConfirmVisit
from src.application.dtos import VisitTransitionResult
from src.application.services.protocol_resolver import (
    ProtocolResolver,
    unsigned_mandatory_templates,
)
from src.core.result import Failure, Result, Success
from src.domain.entities import Visit
from src.domain.enums import ProtocolStage, VisitStatus
from src.domain.errors import VisitError
from src.domain.events import VisitConfirmed, VisitStatusChanged
from src.domain.protocols import (
    AppointmentRepository,
    EventBusProtocol,
    LoggerProtocol,
    VisitProtocolRepository,
    VisitRepository,
)


class ConfirmVisitHandler:
    """Handler for ConfirmVisit command.

    Dependencies (injected via constructor):
        - VisitRepository: Visit persistence
        - AppointmentRepository: Originating appointment
        - VisitProtocolRepository: CHECK_IN protocol instances
        - ProtocolResolver: Mandatory CHECK_IN rules
        - EventBusProtocol: Domain events
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        visit_repo: VisitRepository,
        appointment_repo: AppointmentRepository,
        visit_protocol_repo: VisitProtocolRepository,
        protocol_resolver: ProtocolResolver,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            visit_repo: Visit repository.
            appointment_repo: Appointment repository.
            visit_protocol_repo: Visit protocol repository.
            protocol_resolver: Protocol rule resolver.
            event_bus: Event bus for publishing domain events.
            logger: Logger for structured logging.
        """
        self._visit_repo = visit_repo
        self._appointment_repo = appointment_repo
        self._visit_protocol_repo = visit_protocol_repo
        self._protocol_resolver = protocol_resolver
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: ConfirmVisit) -> Result[VisitTransitionResult, str]:
        """Handle ConfirmVisit command.

        Args:
            cmd: ConfirmVisit command.

        Returns:
            Success(VisitTransitionResult): Visit is IN_PROGRESS.
            Failure(error): Not found, not a draft, unsigned mandatory
                protocols, or the appointment was cancelled meanwhile.

        Raises:
            StaleAggregateError: Visit or appointment changed since loaded.
        """
        studio_id = cmd.context.studio_id

        # Step 1: Load visit
        visit = await self._visit_repo.find_by_id(cmd.visit_id, studio_id)
        if visit is None:
            return cast(
                Result[VisitTransitionResult, str], Failure(error=VisitError.NOT_FOUND)
            )

        # Step 2: Evaluate the CHECK_IN gate (only meaningful for drafts)
        gate_passed = visit.is_draft() and await self._check_in_signed(visit)

        # Step 3: Transition
        old_status = visit.status
        result = visit.confirm(cmd.context.user_id, check_in_protocols_signed=gate_passed)
        if isinstance(result, Failure):
            self._logger.warning(
                "visit_confirm_rejected",
                visit_id=str(visit.id),
                status=old_status.value,
                reason=result.error,
            )
            return cast(Result[VisitTransitionResult, str], result)

        # Step 4: Originating appointment becomes CONVERTED
        appointment = None
        if visit.appointment_id is not None:
            appointment = await self._appointment_repo.find_by_id(
                visit.appointment_id, studio_id
            )
        if appointment is not None:
            converted = appointment.mark_converted(cmd.context.user_id)
            if isinstance(converted, Failure):
                return cast(Result[VisitTransitionResult, str], converted)

        # Step 5: Persist both aggregates in the same unit of work
        await self._visit_repo.save(visit)
        if appointment is not None:
            await self._appointment_repo.save(appointment)

        # Step 6: Publish events
        await self._event_bus.publish(
            VisitStatusChanged(
                visit_id=visit.id,
                studio_id=studio_id,
                old_status=old_status,
                new_status=VisitStatus.IN_PROGRESS,
                changed_by=cmd.context.user_id,
            )
        )
        await self._event_bus.publish(
            VisitConfirmed(
                visit_id=visit.id,
                studio_id=studio_id,
                appointment_id=visit.appointment_id,
                confirmed_by=cmd.context.user_id,
            )
        )
        self._logger.info(
            "visit_confirmed",
            visit_id=str(visit.id),
            appointment_id=str(visit.appointment_id) if visit.appointment_id else None,
        )

        return Success(
            value=VisitTransitionResult(visit_id=visit.id, status=visit.status.value)
        )

    async def _check_in_signed(self, visit: Visit) -> bool:
        rules, protocols = await asyncio.gather(
            self._protocol_resolver.resolve(
                visit.studio_id, ProtocolStage.CHECK_IN, visit.service_ids()
            ),
            self._visit_protocol_repo.find_by_visit(
                visit.id, visit.studio_id, stage=ProtocolStage.CHECK_IN
            ),
        )
        missing = unsigned_mandatory_templates(rules, protocols)
        if missing:
            self._logger.info(
                "visit_check_in_protocols_unsigned",
                visit_id=str(visit.id),
                missing_templates=sorted(str(t) for t in missing),
            )
        return not missing
