"""CancelAppointment command handler.

Cancels a CREATED appointment. Cancelled and converted appointments are
terminal, so cancelling them again fails.
"""

from typing import cast

from src.application.commands.appointment_commands import CancelAppointment
from src.core.result import Failure, Result, Success
from src.domain.errors import AppointmentError
from src.domain.events import AppointmentCancelled
from src.domain.protocols import (
    AppointmentRepository,
    EventBusProtocol,
    LoggerProtocol,
)


class CancelAppointmentHandler:
    """Handler for CancelAppointment command.

    Dependencies (injected via constructor):
        - AppointmentRepository: Appointment persistence
        - EventBusProtocol: Domain events
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        appointment_repo: AppointmentRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            appointment_repo: Appointment repository.
            event_bus: Event bus for publishing domain events.
            logger: Logger for structured logging.
        """
        self._appointment_repo = appointment_repo
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: CancelAppointment) -> Result[None, str]:
        """Handle CancelAppointment command.

        Args:
            cmd: CancelAppointment command.

        Returns:
            Success(None): Appointment cancelled.
            Failure(error): Not found, already cancelled or already converted.

        Raises:
            StaleAggregateError: Appointment changed since it was loaded.
        """
        # Step 1: Load appointment (other studios' appointments are not found)
        appointment = await self._appointment_repo.find_by_id(
            cmd.appointment_id, cmd.context.studio_id
        )
        if appointment is None:
            return cast(Result[None, str], Failure(error=AppointmentError.NOT_FOUND))

        # Step 2: Transition
        result = appointment.cancel(cmd.context.user_id)
        if isinstance(result, Failure):
            self._logger.warning(
                "appointment_cancel_rejected",
                appointment_id=str(appointment.id),
                status=appointment.status.value,
                reason=result.error,
            )
            return result

        # Step 3: Persist and publish
        await self._appointment_repo.save(appointment)
        await self._event_bus.publish(
            AppointmentCancelled(
                appointment_id=appointment.id,
                studio_id=appointment.studio_id,
                cancelled_by=cmd.context.user_id,
            )
        )
        self._logger.info("appointment_cancelled", appointment_id=str(appointment.id))

        return Success(value=None)
