"""Logging event handler for domain events.

Writes one structured log line per published domain event. All events are
normal operational facts and log at INFO, except a draft cancellation that
left orphaned blobs, which logs at WARNING.

Structured Fields:
    - event_id: UUID for event correlation
    - occurred_at: ISO 8601 timestamp (UTC)
    - studio_id: Owning tenant
    - aggregate ids and acting staff member

Usage:
    >>> handler = LoggingEventHandler(logger=get_logger())
    >>> handler.subscribe_all(event_bus)
"""

from src.domain.events import (
    AppointmentCancelled,
    AppointmentCreated,
    DomainEvent,
    VisitConfirmed,
    VisitCreatedFromAppointment,
    VisitDraftCancelled,
    VisitProtocolSigned,
    VisitStatusChanged,
)
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Event handler for structured logging of domain events.

    Attributes:
        _logger: Logger protocol implementation (from container).
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        """Initialize logging handler with logger.

        Args:
            logger: Logger for structured output.
        """
        self._logger = logger

    def subscribe_all(self, event_bus: EventBusProtocol) -> None:
        """Subscribe every handler method to its event type."""
        event_bus.subscribe(AppointmentCreated, self.handle_appointment_created)
        event_bus.subscribe(AppointmentCancelled, self.handle_appointment_cancelled)
        event_bus.subscribe(
            VisitCreatedFromAppointment, self.handle_visit_created_from_appointment
        )
        event_bus.subscribe(VisitStatusChanged, self.handle_visit_status_changed)
        event_bus.subscribe(VisitConfirmed, self.handle_visit_confirmed)
        event_bus.subscribe(VisitDraftCancelled, self.handle_visit_draft_cancelled)
        event_bus.subscribe(VisitProtocolSigned, self.handle_visit_protocol_signed)

    def _base(self, event: DomainEvent) -> dict[str, str]:
        return {
            "event_id": str(event.event_id),
            "occurred_at": event.occurred_at.isoformat(),
        }

    async def handle_appointment_created(self, event: AppointmentCreated) -> None:
        """Log AppointmentCreated (INFO)."""
        self._logger.info(
            "appointment_created_event",
            **self._base(event),
            appointment_id=str(event.appointment_id),
            studio_id=str(event.studio_id),
            customer_id=str(event.customer_id),
            total_gross_cents=event.total_gross_cents,
            created_by=str(event.created_by),
        )

    async def handle_appointment_cancelled(self, event: AppointmentCancelled) -> None:
        """Log AppointmentCancelled (INFO)."""
        self._logger.info(
            "appointment_cancelled_event",
            **self._base(event),
            appointment_id=str(event.appointment_id),
            studio_id=str(event.studio_id),
            cancelled_by=str(event.cancelled_by),
        )

    async def handle_visit_created_from_appointment(
        self, event: VisitCreatedFromAppointment
    ) -> None:
        """Log VisitCreatedFromAppointment (INFO)."""
        self._logger.info(
            "visit_created_from_appointment_event",
            **self._base(event),
            visit_id=str(event.visit_id),
            visit_number=event.visit_number,
            appointment_id=str(event.appointment_id),
            studio_id=str(event.studio_id),
            created_by=str(event.created_by),
        )

    async def handle_visit_status_changed(self, event: VisitStatusChanged) -> None:
        """Log VisitStatusChanged (INFO)."""
        self._logger.info(
            "visit_status_changed_event",
            **self._base(event),
            visit_id=str(event.visit_id),
            studio_id=str(event.studio_id),
            old_status=event.old_status.value,
            new_status=event.new_status.value,
            changed_by=str(event.changed_by),
        )

    async def handle_visit_confirmed(self, event: VisitConfirmed) -> None:
        """Log VisitConfirmed (INFO)."""
        self._logger.info(
            "visit_confirmed_event",
            **self._base(event),
            visit_id=str(event.visit_id),
            studio_id=str(event.studio_id),
            appointment_id=str(event.appointment_id) if event.appointment_id else None,
            confirmed_by=str(event.confirmed_by),
        )

    async def handle_visit_draft_cancelled(self, event: VisitDraftCancelled) -> None:
        """Log VisitDraftCancelled (WARNING when blobs were left behind)."""
        context = {
            **self._base(event),
            "visit_id": str(event.visit_id),
            "studio_id": str(event.studio_id),
            "deleted_protocols": event.deleted_protocols,
            "cancelled_by": str(event.cancelled_by),
        }
        if event.failed_blob_deletions:
            self._logger.warning(
                "visit_draft_cancelled_with_orphaned_blobs",
                **context,
                failed_blob_deletions=list(event.failed_blob_deletions),
            )
            return
        self._logger.info("visit_draft_cancelled_event", **context)

    async def handle_visit_protocol_signed(self, event: VisitProtocolSigned) -> None:
        """Log VisitProtocolSigned (INFO)."""
        self._logger.info(
            "visit_protocol_signed_event",
            **self._base(event),
            protocol_id=str(event.protocol_id),
            visit_id=str(event.visit_id),
            studio_id=str(event.studio_id),
            stage=event.stage.value,
            signed_by=event.signed_by,
        )
