"""Unit tests for InMemoryEventBus and LoggingEventHandler.

Tests cover:
- Subscribe/publish basic flow
- Handler failure doesn't break others (fail-open)
- Exact type matching
- Structured log lines for domain events, including orphaned blobs

Architecture:
- Unit tests with mocked logger
- Validates concurrent execution (asyncio.gather)
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from src.domain.enums import ProtocolStage, VisitStatus
from src.domain.events import (
    AppointmentCancelled,
    AppointmentCreated,
    DomainEvent,
    VisitDraftCancelled,
    VisitProtocolSigned,
    VisitStatusChanged,
)
from src.infrastructure.events.handlers.logging_event_handler import (
    LoggingEventHandler,
)
from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus
from tests.conftest import new_id


def _cancelled(**overrides) -> AppointmentCancelled:
    fields = {
        "appointment_id": new_id(),
        "studio_id": new_id(),
        "cancelled_by": new_id(),
    }
    fields.update(overrides)
    return AppointmentCancelled(**fields)


def _draft_cancelled(failed: tuple[str, ...] = ()) -> VisitDraftCancelled:
    return VisitDraftCancelled(
        visit_id=new_id(),
        studio_id=new_id(),
        appointment_id=None,
        deleted_protocols=2,
        failed_blob_deletions=failed,
        cancelled_by=new_id(),
    )


@pytest.mark.unit
class TestInMemoryEventBusBasicFlow:
    """Test basic subscribe/publish flow."""

    async def test_subscribe_and_publish_single_handler(self):
        """Test subscribing single handler and publishing event."""
        # Arrange
        event_bus = InMemoryEventBus(logger=MagicMock())
        received: list[DomainEvent] = []

        async def handler(event: DomainEvent) -> None:
            received.append(event)

        event = _cancelled()

        # Act
        event_bus.subscribe(AppointmentCancelled, handler)
        await event_bus.publish(event)

        # Assert
        assert received == [event]

    async def test_multiple_handlers_all_execute(self):
        """Test every handler of the event type runs."""
        event_bus = InMemoryEventBus(logger=MagicMock())
        calls: list[str] = []

        async def first(event: DomainEvent) -> None:
            calls.append("first")

        async def second(event: DomainEvent) -> None:
            calls.append("second")

        event_bus.subscribe(AppointmentCancelled, first)
        event_bus.subscribe(AppointmentCancelled, second)
        await event_bus.publish(_cancelled())

        assert sorted(calls) == ["first", "second"]

    async def test_publish_with_no_handlers_is_noop(self):
        """Test publishing without subscribers does nothing."""
        logger = MagicMock()
        event_bus = InMemoryEventBus(logger=logger)

        await event_bus.publish(_cancelled())

        logger.debug.assert_not_called()

    async def test_exact_type_match_only(self):
        """Test a base-class subscription does not receive subclasses."""
        event_bus = InMemoryEventBus(logger=MagicMock())
        received: list[DomainEvent] = []

        async def handler(event: DomainEvent) -> None:
            received.append(event)

        event_bus.subscribe(DomainEvent, handler)
        event_bus.subscribe(AppointmentCreated, handler)
        await event_bus.publish(_cancelled())

        assert received == []

    async def test_handlers_run_concurrently(self):
        """Test handlers overlap instead of running one after another."""
        event_bus = InMemoryEventBus(logger=MagicMock())
        started = asyncio.Event()
        order: list[str] = []

        async def waiting(event: DomainEvent) -> None:
            await asyncio.wait_for(started.wait(), timeout=1)
            order.append("waiting")

        async def releasing(event: DomainEvent) -> None:
            order.append("releasing")
            started.set()

        event_bus.subscribe(AppointmentCancelled, waiting)
        event_bus.subscribe(AppointmentCancelled, releasing)
        await event_bus.publish(_cancelled())

        assert order == ["releasing", "waiting"]


@pytest.mark.unit
class TestInMemoryEventBusFailOpen:
    """Test fail-open behavior."""

    async def test_failing_handler_does_not_stop_others(self):
        """Test a handler exception is logged and not propagated."""
        logger = MagicMock()
        event_bus = InMemoryEventBus(logger=logger)
        received: list[DomainEvent] = []

        async def failing(event: DomainEvent) -> None:
            raise RuntimeError("boom")

        async def working(event: DomainEvent) -> None:
            received.append(event)

        event = _cancelled()
        event_bus.subscribe(AppointmentCancelled, failing)
        event_bus.subscribe(AppointmentCancelled, working)

        await event_bus.publish(event)

        assert received == [event]
        logger.warning.assert_called_once()
        args, kwargs = logger.warning.call_args
        assert args[0] == "event_handler_failed"
        assert kwargs["handler_name"] == "failing"
        assert kwargs["error_type"] == "RuntimeError"
        assert kwargs["error_message"] == "boom"
        assert kwargs["event_id"] == str(event.event_id)


# =============================================================================
# LoggingEventHandler Tests
# =============================================================================


@pytest.mark.unit
class TestLoggingEventHandler:
    """Test structured logging of domain events."""

    def test_subscribe_all_registers_every_event(self):
        event_bus = MagicMock()

        LoggingEventHandler(logger=MagicMock()).subscribe_all(event_bus)

        subscribed = {c.args[0] for c in event_bus.subscribe.call_args_list}
        assert AppointmentCreated in subscribed
        assert VisitStatusChanged in subscribed
        assert VisitDraftCancelled in subscribed
        assert VisitProtocolSigned in subscribed
        assert len(subscribed) == 7

    async def test_logs_through_bus(self):
        """Test a published event produces one info line."""
        logger = MagicMock()
        event_bus = InMemoryEventBus(logger=logger)
        LoggingEventHandler(logger=logger).subscribe_all(event_bus)
        event = _cancelled()

        await event_bus.publish(event)

        logger.info.assert_called_once()
        args, kwargs = logger.info.call_args
        assert args[0] == "appointment_cancelled_event"
        assert kwargs["appointment_id"] == str(event.appointment_id)
        assert kwargs["occurred_at"] == event.occurred_at.isoformat()

    async def test_status_change_logs_values(self):
        logger = MagicMock()
        handler = LoggingEventHandler(logger=logger)
        event = VisitStatusChanged(
            visit_id=new_id(),
            studio_id=new_id(),
            old_status=VisitStatus.DRAFT,
            new_status=VisitStatus.IN_PROGRESS,
            changed_by=new_id(),
        )

        await handler.handle_visit_status_changed(event)

        kwargs = logger.info.call_args.kwargs
        assert kwargs["old_status"] == "draft"
        assert kwargs["new_status"] == "in_progress"

    async def test_draft_cancelled_clean(self):
        logger = MagicMock()

        await LoggingEventHandler(logger=logger).handle_visit_draft_cancelled(
            _draft_cancelled()
        )

        assert logger.info.call_args.args[0] == "visit_draft_cancelled_event"
        logger.warning.assert_not_called()

    async def test_draft_cancelled_with_orphans_warns(self):
        """Test leftover blobs are reported at WARNING."""
        logger = MagicMock()

        await LoggingEventHandler(logger=logger).handle_visit_draft_cancelled(
            _draft_cancelled(failed=("a.pdf", "b.png"))
        )

        logger.info.assert_not_called()
        args, kwargs = logger.warning.call_args
        assert args[0] == "visit_draft_cancelled_with_orphaned_blobs"
        assert kwargs["failed_blob_deletions"] == ["a.pdf", "b.png"]

    async def test_protocol_signed(self):
        logger = MagicMock()
        event = VisitProtocolSigned(
            protocol_id=new_id(),
            visit_id=new_id(),
            studio_id=new_id(),
            stage=ProtocolStage.CHECK_OUT,
            signed_by="Anna Nowak",
        )

        await LoggingEventHandler(logger=logger).handle_visit_protocol_signed(event)

        kwargs = logger.info.call_args.kwargs
        assert kwargs["stage"] == "check_out"
        assert kwargs["signed_by"] == "Anna Nowak"
