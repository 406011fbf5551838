"""Process-local event bus.

Studio events (appointment created/cancelled, visit lifecycle, protocol
signed) are published by handlers after their writes are flushed. Handlers
subscribed here only observe; none of them can veto or undo the change that
produced the event, so a failing subscriber is logged and skipped.

Usage:
    >>> bus = InMemoryEventBus(logger=get_logger())
    >>> bus.subscribe(VisitConfirmed, on_visit_confirmed)
    >>> await bus.publish(VisitConfirmed(...))
"""

import asyncio
from collections import defaultdict

from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__name__", None) or repr(handler)


class InMemoryEventBus:
    """EventBusProtocol adapter keyed by exact event class.

    Subscribing to a base class does not receive subclasses. Subscribers of
    one event run concurrently; their order is undefined.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._subscribers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(
            list
        )
        self._logger = logger

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Add a subscriber for ``event_type``. Duplicates are not filtered."""
        self._subscribers[event_type].append(handler)

    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to its subscribers and wait for all of them.

        Subscriber exceptions are logged at warning level and never reach
        the publisher.
        """
        subscribers = self._subscribers.get(type(event))
        if not subscribers:
            return

        event_name = type(event).__name__
        self._logger.debug(
            "event_publishing",
            event_type=event_name,
            event_id=str(event.event_id),
            handler_count=len(subscribers),
        )

        outcomes = await asyncio.gather(
            *(subscriber(event) for subscriber in subscribers),
            return_exceptions=True,
        )
        for subscriber, outcome in zip(subscribers, outcomes):
            if isinstance(outcome, Exception):
                self._logger.warning(
                    "event_handler_failed",
                    event_type=event_name,
                    event_id=str(event.event_id),
                    handler_name=_handler_name(subscriber),
                    error_type=type(outcome).__name__,
                    error_message=str(outcome),
                )
