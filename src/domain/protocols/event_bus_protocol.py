"""Event bus protocol (port) for domain events.

Handlers publish events after the unit of work succeeded. Subscribers run
concurrently and fail open: one failing subscriber never breaks the others
or the publishing operation.

Implementations:
    - InMemoryEventBus: src/infrastructure/events/in_memory_event_bus.py
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from src.domain.events.base_event import DomainEvent

# Subscribers accept one event of the subscribed type
EventHandler = Callable[[Any], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations."""

    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        """Register handler for an event type (exact type match).

        Args:
            event_type: Event class.
            handler: Async callable receiving the event.
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Publish event to every handler of its type. Never raises.

        Args:
            event: Event to deliver.
        """
        ...
