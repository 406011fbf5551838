"""Event bus dependency factory.

Application-scoped singleton for domain event publishing. Subscriptions are
wired once, when the bus is first built.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.container.infrastructure import get_logger

if TYPE_CHECKING:
    from src.domain.protocols.event_bus_protocol import EventBusProtocol


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Subscribes:
        - LoggingEventHandler: every domain event

    Returns:
        Event bus implementing EventBusProtocol.

    Usage:
        event_bus = get_event_bus()
        await event_bus.publish(VisitConfirmed(...))
    """
    from src.infrastructure.events.handlers.logging_event_handler import (
        LoggingEventHandler,
    )
    from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    logger = get_logger()
    event_bus = InMemoryEventBus(logger=logger)
    LoggingEventHandler(logger=logger).subscribe_all(event_bus)

    logger.info("event_bus_configured", bus_type="in-memory")
    return event_bus
