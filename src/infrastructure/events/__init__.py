"""Infrastructure event implementations.

Event Bus:
    - InMemoryEventBus: Event bus with fail-open behavior

Event Handlers:
    - LoggingEventHandler: Structured logging for all domain events

Usage:
    >>> from src.infrastructure.events import InMemoryEventBus
    >>> from src.infrastructure.events.handlers import LoggingEventHandler
    >>>
    >>> event_bus = InMemoryEventBus(logger=logger)
    >>> LoggingEventHandler(logger=logger).subscribe_all(event_bus)
"""

from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = [
    "InMemoryEventBus",
]
