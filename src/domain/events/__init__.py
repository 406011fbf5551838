"""Domain events.

Usage:
    from src.domain.events import VisitConfirmed
"""

from src.domain.events.appointment_events import (
    AppointmentCancelled,
    AppointmentCreated,
)
from src.domain.events.base_event import DomainEvent
from src.domain.events.protocol_events import VisitProtocolSigned
from src.domain.events.visit_events import (
    VisitConfirmed,
    VisitCreatedFromAppointment,
    VisitDraftCancelled,
    VisitStatusChanged,
)

__all__ = [
    "AppointmentCancelled",
    "AppointmentCreated",
    "DomainEvent",
    "VisitConfirmed",
    "VisitCreatedFromAppointment",
    "VisitDraftCancelled",
    "VisitProtocolSigned",
    "VisitStatusChanged",
]
