"""Queries - Read operations that never change state.

Queries are immutable dataclasses with question-like names. Each query
has a handler that returns DTOs, never domain entities.
"""

from src.application.queries.appointment_queries import (
    GetAppointment,
    ListAppointments,
)
from src.application.queries.protocol_queries import (
    ListProtocolRules,
    ListVisitProtocols,
)
from src.application.queries.visit_queries import GetVisit, ListVisits

__all__ = [
    "GetAppointment",
    "GetVisit",
    "ListAppointments",
    "ListProtocolRules",
    "ListVisitProtocols",
    "ListVisits",
]
