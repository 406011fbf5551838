"""Domain errors package.

Usage:
    from src.domain.errors import VisitError, AppointmentError
"""

from src.domain.errors.appointment_error import AppointmentError
from src.domain.errors.concurrency_error import (
    DuplicateVisitError,
    StaleAggregateError,
)
from src.domain.errors.conversion_error import ConversionError
from src.domain.errors.line_item_error import LineItemError
from src.domain.errors.protocol_error import ProtocolError
from src.domain.errors.visit_error import VisitError

__all__ = [
    "AppointmentError",
    "ConversionError",
    "DuplicateVisitError",
    "LineItemError",
    "ProtocolError",
    "StaleAggregateError",
    "VisitError",
]
