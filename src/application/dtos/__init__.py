"""Data Transfer Objects (DTOs) for application layer.

DTOs are response/result dataclasses returned by command and query handlers.
They transfer data from the application layer to the presentation layer.

Categories:
    - appointment_dtos: Appointment booking and read results
    - visit_dtos: Conversion, transition and visit read results
    - protocol_dtos: Protocol rule and instance results

Note:
    DTOs are NOT the same as API schemas (Pydantic models in presentation).
"""

from src.application.dtos.appointment_dtos import (
    AppointmentListResult,
    AppointmentResult,
    CreateAppointmentResult,
    LineItemResult,
    TotalsResult,
)
from src.application.dtos.protocol_dtos import ProtocolRuleResult, VisitProtocolResult
from src.application.dtos.visit_dtos import (
    ConvertToVisitResult,
    VisitListResult,
    VisitResult,
    VisitServiceItemResult,
    VisitSummaryResult,
    VisitTransitionResult,
)

__all__ = [
    "AppointmentListResult",
    "AppointmentResult",
    "ConvertToVisitResult",
    "CreateAppointmentResult",
    "LineItemResult",
    "ProtocolRuleResult",
    "TotalsResult",
    "VisitListResult",
    "VisitProtocolResult",
    "VisitResult",
    "VisitServiceItemResult",
    "VisitSummaryResult",
    "VisitTransitionResult",
]
