"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import AppointmentCreateRequest, VisitResponse
"""

from src.schemas.appointment_schemas import (
    AppointmentCreateRequest,
    AppointmentCreateResponse,
    AppointmentListResponse,
    AppointmentResponse,
)
from src.schemas.common_schemas import LineItemResponse, PaginatedMeta, TotalsResponse
from src.schemas.protocol_schemas import (
    ProtocolReadyRequest,
    ProtocolRuleCreateRequest,
    ProtocolRuleListResponse,
    ProtocolRuleResponse,
    ProtocolRuleUpdateRequest,
    ProtocolSignRequest,
    VisitProtocolGenerateRequest,
    VisitProtocolListResponse,
    VisitProtocolResponse,
)
from src.schemas.visit_schemas import (
    VisitConvertRequest,
    VisitConvertResponse,
    VisitListResponse,
    VisitRejectRequest,
    VisitResponse,
    VisitStatusResponse,
)

__all__ = [
    # Appointments
    "AppointmentCreateRequest",
    "AppointmentCreateResponse",
    "AppointmentListResponse",
    "AppointmentResponse",
    # Common
    "LineItemResponse",
    "PaginatedMeta",
    "TotalsResponse",
    # Protocols
    "ProtocolReadyRequest",
    "ProtocolRuleCreateRequest",
    "ProtocolRuleListResponse",
    "ProtocolRuleResponse",
    "ProtocolRuleUpdateRequest",
    "ProtocolSignRequest",
    "VisitProtocolGenerateRequest",
    "VisitProtocolListResponse",
    "VisitProtocolResponse",
    # Visits
    "VisitConvertRequest",
    "VisitConvertResponse",
    "VisitListResponse",
    "VisitRejectRequest",
    "VisitResponse",
    "VisitStatusResponse",
]
