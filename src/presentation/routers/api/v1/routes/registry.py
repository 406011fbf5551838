"""API Route Registry - Single Source of Truth for all routes.

This module contains ROUTE_REGISTRY, the authoritative list of all API endpoints.
The registry is used to generate FastAPI routes, studio-context dependencies
and OpenAPI metadata at application startup.

Registry structure:
    - Each entry is a RouteMetadata instance with complete specification
    - Handlers reference actual functions from router modules
    - Paths are relative to the /api/v1 prefix

Usage:
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
    from src.presentation.routers.api.v1.routes.generator import register_routes_from_registry

    router = APIRouter(prefix="/api/v1")
    register_routes_from_registry(router, ROUTE_REGISTRY)
"""

from src.presentation.routers.api.v1.appointments import (
    cancel_appointment,
    convert_appointment,
    create_appointment,
    get_appointment,
    list_appointments,
)
from src.presentation.routers.api.v1.protocol_rules import (
    create_protocol_rule,
    delete_protocol_rule,
    list_protocol_rules,
    update_protocol_rule,
)
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    HTTPMethod,
    IdempotencyLevel,
    RouteMetadata,
)
from src.presentation.routers.api.v1.visit_protocols import (
    generate_visit_protocols,
    list_visit_protocols,
    mark_protocol_ready,
    sign_visit_protocol,
)
from src.presentation.routers.api.v1.visits import (
    archive_visit,
    cancel_draft_visit,
    complete_visit,
    confirm_visit,
    get_visit,
    list_visits,
    mark_visit_ready_for_pickup,
    reject_visit,
)
from src.schemas.appointment_schemas import (
    AppointmentCreateResponse,
    AppointmentListResponse,
    AppointmentResponse,
)
from src.schemas.protocol_schemas import (
    ProtocolRuleListResponse,
    ProtocolRuleResponse,
    VisitProtocolListResponse,
    VisitProtocolResponse,
)
from src.schemas.visit_schemas import (
    VisitConvertResponse,
    VisitListResponse,
    VisitResponse,
    VisitStatusResponse,
)

_STUDIO = AuthPolicy(level=AuthLevel.STUDIO_MEMBER)

_UNAUTHORIZED = ErrorSpec(status=401, description="Missing or invalid studio headers")
_BAD_REQUEST = ErrorSpec(status=400, description="Business rule violation")
_STALE = ErrorSpec(status=409, description="Concurrent modification, reload and retry")


def _not_found(resource: str) -> ErrorSpec:
    return ErrorSpec(status=404, description=f"{resource} not found")


ROUTE_REGISTRY: list[RouteMetadata] = [
    # =========================================================================
    # Appointments
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/appointments",
        handler=create_appointment,
        resource="appointments",
        tags=["Appointments"],
        summary="Create appointment",
        description=(
            "Book an appointment. The customer and vehicle are either referenced, "
            "created or updated inline; service lines are priced with their "
            "adjustments and the three totals are returned."
        ),
        operation_id="create_appointment",
        response_model=AppointmentCreateResponse,
        status_code=201,
        errors=[
            _BAD_REQUEST,
            _UNAUTHORIZED,
            _not_found("Customer, vehicle, service or color"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/appointments",
        handler=list_appointments,
        resource="appointments",
        tags=["Appointments"],
        summary="List appointments",
        operation_id="list_appointments",
        response_model=AppointmentListResponse,
        errors=[_UNAUTHORIZED],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/appointments/{appointment_id}",
        handler=get_appointment,
        resource="appointments",
        tags=["Appointments"],
        summary="Get appointment",
        operation_id="get_appointment",
        response_model=AppointmentResponse,
        errors=[_UNAUTHORIZED, _not_found("Appointment")],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/appointments/{appointment_id}/cancel",
        handler=cancel_appointment,
        resource="appointments",
        tags=["Appointments"],
        summary="Cancel appointment",
        operation_id="cancel_appointment",
        status_code=204,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Appointment"), _STALE],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/appointments/{appointment_id}/convert",
        handler=convert_appointment,
        resource="appointments",
        tags=["Appointments", "Visits"],
        summary="Convert appointment to visit",
        description=(
            "Create a DRAFT visit from the appointment, copying customer, vehicle "
            "and priced service lines. The appointment is marked converted only "
            "when the visit is confirmed."
        ),
        operation_id="convert_appointment",
        response_model=VisitConvertResponse,
        status_code=201,
        errors=[
            _BAD_REQUEST,
            _UNAUTHORIZED,
            _not_found("Appointment"),
            ErrorSpec(status=409, description="Visit already exists for appointment"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    # =========================================================================
    # Visits
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/visits",
        handler=list_visits,
        resource="visits",
        tags=["Visits"],
        summary="List visits",
        operation_id="list_visits",
        response_model=VisitListResponse,
        errors=[_UNAUTHORIZED],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/visits/{visit_id}",
        handler=get_visit,
        resource="visits",
        tags=["Visits"],
        summary="Get visit",
        operation_id="get_visit",
        response_model=VisitResponse,
        errors=[_UNAUTHORIZED, _not_found("Visit")],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/visits/{visit_id}/confirm",
        handler=confirm_visit,
        resource="visits",
        tags=["Visits"],
        summary="Confirm visit",
        description=(
            "Move a DRAFT visit to IN_PROGRESS. Every mandatory check-in protocol "
            "must be signed."
        ),
        operation_id="confirm_visit",
        response_model=VisitStatusResponse,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Visit"), _STALE],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/visits/{visit_id}",
        handler=cancel_draft_visit,
        resource="visits",
        tags=["Visits"],
        summary="Cancel draft visit",
        description="Delete a DRAFT visit with its protocols, damage map and documents.",
        operation_id="cancel_draft_visit",
        status_code=204,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Visit")],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/visits/{visit_id}/ready-for-pickup",
        handler=mark_visit_ready_for_pickup,
        resource="visits",
        tags=["Visits"],
        summary="Mark visit ready for pickup",
        operation_id="mark_visit_ready_for_pickup",
        response_model=VisitStatusResponse,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Visit"), _STALE],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/visits/{visit_id}/complete",
        handler=complete_visit,
        resource="visits",
        tags=["Visits"],
        summary="Complete visit",
        operation_id="complete_visit",
        response_model=VisitStatusResponse,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Visit"), _STALE],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/visits/{visit_id}/reject",
        handler=reject_visit,
        resource="visits",
        tags=["Visits"],
        summary="Reject visit",
        operation_id="reject_visit",
        response_model=VisitStatusResponse,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Visit"), _STALE],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/visits/{visit_id}/archive",
        handler=archive_visit,
        resource="visits",
        tags=["Visits"],
        summary="Archive visit",
        operation_id="archive_visit",
        response_model=VisitStatusResponse,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Visit"), _STALE],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    # =========================================================================
    # Visit protocols
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/visits/{visit_id}/protocols",
        handler=generate_visit_protocols,
        resource="visit_protocols",
        tags=["Protocols"],
        summary="Generate visit protocols",
        description="Instantiate the applicable protocol rules for a visit stage.",
        operation_id="generate_visit_protocols",
        response_model=VisitProtocolListResponse,
        errors=[_UNAUTHORIZED, _not_found("Visit")],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/visits/{visit_id}/protocols",
        handler=list_visit_protocols,
        resource="visit_protocols",
        tags=["Protocols"],
        summary="List visit protocols",
        operation_id="list_visit_protocols",
        response_model=VisitProtocolListResponse,
        errors=[_UNAUTHORIZED, _not_found("Visit")],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/protocols/{protocol_id}/ready",
        handler=mark_protocol_ready,
        resource="visit_protocols",
        tags=["Protocols"],
        summary="Mark protocol ready for signature",
        operation_id="mark_protocol_ready",
        response_model=VisitProtocolResponse,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Protocol")],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/protocols/{protocol_id}/sign",
        handler=sign_visit_protocol,
        resource="visit_protocols",
        tags=["Protocols"],
        summary="Sign protocol",
        operation_id="sign_visit_protocol",
        response_model=VisitProtocolResponse,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Protocol")],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    # =========================================================================
    # Protocol rules
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/protocol-rules",
        handler=list_protocol_rules,
        resource="protocol_rules",
        tags=["Protocol Rules"],
        summary="List protocol rules",
        operation_id="list_protocol_rules",
        response_model=ProtocolRuleListResponse,
        errors=[_UNAUTHORIZED],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/protocol-rules",
        handler=create_protocol_rule,
        resource="protocol_rules",
        tags=["Protocol Rules"],
        summary="Create protocol rule",
        operation_id="create_protocol_rule",
        response_model=ProtocolRuleResponse,
        status_code=201,
        errors=[_BAD_REQUEST, _UNAUTHORIZED],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.PATCH,
        path="/protocol-rules/{rule_id}",
        handler=update_protocol_rule,
        resource="protocol_rules",
        tags=["Protocol Rules"],
        summary="Update protocol rule",
        operation_id="update_protocol_rule",
        response_model=ProtocolRuleResponse,
        errors=[_BAD_REQUEST, _UNAUTHORIZED, _not_found("Protocol rule")],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/protocol-rules/{rule_id}",
        handler=delete_protocol_rule,
        resource="protocol_rules",
        tags=["Protocol Rules"],
        summary="Delete protocol rule",
        operation_id="delete_protocol_rule",
        status_code=204,
        errors=[_UNAUTHORIZED, _not_found("Protocol rule")],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=_STUDIO,
    ),
]
