"""Appointments resource handlers.

Handler functions for appointment booking endpoints.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    create_appointment   - Book an appointment (customer/vehicle resolution, pricing)
    list_appointments    - Page through the studio's appointments
    get_appointment      - Get appointment details with totals
    cancel_appointment   - Cancel an appointment
    convert_appointment  - Turn an appointment into a DRAFT visit
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Query, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands import CancelAppointment, ConvertAppointmentToVisit
from src.application.commands.handlers.cancel_appointment_handler import (
    CancelAppointmentHandler,
)
from src.application.commands.handlers.convert_appointment_to_visit_handler import (
    ConvertAppointmentToVisitHandler,
)
from src.application.commands.handlers.create_appointment_handler import (
    CreateAppointmentHandler,
)
from src.application.queries import GetAppointment, ListAppointments
from src.application.queries.handlers.appointment_query_handlers import (
    GetAppointmentHandler,
    ListAppointmentsHandler,
)
from src.core.config import settings
from src.core.container import (
    get_cancel_appointment_handler,
    get_convert_appointment_to_visit_handler,
    get_create_appointment_handler,
    get_get_appointment_handler,
    get_list_appointments_handler,
)
from src.core.result import Failure
from src.domain.enums import AppointmentStatus
from src.presentation.routers.api.middleware.studio_context_dependencies import (
    CurrentStudio,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    map_handler_error,
)
from src.schemas.appointment_schemas import (
    AppointmentCreateRequest,
    AppointmentCreateResponse,
    AppointmentListResponse,
    AppointmentResponse,
)
from src.schemas.visit_schemas import VisitConvertRequest, VisitConvertResponse


def _error_response(request: Request, error: str) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=map_handler_error(error),
        request=request,
        trace_id=get_trace_id() or "",
    )


async def create_appointment(
    request: Request,
    context: CurrentStudio,
    data: AppointmentCreateRequest,
    handler: CreateAppointmentHandler = Depends(get_create_appointment_handler),
) -> AppointmentCreateResponse | JSONResponse:
    """Book a new appointment.

    POST /api/v1/appointments → 201 Created

    Customer and vehicle are resolved (existing, new or updated) and the
    service lines priced before anything is persisted.

    Returns:
        AppointmentCreateResponse with the new id and the three totals.
        JSONResponse with RFC 7807 error on failure.
    """
    result = await handler.handle(data.to_command(context))

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return AppointmentCreateResponse.from_dto(result.value)


async def list_appointments(
    request: Request,
    context: CurrentStudio,
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    page_size: Annotated[
        int,
        Query(ge=1, description="Items per page (clamped to the configured maximum)"),
    ] = settings.default_page_size,
    appointment_status: Annotated[
        AppointmentStatus | None,
        Query(alias="status", description="Filter by status"),
    ] = None,
    handler: ListAppointmentsHandler = Depends(get_list_appointments_handler),
) -> AppointmentListResponse | JSONResponse:
    """List appointments for the studio.

    GET /api/v1/appointments → 200 OK
    """
    query = ListAppointments(
        context=context,
        page=page,
        page_size=page_size,
        status=appointment_status,
    )
    result = await handler.handle(query)

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return AppointmentListResponse.from_dto(result.value)


async def get_appointment(
    request: Request,
    context: CurrentStudio,
    appointment_id: Annotated[UUID, Path(description="Appointment UUID")],
    handler: GetAppointmentHandler = Depends(get_get_appointment_handler),
) -> AppointmentResponse | JSONResponse:
    """Get a specific appointment.

    GET /api/v1/appointments/{appointment_id} → 200 OK

    Appointments of other studios are reported as not found.
    """
    result = await handler.handle(
        GetAppointment(context=context, appointment_id=appointment_id)
    )

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return AppointmentResponse.from_dto(result.value)


async def cancel_appointment(
    request: Request,
    context: CurrentStudio,
    appointment_id: Annotated[UUID, Path(description="Appointment UUID")],
    handler: CancelAppointmentHandler = Depends(get_cancel_appointment_handler),
) -> Response:
    """Cancel an appointment.

    POST /api/v1/appointments/{appointment_id}/cancel → 204 No Content
    """
    result = await handler.handle(
        CancelAppointment(context=context, appointment_id=appointment_id)
    )

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def convert_appointment(
    request: Request,
    context: CurrentStudio,
    appointment_id: Annotated[UUID, Path(description="Appointment UUID")],
    data: VisitConvertRequest,
    handler: ConvertAppointmentToVisitHandler = Depends(
        get_convert_appointment_to_visit_handler
    ),
) -> VisitConvertResponse | JSONResponse:
    """Convert an appointment into a DRAFT visit.

    POST /api/v1/appointments/{appointment_id}/convert → 201 Created

    The appointment stays CREATED until the visit is confirmed. A second
    conversion of the same appointment is rejected with 409.
    """
    command = ConvertAppointmentToVisit(
        context=context,
        appointment_id=appointment_id,
        mileage_at_arrival=data.mileage_at_arrival,
        keys_handed_over=data.keys_handed_over,
        documents_handed_over=data.documents_handed_over,
        technical_notes=data.technical_notes,
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitConvertResponse.from_dto(result.value)
