"""Visits resource handlers.

Handler functions for the visit lifecycle endpoints.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    list_visits                  - Page through the studio's visits
    get_visit                    - Get visit details (items, totals, protocols)
    confirm_visit                - DRAFT → IN_PROGRESS (protocol gate)
    cancel_draft_visit           - Delete a DRAFT visit and its artifacts
    mark_visit_ready_for_pickup  - IN_PROGRESS → READY_FOR_PICKUP
    complete_visit               - READY_FOR_PICKUP → COMPLETED
    reject_visit                 - Active visit → REJECTED
    archive_visit                - Any non-archived visit → ARCHIVED
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Query, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands import (
    ArchiveVisit,
    CancelDraftVisit,
    CompleteVisit,
    ConfirmVisit,
    MarkVisitReadyForPickup,
    RejectVisit,
)
from src.application.commands.handlers.cancel_draft_visit_handler import (
    CancelDraftVisitHandler,
)
from src.application.commands.handlers.confirm_visit_handler import (
    ConfirmVisitHandler,
)
from src.application.commands.handlers.visit_transition_handlers import (
    ArchiveVisitHandler,
    CompleteVisitHandler,
    MarkVisitReadyForPickupHandler,
    RejectVisitHandler,
)
from src.application.queries import GetVisit, ListVisits
from src.application.queries.handlers.visit_query_handlers import (
    GetVisitHandler,
    ListVisitsHandler,
)
from src.core.config import settings
from src.core.container import (
    get_archive_visit_handler,
    get_cancel_draft_visit_handler,
    get_complete_visit_handler,
    get_confirm_visit_handler,
    get_get_visit_handler,
    get_list_visits_handler,
    get_mark_visit_ready_for_pickup_handler,
    get_reject_visit_handler,
)
from src.core.result import Failure
from src.domain.enums import VisitStatus
from src.presentation.routers.api.middleware.studio_context_dependencies import (
    CurrentStudio,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    map_handler_error,
)
from src.schemas.visit_schemas import (
    VisitListResponse,
    VisitRejectRequest,
    VisitResponse,
    VisitStatusResponse,
)

VisitId = Annotated[UUID, Path(description="Visit UUID")]


def _error_response(request: Request, error: str) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=map_handler_error(error),
        request=request,
        trace_id=get_trace_id() or "",
    )


# =============================================================================
# Queries
# =============================================================================


async def list_visits(
    request: Request,
    context: CurrentStudio,
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    page_size: Annotated[
        int,
        Query(ge=1, description="Items per page (clamped to the configured maximum)"),
    ] = settings.default_page_size,
    visit_status: Annotated[
        VisitStatus | None,
        Query(alias="status", description="Filter by status"),
    ] = None,
    handler: ListVisitsHandler = Depends(get_list_visits_handler),
) -> VisitListResponse | JSONResponse:
    """List visits for the studio.

    GET /api/v1/visits → 200 OK
    """
    result = await handler.handle(
        ListVisits(context=context, page=page, page_size=page_size, status=visit_status)
    )

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitListResponse.from_dto(result.value)


async def get_visit(
    request: Request,
    context: CurrentStudio,
    visit_id: VisitId,
    handler: GetVisitHandler = Depends(get_get_visit_handler),
) -> VisitResponse | JSONResponse:
    """Get a specific visit.

    GET /api/v1/visits/{visit_id} → 200 OK
    """
    result = await handler.handle(GetVisit(context=context, visit_id=visit_id))

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitResponse.from_dto(result.value)


# =============================================================================
# Lifecycle
# =============================================================================


async def confirm_visit(
    request: Request,
    context: CurrentStudio,
    visit_id: VisitId,
    handler: ConfirmVisitHandler = Depends(get_confirm_visit_handler),
) -> VisitStatusResponse | JSONResponse:
    """Confirm a DRAFT visit.

    POST /api/v1/visits/{visit_id}/confirm → 200 OK

    Fails with 400 ``mandatory_protocols_unsigned`` while any mandatory
    check-in protocol is unsigned. On success the source appointment is
    marked converted.
    """
    result = await handler.handle(ConfirmVisit(context=context, visit_id=visit_id))

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitStatusResponse.from_dto(result.value)


async def cancel_draft_visit(
    request: Request,
    context: CurrentStudio,
    visit_id: VisitId,
    handler: CancelDraftVisitHandler = Depends(get_cancel_draft_visit_handler),
) -> Response:
    """Cancel a DRAFT visit.

    DELETE /api/v1/visits/{visit_id} → 204 No Content

    Removes protocols, damage map, documents and stored files. The source
    appointment becomes convertible again.
    """
    result = await handler.handle(CancelDraftVisit(context=context, visit_id=visit_id))

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def mark_visit_ready_for_pickup(
    request: Request,
    context: CurrentStudio,
    visit_id: VisitId,
    handler: MarkVisitReadyForPickupHandler = Depends(
        get_mark_visit_ready_for_pickup_handler
    ),
) -> VisitStatusResponse | JSONResponse:
    """POST /api/v1/visits/{visit_id}/ready-for-pickup → 200 OK"""
    result = await handler.handle(
        MarkVisitReadyForPickup(context=context, visit_id=visit_id)
    )

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitStatusResponse.from_dto(result.value)


async def complete_visit(
    request: Request,
    context: CurrentStudio,
    visit_id: VisitId,
    handler: CompleteVisitHandler = Depends(get_complete_visit_handler),
) -> VisitStatusResponse | JSONResponse:
    """POST /api/v1/visits/{visit_id}/complete → 200 OK"""
    result = await handler.handle(CompleteVisit(context=context, visit_id=visit_id))

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitStatusResponse.from_dto(result.value)


async def reject_visit(
    request: Request,
    context: CurrentStudio,
    visit_id: VisitId,
    data: VisitRejectRequest | None = None,
    handler: RejectVisitHandler = Depends(get_reject_visit_handler),
) -> VisitStatusResponse | JSONResponse:
    """Reject an active visit.

    POST /api/v1/visits/{visit_id}/reject → 200 OK

    The optional reason is appended to the visit's technical notes.
    """
    command = RejectVisit(
        context=context,
        visit_id=visit_id,
        reason=data.reason if data else None,
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitStatusResponse.from_dto(result.value)


async def archive_visit(
    request: Request,
    context: CurrentStudio,
    visit_id: VisitId,
    handler: ArchiveVisitHandler = Depends(get_archive_visit_handler),
) -> VisitStatusResponse | JSONResponse:
    """POST /api/v1/visits/{visit_id}/archive → 200 OK"""
    result = await handler.handle(ArchiveVisit(context=context, visit_id=visit_id))

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitStatusResponse.from_dto(result.value)
