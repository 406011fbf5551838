"""Visit protocols resource handlers.

Handlers:
    generate_visit_protocols  - Instantiate the rules applying to a visit stage
    list_visit_protocols      - List a visit's protocol instances
    mark_protocol_ready       - PENDING → READY_FOR_SIGNATURE
    sign_visit_protocol       - READY_FOR_SIGNATURE → SIGNED
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Query, Request
from fastapi.responses import JSONResponse

from src.application.commands import (
    GenerateVisitProtocols,
    MarkProtocolReadyForSignature,
    SignVisitProtocol,
)
from src.application.commands.handlers.visit_protocol_handlers import (
    GenerateVisitProtocolsHandler,
    MarkProtocolReadyForSignatureHandler,
    SignVisitProtocolHandler,
)
from src.application.queries import ListVisitProtocols
from src.application.queries.handlers.protocol_query_handlers import (
    ListVisitProtocolsHandler,
)
from src.core.container import (
    get_generate_visit_protocols_handler,
    get_list_visit_protocols_handler,
    get_mark_protocol_ready_handler,
    get_sign_visit_protocol_handler,
)
from src.core.result import Failure
from src.domain.enums import ProtocolStage
from src.presentation.routers.api.middleware.studio_context_dependencies import (
    CurrentStudio,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    map_handler_error,
)
from src.schemas.protocol_schemas import (
    ProtocolReadyRequest,
    ProtocolSignRequest,
    VisitProtocolGenerateRequest,
    VisitProtocolListResponse,
    VisitProtocolResponse,
)

ProtocolId = Annotated[UUID, Path(description="Visit protocol UUID")]
VisitId = Annotated[UUID, Path(description="Visit UUID")]


def _error_response(request: Request, error: str) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=map_handler_error(error),
        request=request,
        trace_id=get_trace_id() or "",
    )


async def generate_visit_protocols(
    request: Request,
    context: CurrentStudio,
    visit_id: VisitId,
    data: VisitProtocolGenerateRequest,
    handler: GenerateVisitProtocolsHandler = Depends(
        get_generate_visit_protocols_handler
    ),
) -> VisitProtocolListResponse | JSONResponse:
    """Generate protocol instances for a visit stage.

    POST /api/v1/visits/{visit_id}/protocols → 200 OK

    Idempotent per stage: when the stage already has instances they are
    returned unchanged.
    """
    result = await handler.handle(
        GenerateVisitProtocols(context=context, visit_id=visit_id, stage=data.stage)
    )

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitProtocolListResponse.from_dto(result.value)


async def list_visit_protocols(
    request: Request,
    context: CurrentStudio,
    visit_id: VisitId,
    stage: Annotated[ProtocolStage | None, Query(description="Filter by stage")] = None,
    handler: ListVisitProtocolsHandler = Depends(get_list_visit_protocols_handler),
) -> VisitProtocolListResponse | JSONResponse:
    """GET /api/v1/visits/{visit_id}/protocols → 200 OK"""
    result = await handler.handle(
        ListVisitProtocols(context=context, visit_id=visit_id, stage=stage)
    )

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitProtocolListResponse.from_dto(result.value)


async def mark_protocol_ready(
    request: Request,
    context: CurrentStudio,
    protocol_id: ProtocolId,
    data: ProtocolReadyRequest,
    handler: MarkProtocolReadyForSignatureHandler = Depends(
        get_mark_protocol_ready_handler
    ),
) -> VisitProtocolResponse | JSONResponse:
    """POST /api/v1/protocols/{protocol_id}/ready → 200 OK"""
    command = MarkProtocolReadyForSignature(
        context=context,
        protocol_id=protocol_id,
        filled_document_key=data.filled_document_key,
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitProtocolResponse.from_dto(result.value)


async def sign_visit_protocol(
    request: Request,
    context: CurrentStudio,
    protocol_id: ProtocolId,
    data: ProtocolSignRequest,
    handler: SignVisitProtocolHandler = Depends(get_sign_visit_protocol_handler),
) -> VisitProtocolResponse | JSONResponse:
    """Sign a protocol.

    POST /api/v1/protocols/{protocol_id}/sign → 200 OK

    A signed protocol is immutable; signing it again fails with
    ``protocol_immutable``.
    """
    command = SignVisitProtocol(
        context=context,
        protocol_id=protocol_id,
        signed_document_key=data.signed_document_key,
        signed_by=data.signed_by,
        signature_image_key=data.signature_image_key,
        notes=data.notes,
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return VisitProtocolResponse.from_dto(result.value)
