"""Protocol rules resource handlers.

Handlers:
    list_protocol_rules   - List the studio's rules (optionally per stage)
    create_protocol_rule  - Define a rule
    update_protocol_rule  - Reorder or change the mandatory flag
    delete_protocol_rule  - Remove a rule
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Query, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands import (
    CreateProtocolRule,
    DeleteProtocolRule,
    UpdateProtocolRule,
)
from src.application.commands.handlers.protocol_rule_handlers import (
    CreateProtocolRuleHandler,
    DeleteProtocolRuleHandler,
    UpdateProtocolRuleHandler,
)
from src.application.queries import ListProtocolRules
from src.application.queries.handlers.protocol_query_handlers import (
    ListProtocolRulesHandler,
)
from src.core.container import (
    get_create_protocol_rule_handler,
    get_delete_protocol_rule_handler,
    get_list_protocol_rules_handler,
    get_update_protocol_rule_handler,
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
    ProtocolRuleCreateRequest,
    ProtocolRuleListResponse,
    ProtocolRuleResponse,
    ProtocolRuleUpdateRequest,
)

RuleId = Annotated[UUID, Path(description="Protocol rule UUID")]


def _error_response(request: Request, error: str) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=map_handler_error(error),
        request=request,
        trace_id=get_trace_id() or "",
    )


async def list_protocol_rules(
    request: Request,
    context: CurrentStudio,
    stage: Annotated[ProtocolStage | None, Query(description="Filter by stage")] = None,
    handler: ListProtocolRulesHandler = Depends(get_list_protocol_rules_handler),
) -> ProtocolRuleListResponse | JSONResponse:
    """GET /api/v1/protocol-rules → 200 OK"""
    result = await handler.handle(ListProtocolRules(context=context, stage=stage))

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return ProtocolRuleListResponse.from_dto(result.value)


async def create_protocol_rule(
    request: Request,
    context: CurrentStudio,
    data: ProtocolRuleCreateRequest,
    handler: CreateProtocolRuleHandler = Depends(get_create_protocol_rule_handler),
) -> ProtocolRuleResponse | JSONResponse:
    """Define a protocol rule.

    POST /api/v1/protocol-rules → 201 Created

    Service-specific rules need at least one service; global rules must not
    name any.
    """
    command = CreateProtocolRule(
        context=context,
        template_id=data.template_id,
        trigger_type=data.trigger_type,
        stage=data.stage,
        service_ids=frozenset(data.service_ids),
        is_mandatory=data.is_mandatory,
        display_order=data.display_order,
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return ProtocolRuleResponse.from_dto(result.value)


async def update_protocol_rule(
    request: Request,
    context: CurrentStudio,
    rule_id: RuleId,
    data: ProtocolRuleUpdateRequest,
    handler: UpdateProtocolRuleHandler = Depends(get_update_protocol_rule_handler),
) -> ProtocolRuleResponse | JSONResponse:
    """PATCH /api/v1/protocol-rules/{rule_id} → 200 OK"""
    command = UpdateProtocolRule(
        context=context,
        rule_id=rule_id,
        display_order=data.display_order,
        is_mandatory=data.is_mandatory,
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return ProtocolRuleResponse.from_dto(result.value)


async def delete_protocol_rule(
    request: Request,
    context: CurrentStudio,
    rule_id: RuleId,
    handler: DeleteProtocolRuleHandler = Depends(get_delete_protocol_rule_handler),
) -> Response:
    """DELETE /api/v1/protocol-rules/{rule_id} → 204 No Content

    Protocol instances already generated from the rule are kept.
    """
    result = await handler.handle(DeleteProtocolRule(context=context, rule_id=rule_id))

    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
