"""Global exception handlers for FastAPI application.

This module provides exception handlers that catch exceptions escaping route
handlers and convert them to RFC 7807 Problem Details responses.

Handlers:
    http_exception_handler: Converts HTTPException to RFC 7807 format
    validation_exception_handler: Converts RequestValidationError to RFC 7807 format
    stale_aggregate_handler: Optimistic concurrency failure → 409
    invariant_violation_handler: ValueError from entity construction → 500 (critical log)
    generic_exception_handler: Catches all unhandled exceptions

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.config import settings
from src.core.container import get_logger
from src.core.enums import ErrorCode
from src.domain.errors import StaleAggregateError
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors.error_response_builder import (
    PROBLEM_JSON,
)
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)


# HTTP status code to (title, slug) mapping
_HTTP_STATUS_INFO: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    409: ("Resource Conflict", "conflict"),
    415: ("Unsupported Media Type", "unsupported-media-type"),
    422: ("Validation Failed", "validation-failed"),
    500: ("Internal Server Error", "internal-server-error"),
    503: ("Service Unavailable", "service-unavailable"),
}


def _get_status_title(status_code: int) -> str:
    """Get human-readable title for HTTP status code."""
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[0]


def _get_error_slug(status_code: int) -> str:
    """Get kebab-case error slug for the problem type URL."""
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[1]


def _problem_response(
    problem: ProblemDetails, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(mode="json", exclude_none=True),
        headers=headers,
        media_type=PROBLEM_JSON,
    )


def _internal_error_problem(request: Request) -> ProblemDetails:
    return ProblemDetails(
        type=f"{settings.api_base_url}/errors/internal-server-error",
        title="Internal Server Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please contact support with the trace ID.",
        instance=str(request.url.path),
        errors=None,
        trace_id=get_trace_id(),
    )


async def http_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert HTTPException to RFC 7807 Problem Details response.

    Covers dependency failures (missing studio headers → 401) and routing
    errors (unknown path → 404, wrong method → 405).

    Args:
        request: FastAPI Request object.
        exc: HTTPException raised by handler, dependency or router.

    Returns:
        JSONResponse with RFC 7807 ProblemDetails.
    """
    # Type narrowing: registered only for HTTPException
    assert isinstance(exc, StarletteHTTPException)

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/{_get_error_slug(exc.status_code)}",
        title=_get_status_title(exc.status_code),
        status=exc.status_code,
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        instance=str(request.url.path),
        errors=None,
        trace_id=get_trace_id(),
    )

    # Preserve any headers from HTTPException (e.g., Allow)
    return _problem_response(problem, headers=getattr(exc, "headers", None))


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert RequestValidationError to RFC 7807 Problem Details response.

    Example:
        >>> # POST /api/v1/appointments with a non-UUID color_id
        >>> # {
        >>> #   "type": "http://localhost:8000/errors/validation-failed",
        >>> #   "title": "Validation Failed",
        >>> #   "status": 422,
        >>> #   "errors": [
        >>> #     {"field": "color_id", "code": "uuid_parsing", "message": "..."}
        >>> #   ],
        >>> # }
    """
    assert isinstance(exc, RequestValidationError)

    field_errors: list[ErrorDetail] = []
    for error in exc.errors():
        # Skip "body" prefix (["body", "schedule", "end_datetime"] → "schedule.end_datetime")
        loc = error.get("loc", [])
        field_parts = [str(p) for p in loc if p != "body"]
        field_name = ".".join(field_parts) if field_parts else "unknown"

        field_errors.append(
            ErrorDetail(
                field=field_name,
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/validation-failed",
        title="Validation Failed",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Request validation failed. Check 'errors' for details.",
        instance=str(request.url.path),
        errors=field_errors if field_errors else None,
        trace_id=get_trace_id(),
    )
    return _problem_response(problem)


async def stale_aggregate_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render an optimistic concurrency failure as 409.

    The request session has already rolled back by the time this runs; the
    client should reload the resource and retry.
    """
    assert isinstance(exc, StaleAggregateError)

    get_logger().warning(
        "concurrent_modification_rejected",
        aggregate_type=exc.aggregate_type,
        aggregate_id=str(exc.aggregate_id),
        loaded_version=exc.version,
        path=request.url.path,
    )

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/{ErrorCode.CONCURRENT_MODIFICATION.value}",
        title="Resource Conflict",
        status=status.HTTP_409_CONFLICT,
        detail=f"{exc.aggregate_type} was modified concurrently, reload and retry",
        instance=str(request.url.path),
        errors=None,
        trace_id=get_trace_id(),
    )
    return _problem_response(problem)


async def invariant_violation_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle ValueError escaping a handler.

    These come from entity and value-object constructors (financial
    integrity, malformed persisted rows) and indicate a defect, not bad
    input. Details are logged, never returned.
    """
    get_logger().critical(
        "invariant_violation",
        error=exc,
        path=request.url.path,
        method=request.method,
    )
    return _problem_response(_internal_error_problem(request))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    Converts any unhandled exception into an RFC 7807 500 response without
    leaking stack traces or internal details to API consumers.
    """
    get_logger().error(
        "unhandled_exception",
        error=exc,
        path=request.url.path,
        method=request.method,
    )
    return _problem_response(_internal_error_problem(request))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Args:
        app: FastAPI application instance

    Example:
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StaleAggregateError, stale_aggregate_handler)
    app.add_exception_handler(ValueError, invariant_violation_handler)
    # Catch-all for 500 errors
    app.add_exception_handler(Exception, generic_exception_handler)
