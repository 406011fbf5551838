"""Error response builder for RFC 7807 Problem Details.

This module provides utilities to build RFC 7807 compliant error responses
from application layer errors.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 7807 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.config import settings
from src.core.errors import ValidationError
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

PROBLEM_JSON = "application/problem+json"

_STATUS_BY_CODE: dict[ApplicationErrorCode, int] = {
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ApplicationErrorCode.COMMAND_EXECUTION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ApplicationErrorCode.QUERY_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ApplicationErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ApplicationErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ApplicationErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ApplicationErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
}

_TITLE_BY_CODE: dict[ApplicationErrorCode, str] = {
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: "Validation Failed",
    ApplicationErrorCode.COMMAND_EXECUTION_FAILED: "Command Execution Failed",
    ApplicationErrorCode.QUERY_FAILED: "Query Failed",
    ApplicationErrorCode.UNAUTHORIZED: "Authentication Required",
    ApplicationErrorCode.FORBIDDEN: "Access Denied",
    ApplicationErrorCode.NOT_FOUND: "Resource Not Found",
    ApplicationErrorCode.CONFLICT: "Resource Conflict",
}


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses.

    Converts application layer errors into standardized RFC 7807 JSON responses
    with appropriate HTTP status codes and structured error information.

    Example:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
        ...     message="Only DRAFT visits can be confirmed",
        ... )
        >>> response = ErrorResponseBuilder.from_application_error(
        ...     error=error,
        ...     request=request,
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    @staticmethod
    def from_application_error(
        error: ApplicationError,
        request: Request,
        trace_id: str,
    ) -> JSONResponse:
        """Convert ApplicationError to RFC 7807 JSON response.

        Args:
            error: Application layer error to convert
            request: FastAPI Request object (for instance URL)
            trace_id: Request trace ID for debugging

        Returns:
            JSONResponse with RFC 7807 ProblemDetails content
        """
        status_code = ErrorResponseBuilder._get_status_code(error.code)
        domain_error = error.domain_error
        # Domain code is more specific than the application category
        slug = domain_error.code.value if domain_error else error.code.value

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{slug}",
            title=ErrorResponseBuilder._get_title(error.code),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            errors=None,
            trace_id=trace_id or None,
        )

        # Field-specific errors for validation failures naming a field
        if isinstance(domain_error, ValidationError) and domain_error.field:
            problem.errors = [
                ErrorDetail(
                    field=domain_error.field,
                    code=domain_error.code.value,
                    message=domain_error.message,
                )
            ]

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(mode="json", exclude_none=True),
            media_type=PROBLEM_JSON,
        )

    @staticmethod
    def _get_status_code(code: ApplicationErrorCode) -> int:
        """Map application error code to HTTP status code.

        Example:
            >>> ErrorResponseBuilder._get_status_code(
            ...     ApplicationErrorCode.NOT_FOUND
            ... )
            404
        """
        return _STATUS_BY_CODE.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @staticmethod
    def _get_title(code: ApplicationErrorCode) -> str:
        """Get human-readable title for application error code."""
        return _TITLE_BY_CODE.get(code, "Internal Server Error")
