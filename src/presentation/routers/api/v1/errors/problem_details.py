"""RFC 7807 problem documents returned by the studio API.

https://tools.ietf.org/html/rfc7807
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """One offending input field (request body path or command field)."""

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """Body of every non-2xx response (media type application/problem+json).

    ``type`` ends in the most specific error code known for the failure,
    e.g. ``.../errors/mandatory_protocols_unsigned`` when a visit cannot be
    confirmed. ``errors`` is present only for field-level validation
    failures; ``trace_id`` echoes the X-Trace-ID of the request.

    Example:
        >>> ProblemDetails(
        ...     type="http://localhost:8000/errors/visit_already_exists",
        ...     title="Resource Conflict",
        ...     status=409,
        ...     detail="A visit already exists for this appointment",
        ...     instance="/api/v1/appointments/0190f1d2-7c3a-7b4e-9a51-3f2d1c0b9a87/convert",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["http://localhost:8000/errors/invalid_date_range"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Validation Failed"],
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        examples=[400],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["Schedule end must be after start"],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/appointments"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
    trace_id: str | None = Field(
        None,
        description="Request trace ID for debugging",
    )
