"""Route metadata types for the API Route Registry.

This module defines the core types for the Route Metadata Registry pattern.
The registry is the single source of truth for all API routes, generating
FastAPI routes, studio-context dependencies and OpenAPI metadata.

Core types:
    RouteMetadata: Complete route specification (method, path, handler, auth, docs)
    HTTPMethod: HTTP method enum (GET, POST, PATCH, PUT, DELETE)
    AuthPolicy: Access policy (PUBLIC, STUDIO_MEMBER)
    ErrorSpec: Error response specification for OpenAPI
    IdempotencyLevel: HTTP idempotency classification

Usage:
    from src.presentation.routers.api.v1.routes.metadata import RouteMetadata, HTTPMethod

    metadata = RouteMetadata(
        method=HTTPMethod.POST,
        path="/appointments",
        handler=create_appointment,
        response_model=AppointmentCreateResponse,
        status_code=201,
        auth_policy=AuthPolicy(level=AuthLevel.STUDIO_MEMBER),
    )
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel


# =============================================================================
# HTTP Method Enum
# =============================================================================


class HTTPMethod(str, Enum):
    """HTTP methods for API routes."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


# =============================================================================
# Access Policy
# =============================================================================


class AuthLevel(str, Enum):
    """Access levels for routes.

    Attributes:
        PUBLIC: No studio context required (health, docs)
        STUDIO_MEMBER: Requires gateway-forwarded studio and user headers
    """

    PUBLIC = "public"
    STUDIO_MEMBER = "studio_member"


@dataclass(frozen=True, kw_only=True)
class AuthPolicy:
    """Access policy for a route.

    Attributes:
        level: Access level.
        rationale: Optional note for routes that deviate from the default.

    Examples:
        >>> AuthPolicy(level=AuthLevel.STUDIO_MEMBER)
    """

    level: AuthLevel
    rationale: str | None = None


# =============================================================================
# Idempotency Level
# =============================================================================


class IdempotencyLevel(str, Enum):
    """HTTP idempotency classification.

    Attributes:
        SAFE: No side effects (GET) - cacheable
        IDEMPOTENT: Side effects, but repeatable (PUT, DELETE) - safe to retry
        NON_IDEMPOTENT: Side effects, not repeatable (POST, PATCH) - do not retry

    Reference:
        - RFC 7231 Section 4.2 (HTTP Semantics)
    """

    SAFE = "safe"
    IDEMPOTENT = "idempotent"
    NON_IDEMPOTENT = "non_idempotent"


# =============================================================================
# Error Specification
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class ErrorSpec:
    """Error response specification for OpenAPI documentation.

    Attributes:
        status: HTTP status code (e.g., 400, 404, 409)
        description: Human-readable error description
        model: Optional Pydantic model for response (defaults to ProblemDetails)

    Examples:
        >>> ErrorSpec(status=404, description="Visit not found")
        >>> ErrorSpec(status=409, description="Visit already exists for appointment")
    """

    status: int
    description: str
    model: type[BaseModel] | None = None


# =============================================================================
# Route Metadata (SSOT)
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class RouteMetadata:
    """Complete specification for an API route (Single Source of Truth).

    Identity fields:
        method: HTTP method (GET, POST, etc.)
        path: URL path relative to the version prefix (e.g., "/visits/{visit_id}")
        handler: Async function that implements the endpoint

    Grouping fields:
        resource: Resource category (e.g., "visits")
        tags: OpenAPI tags (e.g., ["Visits"])
        version: API version (e.g., "v1")

    OpenAPI documentation:
        summary: Short endpoint description
        description: Detailed endpoint description (markdown supported)
        operation_id: Stable operation ID for client generation

    Request/Response:
        response_model: Pydantic model for success response
        status_code: Expected success status (e.g., 200, 201, 204)
        errors: List of possible error responses for OpenAPI

    Behavior:
        idempotency: HTTP idempotency level
        auth_policy: Access policy

    Examples:
        >>> RouteMetadata(
        ...     method=HTTPMethod.GET,
        ...     path="/visits/{visit_id}",
        ...     handler=get_visit,
        ...     resource="visits",
        ...     tags=["Visits"],
        ...     summary="Get visit",
        ...     response_model=VisitResponse,
        ...     errors=[ErrorSpec(status=404, description="Visit not found")],
        ...     idempotency=IdempotencyLevel.SAFE,
        ...     auth_policy=AuthPolicy(level=AuthLevel.STUDIO_MEMBER),
        ... )
    """

    # Identity
    method: HTTPMethod
    path: str
    handler: Callable[..., Awaitable[Any]]

    # Grouping
    resource: str
    tags: Sequence[str]
    version: str = "v1"

    # OpenAPI documentation
    summary: str
    description: str | None = None
    operation_id: str | None = None

    # Request/Response
    response_model: type[BaseModel] | None = None
    status_code: int = 200
    errors: list[ErrorSpec] | None = None

    # Behavior
    idempotency: IdempotencyLevel
    auth_policy: AuthPolicy

    # Deprecation
    deprecated: bool = False
