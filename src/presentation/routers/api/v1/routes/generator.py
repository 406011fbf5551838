"""Route generator for the API Route Registry.

This module provides register_routes_from_registry(), which generates FastAPI routes
from RouteMetadata entries at application startup, converting declarative
metadata into runtime routes.

Functions:
    register_routes_from_registry: Generate all routes from registry
    _build_dependencies: Build FastAPI dependencies from auth policy
    _build_responses: Build OpenAPI responses dict from error specs

Usage:
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
    from src.presentation.routers.api.v1.routes.generator import register_routes_from_registry

    v1_router = APIRouter(prefix="/api/v1")
    register_routes_from_registry(v1_router, ROUTE_REGISTRY)
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.presentation.routers.api.middleware.studio_context_dependencies import (
    get_studio_context,
)
from src.presentation.routers.api.v1.errors import ProblemDetails
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    RouteMetadata,
)


def register_routes_from_registry(
    router: APIRouter,
    registry: list[RouteMetadata],
) -> None:
    """Generate FastAPI routes from registry metadata.

    Args:
        router: FastAPI APIRouter to register routes on
        registry: List of RouteMetadata entries to convert into routes

    Example:
        >>> v1_router = APIRouter(prefix="/api/v1")
        >>> register_routes_from_registry(v1_router, ROUTE_REGISTRY)
    """
    for metadata in registry:
        dependencies = _build_dependencies(metadata.auth_policy)
        responses = _build_responses(metadata.errors) if metadata.errors else None

        router.add_api_route(
            path=metadata.path,
            endpoint=metadata.handler,
            methods=[metadata.method.value],
            response_model=metadata.response_model,
            status_code=metadata.status_code,
            tags=list(metadata.tags),  # Convert Sequence to list for FastAPI
            summary=metadata.summary,
            description=metadata.description,
            operation_id=metadata.operation_id,
            responses=responses,
            dependencies=dependencies,
            deprecated=metadata.deprecated,
        )


def _build_dependencies(auth_policy: AuthPolicy) -> list[Any]:
    """Build FastAPI dependencies from auth policy.

    Auth policy mapping:
        PUBLIC: No dependencies
        STUDIO_MEMBER: Depends(get_studio_context) - rejects missing headers

    Handlers that need the context still declare ``CurrentStudio``; FastAPI
    caches the dependency so it is resolved once per request.

    Raises:
        ValueError: For an unknown auth level (fail closed).
    """
    match auth_policy.level:
        case AuthLevel.PUBLIC:
            return []

        case AuthLevel.STUDIO_MEMBER:
            return [Depends(get_studio_context)]

        case _:
            msg = f"Unknown auth level: {auth_policy.level}"
            raise ValueError(msg)


def _build_responses(errors: list[ErrorSpec]) -> dict[int | str, dict[str, Any]]:
    """Build OpenAPI responses dict from error specifications.

    Example:
        >>> _build_responses([ErrorSpec(status=404, description="Visit not found")])
        {404: {"description": "Visit not found", "model": ProblemDetails}}
    """
    return {
        error.status: {
            "description": error.description,
            "model": error.model or ProblemDetails,
        }
        for error in errors
    }
