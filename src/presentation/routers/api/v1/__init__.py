"""API v1 routers.

All routes are generated from the Route Metadata Registry at startup.
The registry (ROUTE_REGISTRY) is the single source of truth for all endpoints.
See src/presentation/routers/api/v1/routes/registry.py for the complete route catalog.

Resources:
    /api/v1/appointments           - Appointment booking, cancellation, conversion
    /api/v1/visits                 - Visit lifecycle
    /api/v1/visits/{id}/protocols  - Protocol generation and listing
    /api/v1/protocols              - Protocol signature workflow
    /api/v1/protocol-rules         - Protocol rule administration
"""

from fastapi import APIRouter

from src.presentation.routers.api.v1.routes.generator import (
    register_routes_from_registry,
)
from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY

# Create v1 router and generate all routes from registry
v1_router = APIRouter(prefix="/api/v1")
register_routes_from_registry(v1_router, ROUTE_REGISTRY)

__all__ = [
    "v1_router",
]
