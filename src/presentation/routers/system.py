"""System router for non-versioned application endpoints.

Provides root, liveness and configuration endpoints that are not part of
the versioned API contract. None of them require a studio context.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.core.config import settings


system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - basic status check.

    Returns:
        dict[str, str]: Service name, status and version.
    """
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> dict[str, str]:
    """Liveness endpoint for monitoring and load balancers."""
    return {"status": "healthy"}


@system_router.get("/config")
async def get_config() -> JSONResponse:
    """Configuration debug endpoint (development only).

    Returns:
        JSONResponse: Sanitized configuration, or 403 outside development.
    """
    if not settings.is_development:
        return JSONResponse(
            status_code=403,
            content={"detail": "Config endpoint only available in development"},
        )

    return JSONResponse(
        content={
            "environment": settings.environment.value,
            "debug": settings.debug,
            "api": {
                "name": settings.app_name,
                "version": settings.app_version,
                "base_url": settings.api_base_url,
            },
            "database": {
                "url": "<redacted>",  # Never expose credentials
                "echo": settings.db_echo,
            },
            "pagination": {
                "default_page_size": settings.default_page_size,
                "max_page_size": settings.max_page_size,
            },
            "storage": {
                "bucket": settings.storage_bucket_name,
                "region": settings.aws_region,
            },
            "cors": {
                "origins": settings.cors_origin_list,
            },
        }
    )
