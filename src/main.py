"""
Main FastAPI application entry point.

This module initializes the FastAPI application instance and wires
middleware, exception handlers and routers.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.container import get_database, get_event_bus, get_logger
from src.presentation.routers import system_router
from src.presentation.routers.api.middleware.trace_middleware import (
    TRACE_HEADER,
    TraceMiddleware,
)
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Configure event bus subscriptions
    - Shutdown: Dispose database connections

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    get_event_bus()
    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await get_database().close()
    logger.info("application_stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Multi-tenant detailing studio backend: appointments, visits, protocols",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[TRACE_HEADER],
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 7807 error responses)
register_exception_handlers(app)

app.include_router(system_router)
app.include_router(v1_router)
