"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (PostgreSQL)
- Logging (structlog console)
- Object storage (S3)

Request-scoped:
- Database session (one unit of work per request)
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.object_storage_protocol import ObjectStorageProtocol


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns Database instance with connection pool.
    Use get_db_session() for per-request sessions.

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON, one event per line)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_object_storage() -> "ObjectStorageProtocol":
    """Get object storage singleton (app-scoped).

    The boto3 client is thread-safe and shared across requests.
    """
    from src.infrastructure.storage.s3_object_storage import S3ObjectStorage

    return S3ObjectStorage(
        bucket=settings.storage_bucket_name,
        region=settings.aws_region,
        endpoint_url=settings.storage_endpoint_url,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception (including StaleAggregateError)
        - Always closes session

    Yields:
        Database session for request duration.

    Usage:
        @router.post("/appointments")
        async def create_appointment(
            session: AsyncSession = Depends(get_db_session)
        ):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
