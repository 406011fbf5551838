"""Shared plumbing for SQLAlchemy repository adapters.

Handlers fan out reads with ``asyncio.gather``, and all repositories of a
request share one AsyncSession, which does not allow concurrent use. Every
statement therefore goes through a lock stored in ``session.info``, so
repositories built on the same session serialize their database calls
while still letting the gather branches interleave everything else.

Repositories flush and never commit; the session scope commits once.
"""

import asyncio
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Executable, Result
from sqlalchemy.ext.asyncio import AsyncSession

_SESSION_LOCK_KEY = "repository_lock"


def session_lock(session: AsyncSession) -> asyncio.Lock:
    """Return the lock shared by every repository of a session.

    Args:
        session: Request session.

    Returns:
        asyncio.Lock: Created on first use and cached in ``session.info``.
    """
    lock = session.info.get(_SESSION_LOCK_KEY)
    if lock is None:
        lock = asyncio.Lock()
        session.info[_SESSION_LOCK_KEY] = lock
    return lock


class SQLAlchemyRepository:
    """Base class for repository adapters.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self._lock = session_lock(session)

    async def _execute(self, stmt: Executable) -> Result[Any]:
        async with self._lock:
            return await self.session.execute(stmt)

    async def _scalars(self, stmt: Executable) -> Sequence[Any]:
        result = await self._execute(stmt)
        return result.scalars().all()

    async def _scalar_one_or_none(self, stmt: Executable) -> Any:
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def _add(self, *models: Any) -> None:
        async with self._lock:
            self.session.add_all(models)
            await self.session.flush()

    async def _add_in_savepoint(self, *models: Any) -> None:
        """Insert inside a savepoint.

        A constraint violation rolls back only the savepoint, leaving the
        request transaction usable for the caller.
        """
        async with self._lock:
            async with self.session.begin_nested():
                self.session.add_all(models)
                await self.session.flush()

    async def _flush(self) -> None:
        async with self._lock:
            await self.session.flush()
