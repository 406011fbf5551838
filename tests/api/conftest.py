"""API test fixtures.

Handlers are replaced through ``app.dependency_overrides`` so endpoints run
without a database. Studio context comes from the gateway headers exactly
as in production.
"""

from collections.abc import Callable, Iterator
from typing import Any
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from src.main import app
from src.presentation.routers.api.middleware.studio_context_dependencies import (
    STUDIO_HEADER,
    USER_HEADER,
)
from tests.conftest import new_id


class StubHandler:
    """Handler double returning a fixed result and recording messages."""

    def __init__(self, result: Any) -> None:
        self.result = result
        self.messages: list[Any] = []

    async def handle(self, message: Any) -> Any:
        self.messages.append(message)
        return self.result


@pytest.fixture
def client() -> TestClient:
    """Provide test client (lifespan not started)."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def studio_id() -> UUID:
    return new_id()


@pytest.fixture
def user_id() -> UUID:
    return new_id()


@pytest.fixture
def headers(studio_id: UUID, user_id: UUID) -> dict[str, str]:
    """Gateway headers identifying the studio and staff member."""
    return {STUDIO_HEADER: str(studio_id), USER_HEADER: str(user_id)}


@pytest.fixture
def override() -> Iterator[Callable[[Callable[..., Any], Any], StubHandler]]:
    """Install a StubHandler for a handler dependency.

    Usage:
        handler = override(get_confirm_visit_handler, Success(value=...))
    """

    def _override(dependency: Callable[..., Any], result: Any) -> StubHandler:
        handler = StubHandler(result)
        app.dependency_overrides[dependency] = lambda: handler
        return handler

    yield _override
    app.dependency_overrides.clear()
