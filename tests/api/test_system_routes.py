"""API tests for system endpoints and cross-cutting HTTP behavior.

Tests:
- GET / and GET /health (no studio context required)
- X-Trace-ID propagation
- Unknown routes rendered as problem details
"""

import pytest

from src.core.config import settings


@pytest.mark.api
class TestSystemRoutes:
    """Test non-versioned endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "operational"
        assert data["version"] == settings.app_version

    def test_health_requires_no_headers(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


@pytest.mark.api
class TestCrossCuttingBehavior:
    """Test trace IDs and error rendering."""

    def test_trace_id_generated(self, client):
        response = client.get("/health")

        assert response.headers["X-Trace-ID"]

    def test_trace_id_echoed(self, client):
        response = client.get("/health", headers={"X-Trace-ID": "trace-abc"})

        assert response.headers["X-Trace-ID"] == "trace-abc"

    def test_unknown_route_is_problem_json(self, client, headers):
        response = client.get("/api/v1/invoices", headers=headers)

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("application/problem+json")
        data = response.json()
        assert data["title"] == "Resource Not Found"
        assert data["instance"] == "/api/v1/invoices"

    def test_missing_user_header_returns_401(self, client, studio_id):
        response = client.get(
            "/api/v1/visits", headers={"X-Studio-ID": str(studio_id)}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing X-User-ID header"
