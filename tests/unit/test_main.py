"""
Tests for main application startup, health checks, and error rendering.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from studypath.core.exceptions import (
    DuplicateAnswer,
    NotFound,
    SessionClosed,
    SessionExpired,
    ValidationError,
)
from studypath.main import app


@pytest.fixture
async def client() -> AsyncClient:
    """Create test client for main app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealthEndpoints:
    """Test all health check endpoints."""

    async def test_root_endpoint(self, client: AsyncClient) -> None:
        """Test root endpoint returns service info."""
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "StudyPath Platform"
        assert data["status"] == "operational"
        assert data["version"] == "0.1.0"
        assert "environment" in data

    async def test_health_check_endpoint(self, client: AsyncClient) -> None:
        """Test /health endpoint reports each check."""
        response = await client.get("/health")

        # Can be 200 (healthy) or 503 (unhealthy) depending on DB state
        assert response.status_code in [200, 503]
        data = response.json()
        assert data["status"] in ["healthy", "unhealthy"]
        assert "environment" in data
        assert "database" in data["checks"]
        assert data["checks"]["assessment_configs"]["status"] == "healthy"
        assert data["checks"]["assessment_configs"]["configs"] == 2

    async def test_readiness_check(self, client: AsyncClient) -> None:
        response = await client.get("/health/ready")

        assert response.status_code in [200, 503]
        assert response.json()["status"] in ["ready", "not_ready"]

    async def test_liveness_check(self, client: AsyncClient) -> None:
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}


class TestErrorPayloads:
    """Test application errors carry stable codes and statuses."""

    def test_error_to_dict(self) -> None:
        assert NotFound("Question not found").to_dict() == {
            "error": "not_found",
            "detail": "Question not found",
        }

    def test_status_codes(self) -> None:
        assert NotFound("x").status_code == 404
        assert DuplicateAnswer("x").status_code == 409
        assert ValidationError("x").status_code == 422

    def test_expired_is_a_closed_session(self) -> None:
        error = SessionExpired("idle")
        assert isinstance(error, SessionClosed)
        assert error.code == "session_expired"
        assert error.status_code == 409


class TestRouting:
    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/nope")
        assert response.status_code == 404

    async def test_openapi_lists_routers(self, client: AsyncClient) -> None:
        response = await client.get("/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/v1/assessments/sessions" in paths
        assert "/api/v1/answers" in paths
        assert "/api/v1/learning-style/results" in paths
        assert "/api/v1/progress" in paths
