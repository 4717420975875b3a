"""Tests for health check endpoints."""

from fastapi.testclient import TestClient

from api.app import create_app


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self):
        """Health endpoint should return 200 with status."""
        client = TestClient(create_app())
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data == {"status": "healthy", "version": "0.1.0"}

    def test_readiness_without_database(self):
        """Without DATABASE_URL the service is up but not ready."""
        client = TestClient(create_app())
        response = client.get("/api/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["database"] == "not_configured"
        assert data["schema_ready"] is False

    def test_startup_without_database(self):
        """Lifespan skips schema setup when no database is configured."""
        with TestClient(create_app()) as client:
            response = client.get("/api/health")
        assert response.status_code == 200
