"""Tests for health check endpoints."""

from api.dependencies import reset_container
from shared.config import get_settings


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0"}

    def test_readiness_check(self, client):
        """Readiness reports storage, push and token signing."""
        response = client.get("/api/ready")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ready",
            "storage": "memory",
            "live_push": "enabled",
            "auth": "configured",
        }

    def test_readiness_degraded_without_secret(self, client, monkeypatch):
        monkeypatch.setenv("COOKBOOK_JWT_SECRET", "")
        monkeypatch.setenv("COOKBOOK_BROADCAST_ENABLED", "false")
        get_settings.cache_clear()
        reset_container()

        data = client.get("/api/ready").json()

        assert data["status"] == "degraded"
        assert data["auth"] == "missing secret"
        assert data["live_push"] == "disabled"
