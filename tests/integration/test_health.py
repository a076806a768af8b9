"""Integration tests for health check endpoints."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    def test_health_returns_200(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_returns_healthy_status(self, client: TestClient) -> None:
        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["timestamp"] is not None
        assert data["version"] == "0.1.0"


class TestReadinessEndpoint:
    """Tests for /health/ready endpoint."""

    def test_readiness_returns_200_when_healthy(self, client: TestClient) -> None:
        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert [check["name"] for check in data["checks"]] == ["database"]

    def test_readiness_returns_503_when_database_fails(
        self, client: TestClient, mock_admin_client: MagicMock
    ) -> None:
        mock_admin_client.table.return_value.select.return_value.limit.return_value.execute.side_effect = (
            Exception("Connection refused")
        )

        response = client.get("/health/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["checks"][0]["healthy"] is False
        assert "Connection refused" in data["checks"][0]["error"]

    def test_readiness_queries_profiles_table(self, client: TestClient, mock_admin_client: MagicMock) -> None:
        client.get("/health/ready")

        mock_admin_client.table.assert_called_with("profiles")
