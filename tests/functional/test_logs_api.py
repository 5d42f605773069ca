"""
API tests for request logging and the health endpoint.
"""

from fastapi.testclient import TestClient

from kbpages import __version__
from kbpages.core.exceptions import GatewayError


class TestHealth:

    def test_health(self, client: TestClient):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestRequestLogs:
    """GET /api/logs/"""

    def test_requests_are_logged(self, client: TestClient):
        client.post("/api/pages/query/preview", json={"category": "Logged"})

        response = client.get("/api/logs/", params={"limit": 100})
        assert response.status_code == 200

        entries = [log for log in response.json() if log["path"] == "/api/pages/query/preview"]
        assert entries
        assert entries[0]["method"] == "POST"
        assert entries[0]["status_code"] == 200
        assert "Logged" in entries[0]["request_body"]
        assert entries[0]["application_id"] == "kbpages"

    def test_log_reads_are_not_logged(self, client: TestClient):
        client.get("/api/logs/")

        response = client.get("/api/logs/", params={"limit": 1000})
        log_reads = [
            log for log in response.json() if log["path"].startswith("/api/logs") and log["status_code"] == 200
        ]
        assert log_reads == []

    def test_status_filter(self, client: TestClient):
        client.post("/api/pages/distinct", json={"column": "Status"})

        response = client.get("/api/logs/", params={"status_min": 400})
        assert response.status_code == 200

        logs = response.json()
        assert logs
        assert all(log["status_code"] >= 400 for log in logs)

    def test_limit_is_validated(self, client: TestClient):
        response = client.get("/api/logs/", params={"limit": 0})
        assert response.status_code == 422

    def test_get_log_by_id(self, client: TestClient):
        client.get("/api/health")
        latest = client.get("/api/logs/", params={"limit": 1}).json()[0]

        response = client.get(f"/api/logs/{latest['id']}")
        assert response.status_code == 200
        assert response.json()["path"] == latest["path"]

    def test_missing_log_is_404(self, client: TestClient):
        response = client.get("/api/logs/999999")
        assert response.status_code == 404

    def test_gateway_errors_record_upstream_status(self, client: TestClient, mock_gateway):
        mock_gateway.get_list_details.side_effect = GatewayError("HTTP 404", status_code=404)
        client.get("/api/lists/Missing%20List")

        logs = client.get("/api/logs/", params={"status_min": 502, "limit": 1000}).json()
        errors = [log for log in logs if log["path"].startswith("/api/lists/Missing") and log["error_type"]]
        assert errors
        assert errors[0]["upstream_status"] == 404
        assert errors[0]["error_type"] == "GatewayError"
