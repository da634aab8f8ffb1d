"""Tests for holiday calendar routes."""

from fastapi.testclient import TestClient


class TestHolidayRoutes:
    def test_list_empty(self, client: TestClient) -> None:
        response = client.get("/api/holidays")

        assert response.status_code == 200
        assert response.json() == {"holidays": [], "total_count": 0}

    def test_sync_then_list(self, client: TestClient) -> None:
        response = client.put("/api/holidays", json={"dates": ["2024-12-25", "2024-01-01"]})

        assert response.status_code == 200
        assert response.json() == {"inserted": 2, "deleted": 0, "message": "2 inserted."}
        listed = client.get("/api/holidays").json()
        assert listed["holidays"] == ["2024-01-01", "2024-12-25"]

    def test_resync_reports_changes(self, client: TestClient) -> None:
        client.put("/api/holidays", json={"dates": ["2024-01-01", "2024-12-25"]})

        response = client.put("/api/holidays", json={"dates": ["2024-12-25", "2025-01-01"]})

        assert response.json()["message"] == "1 inserted and 1 deleted."

    def test_no_dates(self, client: TestClient) -> None:
        response = client.put("/api/holidays", json={"dates": []})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "ERR_003"
        assert body["message"] == "No dates provided"
