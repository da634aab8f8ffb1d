"""Tests for booking, health and error-handling routes."""

from decimal import Decimal
from typing import Any

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient


class TestHealth:
    def test_ping(self, client: TestClient) -> None:
        response = client.get("/api/ping")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["service"] == "payplan-api"

    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_correlation_id_echoed(self, client: TestClient) -> None:
        response = client.get("/api/ping", headers={"X-Correlation-ID": "trace-42"})

        assert response.headers["X-Correlation-ID"] == "trace-42"

    def test_correlation_id_generated(self, client: TestClient) -> None:
        response = client.get("/api/ping")

        assert response.headers["X-Correlation-ID"]


class TestCreateBooking:
    def test_created(self, client: TestClient, sample_booking_data: dict[str, Any]) -> None:
        response = client.post("/api/bookings", json=sample_booking_data)

        assert response.status_code == 201
        body = response.json()
        assert body["booking_id"].startswith("BKG-")
        assert body["stay"]["billing_cadence"] == "weekly"
        assert [p["title"] for p in body["properties"]] == ["Harbour Flat", "Garden Studio"]
        assert Decimal(body["properties"][0]["night_price"]) == Decimal("100")

    def test_checkout_before_checkin(
        self, client: TestClient, sample_booking_data: dict[str, Any]
    ) -> None:
        sample_booking_data["stay"]["check_out"] = "2023-12-31"

        response = client.post("/api/bookings", json=sample_booking_data)

        assert response.status_code == 422
        assert "Checkout date must be greater than checkin date." in response.text

    def test_no_properties(self, client: TestClient, sample_booking_data: dict[str, Any]) -> None:
        sample_booking_data["properties"] = []

        response = client.post("/api/bookings", json=sample_booking_data)

        assert response.status_code == 422

    def test_negative_price(self, client: TestClient, sample_booking_data: dict[str, Any]) -> None:
        sample_booking_data["properties"][0]["night_price"] = -5

        response = client.post("/api/bookings", json=sample_booking_data)

        assert response.status_code == 422

    def test_price_precision_rejected(
        self, client: TestClient, sample_booking_data: dict[str, Any]
    ) -> None:
        sample_booking_data["properties"][0]["night_price"] = (
            "1.0000000000000000000000000000000000000001"
        )

        response = client.post("/api/bookings", json=sample_booking_data)

        assert response.status_code == 422
        assert client.get("/api/bookings").json()["total_count"] == 0

    def test_oversized_notify_offset_rejected(
        self, client: TestClient, sample_booking_data: dict[str, Any]
    ) -> None:
        sample_booking_data["properties"][0]["is_cancelled"] = True
        sample_booking_data["properties"][0]["notify_day_offset"] = 10_000_000
        sample_booking_data["cancellation"]["cancellation_date"] = "2024-01-06"

        response = client.post("/api/bookings", json=sample_booking_data)

        assert response.status_code == 422
        assert client.get("/api/bookings").json()["total_count"] == 0


class TestReadBookings:
    def test_get(self, client: TestClient, created_booking: dict[str, Any]) -> None:
        response = client.get(f"/api/bookings/{created_booking['booking_id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["booking_id"] == created_booking["booking_id"]
        assert body["stay"] == created_booking["stay"]
        assert [p["title"] for p in body["properties"]] == ["Harbour Flat", "Garden Studio"]
        assert Decimal(body["properties"][1]["deposit"]) == Decimal("100")

    def test_get_missing(self, client: TestClient) -> None:
        response = client.get("/api/bookings/BKG-000000000000")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "ERR_001"
        assert body["success"] is False
        assert body["details"] == {"booking_id": "BKG-000000000000"}

    def test_list(self, client: TestClient, created_booking: dict[str, Any]) -> None:
        response = client.get("/api/bookings")

        assert response.status_code == 200
        body = response.json()
        assert body["total_count"] == 1
        summary = body["bookings"][0]
        assert summary["booking_id"] == created_booking["booking_id"]
        assert summary["property_count"] == 2
        assert summary["is_cancelled"] is False


class TestUpdateBooking:
    def test_replace(
        self,
        client: TestClient,
        created_booking: dict[str, Any],
        sample_booking_data: dict[str, Any],
    ) -> None:
        sample_booking_data["properties"] = sample_booking_data["properties"][1:]
        sample_booking_data["stay"]["billing_cadence"] = "fortnighly"

        response = client.put(
            f"/api/bookings/{created_booking['booking_id']}", json=sample_booking_data
        )

        assert response.status_code == 200
        body = response.json()
        assert [p["title"] for p in body["properties"]] == ["Garden Studio"]
        assert body["stay"]["billing_cadence"] == "fortnightly"
        assert body["created_at"] == created_booking["created_at"]

    def test_replace_missing(
        self, client: TestClient, sample_booking_data: dict[str, Any]
    ) -> None:
        response = client.put("/api/bookings/BKG-000000000000", json=sample_booking_data)

        assert response.status_code == 404


class TestDeleteBooking:
    def test_delete(self, client: TestClient, created_booking: dict[str, Any]) -> None:
        booking_id = created_booking["booking_id"]

        response = client.delete(f"/api/bookings/{booking_id}")

        assert response.status_code == 204
        assert client.get(f"/api/bookings/{booking_id}").status_code == 404

    def test_delete_missing(self, client: TestClient) -> None:
        response = client.delete("/api/bookings/BKG-000000000000")

        assert response.status_code == 404
        assert response.json()["error_code"] == "ERR_001"


class TestStorageFailures:
    def test_client_error_renders_save_failed(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from payplan.services.booking_service import BookingService

        def fail(self: BookingService) -> None:
            raise ClientError(
                {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
                "Scan",
            )

        monkeypatch.setattr(BookingService, "list_bookings", fail)

        response = client.get("/api/bookings")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "ERR_004"
        assert body["details"]["aws_error_code"] == "ProvisionedThroughputExceededException"

    def test_cancelled_transaction_renders_save_failed(
        self,
        client: TestClient,
        sample_booking_data: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        from payplan.services.dynamodb import DynamoDBService

        monkeypatch.setattr(DynamoDBService, "transact_write", lambda self, items: False)

        response = client.post("/api/bookings", json=sample_booking_data)

        assert response.status_code == 500
        assert response.json()["error_code"] == "ERR_004"
