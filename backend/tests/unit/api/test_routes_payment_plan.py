"""Tests for payment plan and paid-period routes."""

from decimal import Decimal
from typing import Any

from fastapi.testclient import TestClient


def plan_url(booking: dict[str, Any]) -> str:
    return f"/api/bookings/{booking['booking_id']}/payment-plan"


def paid_url(booking: dict[str, Any]) -> str:
    return f"/api/bookings/{booking['booking_id']}/paid-periods"


class TestGetPaymentPlan:
    def test_plan_for_uncancelled_booking(
        self, client: TestClient, created_booking: dict[str, Any]
    ) -> None:
        response = client.get(plan_url(created_booking))

        assert response.status_code == 200
        plan = response.json()
        assert plan["billing_cadence"] == "weekly"
        assert [(p["start"], p["end"]) for p in plan["periods"]] == [
            ("2024-01-01", "2024-01-08"),
            ("2024-01-08", "2024-01-15"),
        ]
        assert Decimal(plan["deposit_total"]) == Decimal("300")
        totals = plan["no_cancel_totals"]
        assert totals["nights"] == 14
        assert Decimal(totals["final_total"]) == Decimal("2100")
        assert Decimal(totals["service_fee"]) == Decimal("14")
        assert plan["show_with_cancel"] is False
        assert plan["with_cancel"] == []
        assert plan["host_refund"]["rows"] == []

    def test_plan_for_cancelled_booking(
        self, client: TestClient, cancelled_booking: dict[str, Any]
    ) -> None:
        plan = client.get(plan_url(cancelled_booking)).json()

        assert plan["show_with_cancel"] is True
        assert plan["effective_cancel_ends"] == ["2024-01-11", None]
        assert plan["with_cancel"][1]["property_nights"] == [3, 7]
        assert Decimal(plan["with_cancel_totals"]["final_total"]) == Decimal("1700")

    def test_longest_notice_window_bills_full_stay(
        self, client: TestClient, cancelled_booking_data: dict[str, Any]
    ) -> None:
        from payplan.models import MAX_NOTIFY_DAY_OFFSET

        cancelled_booking_data["properties"][0]["notify_day_offset"] = MAX_NOTIFY_DAY_OFFSET
        booking = client.post("/api/bookings", json=cancelled_booking_data).json()

        response = client.get(plan_url(booking))

        assert response.status_code == 200
        plan = response.json()
        assert plan["effective_cancel_ends"][0] == "2034-01-05"
        assert plan["with_cancel_totals"]["final_total"] == plan["no_cancel_totals"]["final_total"]

    def test_missing_booking(self, client: TestClient) -> None:
        response = client.get("/api/bookings/BKG-000000000000/payment-plan")

        assert response.status_code == 404


class TestPaidPeriods:
    def test_mark_paid_returns_refund(
        self, client: TestClient, cancelled_booking: dict[str, Any]
    ) -> None:
        response = client.put(paid_url(cancelled_booking), json={"periods": [0, 1]})

        assert response.status_code == 200
        plan = response.json()
        assert plan["paid_periods"] == [0, 1]
        (row,) = plan["host_refund"]["rows"]
        assert row["title"] == "Harbour Flat"
        assert row["cancelled_nights"] == 4
        assert Decimal(row["final_total"]) == Decimal("400")
        assert Decimal(plan["host_refund"]["totals"]["service_fee"]) == Decimal("2")

    def test_selection_persists(
        self, client: TestClient, cancelled_booking: dict[str, Any]
    ) -> None:
        client.put(paid_url(cancelled_booking), json={"periods": [1]})

        plan = client.get(plan_url(cancelled_booking)).json()

        assert plan["paid_periods"] == [1]

    def test_invalid_index(self, client: TestClient, created_booking: dict[str, Any]) -> None:
        response = client.put(paid_url(created_booking), json={"periods": [0, 7]})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "ERR_002"
        assert body["details"]["invalid_periods"] == "7"

    def test_negative_index(self, client: TestClient, created_booking: dict[str, Any]) -> None:
        response = client.put(paid_url(created_booking), json={"periods": [-1]})

        assert response.status_code == 400

    def test_clear(self, client: TestClient, cancelled_booking: dict[str, Any]) -> None:
        client.put(paid_url(cancelled_booking), json={"periods": [1]})

        response = client.delete(paid_url(cancelled_booking))

        assert response.status_code == 204
        plan = client.get(plan_url(cancelled_booking)).json()
        assert plan["paid_periods"] == []
        assert plan["host_refund"]["rows"] == []

    def test_clear_missing_booking(self, client: TestClient) -> None:
        response = client.delete("/api/bookings/BKG-000000000000/paid-periods")

        assert response.status_code == 404

    def test_mark_paid_missing_booking(self, client: TestClient) -> None:
        response = client.put(
            "/api/bookings/BKG-000000000000/paid-periods", json={"periods": [0]}
        )

        assert response.status_code == 404
