"""Fixtures for API route tests."""

from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(create_tables: None) -> Generator[TestClient, None, None]:
    """TestClient with fresh service instances bound to mocked tables."""
    from payplan_api.dependencies import reset_services
    from payplan_api.main import app

    reset_services()
    yield TestClient(app)
    reset_services()


@pytest.fixture
def created_booking(client: TestClient, sample_booking_data: dict[str, Any]) -> dict[str, Any]:
    response = client.post("/api/bookings", json=sample_booking_data)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def cancelled_booking(
    client: TestClient, cancelled_booking_data: dict[str, Any]
) -> dict[str, Any]:
    response = client.post("/api/bookings", json=cancelled_booking_data)
    assert response.status_code == 201
    return response.json()
