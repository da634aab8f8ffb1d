"""Pytest configuration and fixtures for payment plan backend tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto
- Sample booking data and models
"""

import os
from typing import Any, Generator

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-payplan")

# Only set fake credentials for moto if no real credentials are present
if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

TABLE_PREFIX = os.environ["DYNAMODB_TABLE_PREFIX"]


# === DynamoDB Fixtures ===


@pytest.fixture(autouse=True)
def reset_dynamodb_singleton() -> Generator[None, None, None]:
    """Reset DynamoDB singleton before and after each test.

    This ensures tests using mock_aws get a fresh service instance
    inside the mock context.
    """
    from payplan.services.dynamodb import reset_dynamodb_service

    reset_dynamodb_service()
    yield
    reset_dynamodb_service()


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    if not os.environ.get("AWS_PROFILE"):
        os.environ["AWS_ACCESS_KEY_ID"] = "testing"
        os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
        os.environ["AWS_SECURITY_TOKEN"] = "testing"
        os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


@pytest.fixture
def dynamodb_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Create a mocked DynamoDB client."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name="eu-west-1")
        yield client


@pytest.fixture
def create_tables(dynamodb_client: Any) -> None:
    """Create all required DynamoDB tables for testing."""
    tables = [
        {
            "TableName": f"{TABLE_PREFIX}-bookings",
            "KeySchema": [{"AttributeName": "booking_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "booking_id", "AttributeType": "S"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-properties",
            "KeySchema": [
                {"AttributeName": "booking_id", "KeyType": "HASH"},
                {"AttributeName": "property_index", "KeyType": "RANGE"},
            ],
            "AttributeDefinitions": [
                {"AttributeName": "booking_id", "AttributeType": "S"},
                {"AttributeName": "property_index", "AttributeType": "N"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-holidays",
            "KeySchema": [{"AttributeName": "holiday_date", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "holiday_date", "AttributeType": "S"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-paid-periods",
            "KeySchema": [{"AttributeName": "booking_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "booking_id", "AttributeType": "S"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
            "TimeToLiveSpecification": {
                "AttributeName": "expires_at",
                "Enabled": True,
            },
        },
    ]

    for table_config in tables:
        # TimeToLiveSpecification needs to be set after table creation
        ttl_spec = table_config.pop("TimeToLiveSpecification", None)
        dynamodb_client.create_table(**table_config)

        if ttl_spec:
            dynamodb_client.update_time_to_live(
                TableName=table_config["TableName"],
                TimeToLiveSpecification=ttl_spec,
            )


@pytest.fixture
def db(create_tables: None) -> Any:
    """DynamoDBService bound to the mocked tables."""
    from payplan.services.dynamodb import get_dynamodb_service

    return get_dynamodb_service()


# === Sample Data Fixtures ===


@pytest.fixture
def sample_booking_data() -> dict[str, Any]:
    """Booking request body as JSON would deliver it."""
    return {
        "stay": {
            "check_in": "2024-01-01",
            "check_out": "2024-01-15",
            "eligible_weekdays": [],
            "exclude_holidays": False,
            "billing_cadence": "weekly",
        },
        "service_fee": True,
        "cancellation": {
            "notification_date": None,
            "cancellation_date": None,
        },
        "properties": [
            {
                "title": "Harbour Flat",
                "night_price": "100.00",
                "deposit": "200.00",
                "is_cancelled": False,
                "notify_day_offset": 0,
            },
            {
                "title": "Garden Studio",
                "night_price": "50.00",
                "deposit": "100.00",
                "is_cancelled": False,
                "notify_day_offset": 0,
            },
        ],
    }


@pytest.fixture
def sample_booking_create(sample_booking_data: dict[str, Any]) -> Any:
    """Validated BookingCreate built from sample_booking_data."""
    from payplan.models import BookingCreate

    return BookingCreate.model_validate(sample_booking_data)


@pytest.fixture
def cancelled_booking_data(sample_booking_data: dict[str, Any]) -> dict[str, Any]:
    """Sample booking where the first property is cancelled mid-stay.

    Notice was given on the day of cancellation, so a 3-day notify
    window pushes the cutoff from 2024-01-08 to 2024-01-11.
    """
    data = {**sample_booking_data}
    data["cancellation"] = {
        "notification_date": "2024-01-08",
        "cancellation_date": "2024-01-08",
    }
    data["properties"] = [
        {**sample_booking_data["properties"][0], "is_cancelled": True, "notify_day_offset": 3},
        sample_booking_data["properties"][1],
    ]
    return data
