"""API models for booking endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from payplan.models import BookingCreate, BookingSummary


class BookingRequest(BookingCreate):
    """Request body to create or replace a booking."""

    model_config = ConfigDict(
        # strict=False allows string-to-date coercion from JSON
        strict=False,
        json_schema_extra={
            "examples": [
                {
                    "stay": {
                        "check_in": "2025-01-01",
                        "check_out": "2025-03-01",
                        "eligible_weekdays": ["mon", "tue", "wed", "thu", "fri"],
                        "exclude_holidays": True,
                        "billing_cadence": "monthly",
                    },
                    "service_fee": True,
                    "cancellation": {
                        "notification_date": "2025-01-20",
                        "cancellation_date": "2025-02-01",
                    },
                    "properties": [
                        {
                            "title": "Harbour Flat",
                            "night_price": "45.00",
                            "deposit": "200.00",
                            "is_cancelled": True,
                            "notify_day_offset": 14,
                        },
                        {
                            "title": "Garden Studio",
                            "night_price": "38.50",
                            "deposit": "150.00",
                        },
                    ],
                }
            ]
        },
    )


class BookingListResponse(BaseModel):
    """Response for the booking list."""

    model_config = ConfigDict(strict=True)

    bookings: list[BookingSummary] = Field(
        ..., description="Bookings, latest check-in first"
    )
    total_count: int = Field(..., ge=0)
