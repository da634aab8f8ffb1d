"""Booking models: stay, properties and booking-level cancellation.

These models are lax (not strict) so they can be populated from JSON
request bodies where dates arrive as ISO strings and prices as numbers.
"""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import BillingCadence, Weekday

# One transaction item is reserved for the booking row itself
MAX_PROPERTIES_PER_BOOKING = 99

# Ten years of notice
MAX_NOTIFY_DAY_OFFSET = 3650

# Matches the DECIMAL(10,2) columns prices were stored in
PRICE_MAX_DIGITS = 10
PRICE_DECIMAL_PLACES = 2


class Stay(BaseModel):
    """Dates and billing rules for a booking."""

    model_config = ConfigDict(strict=False)

    check_in: dt.date = Field(..., description="Check-in date (YYYY-MM-DD)")
    check_out: dt.date = Field(..., description="Check-out date (YYYY-MM-DD), exclusive")
    eligible_weekdays: list[Weekday] = Field(
        default_factory=list,
        description="Weekdays that count as billable nights; empty means every day",
    )
    exclude_holidays: bool = Field(
        default=False, description="Skip public holidays when counting nights"
    )
    billing_cadence: BillingCadence = Field(
        default=BillingCadence.MONTHLY, description="How the stay is split into periods"
    )

    @field_validator("eligible_weekdays", mode="before")
    @classmethod
    def lowercase_weekdays(cls, v: Any) -> Any:
        """Accept weekday codes in any case."""
        if isinstance(v, (list, tuple, set, frozenset)):
            return [d.strip().lower() if isinstance(d, str) else d for d in v]
        return v

    @field_validator("eligible_weekdays")
    @classmethod
    def dedupe_weekdays(cls, v: list[Weekday]) -> list[Weekday]:
        """Drop duplicates and keep Monday-first order."""
        chosen = set(v)
        return [day for day in Weekday if day in chosen]

    @field_validator("billing_cadence", mode="before")
    @classmethod
    def parse_cadence(cls, v: Any) -> Any:
        if isinstance(v, str):
            return BillingCadence.parse(v)
        return v

    @model_validator(mode="after")
    def check_out_after_check_in(self) -> "Stay":
        if self.check_out <= self.check_in:
            raise ValueError("Checkout date must be greater than checkin date.")
        return self


class Property(BaseModel):
    """A property let as part of a booking."""

    model_config = ConfigDict(strict=False)

    title: str = Field(..., description="Property name shown on the plan")
    night_price: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        description="Price per night",
    )
    deposit: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        description="One-off deposit",
    )
    is_cancelled: bool = Field(default=False)
    notify_day_offset: int = Field(
        default=0,
        ge=0,
        le=MAX_NOTIFY_DAY_OFFSET,
        description="Days of cancellation notice owed to the host",
    )
    own_checkout_override: dt.date | None = Field(
        default=None,
        description="Early checkout date for this property only",
    )

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title is required.")
        return v


class BookingCancellation(BaseModel):
    """When the guest gave notice and when the cancellation takes effect."""

    model_config = ConfigDict(strict=False)

    notification_date: dt.date | None = None
    cancellation_date: dt.date | None = None

    @field_validator("notification_date", "cancellation_date", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class BookingCreate(BaseModel):
    """Data required to create or fully replace a booking."""

    model_config = ConfigDict(strict=False)

    stay: Stay
    service_fee: bool = Field(default=False, description="Charge the per-night service fee")
    cancellation: BookingCancellation = Field(default_factory=BookingCancellation)
    properties: list[Property] = Field(..., description="Properties in booking order")

    @field_validator("properties")
    @classmethod
    def properties_required(cls, v: list[Property]) -> list[Property]:
        if not v:
            raise ValueError("At least one property is required.")
        if len(v) > MAX_PROPERTIES_PER_BOOKING:
            raise ValueError(
                f"A booking can hold at most {MAX_PROPERTIES_PER_BOOKING} properties."
            )
        return v

    @model_validator(mode="after")
    def overrides_within_stay(self) -> "BookingCreate":
        for idx, prop in enumerate(self.properties):
            override = prop.own_checkout_override
            if override is None:
                continue
            if not self.stay.check_in <= override <= self.stay.check_out:
                raise ValueError(
                    f"Property #{idx + 1}: checkout date must fall within the stay."
                )
        return self

    @property
    def has_cancelled_property(self) -> bool:
        return any(p.is_cancelled for p in self.properties)


class Booking(BookingCreate):
    """A stored booking with its properties."""

    booking_id: str = Field(..., description="Unique booking ID")
    created_at: dt.datetime = Field(..., description="Creation timestamp")
    updated_at: dt.datetime = Field(..., description="Last update timestamp")


class BookingSummary(BaseModel):
    """Row in the booking list."""

    model_config = ConfigDict(strict=True)

    booking_id: str
    check_in: dt.date
    check_out: dt.date
    billing_cadence: BillingCadence
    property_count: int = Field(..., ge=0)
    is_cancelled: bool = Field(
        ..., description="Booking has a cancellation date"
    )
    created_at: dt.datetime
