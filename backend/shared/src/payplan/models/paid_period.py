"""Paid-period selection model."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class PaidPeriodSelection(BaseModel):
    """Billing periods the operator has marked as collected.

    Stored per booking with a TTL; it only lives as long as an
    editing session would.
    """

    model_config = ConfigDict(strict=True)

    booking_id: str
    periods: list[int] = Field(default_factory=list)
    updated_at: dt.datetime
    expires_at: int = Field(..., description="Expiry as Unix timestamp (DynamoDB TTL)")
