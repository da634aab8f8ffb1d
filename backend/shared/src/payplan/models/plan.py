"""Computed payment plan models.

None of these are stored: they are rebuilt from the booking, the holiday
calendar and the paid-period selection every time a plan is requested.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from .enums import BillingCadence

ZERO = Decimal("0")


class BillingPeriod(BaseModel):
    """Half-open billing period ``[start, end)``."""

    model_config = ConfigDict(strict=True)

    start: dt.date
    end: dt.date


class PeriodTotals(BaseModel):
    """Charges for one billing period."""

    model_config = ConfigDict(strict=True)

    start: dt.date
    end: dt.date
    nights: int = Field(..., ge=0, description="Eligible nights in the period")
    property_nights: list[int] = Field(
        default_factory=list,
        description="Eligible nights charged per property, in booking order",
    )
    deposit: Decimal = ZERO
    service_fee: Decimal = ZERO
    final_total: Decimal = ZERO


class PlanTotals(BaseModel):
    """Column sums of a totals table."""

    model_config = ConfigDict(strict=True)

    nights: int = 0
    deposit: Decimal = ZERO
    service_fee: Decimal = ZERO
    final_total: Decimal = ZERO


class HostRefundRow(BaseModel):
    """Paid nights to refund for one cancelled property."""

    model_config = ConfigDict(strict=True)

    title: str
    cancelled_nights: int = Field(..., gt=0)
    service_fee: Decimal
    final_total: Decimal


class HostRefundTotals(BaseModel):
    model_config = ConfigDict(strict=True)

    service_fee: Decimal = ZERO
    final_total: Decimal = ZERO


class HostRefundResult(BaseModel):
    """Refund rows for cancelled properties plus grand totals."""

    model_config = ConfigDict(strict=True)

    rows: list[HostRefundRow] = Field(default_factory=list)
    totals: HostRefundTotals = Field(default_factory=HostRefundTotals)

    @property
    def is_empty(self) -> bool:
        return not self.rows


class PaymentPlan(BaseModel):
    """Everything the payment plan page shows for a booking."""

    model_config = ConfigDict(strict=True)

    booking_id: str
    billing_cadence: BillingCadence
    periods: list[BillingPeriod]
    deposit_total: Decimal
    no_cancel: list[PeriodTotals]
    no_cancel_totals: PlanTotals
    show_with_cancel: bool = Field(
        ...,
        description="Booking has a cancellation date and at least one cancelled property",
    )
    with_cancel: list[PeriodTotals] = Field(default_factory=list)
    with_cancel_totals: PlanTotals = Field(default_factory=PlanTotals)
    effective_cancel_ends: list[dt.date | None] = Field(
        default_factory=list,
        description="Date each property stops accruing nights, in booking order",
    )
    paid_periods: list[int] = Field(default_factory=list)
    host_refund: HostRefundResult = Field(default_factory=HostRefundResult)
