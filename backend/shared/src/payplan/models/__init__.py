"""Pydantic models for booking payment plan entities."""

from .booking import (
    MAX_NOTIFY_DAY_OFFSET,
    MAX_PROPERTIES_PER_BOOKING,
    Booking,
    BookingCancellation,
    BookingCreate,
    BookingSummary,
    Property,
    Stay,
)
from .enums import BillingCadence, Weekday
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    BookingError,
    ErrorCode,
    ErrorResponse,
)
from .holiday import Holiday, HolidaySyncResult
from .paid_period import PaidPeriodSelection
from .plan import (
    BillingPeriod,
    HostRefundResult,
    HostRefundRow,
    HostRefundTotals,
    PaymentPlan,
    PeriodTotals,
    PlanTotals,
)

__all__ = [
    # Enums
    "BillingCadence",
    "Weekday",
    # Booking
    "Booking",
    "BookingCancellation",
    "BookingCreate",
    "BookingSummary",
    "MAX_NOTIFY_DAY_OFFSET",
    "MAX_PROPERTIES_PER_BOOKING",
    "Property",
    "Stay",
    # Holiday
    "Holiday",
    "HolidaySyncResult",
    # Paid periods
    "PaidPeriodSelection",
    # Plan
    "BillingPeriod",
    "HostRefundResult",
    "HostRefundRow",
    "HostRefundTotals",
    "PaymentPlan",
    "PeriodTotals",
    "PlanTotals",
    # Errors
    "BookingError",
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "ErrorResponse",
]
