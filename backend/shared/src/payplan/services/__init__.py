"""Calculation and storage services for booking payment plans."""

from .booking_service import BookingService
from .dynamodb import DynamoDBService, get_dynamodb_service, reset_dynamodb_service
from .holiday_service import HolidayService
from .paid_periods import PaidPeriodStore
from .payment_plan import PaymentPlanService, calculate_payment_plan

__all__ = [
    "BookingService",
    "DynamoDBService",
    "get_dynamodb_service",
    "reset_dynamodb_service",
    "HolidayService",
    "PaidPeriodStore",
    "PaymentPlanService",
    "calculate_payment_plan",
]
