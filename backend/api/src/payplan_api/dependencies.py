"""FastAPI dependency injection providers for shared services.

Services are lazily instantiated and cached with @lru_cache so every
request reuses the same instances.

Usage in routes:
    from payplan_api.dependencies import get_booking_service

    @router.get("/bookings")
    async def list_bookings(
        service: BookingService = Depends(get_booking_service),
    ):
        ...

Service Dependency Graph:
    DynamoDBService (singleton via get_dynamodb_service)
        ├── BookingService ─────┐
        ├── HolidayService ─────┼── PaymentPlanService
        └── PaidPeriodStore ────┘

Testing:
    Use reset_services() to clear cached instances between tests.
"""

from functools import lru_cache

from payplan.services.booking_service import BookingService
from payplan.services.dynamodb import get_dynamodb_service
from payplan.services.holiday_service import HolidayService
from payplan.services.paid_periods import PaidPeriodStore
from payplan.services.payment_plan import PaymentPlanService


@lru_cache
def get_booking_service() -> BookingService:
    """Get cached BookingService instance."""
    return BookingService(db=get_dynamodb_service())


@lru_cache
def get_holiday_service() -> HolidayService:
    """Get cached HolidayService instance."""
    return HolidayService(db=get_dynamodb_service())


@lru_cache
def get_paid_period_store() -> PaidPeriodStore:
    """Get cached PaidPeriodStore instance."""
    return PaidPeriodStore(db=get_dynamodb_service())


@lru_cache
def get_payment_plan_service() -> PaymentPlanService:
    """Get cached PaymentPlanService instance.

    Returns:
        PaymentPlanService wired to the booking, holiday and paid-period
        services.
    """
    return PaymentPlanService(
        bookings=get_booking_service(),
        holidays=get_holiday_service(),
        paid_periods=get_paid_period_store(),
    )


def reset_services() -> None:
    """Clear all cached service instances.

    Call this in test fixtures to ensure clean state between tests.
    Also resets the underlying DynamoDB singleton.
    """
    from payplan.services.dynamodb import reset_dynamodb_service

    get_booking_service.cache_clear()
    get_holiday_service.cache_clear()
    get_paid_period_store.cache_clear()
    get_payment_plan_service.cache_clear()

    reset_dynamodb_service()
