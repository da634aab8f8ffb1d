"""Payment plan endpoints.

The plan is computed on every request from the stored booking, the
holiday calendar and the paid-period selection.
"""

from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_204_NO_CONTENT

from payplan.models import PaymentPlan
from payplan.services.booking_service import BookingService
from payplan.services.paid_periods import PaidPeriodStore
from payplan.services.payment_plan import PaymentPlanService
from payplan_api.dependencies import (
    get_booking_service,
    get_paid_period_store,
    get_payment_plan_service,
)
from payplan_api.models.payment_plan import PaidPeriodsRequest

router = APIRouter(tags=["payment-plan"])


@router.get(
    "/bookings/{booking_id}/payment-plan",
    summary="Get payment plan",
    description="""
Compute the payment plan for a booking.

Returns the billing periods, the totals table without cancellations,
the totals table with cancellation cutoffs applied (only when the
booking has a cancellation date and a cancelled property), and the host
refund for cancelled nights in periods already paid.
""",
    response_model=PaymentPlan,
    responses={404: {"description": "Booking not found"}},
)
async def get_payment_plan(
    booking_id: str,
    service: PaymentPlanService = Depends(get_payment_plan_service),
) -> PaymentPlan:
    """Compute the payment plan."""
    return service.get_plan(booking_id)


@router.put(
    "/bookings/{booking_id}/paid-periods",
    summary="Mark periods as paid",
    description="""
Replace the set of paid billing periods and return the recomputed plan.

**Notes:**
- Indices refer to the booking's current periods (0-based)
- An empty list clears the selection
- Selections expire after PAID_PERIODS_TTL_DAYS days
""",
    response_model=PaymentPlan,
    responses={
        400: {"description": "Period index out of range"},
        404: {"description": "Booking not found"},
    },
)
async def set_paid_periods(
    booking_id: str,
    body: PaidPeriodsRequest,
    service: PaymentPlanService = Depends(get_payment_plan_service),
) -> PaymentPlan:
    """Store the paid-period selection."""
    return service.mark_paid(booking_id, body.periods)


@router.delete(
    "/bookings/{booking_id}/paid-periods",
    summary="Clear paid periods",
    status_code=HTTP_204_NO_CONTENT,
    responses={404: {"description": "Booking not found"}},
)
async def clear_paid_periods(
    booking_id: str,
    bookings: BookingService = Depends(get_booking_service),
    store: PaidPeriodStore = Depends(get_paid_period_store),
) -> Response:
    """Remove the paid-period selection."""
    bookings.require_booking(booking_id)
    store.clear(booking_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
