"""Payment plan assembly for a booking.

Combines the billing periods, both totals tables and the host refund
reconciliation into a single PaymentPlan.
"""

import datetime as dt
from collections.abc import Collection, Iterable
from decimal import Decimal
from typing import TYPE_CHECKING

from payplan.models import Booking, BookingError, ErrorCode, PaymentPlan, PeriodTotals, Property
from payplan.models.plan import ZERO
from payplan.utils.logging import get_logger, log_plan_calculation

from .cancellation import effective_cancel_end
from .host_refund import compute_host_refunds
from .period_totals import compute_no_cancel_totals, compute_with_cancel_totals, summarize_totals
from .periods import build_periods

if TYPE_CHECKING:
    from .booking_service import BookingService
    from .holiday_service import HolidayService
    from .paid_periods import PaidPeriodStore

logger = get_logger(__name__)


def deposit_total(properties: Iterable[Property]) -> Decimal:
    """Sum of every property's deposit."""
    return sum((p.deposit for p in properties), ZERO)


def calculate_payment_plan(
    booking: Booking,
    holidays: Collection[dt.date] = (),
    paid_periods: Collection[int] = (),
) -> PaymentPlan:
    """Compute the full payment plan for a booking.

    Args:
        booking: The booking with its properties
        holidays: Holiday calendar; only used if the stay excludes holidays
        paid_periods: Indices of periods marked as paid

    Returns:
        PaymentPlan with periods, totals tables and host refunds
    """
    stay = booking.stay
    weekdays = stay.eligible_weekdays
    if stay.exclude_holidays:
        observed = {d for d in holidays if stay.check_in <= d < stay.check_out}
    else:
        observed = set()

    periods = build_periods(stay.check_in, stay.check_out, stay.billing_cadence)
    deposits = deposit_total(booking.properties)
    paid = sorted({i for i in paid_periods if 0 <= i < len(periods)})

    no_cancel = compute_no_cancel_totals(
        periods, booking.properties, booking.service_fee, weekdays, observed, deposits
    )

    show_with_cancel = (
        booking.cancellation.cancellation_date is not None
        and booking.has_cancelled_property
    )
    with_cancel: list[PeriodTotals] = []
    if show_with_cancel:
        with_cancel = compute_with_cancel_totals(
            periods,
            booking.properties,
            booking.service_fee,
            weekdays,
            observed,
            deposits,
            booking.cancellation,
        )

    host_refund = compute_host_refunds(
        booking.properties,
        periods,
        paid,
        booking.service_fee,
        weekdays,
        observed,
        stay.check_out,
        booking.cancellation,
    )

    return PaymentPlan(
        booking_id=booking.booking_id,
        billing_cadence=stay.billing_cadence,
        periods=periods,
        deposit_total=deposits,
        no_cancel=no_cancel,
        no_cancel_totals=summarize_totals(no_cancel),
        show_with_cancel=show_with_cancel,
        with_cancel=with_cancel,
        with_cancel_totals=summarize_totals(with_cancel),
        effective_cancel_ends=[
            effective_cancel_end(p, booking.cancellation) for p in booking.properties
        ],
        paid_periods=paid,
        host_refund=host_refund,
    )


class PaymentPlanService:
    """Loads booking state from storage and builds its payment plan."""

    def __init__(
        self,
        bookings: "BookingService",
        holidays: "HolidayService",
        paid_periods: "PaidPeriodStore",
    ) -> None:
        """Initialize payment plan service.

        Args:
            bookings: Booking service instance
            holidays: Holiday service instance
            paid_periods: Paid-period store instance
        """
        self.bookings = bookings
        self.holidays = holidays
        self.paid_periods = paid_periods

    def get_plan(self, booking_id: str) -> PaymentPlan:
        """Build the payment plan for a stored booking.

        Raises:
            BookingError: BOOKING_NOT_FOUND if the booking does not exist
        """
        booking = self.bookings.require_booking(booking_id)
        return self._calculate(booking)

    def mark_paid(self, booking_id: str, periods: Collection[int]) -> PaymentPlan:
        """Replace the paid-period selection and return the updated plan.

        Args:
            booking_id: Booking to update
            periods: Period indices now marked as paid; empty clears

        Raises:
            BookingError: BOOKING_NOT_FOUND, or INVALID_PERIOD_INDEX if an
                index is outside the booking's current periods
        """
        booking = self.bookings.require_booking(booking_id)
        stay = booking.stay
        period_count = len(build_periods(stay.check_in, stay.check_out, stay.billing_cadence))

        invalid = sorted(i for i in periods if not 0 <= i < period_count)
        if invalid:
            raise BookingError(
                ErrorCode.INVALID_PERIOD_INDEX,
                details={
                    "invalid_periods": ",".join(str(i) for i in invalid),
                    "period_count": str(period_count),
                },
            )

        self.paid_periods.save(booking_id, periods)
        return self._calculate(booking)

    def _calculate(self, booking: Booking) -> PaymentPlan:
        stay = booking.stay
        holidays: set[dt.date] = set()
        if stay.exclude_holidays:
            holidays = self.holidays.holidays_between(stay.check_in, stay.check_out)
        paid = self.paid_periods.get(booking.booking_id)

        plan = calculate_payment_plan(booking, holidays, paid)

        log_plan_calculation(
            logger,
            booking.booking_id,
            cadence=stay.billing_cadence.value,
            periods=len(plan.periods),
            paid_periods=len(plan.paid_periods),
            refund_rows=len(plan.host_refund.rows),
        )
        return plan
