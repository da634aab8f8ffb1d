"""Host refund reconciliation for cancelled properties.

Only periods the operator has marked as paid are considered: nights in
unpaid periods were never collected, so there is nothing to give back.
"""

import datetime as dt
from collections.abc import Collection, Sequence

from payplan.models.booking import BookingCancellation, Property
from payplan.models.enums import Weekday
from payplan.models.plan import (
    ZERO,
    BillingPeriod,
    HostRefundResult,
    HostRefundRow,
    HostRefundTotals,
)

from .calendar import as_date, count_eligible_nights
from .cancellation import effective_cancel_end
from .period_totals import SERVICE_FEE_PER_NIGHT


def paid_cancelled_nights(
    cancel_end: dt.date,
    periods: Sequence[BillingPeriod],
    paid_periods: Collection[int],
    eligible_weekdays: Collection[Weekday | str],
    holidays: Collection[dt.date],
    check_out: dt.date,
) -> int:
    """Eligible nights in ``[cancel_end, check_out)`` that fall in paid periods."""
    nights = 0
    for index, period in enumerate(periods):
        if index not in paid_periods:
            continue
        start = max(cancel_end, period.start)
        end = min(period.end, check_out)
        if start < end:
            nights += count_eligible_nights(start, end, eligible_weekdays, holidays)
    return nights


def compute_host_refunds(
    properties: Sequence[Property],
    periods: Sequence[BillingPeriod],
    paid_periods: Collection[int],
    service_fee_enabled: bool,
    eligible_weekdays: Collection[Weekday | str],
    holidays: Collection[dt.date],
    check_out: dt.date,
    cancellation: BookingCancellation,
) -> HostRefundResult:
    """Refund owed per cancelled property for nights already paid.

    Properties whose cutoff is on or after checkout, or whose refundable
    night count is zero, are left out.

    Args:
        properties: Booking properties
        periods: Billing periods of the stay
        paid_periods: Indices into ``periods`` marked as paid
        service_fee_enabled: Whether the service fee was charged
        eligible_weekdays: Allowed weekday codes; empty allows every day
        holidays: Holidays that never count
        check_out: Stay checkout date
        cancellation: Booking-level notification and cancellation dates

    Returns:
        Refund rows and grand totals; empty if there is no cancellation
        date or no paid period
    """
    if cancellation.cancellation_date is None or not paid_periods:
        return HostRefundResult()

    check_out = as_date(check_out)
    paid = set(paid_periods)
    rows: list[HostRefundRow] = []

    for prop in properties:
        cancel_end = effective_cancel_end(prop, cancellation)
        if cancel_end is None or cancel_end >= check_out:
            continue

        nights = paid_cancelled_nights(
            cancel_end, periods, paid, eligible_weekdays, holidays, check_out
        )
        if nights <= 0:
            continue

        rows.append(
            HostRefundRow(
                title=prop.title,
                cancelled_nights=nights,
                service_fee=SERVICE_FEE_PER_NIGHT * nights if service_fee_enabled else ZERO,
                final_total=prop.night_price * nights,
            )
        )

    totals = HostRefundTotals(
        service_fee=sum((r.service_fee for r in rows), ZERO),
        final_total=sum((r.final_total for r in rows), ZERO),
    )
    return HostRefundResult(rows=rows, totals=totals)
