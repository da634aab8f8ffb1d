"""Split a stay into billing periods."""

import datetime as dt

from payplan.models.enums import BillingCadence
from payplan.models.plan import BillingPeriod

from .calendar import as_date

# Fixed-length cadences, in days
PERIOD_DAYS: dict[BillingCadence, int] = {
    BillingCadence.WEEKLY: 7,
    BillingCadence.FORTNIGHTLY: 14,
}


def first_of_next_month(day: dt.date) -> dt.date:
    """First day of the calendar month after ``day``."""
    if day.month == 12:
        return dt.date(day.year + 1, 1, 1)
    return dt.date(day.year, day.month + 1, 1)


def _next_boundary(cursor: dt.date, cadence: BillingCadence, check_out: dt.date) -> dt.date:
    if cadence in PERIOD_DAYS:
        end = cursor + dt.timedelta(days=PERIOD_DAYS[cadence])
    elif cadence is BillingCadence.MONTHLY:
        end = first_of_next_month(cursor)
    else:
        end = check_out
    return min(end, check_out)


def build_periods(
    check_in: dt.date,
    check_out: dt.date,
    cadence: BillingCadence | str,
) -> list[BillingPeriod]:
    """Partition ``[check_in, check_out)`` into contiguous billing periods.

    Weekly and fortnightly periods run 7 and 14 days from check-in.
    Monthly periods end on the first of the next calendar month, so only
    the first and last period can be partial. ``full`` yields one period.
    The last period is always clamped to checkout.

    Args:
        check_in: First night of the stay
        check_out: Checkout date (exclusive)
        cadence: Billing cadence, legacy spellings accepted

    Returns:
        Ordered periods, empty if ``check_out <= check_in``
    """
    start = as_date(check_in)
    stop = as_date(check_out)
    if stop <= start:
        return []

    cadence = BillingCadence.parse(cadence)
    periods: list[BillingPeriod] = []
    cursor = start
    while cursor < stop:
        end = _next_boundary(cursor, cadence, stop)
        periods.append(BillingPeriod(start=cursor, end=end))
        cursor = end

    return periods
