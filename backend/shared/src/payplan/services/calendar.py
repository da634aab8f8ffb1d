"""Calendar helpers for counting billable nights."""

import datetime as dt
from collections.abc import Collection, Iterator

from payplan.models.enums import Weekday

ONE_DAY = dt.timedelta(days=1)


def as_date(value: dt.date) -> dt.date:
    """Drop any time-of-day component."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def iter_days(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    """Yield each calendar day in ``[start, end)``."""
    day = as_date(start)
    stop = as_date(end)
    while day < stop:
        yield day
        day += ONE_DAY


def count_eligible_nights(
    start: dt.date,
    end: dt.date,
    eligible_weekdays: Collection[Weekday | str] = (),
    holidays: Collection[dt.date] = (),
) -> int:
    """Count billable nights in ``[start, end)``.

    A night counts unless its weekday is outside a non-empty
    ``eligible_weekdays`` or its date is a holiday.

    Args:
        start: First night
        end: Exclusive end (checkout side)
        eligible_weekdays: Allowed weekday codes; empty allows every day
        holidays: Dates that never count

    Returns:
        Number of eligible nights, 0 if ``end <= start``
    """
    allowed = {Weekday(code.lower()) for code in eligible_weekdays}
    skipped = {as_date(d) for d in holidays}

    return sum(
        1
        for day in iter_days(start, end)
        if (not allowed or Weekday.of(day) in allowed) and day not in skipped
    )
