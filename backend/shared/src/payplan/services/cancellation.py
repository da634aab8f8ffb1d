"""Resolve when a cancelled property stops accruing nights.

A property that is cancelled keeps billing until the booking's
cancellation date, or its own earlier checkout if it has one. If the
guest gave less notice than the property's notify window, the shortfall
is added back as extra billable days owed to the host.
"""

import datetime as dt

from payplan.models.booking import BookingCancellation, Property

from .calendar import as_date


def notice_days(notification_date: dt.date | None, cancel_base: dt.date) -> int:
    """Days of notice given before ``cancel_base``; never negative."""
    if notification_date is None:
        return 0
    return max(0, (as_date(cancel_base) - as_date(notification_date)).days)


def effective_cancel_end(
    prop: Property,
    cancellation: BookingCancellation,
) -> dt.date | None:
    """Date from which a cancelled property's nights stop counting.

    Args:
        prop: The property
        cancellation: Booking-level notification and cancellation dates

    Returns:
        Cutoff date, or None if the property is not cancelled or the
        booking has no cancellation date
    """
    if not prop.is_cancelled or cancellation.cancellation_date is None:
        return None

    cancel_base = as_date(cancellation.cancellation_date)
    override = prop.own_checkout_override
    if override is not None and as_date(override) < cancel_base:
        cancel_base = as_date(override)

    shortfall = 0
    if prop.notify_day_offset > 0:
        given = notice_days(cancellation.notification_date, cancel_base)
        shortfall = max(0, prop.notify_day_offset - given)

    # A cutoff past the last representable date bills the whole stay either way
    if shortfall > (dt.date.max - cancel_base).days:
        return dt.date.max
    return cancel_base + dt.timedelta(days=shortfall)
