"""Per-period deposit, service fee and rent totals.

Two tables are produced for a booking: one as if nothing was cancelled,
and one where each cancelled property stops accruing at its effective
cancel end. The deposit is charged once, on the first period.
"""

import datetime as dt
from collections.abc import Collection, Sequence
from decimal import Decimal

from payplan.models.booking import BookingCancellation, Property
from payplan.models.enums import Weekday
from payplan.models.plan import ZERO, BillingPeriod, PeriodTotals, PlanTotals

from .calendar import count_eligible_nights
from .cancellation import effective_cancel_end

# Flat fee per property per eligible night
SERVICE_FEE_PER_NIGHT = Decimal("0.5")


def _build_row(
    index: int,
    period: BillingPeriod,
    nights: int,
    property_nights: list[int],
    properties: Sequence[Property],
    service_fee_enabled: bool,
    deposit_total: Decimal,
) -> PeriodTotals:
    final_total = sum(
        (p.night_price * n for p, n in zip(properties, property_nights)), ZERO
    )
    service_fee = (
        SERVICE_FEE_PER_NIGHT * sum(property_nights) if service_fee_enabled else ZERO
    )
    return PeriodTotals(
        start=period.start,
        end=period.end,
        nights=nights,
        property_nights=property_nights,
        deposit=deposit_total if index == 0 else ZERO,
        service_fee=service_fee,
        final_total=final_total,
    )


def compute_no_cancel_totals(
    periods: Sequence[BillingPeriod],
    properties: Sequence[Property],
    service_fee_enabled: bool,
    eligible_weekdays: Collection[Weekday | str],
    holidays: Collection[dt.date],
    deposit_total: Decimal,
) -> list[PeriodTotals]:
    """Totals per period with every property billed for the full period."""
    rows: list[PeriodTotals] = []
    for index, period in enumerate(periods):
        nights = count_eligible_nights(period.start, period.end, eligible_weekdays, holidays)
        rows.append(
            _build_row(
                index,
                period,
                nights,
                [nights] * len(properties),
                properties,
                service_fee_enabled,
                deposit_total,
            )
        )
    return rows


def compute_with_cancel_totals(
    periods: Sequence[BillingPeriod],
    properties: Sequence[Property],
    service_fee_enabled: bool,
    eligible_weekdays: Collection[Weekday | str],
    holidays: Collection[dt.date],
    deposit_total: Decimal,
    cancellation: BookingCancellation,
) -> list[PeriodTotals]:
    """Totals per period with cancelled properties cut off.

    A cancelled property is billed for ``[period.start,
    min(cancel_end, period.end))``, which is empty once the period
    starts after its cutoff.

    Returns:
        One row per period, or an empty list if the booking has no
        cancellation date
    """
    if cancellation.cancellation_date is None:
        return []

    cutoffs = [effective_cancel_end(p, cancellation) for p in properties]

    rows: list[PeriodTotals] = []
    for index, period in enumerate(periods):
        nights = count_eligible_nights(period.start, period.end, eligible_weekdays, holidays)
        property_nights = [
            nights
            if cutoff is None
            else count_eligible_nights(
                period.start, min(cutoff, period.end), eligible_weekdays, holidays
            )
            for cutoff in cutoffs
        ]
        rows.append(
            _build_row(
                index,
                period,
                nights,
                property_nights,
                properties,
                service_fee_enabled,
                deposit_total,
            )
        )
    return rows


def summarize_totals(rows: Sequence[PeriodTotals]) -> PlanTotals:
    """Column sums for a totals table."""
    return PlanTotals(
        nights=sum(r.nights for r in rows),
        deposit=sum((r.deposit for r in rows), ZERO),
        service_fee=sum((r.service_fee for r in rows), ZERO),
        final_total=sum((r.final_total for r in rows), ZERO),
    )
