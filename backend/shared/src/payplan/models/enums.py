"""Enumeration types for payment plan data models."""

import datetime as dt
from enum import Enum


class Weekday(str, Enum):
    """Three-letter weekday code, Monday first."""

    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @classmethod
    def of(cls, day: dt.date) -> "Weekday":
        """Weekday code for a calendar date."""
        return _WEEKDAY_ORDER[day.weekday()]


_WEEKDAY_ORDER: list[Weekday] = list(Weekday)


class BillingCadence(str, Enum):
    """How a stay is split into billing periods."""

    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    FULL = "full"

    @classmethod
    def parse(cls, value: "str | BillingCadence") -> "BillingCadence":
        """Parse a cadence value, accepting the legacy stored spellings.

        Older records store ``fortnighly`` and ``Monthly``; ``monthly_calendar``
        is accepted as another name for ``monthly``.

        Raises:
            ValueError: If the value is not a known cadence
        """
        if isinstance(value, cls):
            return value
        key = value.strip()
        if key in _LEGACY_CADENCES:
            return _LEGACY_CADENCES[key]
        return cls(key.lower())


_LEGACY_CADENCES: dict[str, BillingCadence] = {
    "fortnighly": BillingCadence.FORTNIGHTLY,
    "Monthly": BillingCadence.MONTHLY,
    "monthly_calendar": BillingCadence.MONTHLY,
}
