"""Calendar-unit arithmetic on instants.

Years and months move along the calendar with day-of-month clamping, weeks and
days move whole UTC days, and hours, minutes and seconds are exact offsets.
"""

from dataclasses import dataclass, fields

from dateutil.relativedelta import relativedelta

from caldelta.errors import CalendarError
from caldelta.instant import Instant
from caldelta.util import DAY, HOUR, MINUTE, SECOND, WEEK

# Application order; also the order used for display.
UNITS = ("years", "months", "weeks", "days", "hours", "minutes", "seconds")

_FIXED = {
    "weeks": WEEK,
    "days": DAY,
    "hours": HOUR,
    "minutes": MINUTE,
    "seconds": SECOND,
}


@dataclass(frozen=True, kw_only=True)
class CalendarDelta:
    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def __neg__(self) -> "CalendarDelta":
        return CalendarDelta(**{f.name: -getattr(self, f.name) for f in fields(self)})

    def __bool__(self) -> bool:
        return any(getattr(self, unit) for unit in UNITS)

    def parts(self) -> list[str]:
        """Describe the non-zero fields, e.g. ``["2 years", "1 month"]``."""
        out: list[str] = []
        for unit in UNITS:
            value = getattr(self, unit)
            if value:
                label = unit if value != 1 else unit[:-1]
                out.append(f"{value} {label}")
        return out

    @classmethod
    def from_mapping(cls, values: dict[str, int | None]) -> "CalendarDelta":
        """Build a delta from a sparse mapping; absent or None fields are zero."""
        return cls(**{unit: int(values.get(unit) or 0) for unit in UNITS})


def add_months(instant: Instant, months: int) -> Instant:
    """Shift by whole calendar months in UTC, clamping the day to the month's end.

    Time of day is preserved. Jan 31 + 1 month is Feb 28 (or 29 in leap years).
    """
    if not months:
        return instant
    try:
        shifted = instant.to_datetime() + relativedelta(months=months)
    except (OverflowError, ValueError) as exc:
        raise CalendarError.invalid_instant(f"{instant} shifted by {months} months") from exc
    return Instant.from_datetime(shifted)


def apply(instant: Instant, delta: CalendarDelta) -> Instant:
    """Return a new Instant with each field of `delta` applied in unit order.

    Years and months are separate steps, each clamping on its own, so
    2024-02-29 + 1 year 1 month is 2025-03-28.
    """
    instant = add_months(add_months(instant, 12 * delta.years), delta.months)
    ms = instant.ms
    for unit, size in _FIXED.items():
        value = getattr(delta, unit)
        if value:
            ms += value * size
    return Instant(ms)


def add_delta(instant: Instant, delta: CalendarDelta) -> Instant:
    return apply(instant, delta)


def subtract_delta(instant: Instant, delta: CalendarDelta) -> Instant:
    return apply(instant, -delta)
