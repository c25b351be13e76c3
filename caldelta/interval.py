from dataclasses import dataclass

from caldelta.delta import CalendarDelta, add_months
from caldelta.instant import Instant
from caldelta.util import DAY, HOUR, MINUTE, SECOND

# Decomposition units in priority order (weeks is never one of them)
COMPONENT_UNITS = ("years", "months", "days", "hours", "minutes", "seconds")


@dataclass(frozen=True, kw_only=True)
class DurationComponents:
    """Calendar-accurate breakdown of an interval, always measured forward.

    `negative` records that the interval was given in reverse (second instant
    before the first); the counts themselves are never negative.
    """

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    negative: bool = False

    def __post_init__(self) -> None:
        for unit in COMPONENT_UNITS:
            if getattr(self, unit) < 0:
                raise ValueError(
                    f"DurationComponents.{unit} must be >= 0, got {getattr(self, unit)}"
                )

    @property
    def is_zero(self) -> bool:
        return not any(getattr(self, unit) for unit in COMPONENT_UNITS)

    def as_dict(self) -> dict[str, int]:
        return {unit: getattr(self, unit) for unit in COMPONENT_UNITS}

    def to_delta(self) -> CalendarDelta:
        """The forward CalendarDelta that rebuilds the later instant from the earlier."""
        return CalendarDelta(**self.as_dict())


@dataclass(frozen=True, kw_only=True)
class IntervalTotals:
    """Whole-interval length in each unit, signed by direction."""

    days: int
    hours: int
    minutes: int
    seconds: int


def _month_span(start: Instant, end: Instant) -> int:
    """Calendar-month boundaries between the UTC dates of `start` and `end`."""
    s, e = start.to_datetime(), end.to_datetime()
    return (e.year - s.year) * 12 + e.month - s.month


def _fit(start: Instant, end: Instant, months: int, step: int) -> int:
    """Back `months` off by one `step` if adding it to `start` overshoots `end`.

    Callers pass the month-boundary count, which can overshoot by at most one
    step when the day or time of day of `end` is earlier than `start`.
    """
    if months > 0 and add_months(start, months) > end:
        months -= step
    return months


def decompose(a: Instant, b: Instant) -> DurationComponents:
    """Break the interval between `a` and `b` into calendar units.

    Years and months are taken greedily from the earlier instant, each checked
    by applying it with `caldelta.delta.add_months`, so the result re-applied
    to the earlier instant lands exactly on the later one. What is left is a
    fixed-length span split into days, hours, minutes and seconds; sub-second
    remainders are dropped.
    """
    negative = b < a
    earlier, later = (b, a) if negative else (a, b)

    span = _month_span(earlier, later)
    years = _fit(earlier, later, 12 * (span // 12), 12) // 12
    cursor = add_months(earlier, 12 * years)

    months = _fit(cursor, later, _month_span(cursor, later), 1)
    if months == 12:
        # Feb 29 start: the year step backed off but 12 clamped months still fit
        months = 11
    cursor = add_months(cursor, months)

    rem = later.ms - cursor.ms
    days, rem = divmod(rem, DAY)
    hours, rem = divmod(rem, HOUR)
    minutes, rem = divmod(rem, MINUTE)
    seconds = rem // SECOND

    return DurationComponents(
        years=years,
        months=months,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        negative=negative,
    )


def _truncate(value: int, unit: int) -> int:
    """Divide toward zero."""
    return value // unit if value >= 0 else -(-value // unit)


def totals(a: Instant, b: Instant) -> IntervalTotals:
    """Length of ``b - a`` expressed whole in each unit (not a breakdown)."""
    diff = b.ms - a.ms
    return IntervalTotals(
        days=_truncate(diff, DAY),
        hours=_truncate(diff, HOUR),
        minutes=_truncate(diff, MINUTE),
        seconds=_truncate(diff, SECOND),
    )
