"""Business-day checks and walking.

A `DayFilter` decides whether a calendar date is a non-business day. Filters
compose with ``|``: a day is skipped if any member matches.

Example:
    >>> from caldelta import ExcludedDates, NonBusinessDays, resolve_instant, shift
    >>> closed = NonBusinessDays() | ExcludedDates(["2025-12-25"])
    >>> shift(resolve_instant("2025-12-24T09:00:00Z"), 1, closed)
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date, timedelta

from typing_extensions import override

from caldelta.errors import CalendarError, ErrorKind
from caldelta.instant import Instant
from caldelta.timezones import local_date, to_zone
from caldelta.util import WEEKDAY_NAMES

logger = logging.getLogger(__name__)

# Mapping from day names to Python weekday integers
_DAY_MAP = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
    "mon": 0,
    "tue": 1,
    "wed": 2,
    "thu": 3,
    "fri": 4,
    "sat": 5,
    "sun": 6,
}


def weekday_number(name: str) -> int:
    """Map a weekday name (full or three-letter, any case) to 0=Monday..6=Sunday."""
    try:
        return _DAY_MAP[name.strip().lower()]
    except (KeyError, AttributeError) as exc:
        raise CalendarError.invalid_weekday(name) from exc


class DayFilter(ABC):

    @abstractmethod
    def matches(self, day: date) -> bool:
        """Return True if `day` is not a business day."""
        pass

    def __or__(self, other: "DayFilter") -> "DayFilter":
        return AnyOf(self, other)

    def closed_weekdays(self) -> frozenset[int]:
        """Weekday numbers this filter closes outright, whatever the date."""
        return frozenset()

    def closes_every_weekday(self) -> bool:
        """True if no weekday can ever be a business day under this filter."""
        return len(self.closed_weekdays()) == 7


class NonBusinessDays(DayFilter):
    """Weekdays that never count as business days (Saturday and Sunday by default)."""

    def __init__(self, days: Iterable[str] = ("saturday", "sunday")):
        if isinstance(days, str):
            days = [days]
        self.weekdays: frozenset[int] = frozenset(weekday_number(d) for d in days)

    @classmethod
    def from_business_days(cls, days: Iterable[str]) -> "NonBusinessDays":
        """Build the complement of an explicit list of working weekdays."""
        if isinstance(days, str):
            days = [days]
        working = {weekday_number(d) for d in days}
        return cls(WEEKDAY_NAMES[i] for i in range(7) if i not in working)

    @property
    def business_day_names(self) -> list[str]:
        return [WEEKDAY_NAMES[i] for i in range(7) if i not in self.weekdays]

    @override
    def matches(self, day: date) -> bool:
        return day.weekday() in self.weekdays

    @override
    def closed_weekdays(self) -> frozenset[int]:
        return self.weekdays

    def __repr__(self) -> str:
        names = [WEEKDAY_NAMES[i] for i in sorted(self.weekdays)]
        return f"NonBusinessDays({names!r})"


class ExcludedDates(DayFilter):
    """Specific calendar dates (holidays) that are never business days."""

    def __init__(self, dates: Iterable[str | date] = ()):
        parsed: set[date] = set()
        for d in dates:
            if isinstance(d, date):
                parsed.add(d)
                continue
            try:
                parsed.add(date.fromisoformat(d.strip()))
            except (ValueError, AttributeError) as exc:
                raise CalendarError.invalid_instant(str(d)) from exc
        self.dates: frozenset[date] = frozenset(parsed)

    @override
    def matches(self, day: date) -> bool:
        return day in self.dates

    def __repr__(self) -> str:
        return f"ExcludedDates({sorted(d.isoformat() for d in self.dates)!r})"


class AnyOf(DayFilter):
    def __init__(self, *filters: DayFilter):
        flattened: list[DayFilter] = []
        for f in filters:
            if isinstance(f, AnyOf):
                flattened.extend(f.filters)
            else:
                flattened.append(f)
        self.filters: tuple[DayFilter, ...] = tuple(flattened)

    @override
    def matches(self, day: date) -> bool:
        return any(f.matches(day) for f in self.filters)

    @override
    def closed_weekdays(self) -> frozenset[int]:
        return frozenset().union(*(f.closed_weekdays() for f in self.filters))


WEEKENDS = NonBusinessDays()


def weekday_name(instant: Instant, tz: str = "UTC") -> str:
    return WEEKDAY_NAMES[to_zone(instant, tz).weekday()]


def is_business_day(
    instant: Instant, predicate: DayFilter | None = None, tz: str = "UTC"
) -> bool:
    """True iff the calendar date of `instant` in `tz` is not matched by `predicate`."""
    predicate = WEEKENDS if predicate is None else predicate
    return not predicate.matches(local_date(instant, tz))


def shift(
    instant: Instant,
    days: int | None,
    predicate: DayFilter | None = None,
    tz: str = "UTC",
) -> Instant:
    """Move `instant` by `days` business days, keeping its wall-clock time in `tz`.

    The walk steps one calendar day at a time in the direction of the sign and
    only counts days it lands on that are business days. The starting day is
    never evaluated, so ``days=0`` returns `instant` unchanged.

    Raises:
        CalendarError: ``MISSING_COUNT`` if `days` is None, or
            ``INVALID_WEEKDAY_NAME`` if the predicate closes all seven weekdays.
    """
    if days is None:
        raise CalendarError.missing_count("shift")
    predicate = WEEKENDS if predicate is None else predicate
    if days == 0:
        return instant
    if predicate.closes_every_weekday():
        raise CalendarError(
            ErrorKind.INVALID_WEEKDAY_NAME,
            "Invalid weekday configuration: every weekday is a non-business day",
        )

    step = timedelta(days=1 if days > 0 else -1)
    remaining = abs(days)
    current = to_zone(instant, tz)
    while remaining:
        try:
            current += step
        except OverflowError as exc:
            raise CalendarError.invalid_instant(
                f"{instant} shifted by {days} business days"
            ) from exc
        if not predicate.matches(current.date()):
            remaining -= 1
    result = Instant.from_datetime(current)
    logger.debug("shift %s by %d business days -> %s", instant, days, result)
    return result
