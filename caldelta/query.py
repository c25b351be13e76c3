"""Structured date queries: weekday hops and period boundaries.

Queries are evaluated on the wall clock of a timezone. Weekday hops keep the
time of day; period boundaries land on local midnight (start) or one
millisecond before the next period's midnight (end).

Example:
    >>> from caldelta import resolve_instant
    >>> from caldelta.query import DateQuery, evaluate
    >>> evaluate(
    ...     resolve_instant("2025-08-13T10:00:00Z"),
    ...     [DateQuery(type="nextWeekday", weekday="friday"),
    ...      DateQuery(type="endOfPeriod", period="day")],
    ...     tz="Europe/Berlin",
    ... )
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Literal, TypeAlias, get_args

from dateutil.relativedelta import relativedelta

from caldelta.business import weekday_number
from caldelta.errors import CalendarError, ErrorKind
from caldelta.instant import Instant
from caldelta.timezones import to_zone
from caldelta.util import MILLISECOND

logger = logging.getLogger(__name__)

QueryType: TypeAlias = Literal[
    "nextWeekday", "previousWeekday", "startOfPeriod", "endOfPeriod"
]
Period: TypeAlias = Literal["day", "week", "month", "quarter", "year"]

_PERIOD_LENGTH: dict[str, relativedelta] = {
    "day": relativedelta(days=1),
    "week": relativedelta(weeks=1),
    "month": relativedelta(months=1),
    "quarter": relativedelta(months=3),
    "year": relativedelta(years=1),
}


@dataclass(frozen=True, kw_only=True)
class DateQuery:
    """One step of a date query.

    Attributes:
        type: "nextWeekday", "previousWeekday", "startOfPeriod" or "endOfPeriod"
        weekday: Target weekday name for the weekday hops
        period: "day", "week", "month", "quarter" or "year" for boundaries
        week_start: First day of the week for week boundaries (name, or an
            integer counted from Sunday = 0)
    """

    type: str
    weekday: str | None = None
    period: str | None = None
    week_start: str | int | None = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DateQuery":
        """Build a query from request fields; ``weekStart`` is accepted as an alias."""
        if "type" not in values:
            raise CalendarError.invalid_query(f"Query without a type: {dict(values)!r}")
        return cls(
            type=values["type"],
            weekday=values.get("weekday"),
            period=values.get("period"),
            week_start=values.get("week_start", values.get("weekStart")),
        )


def week_start_number(value: str | int | None) -> int:
    """Resolve a week start to 0=Monday..6=Sunday; missing means Monday."""
    if value is None:
        return 0
    if isinstance(value, int):
        if not 0 <= value <= 6:
            raise CalendarError.invalid_weekday(str(value))
        return (value - 1) % 7
    return weekday_number(value)


def next_weekday(instant: Instant, weekday: str, tz: str = "UTC") -> Instant:
    """The next `weekday` strictly after `instant`, same wall-clock time in `tz`."""
    local = to_zone(instant, tz)
    ahead = (weekday_number(weekday) - local.weekday()) % 7 or 7
    return Instant.from_datetime(local + timedelta(days=ahead))


def previous_weekday(instant: Instant, weekday: str, tz: str = "UTC") -> Instant:
    """The last `weekday` strictly before `instant`, same wall-clock time in `tz`."""
    local = to_zone(instant, tz)
    back = (local.weekday() - weekday_number(weekday)) % 7 or 7
    return Instant.from_datetime(local - timedelta(days=back))


def _period_start(
    instant: Instant, period: str, tz: str, week_start: str | int | None
) -> datetime:
    if period not in get_args(Period):
        raise CalendarError.invalid_period(period)
    local = to_zone(instant, tz)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0, fold=0)
    if period == "day":
        return midnight
    if period == "week":
        offset = (local.weekday() - week_start_number(week_start)) % 7
        return midnight - timedelta(days=offset)
    if period == "month":
        return midnight.replace(day=1)
    if period == "quarter":
        return midnight.replace(month=(local.month - 1) // 3 * 3 + 1, day=1)
    return midnight.replace(month=1, day=1)


def start_of_period(
    instant: Instant, period: str, tz: str = "UTC", week_start: str | int | None = None
) -> Instant:
    """Local midnight at the start of the `period` containing `instant`."""
    return Instant.from_datetime(_period_start(instant, period, tz, week_start))


def end_of_period(
    instant: Instant, period: str, tz: str = "UTC", week_start: str | int | None = None
) -> Instant:
    """Last millisecond of the `period` containing `instant`."""
    start = _period_start(instant, period, tz, week_start)
    following = Instant.from_datetime(start + _PERIOD_LENGTH[period])
    return Instant(following.ms - MILLISECOND)


def _evaluate_one(
    query: DateQuery, anchor: Instant, tz: str, week_start: str | int | None
) -> Instant:
    if query.type in ("nextWeekday", "previousWeekday"):
        if not query.weekday:
            raise CalendarError(
                ErrorKind.INVALID_WEEKDAY_NAME,
                f"Weekday required for {query.type} query",
            )
        hop = next_weekday if query.type == "nextWeekday" else previous_weekday
        return hop(anchor, query.weekday, tz)
    if query.type in ("startOfPeriod", "endOfPeriod"):
        if not query.period:
            raise CalendarError.missing_period(query.type)
        bound = start_of_period if query.type == "startOfPeriod" else end_of_period
        return bound(anchor, query.period, tz, week_start)
    raise CalendarError.invalid_query(f"Unsupported query type: {query.type}")


def evaluate(
    base: Instant,
    queries: Iterable[DateQuery | None],
    tz: str = "UTC",
    chain: bool = True,
    week_start: str | int | None = None,
) -> list[Instant]:
    """Run `queries` in order and return one instant per query.

    With `chain` each query starts from the previous result; otherwise every
    query starts from `base`. A query's own `week_start` wins over the
    `week_start` given here.

    Raises:
        CalendarError: ``INVALID_QUERY`` for an empty or unknown query,
            ``INVALID_WEEKDAY_NAME`` for a missing or unknown weekday,
            ``MISSING_PERIOD`` / ``INVALID_PERIOD`` for boundary queries.
    """
    results: list[Instant] = []
    current = base
    for index, query in enumerate(queries):
        if query is None:
            raise CalendarError.invalid_query(f"Invalid query at index {index}")
        anchor = current if chain else base
        start = query.week_start if query.week_start is not None else week_start
        current = _evaluate_one(query, anchor, tz, start)
        logger.debug("query %d %s from %s -> %s", index, query.type, anchor, current)
        results.append(current)
    return results
