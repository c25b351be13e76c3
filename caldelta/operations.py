"""Caller-facing operations.

Each operation takes raw request values (ISO strings, counts, names), runs the
calendar math and returns a frozen result record. A request shell can call
these directly or route by name through `run`.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from inspect import signature
from typing import Any, Literal, TypeAlias, get_args

from caldelta.business import is_business_day, shift, weekday_name
from caldelta.config import DEFAULT_BUSINESS_DAYS, Settings
from caldelta.delta import UNITS, CalendarDelta, add_delta, subtract_delta
from caldelta.errors import CalendarError
from caldelta.instant import Instant, resolve_instant
from caldelta.interval import DurationComponents, IntervalTotals, decompose, totals
from caldelta.query import DateQuery, evaluate
from caldelta.render import Verbosity, format_duration
from caldelta.timezones import format_in_timezone, format_utc, local_timezone_name

logger = logging.getLogger(__name__)

BusinessDayOperation: TypeAlias = Literal[
    "isBusinessDay", "addBusinessDays", "subtractBusinessDays"
]


@dataclass(frozen=True, kw_only=True)
class TimeShiftResult:
    """Result of adding or subtracting a CalendarDelta.

    Attributes:
        iso: Result as ISO 8601 UTC
        utc: Result as ``YYYY-MM-DD HH:MM:SS UTC``
        base_time: Base instant as ISO 8601 UTC
        local: Result formatted in the caller's local timezone
        local_timezone: Name of the caller's local timezone
        result_timezone: Timezone used for `formatted_result`
        formatted_result: Result formatted in `result_timezone`
        description: Human description of the applied delta
    """

    iso: str
    utc: str
    base_time: str
    local: str
    local_timezone: str
    result_timezone: str
    formatted_result: str
    description: str


@dataclass(frozen=True, kw_only=True)
class BusinessDayResult:
    is_business_day: bool | None = None
    weekday: str | None = None
    result: str | None = None
    days: int | None = None
    business_days: str | None = None
    excluded_dates: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class FormattedDuration:
    formatted: str
    total_milliseconds: int


@dataclass(frozen=True, kw_only=True)
class ConvertTimezoneResult:
    iso: str
    formatted_result: str
    from_timezone: str
    local: str
    local_timezone: str
    result_timezone: str


@dataclass(frozen=True, kw_only=True)
class CurrentDateTimeResult:
    iso: str
    utc: str
    local: str
    local_timezone: str
    result_timezone: str
    formatted_result: str


@dataclass(frozen=True, kw_only=True)
class DateQueryResult:
    """ISO 8601 UTC instants, one per query, in query order."""

    dates: tuple[str, ...]


def _instant(text: str | None) -> Instant:
    return resolve_instant(text) if text else Instant.now()


def _shift_result(
    base: Instant,
    result: Instant,
    delta: CalendarDelta,
    timezone: str | None,
    settings: Settings,
) -> TimeShiftResult:
    local_tz = local_timezone_name(settings.timezone)
    result_tz = timezone or local_tz
    return TimeShiftResult(
        iso=result.isoformat(),
        utc=format_utc(result),
        base_time=base.isoformat(),
        local=format_in_timezone(result, local_tz, settings.date_format),
        local_timezone=local_tz,
        result_timezone=result_tz,
        formatted_result=format_in_timezone(result, result_tz, settings.date_format),
        description=", ".join(delta.parts()),
    )


def add_time(
    delta: CalendarDelta | Mapping[str, int | None],
    base_time: str | None = None,
    timezone: str | None = None,
    settings: Settings | None = None,
) -> TimeShiftResult:
    """Add `delta` to `base_time` (now when omitted)."""
    settings = settings or Settings()
    if not isinstance(delta, CalendarDelta):
        delta = CalendarDelta.from_mapping(dict(delta))
    base = _instant(base_time)
    return _shift_result(base, add_delta(base, delta), delta, timezone, settings)


def subtract_time(
    delta: CalendarDelta | Mapping[str, int | None],
    base_time: str | None = None,
    timezone: str | None = None,
    settings: Settings | None = None,
) -> TimeShiftResult:
    """Subtract `delta` from `base_time` (now when omitted)."""
    settings = settings or Settings()
    if not isinstance(delta, CalendarDelta):
        delta = CalendarDelta.from_mapping(dict(delta))
    base = _instant(base_time)
    return _shift_result(base, subtract_delta(base, delta), delta, timezone, settings)


def business_day(
    operation: str,
    date: str,
    days: int | None = None,
    business_days: list[str] | None = None,
    excluded_dates: list[str] | None = None,
    timezone: str = "UTC",
    settings: Settings | None = None,
) -> BusinessDayResult:
    """Check or walk business days.

    Args:
        operation: "isBusinessDay", "addBusinessDays" or "subtractBusinessDays"
        date: Base instant as ISO 8601
        days: Business days to move (required for add/subtract, may be negative)
        business_days: Working weekday names; overrides settings
        excluded_dates: ``YYYY-MM-DD`` holidays; overrides settings
        timezone: Zone whose calendar decides which day an instant falls on

    Raises:
        CalendarError: ``UNSUPPORTED_OPERATION`` for unknown operations,
            ``MISSING_COUNT`` when add/subtract has no `days`,
            ``INVALID_WEEKDAY_NAME`` for unknown weekday names and
            ``INVALID_INSTANT`` for unparseable dates.
    """
    if operation not in get_args(BusinessDayOperation):
        raise CalendarError.unsupported_operation(operation)
    if operation != "isBusinessDay" and days is None:
        raise CalendarError.missing_count(operation)

    settings = settings or Settings()
    base = resolve_instant(date)
    predicate = settings.non_business_days(business_days, excluded_dates)
    excluded = tuple(
        excluded_dates if excluded_dates is not None else settings.excluded_dates
    )

    if operation == "isBusinessDay":
        return BusinessDayResult(
            is_business_day=is_business_day(base, predicate, timezone),
            weekday=weekday_name(base, timezone),
            excluded_dates=excluded,
        )

    signed = days if operation == "addBusinessDays" else -days
    logger.debug("%s %s by %d with %r", operation, base, days, predicate)
    result = shift(base, signed, predicate, timezone)
    working = business_days if business_days is not None else settings.business_days
    return BusinessDayResult(
        result=result.isoformat(),
        days=days,
        business_days=_business_days_label(working),
        excluded_dates=excluded,
    )


def _business_days_label(days: list[str] | tuple[str, ...]) -> str:
    if tuple(d.capitalize() for d in days) == DEFAULT_BUSINESS_DAYS:
        return "Monday to Friday"
    return ", ".join(days)


def calculate_difference(from_: str, to: str) -> IntervalTotals:
    return totals(resolve_instant(from_), resolve_instant(to))


def decompose_interval(from_: str, to: str) -> DurationComponents:
    return decompose(resolve_instant(from_), resolve_instant(to))


def format_duration_between(
    from_: str,
    to: str,
    verbosity: Verbosity | None = None,
    max_units: int | None = None,
    settings: Settings | None = None,
) -> FormattedDuration:
    start, end = resolve_instant(from_), resolve_instant(to)
    return FormattedDuration(
        formatted=format_duration(start, end, verbosity, max_units, settings),
        total_milliseconds=end.ms - start.ms,
    )


def convert_timezone(
    date: str,
    to_timezone: str,
    from_timezone: str | None = None,
    settings: Settings | None = None,
) -> ConvertTimezoneResult:
    """Show `date` as wall time in `to_timezone`.

    `from_timezone` (default UTC) only applies to strings without an offset.
    """
    settings = settings or Settings()
    if not from_timezone:
        logger.debug("no from_timezone for %r, reading it as UTC", date)
        from_timezone = "UTC"
    instant = resolve_instant(date, from_timezone)
    local_tz = local_timezone_name(settings.timezone)
    return ConvertTimezoneResult(
        iso=instant.isoformat(),
        formatted_result=format_in_timezone(instant, to_timezone, settings.date_format),
        from_timezone=from_timezone,
        local=format_in_timezone(instant, local_tz, settings.date_format),
        local_timezone=local_tz,
        result_timezone=to_timezone,
    )


def current_date_time(
    timezone: str | None = None,
    format: str | None = None,
    settings: Settings | None = None,
) -> CurrentDateTimeResult:
    """The current instant, formatted locally and in `timezone`."""
    settings = settings or Settings()
    now = Instant.now()
    local_tz = local_timezone_name(settings.timezone)
    result_tz = timezone or local_tz
    return CurrentDateTimeResult(
        iso=now.isoformat(),
        utc=format_utc(now),
        local=format_in_timezone(now, local_tz, settings.date_format),
        local_timezone=local_tz,
        result_timezone=result_tz,
        formatted_result=format_in_timezone(
            now, result_tz, format or settings.date_format
        ),
    )


def date_query(
    base_date: str,
    queries: Iterable[DateQuery | Mapping[str, Any] | None],
    timezone: str | None = None,
    chain: bool = True,
    settings: Settings | None = None,
) -> DateQueryResult:
    """Run structured date queries from `base_date`.

    Args:
        base_date: Starting instant as ISO 8601
        queries: `DateQuery` values or request mappings with ``type``,
            ``weekday``, ``period`` and ``weekStart``
        timezone: Zone whose wall clock the queries use; defaults to the local zone
        chain: Start each query from the previous result (default) or from
            `base_date`
    """
    settings = settings or Settings()
    tz = timezone or local_timezone_name(settings.timezone)
    steps = [
        q if q is None or isinstance(q, DateQuery) else DateQuery.from_mapping(q)
        for q in queries
    ]
    results = evaluate(resolve_instant(base_date), steps, tz, chain, settings.week_start)
    return DateQueryResult(dates=tuple(r.isoformat() for r in results))


_OPERATIONS: dict[str, Callable[..., Any]] = {
    "addTime": add_time,
    "subtractTime": subtract_time,
    "businessDay": business_day,
    "calculateDifference": calculate_difference,
    "decomposeInterval": decompose_interval,
    "formatDuration": format_duration_between,
    "convertTimezone": convert_timezone,
    "getCurrentDateTime": current_date_time,
    "dateQuery": date_query,
}


def run(operation: str, params: Mapping[str, Any], settings: Settings | None = None) -> Any:
    """Dispatch a named operation with keyword parameters.

    Parameter names follow the Python signatures (``from_`` may also be given
    as ``from``). For addTime and subtractTime the unit counts may be given
    flat (``{"months": 1, "base_time": ...}``) instead of as ``delta``.
    `settings` is passed to operations that take defaults.

    Raises:
        CalendarError: ``UNSUPPORTED_OPERATION`` for unknown names and
            ``INVALID_PARAMETERS`` for unknown or missing parameters, besides
            whatever the operation itself raises.
    """
    handler = _OPERATIONS.get(operation)
    if handler is None:
        raise CalendarError.unsupported_operation(operation, scope="calendar")
    kwargs = dict(params)
    if "from" in kwargs:
        kwargs["from_"] = kwargs.pop("from")
    if handler in (add_time, subtract_time) and "delta" not in kwargs:
        kwargs["delta"] = {unit: kwargs.pop(unit) for unit in UNITS if unit in kwargs}
    sig = signature(handler)
    if "settings" in sig.parameters:
        kwargs.setdefault("settings", settings)
    try:
        sig.bind(**kwargs)
    except TypeError as exc:
        raise CalendarError.invalid_parameters(operation, str(exc)) from exc
    logger.debug("run %s with %s", operation, sorted(kwargs))
    return handler(**kwargs)
