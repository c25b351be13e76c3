"""Tests for structured date queries."""

import pytest

from caldelta import (
    CalendarError,
    DateQuery,
    ErrorKind,
    end_of_period,
    evaluate,
    next_weekday,
    previous_weekday,
    resolve_instant,
    start_of_period,
)

# Wednesday
WED = resolve_instant("2025-08-13T10:00:00Z")


@pytest.mark.parametrize(
    "weekday,expected",
    [
        ("friday", "2025-08-15T10:00:00Z"),
        ("Thu", "2025-08-14T10:00:00Z"),
        ("wednesday", "2025-08-20T10:00:00Z"),
        ("monday", "2025-08-18T10:00:00Z"),
    ],
)
def test_next_weekday(weekday, expected):
    """The same weekday as the base is a full week ahead."""
    assert next_weekday(WED, weekday) == resolve_instant(expected)


@pytest.mark.parametrize(
    "weekday,expected",
    [
        ("monday", "2025-08-11T10:00:00Z"),
        ("wednesday", "2025-08-06T10:00:00Z"),
        ("sun", "2025-08-10T10:00:00Z"),
    ],
)
def test_previous_weekday(weekday, expected):
    assert previous_weekday(WED, weekday) == resolve_instant(expected)


def test_next_weekday_uses_local_calendar():
    """02:00 UTC Monday is Sunday evening in Pacific time."""
    instant = resolve_instant("2025-01-06T02:00:00Z")
    assert next_weekday(instant, "monday", "US/Pacific") == resolve_instant(
        "2025-01-07T02:00:00Z"
    )
    assert next_weekday(instant, "monday") == resolve_instant("2025-01-13T02:00:00Z")


def test_day_bounds_in_timezone():
    assert start_of_period(WED, "day", "Europe/Berlin") == resolve_instant(
        "2025-08-12T22:00:00Z"
    )
    assert end_of_period(WED, "day", "Europe/Berlin") == resolve_instant(
        "2025-08-13T21:59:59.999Z"
    )


def test_day_bounds_across_dst_change():
    """The day clocks spring forward is 23 hours long."""
    instant = resolve_instant("2025-03-09T12:00:00Z")
    assert start_of_period(instant, "day", "America/New_York") == resolve_instant(
        "2025-03-09T05:00:00Z"
    )
    assert end_of_period(instant, "day", "America/New_York") == resolve_instant(
        "2025-03-10T03:59:59.999Z"
    )


@pytest.mark.parametrize(
    "week_start,start,end",
    [
        (None, "2025-08-11T00:00:00Z", "2025-08-17T23:59:59.999Z"),
        ("sunday", "2025-08-10T00:00:00Z", "2025-08-16T23:59:59.999Z"),
        (0, "2025-08-10T00:00:00Z", "2025-08-16T23:59:59.999Z"),
        (1, "2025-08-11T00:00:00Z", "2025-08-17T23:59:59.999Z"),
    ],
)
def test_week_bounds(week_start, start, end):
    """Integer week starts count from Sunday = 0."""
    assert start_of_period(WED, "week", week_start=week_start) == resolve_instant(start)
    assert end_of_period(WED, "week", week_start=week_start) == resolve_instant(end)


@pytest.mark.parametrize(
    "base,period,start,end",
    [
        ("2025-02-14T10:00:00Z", "month", "2025-02-01T00:00:00Z", "2025-02-28T23:59:59.999Z"),
        ("2024-02-14T10:00:00Z", "month", "2024-02-01T00:00:00Z", "2024-02-29T23:59:59.999Z"),
        ("2025-08-13T10:00:00Z", "quarter", "2025-07-01T00:00:00Z", "2025-09-30T23:59:59.999Z"),
        ("2025-11-05T10:00:00Z", "quarter", "2025-10-01T00:00:00Z", "2025-12-31T23:59:59.999Z"),
        ("2025-08-13T10:00:00Z", "year", "2025-01-01T00:00:00Z", "2025-12-31T23:59:59.999Z"),
    ],
)
def test_calendar_period_bounds(base, period, start, end):
    instant = resolve_instant(base)
    assert start_of_period(instant, period) == resolve_instant(start)
    assert end_of_period(instant, period) == resolve_instant(end)


def test_evaluate_chains_results():
    queries = [
        DateQuery(type="nextWeekday", weekday="friday"),
        DateQuery(type="endOfPeriod", period="day"),
    ]
    assert evaluate(WED, queries) == [
        resolve_instant("2025-08-15T10:00:00Z"),
        resolve_instant("2025-08-15T23:59:59.999Z"),
    ]


def test_evaluate_without_chaining_starts_each_query_from_base():
    queries = [
        DateQuery(type="nextWeekday", weekday="friday"),
        DateQuery(type="endOfPeriod", period="day"),
    ]
    assert evaluate(WED, queries, chain=False) == [
        resolve_instant("2025-08-15T10:00:00Z"),
        resolve_instant("2025-08-13T23:59:59.999Z"),
    ]


def test_query_week_start_overrides_default():
    queries = [DateQuery(type="startOfPeriod", period="week", week_start="monday")]
    assert evaluate(WED, queries, week_start="sunday") == [
        resolve_instant("2025-08-11T00:00:00Z")
    ]
    queries = [DateQuery(type="startOfPeriod", period="week")]
    assert evaluate(WED, queries, week_start="sunday") == [
        resolve_instant("2025-08-10T00:00:00Z")
    ]


def test_query_from_mapping_accepts_week_start_alias():
    query = DateQuery.from_mapping(
        {"type": "startOfPeriod", "period": "week", "weekStart": "sunday"}
    )
    assert query == DateQuery(type="startOfPeriod", period="week", week_start="sunday")


@pytest.mark.parametrize(
    "query,kind",
    [
        (DateQuery(type="nextWeekday"), ErrorKind.INVALID_WEEKDAY_NAME),
        (DateQuery(type="previousWeekday", weekday="funday"), ErrorKind.INVALID_WEEKDAY_NAME),
        (DateQuery(type="startOfPeriod"), ErrorKind.MISSING_PERIOD),
        (DateQuery(type="endOfPeriod", period="decade"), ErrorKind.INVALID_PERIOD),
        (DateQuery(type="nextFullMoon"), ErrorKind.INVALID_QUERY),
        (None, ErrorKind.INVALID_QUERY),
    ],
)
def test_invalid_queries(query, kind):
    with pytest.raises(CalendarError) as info:
        evaluate(WED, [query])
    assert info.value.kind is kind


def test_invalid_week_start_number():
    with pytest.raises(CalendarError) as info:
        start_of_period(WED, "week", week_start=9)
    assert info.value.kind is ErrorKind.INVALID_WEEKDAY_NAME


def test_mapping_without_type_rejected():
    with pytest.raises(CalendarError, match="without a type") as info:
        DateQuery.from_mapping({"weekday": "friday"})
    assert info.value.kind is ErrorKind.INVALID_QUERY
