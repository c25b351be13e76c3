"""Tests for Instant and the ISO 8601 resolver."""

from datetime import datetime, timezone

import pytest

from caldelta import CalendarError, ErrorKind, Instant, resolve_instant


def test_resolve_utc_string():
    instant = resolve_instant("2025-01-31T00:00:00Z")
    assert instant.isoformat() == "2025-01-31T00:00:00.000Z"
    assert str(instant) == "2025-01-31T00:00:00.000Z"


def test_resolve_keeps_milliseconds():
    instant = resolve_instant("2025-01-01T00:00:00.123Z")
    assert instant.ms % 1000 == 123
    assert instant.isoformat() == "2025-01-01T00:00:00.123Z"


def test_resolve_with_offset():
    """An explicit offset is honoured regardless of the tz argument."""
    instant = resolve_instant("2025-01-01T02:00:00+02:00", tz="US/Pacific")
    assert instant == resolve_instant("2025-01-01T00:00:00Z")


def test_naive_string_defaults_to_utc():
    assert resolve_instant("2025-01-01T00:00:00") == resolve_instant(
        "2025-01-01T00:00:00Z"
    )


def test_naive_string_read_in_timezone():
    """Naive wall time is interpreted in the given zone."""
    instant = resolve_instant("2025-07-01T12:00:00", tz="Europe/Paris")
    assert instant == resolve_instant("2025-07-01T10:00:00Z")


@pytest.mark.parametrize("text", ["not a date", "2025-02-30T00:00:00Z", "", "2025-13-01"])
def test_invalid_text_raises_invalid_instant(text):
    with pytest.raises(CalendarError, match="Invalid date") as info:
        resolve_instant(text)
    assert info.value.kind is ErrorKind.INVALID_INSTANT


def test_unknown_timezone_for_naive_text():
    with pytest.raises(CalendarError) as info:
        resolve_instant("2025-01-01T00:00:00", tz="Mars/Olympus")
    assert info.value.kind is ErrorKind.INVALID_TIMEZONE


def test_naive_datetime_rejected():
    with pytest.raises(TypeError, match="timezone-aware"):
        Instant.from_datetime(datetime(2025, 1, 1))


def test_instants_are_ordered_by_time():
    early = resolve_instant("2025-01-01T00:00:00Z")
    late = resolve_instant("2025-01-01T00:00:01Z")
    assert early < late
    assert max(early, late) is late


def test_to_datetime_round_trip():
    dt = datetime(1960, 5, 4, 3, 2, 1, 500000, tzinfo=timezone.utc)
    assert Instant.from_datetime(dt).to_datetime() == dt
