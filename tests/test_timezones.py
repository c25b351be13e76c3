"""Tests for timezone-aware display formatting."""

import pytest

from caldelta import CalendarError, ErrorKind, format_in_timezone, format_utc, local_timezone_name, resolve_instant


def test_standard_format_in_zone():
    instant = resolve_instant("2025-01-06T02:00:00Z")
    assert format_in_timezone(instant, "US/Pacific") == "2025-01-05 18:00:00"
    assert format_in_timezone(instant, "UTC") == "2025-01-06 02:00:00"


def test_format_utc():
    assert format_utc(resolve_instant("2025-03-07T04:05:06Z")) == "2025-03-07 04:05:06 UTC"


def test_custom_pattern_padded_tokens():
    instant = resolve_instant("2025-01-06T02:00:00Z")
    text = format_in_timezone(instant, "US/Pacific", "DD/MM/YYYY HH:mm")
    assert text == "05/01/2025 18:00"


def test_custom_pattern_short_tokens():
    instant = resolve_instant("2025-03-07T04:05:06Z")
    assert format_in_timezone(instant, "UTC", "D.M.YY H:m:s") == "7.3.25 4:5:6"


def test_tokens_glued_to_word_characters_are_left_alone():
    instant = resolve_instant("2025-03-07T04:05:06Z")
    assert format_in_timezone(instant, "UTC", "YYYYMMDD") == "YYYYMMDD"
    assert format_in_timezone(instant, "UTC", "Date: YYYY-MM-DD") == "Date: 2025-03-07"


def test_unknown_timezone_raises():
    with pytest.raises(CalendarError, match="Invalid timezone") as info:
        format_in_timezone(resolve_instant("2025-01-01T00:00:00Z"), "Nowhere/Special")
    assert info.value.kind is ErrorKind.INVALID_TIMEZONE


def test_local_timezone_prefers_configured_name(monkeypatch):
    monkeypatch.setenv("TZ", "Europe/Paris")
    assert local_timezone_name("Asia/Tokyo") == "Asia/Tokyo"


def test_local_timezone_from_environment(monkeypatch):
    monkeypatch.setenv("TZ", "Europe/Paris")
    assert local_timezone_name() == "Europe/Paris"


def test_local_timezone_falls_back_to_utc(monkeypatch):
    monkeypatch.setenv("TZ", "Not/AZone")
    assert local_timezone_name() == "UTC"
    monkeypatch.delenv("TZ")
    assert local_timezone_name() == "UTC"
