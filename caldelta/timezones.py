"""Timezone-aware display helpers.

These sit at the edge of the core: they resolve IANA zone names and format
instants for display. The only thing the calendar math takes from here is
`local_date`, which the business-day walker needs to know which calendar day
an instant falls on.
"""

import logging
import os
import re
from datetime import date, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from caldelta.errors import CalendarError
from caldelta.instant import Instant

logger = logging.getLogger(__name__)


def zone(tz: str) -> ZoneInfo:
    """Resolve an IANA name, raising ``INVALID_TIMEZONE`` when unknown."""
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
        raise CalendarError.invalid_timezone(tz) from exc


def local_timezone_name(configured: str | None = None) -> str:
    """Return the caller's timezone name.

    Preference order: explicitly configured name, the ``TZ`` environment
    variable when it names a known zone, then ``"UTC"``.
    """
    if configured:
        return configured
    env_tz = os.environ.get("TZ", "").lstrip(":")
    if env_tz:
        try:
            ZoneInfo(env_tz)
            return env_tz
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug("TZ=%r is not a known zone, falling back to UTC", env_tz)
    return "UTC"


def to_zone(instant: Instant, tz: str) -> datetime:
    return instant.to_datetime().astimezone(zone(tz))


def local_date(instant: Instant, tz: str = "UTC") -> date:
    """Calendar date of `instant` as seen in `tz`."""
    return to_zone(instant, tz).date()


def format_utc(instant: Instant) -> str:
    return instant.to_datetime().strftime("%Y-%m-%d %H:%M:%S") + " UTC"


def format_in_timezone(instant: Instant, tz: str, pattern: str | None = None) -> str:
    """Format `instant` as wall time in `tz`.

    Without a pattern the result is ``YYYY-MM-DD HH:MM:SS``. Patterns use the
    tokens YYYY, YY, MM, M, DD, D, HH, H, mm, m, ss and s; a token only matches
    when it is not glued to other word characters, so ``YYYYMMDD`` is left
    alone while ``YYYY/MM/DD`` is expanded.
    """
    dt = to_zone(instant, tz)
    if not pattern:
        return dt.strftime("%Y-%m-%d %H:%M:%S")
    return _apply_pattern(dt, pattern)


def _apply_pattern(dt: datetime, pattern: str) -> str:
    tokens = {
        "YYYY": f"{dt.year:04d}",
        "YY": f"{dt.year:04d}"[-2:],
        "MM": f"{dt.month:02d}",
        "M": str(dt.month),
        "DD": f"{dt.day:02d}",
        "D": str(dt.day),
        "HH": f"{dt.hour:02d}",
        "H": str(dt.hour),
        "mm": f"{dt.minute:02d}",
        "m": str(dt.minute),
        "ss": f"{dt.second:02d}",
        "s": str(dt.second),
    }
    result = pattern
    # Longest first so "YYYY" is never consumed as two "YY"
    for token in sorted(tokens, key=len, reverse=True):
        result = _token_regex(token).sub(tokens[token], result)
    return result


@lru_cache(maxsize=None)
def _token_regex(token: str) -> re.Pattern[str]:
    return re.compile(rf"(?<!\w){re.escape(token)}(?!\w)")
