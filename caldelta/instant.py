from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.parser import isoparse

from caldelta.errors import CalendarError
from caldelta.util import MILLISECOND

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, order=True)
class Instant:
    """An absolute point in time, stored as milliseconds since the Unix epoch."""

    ms: int

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        if dt.tzinfo is None:
            raise TypeError(
                f"Instant requires a timezone-aware datetime.\n"
                f"Got naive datetime: {dt!r}\n"
                f"Hint: dt.replace(tzinfo=timezone.utc) or ZoneInfo('US/Pacific')"
            )
        return cls((dt - _EPOCH) // timedelta(milliseconds=MILLISECOND))

    @classmethod
    def now(cls) -> "Instant":
        return cls.from_datetime(datetime.now(timezone.utc))

    def to_datetime(self, tz: str = "UTC") -> datetime:
        utc = _EPOCH + timedelta(milliseconds=self.ms)
        return utc.astimezone(ZoneInfo(tz)) if tz != "UTC" else utc

    def isoformat(self) -> str:
        """ISO 8601 in UTC with millisecond precision, e.g. 2025-01-31T00:00:00.000Z."""
        dt = self.to_datetime()
        return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{self.ms % 1000:03d}Z"

    def __str__(self) -> str:
        return self.isoformat()


def resolve_instant(text: str, tz: str | None = None) -> Instant:
    """Parse an ISO 8601 string into an Instant.

    Strings carrying an explicit offset (or ``Z``) are absolute. Naive strings
    are read as wall time in `tz`, defaulting to UTC.

    Raises:
        CalendarError: ``INVALID_INSTANT`` if the text does not parse, or
            ``INVALID_TIMEZONE`` if `tz` is not a known zone.
    """
    try:
        dt = isoparse(text.strip())
    except (ValueError, OverflowError, AttributeError, TypeError) as exc:
        raise CalendarError.invalid_instant(text) from exc
    if dt.tzinfo is None:
        if tz is None:
            dt = dt.replace(tzinfo=timezone.utc)
        else:
            try:
                dt = dt.replace(tzinfo=ZoneInfo(tz))
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise CalendarError.invalid_timezone(tz) from exc
    return Instant.from_datetime(dt)
