"""Runtime settings loaded from environment variables.

The calendar math never reads these itself; callers load a `Settings` once
and pass it into the operations that take defaults from it.
"""

import os
from dataclasses import dataclass, field
from typing import get_args

from caldelta.business import DayFilter, ExcludedDates, NonBusinessDays
from caldelta.render import DEFAULT_MAX_UNITS, DEFAULT_VERBOSITY, Verbosity

DEFAULT_BUSINESS_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")


@dataclass(frozen=True)
class Settings:
    duration_format: Verbosity = DEFAULT_VERBOSITY
    max_duration_units: int = DEFAULT_MAX_UNITS
    business_days: tuple[str, ...] = DEFAULT_BUSINESS_DAYS
    excluded_dates: tuple[str, ...] = field(default_factory=tuple)
    timezone: str | None = None
    date_format: str | None = None
    week_start: str = "Monday"

    def non_business_days(
        self,
        business_days: list[str] | None = None,
        excluded_dates: list[str] | None = None,
    ) -> DayFilter:
        """Predicate for the business-day walker; per-call lists override settings."""
        days = business_days if business_days is not None else self.business_days
        dates = excluded_dates if excluded_dates is not None else self.excluded_dates
        predicate: DayFilter = NonBusinessDays.from_business_days(days)
        if dates:
            predicate = predicate | ExcludedDates(dates)
        return predicate


def _split_list(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def load_settings() -> Settings:
    """Load settings from the environment, falling back to defaults."""
    duration_format = os.getenv("CALDELTA_DURATION_FORMAT", DEFAULT_VERBOSITY).lower()
    if duration_format not in get_args(Verbosity):
        valid = ", ".join(get_args(Verbosity))
        raise ValueError(
            f"CALDELTA_DURATION_FORMAT must be one of {valid}, got {duration_format!r}"
        )
    return Settings(
        duration_format=duration_format,  # type: ignore[arg-type]
        max_duration_units=int(
            os.getenv("CALDELTA_MAX_DURATION_UNITS", str(DEFAULT_MAX_UNITS))
        ),
        business_days=_split_list(os.getenv("CALDELTA_BUSINESS_DAYS"))
        or DEFAULT_BUSINESS_DAYS,
        excluded_dates=_split_list(os.getenv("CALDELTA_EXCLUDED_DATES")),
        timezone=os.getenv("CALDELTA_TIMEZONE") or None,
        date_format=os.getenv("CALDELTA_DATE_FORMAT") or None,
        week_start=os.getenv("CALDELTA_WEEK_START") or "Monday",
    )
