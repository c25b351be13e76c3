from .business import (
    DayFilter,
    ExcludedDates,
    NonBusinessDays,
    is_business_day,
    shift,
    weekday_name,
)
from .config import Settings, load_settings
from .delta import CalendarDelta, add_delta, apply, subtract_delta
from .errors import CalendarError, ErrorKind
from .instant import Instant, resolve_instant
from .interval import DurationComponents, IntervalTotals, decompose, totals
from .query import (
    DateQuery,
    end_of_period,
    evaluate,
    next_weekday,
    previous_weekday,
    start_of_period,
)
from .render import RenderSpec, format_duration, render
from .timezones import format_in_timezone, format_utc, local_timezone_name

__all__ = [
    "Instant",
    "CalendarDelta",
    "DurationComponents",
    "IntervalTotals",
    "RenderSpec",
    "DayFilter",
    "NonBusinessDays",
    "ExcludedDates",
    "CalendarError",
    "ErrorKind",
    "Settings",
    "load_settings",
    "resolve_instant",
    "apply",
    "add_delta",
    "subtract_delta",
    "is_business_day",
    "shift",
    "weekday_name",
    "decompose",
    "totals",
    "DateQuery",
    "evaluate",
    "next_weekday",
    "previous_weekday",
    "start_of_period",
    "end_of_period",
    "render",
    "format_duration",
    "format_in_timezone",
    "format_utc",
    "local_timezone_name",
]
