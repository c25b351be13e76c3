"""Utility constants for caldelta.

Time unit constants represent fixed durations in milliseconds, the resolution
of an Instant. Calendar units (months, years) have no fixed length and are
handled by `caldelta.delta` through dateutil's relativedelta.
"""

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60_000
HOUR = 3_600_000
DAY = 86_400_000
WEEK = 604_800_000

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
