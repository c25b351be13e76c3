"""Error kinds raised by caldelta.

Every failure is a `CalendarError` tagged with an `ErrorKind`, so callers can
branch on `err.kind` instead of on exception subclasses.
"""

from enum import Enum


class ErrorKind(Enum):
    INVALID_INSTANT = "invalid_instant"
    INVALID_WEEKDAY_NAME = "invalid_weekday_name"
    MISSING_COUNT = "missing_count"
    UNSUPPORTED_OPERATION = "unsupported_operation"
    INVALID_TIMEZONE = "invalid_timezone"
    INVALID_PARAMETERS = "invalid_parameters"
    INVALID_QUERY = "invalid_query"
    MISSING_PERIOD = "missing_period"
    INVALID_PERIOD = "invalid_period"


class CalendarError(ValueError):
    """Caller-contract violation with a specific kind."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind: ErrorKind = kind
        self.message: str = message

    def __repr__(self) -> str:
        return f"CalendarError({self.kind.name}, {self.message!r})"

    @classmethod
    def invalid_instant(cls, text: str) -> "CalendarError":
        return cls(ErrorKind.INVALID_INSTANT, f"Invalid date: {text}")

    @classmethod
    def invalid_weekday(cls, name: str) -> "CalendarError":
        return cls(ErrorKind.INVALID_WEEKDAY_NAME, f"Invalid weekday: {name}")

    @classmethod
    def missing_count(cls, operation: str) -> "CalendarError":
        return cls(
            ErrorKind.MISSING_COUNT,
            f"Missing number of days for business day operation: {operation}",
        )

    @classmethod
    def unsupported_operation(
        cls, operation: str, scope: str = "business day"
    ) -> "CalendarError":
        return cls(
            ErrorKind.UNSUPPORTED_OPERATION, f"Invalid {scope} operation: {operation}"
        )

    @classmethod
    def invalid_timezone(cls, tz: str) -> "CalendarError":
        return cls(ErrorKind.INVALID_TIMEZONE, f"Invalid timezone: {tz}")

    @classmethod
    def invalid_parameters(cls, operation: str, detail: str) -> "CalendarError":
        return cls(
            ErrorKind.INVALID_PARAMETERS, f"Invalid parameters for {operation}: {detail}"
        )

    @classmethod
    def invalid_query(cls, detail: str) -> "CalendarError":
        return cls(ErrorKind.INVALID_QUERY, detail)

    @classmethod
    def missing_period(cls, query_type: str) -> "CalendarError":
        return cls(
            ErrorKind.MISSING_PERIOD, f"Period required for {query_type} query"
        )

    @classmethod
    def invalid_period(cls, period: str) -> "CalendarError":
        return cls(ErrorKind.INVALID_PERIOD, f"Unsupported period: {period}")
