"""Exceptions raised by the date resolution engine."""


class DateResolutionError(Exception):
    """Base class for all date engine errors."""


class InvalidTimezone(DateResolutionError, ValueError):
    """Raised when a timezone identifier is not a known IANA zone."""

    def __init__(self, timezone: str):
        self.timezone = timezone
        super().__init__(
            f"Invalid timezone: '{timezone}'. "
            f"Must be a valid IANA timezone (e.g., 'Europe/Helsinki', 'UTC')"
        )


class InvalidWeekday(DateResolutionError, ValueError):
    """Raised when a weekday value is outside the canonical set."""

    def __init__(self, weekday):
        self.weekday = weekday
        super().__init__(
            f"Invalid weekday: '{weekday}'. "
            f"Expected one of monday, tuesday, wednesday, thursday, friday, saturday, sunday"
        )


class InvalidTimeFormat(DateResolutionError, ValueError):
    """Raised when a time string is not a valid 24-hour HH:mm value."""

    def __init__(self, time: str, reason: str = 'Expected "HH:mm" (e.g., "15:00")'):
        self.time = time
        super().__init__(f'Invalid time format: "{time}". {reason}.')


class DateCalculationInconsistency(DateResolutionError, RuntimeError):
    """Raised when a resolved date does not land on the requested weekday.

    This indicates a bug in the calendar arithmetic, not bad input.
    """
