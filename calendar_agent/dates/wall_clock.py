"""
Wall-clock time handling.

A WallClockTime is a date and time-of-day as shown on a clock in a specific
IANA timezone. It is not an instant: converting it to one requires the UTC
offset in effect in that zone on that date, which to_utc_instant() looks up
from the timezone database.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone as dt_timezone
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidTimezone
from .weekday import DEFAULT_TIMEZONE


@lru_cache(maxsize=64)
def get_zone(timezone: str) -> ZoneInfo:
    """
    Look up an IANA timezone.

    Args:
        timezone: IANA timezone identifier (e.g., 'Europe/Helsinki')

    Returns:
        ZoneInfo for the identifier

    Raises:
        InvalidTimezone: If the identifier is not a known zone
    """
    if not isinstance(timezone, str) or not timezone.strip():
        raise InvalidTimezone(str(timezone))
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise InvalidTimezone(timezone) from None


def is_valid_timezone(timezone: str) -> bool:
    """Check whether a string is a known IANA timezone."""
    try:
        get_zone(timezone)
    except InvalidTimezone:
        return False
    return True


@dataclass(frozen=True)
class WallClockTime:
    """Calendar date and time-of-day as read off a clock in a timezone."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    timezone: str = DEFAULT_TIMEZONE

    def __post_init__(self):
        get_zone(self.timezone)
        # datetime() rejects impossible dates (Feb 30) and out-of-range times
        datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)

    @classmethod
    def from_instant(cls, instant: datetime, timezone: str) -> "WallClockTime":
        """
        Project an aware instant onto the clock of a timezone.

        Args:
            instant: Timezone-aware datetime
            timezone: IANA timezone to read the clock in

        Returns:
            WallClockTime in the given timezone
        """
        if instant.tzinfo is None:
            raise ValueError("Instant must be timezone-aware")
        local = instant.astimezone(get_zone(timezone))
        return cls(
            year=local.year,
            month=local.month,
            day=local.day,
            hour=local.hour,
            minute=local.minute,
            second=local.second,
            timezone=timezone,
        )

    @property
    def calendar_date(self) -> date:
        """Calendar date component."""
        return date(self.year, self.month, self.day)

    def iso_weekday(self) -> int:
        """ISO weekday (1=Monday, 7=Sunday) of the calendar date."""
        return self.calendar_date.isoweekday()

    def add_days(self, days: int) -> "WallClockTime":
        """
        Shift the calendar date by a signed number of days.

        Time-of-day and timezone are kept as they are.
        """
        shifted = self.calendar_date + timedelta(days=days)
        return replace(self, year=shifted.year, month=shifted.month, day=shifted.day)

    def with_time(self, hour: int, minute: int) -> "WallClockTime":
        """Replace the time-of-day, zeroing seconds."""
        return replace(self, hour=hour, minute=minute, second=0)

    def to_utc_instant(self) -> datetime:
        """
        Resolve this reading to an absolute UTC instant.

        The offset used is the one in effect in this zone on this date. Readings
        inside a DST gap or overlap resolve with fold=0.
        """
        local = datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            tzinfo=get_zone(self.timezone),
        )
        return local.astimezone(dt_timezone.utc)

    def isoformat(self) -> str:
        """Format as a local ISO 8601 string without offset."""
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )


def wall_clock_now(
    timezone: str = DEFAULT_TIMEZONE, now: Optional[datetime] = None
) -> WallClockTime:
    """
    Get the current wall-clock time in a timezone.

    Args:
        timezone: IANA timezone string
        now: Optional aware instant to use instead of the system clock

    Returns:
        WallClockTime for the current moment in the given timezone

    Raises:
        InvalidTimezone: If the timezone is not recognized
    """
    zone = get_zone(timezone)
    if now is None:
        now = datetime.now(zone)
    return WallClockTime.from_instant(now, timezone)
