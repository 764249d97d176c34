"""
Relative date resolution.

Converts relative date information supplied by a language model
(week offset, weekday, time of day) into absolute UTC instants. Weeks follow
ISO-8601 rules: they start on Monday, and the weekday field only selects a day
inside the week chosen by the offset.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .duration import DEFAULT_DURATION_MINUTES, end_instant
from .errors import DateCalculationInconsistency, InvalidTimeFormat
from .wall_clock import WallClockTime, get_zone, wall_clock_now
from .weekday import DEFAULT_TIMEZONE, Weekday, from_iso

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2})")


def parse_time(time: str) -> Tuple[int, int]:
    """
    Parse a 24-hour "HH:mm" string.

    Args:
        time: Time string such as "09:30"

    Returns:
        Tuple of (hour, minute)

    Raises:
        InvalidTimeFormat: If the string does not match HH:mm or is out of range
    """
    if not isinstance(time, str):
        raise InvalidTimeFormat(str(time))

    match = TIME_PATTERN.fullmatch(time)
    if not match:
        raise InvalidTimeFormat(time)

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidTimeFormat(time, "Hour must be 00-23 and minute 00-59")
    return hour, minute


class RelativeDateInput(BaseModel):
    """Relative date specification supplied by the caller."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    week_offset: int = Field(
        ...,
        alias="weekOffset",
        description="0 = this week, 1 = next week, -1 = last week, etc.",
    )
    weekday: Weekday = Field(..., description="Target day of the week (monday-sunday)")
    time: str = Field(..., description="Time in HH:mm format (24-hour)")
    duration_minutes: int = Field(
        default=DEFAULT_DURATION_MINUTES,
        gt=0,
        alias="durationMinutes",
        description="Duration in minutes (default: 60)",
    )
    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone (e.g., 'Europe/Helsinki'). Defaults to the configured timezone",
    )

    @field_validator("weekday", mode="before")
    @classmethod
    def validate_weekday(cls, v) -> Weekday:
        """Accept weekday names case-insensitively."""
        return Weekday.parse(v)

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Reject anything that is not a valid HH:mm time."""
        parse_time(v)
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Validate timezone string using zoneinfo."""
        if v is not None:
            get_zone(v)
        return v


@dataclass(frozen=True)
class ResolvedSlot:
    """A resolved start/end pair and the timezone it was resolved in."""

    start: datetime
    end: datetime
    timezone: str
    wall_clock: WallClockTime


def resolve_target_wall_clock(
    reference: WallClockTime, relative: RelativeDateInput
) -> WallClockTime:
    """
    Compute the wall-clock reading a relative date input points at.

    Args:
        reference: Reference wall-clock time (usually "now" in the caller's zone)
        relative: Relative date specification

    Returns:
        Target wall-clock time in the reference's timezone

    Raises:
        InvalidTimeFormat: If relative.time is not a valid HH:mm value
        InvalidWeekday: If relative.weekday is not recognized
        DateCalculationInconsistency: If the result lands on the wrong weekday
    """
    hour, minute = parse_time(relative.time)
    weekday = Weekday.parse(relative.weekday)
    target_iso = weekday.to_iso()

    current_iso = reference.iso_weekday()
    # Negative or zero stays inside the reference's own Monday-Sunday week
    days_to_target_in_week = target_iso - current_iso
    total_days_offset = relative.week_offset * 7 + days_to_target_in_week

    target = reference.add_days(total_days_offset).with_time(hour, minute)

    result_iso = target.iso_weekday()
    if result_iso != target_iso:
        message = (
            f"Date calculation inconsistency: expected {weekday.value} (ISO {target_iso}), "
            f"but got {from_iso(result_iso).value} (ISO {result_iso}). "
            f"Input: weekOffset={relative.week_offset}, weekday={weekday.value}, time={relative.time}. "
            f"Reference: {reference.isoformat()} {reference.timezone}."
        )
        logger.error(message)
        raise DateCalculationInconsistency(message)

    return target


def resolve(reference: WallClockTime, relative: RelativeDateInput) -> datetime:
    """
    Resolve a relative date input to an absolute UTC instant.

    Args:
        reference: Reference wall-clock time
        relative: Relative date specification

    Returns:
        Aware UTC datetime for the requested wall-clock time
    """
    target = resolve_target_wall_clock(reference, relative)
    instant = target.to_utc_instant()
    logger.debug(
        f"Resolved weekOffset={relative.week_offset} time={relative.time} "
        f"from {reference.isoformat()} to {target.isoformat()} {target.timezone} "
        f"({instant.isoformat()})"
    )
    return instant


def resolve_slot(
    relative: RelativeDateInput,
    now: Optional[datetime] = None,
    default_timezone: str = DEFAULT_TIMEZONE,
) -> ResolvedSlot:
    """
    Resolve the start and end of a relative time slot.

    Args:
        relative: Relative date specification
        now: Optional aware reference instant (defaults to the system clock)
        default_timezone: Timezone used when relative.timezone is not set

    Returns:
        ResolvedSlot with UTC start and end instants
    """
    effective_timezone = relative.timezone or default_timezone
    reference = wall_clock_now(effective_timezone, now=now)
    target = resolve_target_wall_clock(reference, relative)
    start = target.to_utc_instant()
    end = end_instant(start, relative.duration_minutes)
    return ResolvedSlot(start=start, end=end, timezone=effective_timezone, wall_clock=target)


def get_current_date_info(
    timezone: str = DEFAULT_TIMEZONE, now: Optional[datetime] = None
) -> str:
    """
    Describe the current date for the system prompt.

    Args:
        timezone: IANA timezone string
        now: Optional aware instant to use instead of the system clock

    Returns:
        Human-readable line with date, weekday, time and timezone
    """
    wall_clock = wall_clock_now(timezone, now=now)
    iso_weekday = wall_clock.iso_weekday()
    return (
        f"Current date: {wall_clock.calendar_date.isoformat()} ({from_iso(iso_weekday).value}), "
        f"Current time: {wall_clock.hour:02d}:{wall_clock.minute:02d}, "
        f"Timezone: {timezone}, "
        f"ISO weekday: {iso_weekday} (1=Monday, 7=Sunday)"
    )
