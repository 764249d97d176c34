"""Relative date resolution engine."""

from .duration import DEFAULT_DURATION_MINUTES, end_instant
from .errors import (
    DateCalculationInconsistency,
    DateResolutionError,
    InvalidTimeFormat,
    InvalidTimezone,
    InvalidWeekday,
)
from .formatting import (
    DEFAULT_LOCALE,
    format_date,
    format_event,
    format_event_list,
    format_instant,
    format_time,
)
from .resolver import (
    RelativeDateInput,
    ResolvedSlot,
    get_current_date_info,
    parse_time,
    resolve,
    resolve_slot,
    resolve_target_wall_clock,
)
from .wall_clock import WallClockTime, get_zone, is_valid_timezone, wall_clock_now
from .weekday import DEFAULT_TIMEZONE, Weekday, from_iso, to_iso

__all__ = [
    "DEFAULT_DURATION_MINUTES",
    "DEFAULT_LOCALE",
    "DEFAULT_TIMEZONE",
    "DateCalculationInconsistency",
    "DateResolutionError",
    "InvalidTimeFormat",
    "InvalidTimezone",
    "InvalidWeekday",
    "RelativeDateInput",
    "ResolvedSlot",
    "WallClockTime",
    "Weekday",
    "end_instant",
    "format_date",
    "format_event",
    "format_event_list",
    "format_instant",
    "format_time",
    "from_iso",
    "get_current_date_info",
    "get_zone",
    "is_valid_timezone",
    "parse_time",
    "resolve",
    "resolve_slot",
    "resolve_target_wall_clock",
    "to_iso",
    "wall_clock_now",
]
