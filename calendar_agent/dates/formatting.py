"""Display formatting for instants and calendar events."""

import re
from datetime import datetime
from typing import TYPE_CHECKING, Iterable, Optional

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates

from .wall_clock import get_zone
from .weekday import DEFAULT_TIMEZONE, from_iso

if TYPE_CHECKING:
    from ..ics.events import CalendarEvent

DEFAULT_LOCALE = "fi_FI"

DATETIME_TOKEN_PATTERN = re.compile(r"\{[01]\}|'(?:[^']|'')*'")


def get_locale(locale: str) -> Locale:
    """
    Parse a locale identifier.

    Accepts both "fi_FI" and "fi-FI" spellings.

    Raises:
        ValueError: If the locale is unknown
    """
    try:
        if "-" in locale:
            return Locale.parse(locale, sep="-")
        return Locale.parse(locale)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        raise ValueError(f"Invalid locale: '{locale}' ({e})") from None


def _is_midnight(local: datetime) -> bool:
    return local.hour == 0 and local.minute == 0


def combine_date_time(pattern: str, date_part: str, time_part: str) -> str:
    """
    Fill a CLDR date-time pattern such as "{1} 'klo' {0}".

    Quoted text is literal and a doubled quote stands for one apostrophe.
    """

    def _replace(match: re.Match) -> str:
        token = match.group(0)
        if token == "{0}":
            return time_part
        if token == "{1}":
            return date_part
        if token == "''":
            return "'"
        return token[1:-1].replace("''", "'")

    return DATETIME_TOKEN_PATTERN.sub(_replace, pattern)


def format_instant(
    instant: datetime,
    timezone: str = DEFAULT_TIMEZONE,
    locale: str = DEFAULT_LOCALE,
    include_weekday: bool = True,
    include_time: Optional[bool] = None,
) -> str:
    """
    Format an instant as a localized date/time string in a timezone.

    Args:
        instant: Timezone-aware instant
        timezone: IANA timezone to display the instant in
        locale: Display locale (e.g., 'fi_FI', 'en-US')
        include_weekday: Whether to include the weekday name
        include_time: True forces the time, False hides it, None shows it
            unless the instant is at midnight in the target timezone

    Returns:
        Localized string, e.g. "torstai 9. tammikuuta 2025 klo 10.00"
    """
    zone = get_zone(timezone)
    babel_locale = get_locale(locale)
    local = instant.astimezone(zone)

    if include_time is None:
        include_time = not _is_midnight(local)

    date_part = babel_dates.format_date(
        local, format="full" if include_weekday else "long", locale=babel_locale
    )
    if not include_time:
        return date_part

    time_part = babel_dates.format_time(local, format="short", tzinfo=zone, locale=babel_locale)
    pattern = babel_dates.get_datetime_format("long", locale=babel_locale)
    return combine_date_time(pattern, date_part, time_part)


def format_time(
    instant: datetime,
    timezone: str = DEFAULT_TIMEZONE,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Format the time-of-day of an instant in a timezone (e.g. "11.00")."""
    zone = get_zone(timezone)
    return babel_dates.format_time(
        instant.astimezone(zone), format="short", tzinfo=zone, locale=get_locale(locale)
    )


def format_date(instant: Optional[datetime], timezone: str = DEFAULT_TIMEZONE) -> Optional[str]:
    """
    Format an instant as "YYYY-MM-DD (Weekday) HH:MM" in a timezone.

    Midnight renders date-only as "YYYY-MM-DD (Weekday)".
    """
    if instant is None:
        return None

    local = instant.astimezone(get_zone(timezone))
    weekday = from_iso(local.isoweekday()).display_name
    date_str = f"{local:%Y-%m-%d} ({weekday})"
    if _is_midnight(local):
        return date_str
    return f"{date_str} {local:%H:%M}"


def format_event(event: "CalendarEvent", timezone: str = DEFAULT_TIMEZONE) -> str:
    """Format a single event as a list line."""
    start_str = format_date(event.start, timezone)
    end_str = format_date(event.end, timezone)

    if not start_str:
        time_range = "No time"
    elif end_str and end_str != start_str:
        time_range = f"{start_str} to {end_str}"
    else:
        time_range = start_str

    location = f" at {event.location}" if event.location else ""
    return f"- {event.title}: {time_range}{location}"


def format_event_list(
    events: Iterable["CalendarEvent"],
    empty_message: str = "",
    timezone: str = DEFAULT_TIMEZONE,
) -> str:
    """Format events one per line, or return empty_message if there are none."""
    lines = [format_event(event, timezone) for event in events]
    if not lines:
        return empty_message
    return "\n".join(lines)
