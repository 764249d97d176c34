"""
iCalendar (RFC 5545) date-time codec.

Date-time values come in several wire forms:

- ``20250113T070000Z``                 UTC
- ``20250113T090000``                  floating, read in a fallback timezone
- ``TZID=Europe/Helsinki:20250113T090000``  wall-clock in a named zone
- ``20250113T090000+0200``             fixed UTC offset
- ``20250113``                         date only (midnight)

Decoding classifies the form and returns an aware UTC datetime. Malformed
values decode to None with a warning so one bad event never aborts a listing.
Encoding builds the block with icalendar and always emits the UTC form.
"""

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol

from icalendar import Calendar as iCalendar
from icalendar import Event as iEvent

from ..dates.wall_clock import get_zone, is_valid_timezone
from ..dates.weekday import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

DEFAULT_UID_DOMAIN = "calendar-agent"
PRODID = "-//Calendar Agent//EN"

DATE_PATTERN = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})(?:T([0-9]{2})([0-9]{2})([0-9]{2})?)?")
OFFSET_PATTERN = re.compile(r"(.+T[0-9]+)([+-])([0-9]{2}):?([0-9]{2})")


class WarningLogger(Protocol):
    """Sink for decode warnings (a logging.Logger satisfies this)."""

    def warning(self, msg: str, *args, **kwargs) -> None:
        ...


def decode_ics_date(
    token: Optional[str],
    fallback_zone: str = DEFAULT_TIMEZONE,
    log: Optional[WarningLogger] = None,
) -> Optional[datetime]:
    """
    Decode an iCalendar date-time value to a UTC instant.

    Args:
        token: Date-time value, optionally prefixed with "TZID=<zone>:"
        fallback_zone: IANA timezone for floating values and unknown TZIDs
        log: Anything with a warning(msg) method; defaults to this module's logger

    Returns:
        Aware UTC datetime, or None if the value is empty or malformed
    """
    log = log or logger
    if not token:
        return None

    value = token.strip()
    tzinfo = None

    if value[:5].upper() == "TZID=":
        tzid, sep, value = value[5:].partition(":")
        if not sep:
            log.warning(f"Malformed iCal date (TZID without value): {token!r}")
            return None
        tzid = tzid.strip('"')
        if is_valid_timezone(tzid):
            tzinfo = get_zone(tzid)
        else:
            log.warning(
                f"Unknown TZID {tzid!r} in iCal date {token!r}, falling back to {fallback_zone}"
            )
            tzinfo = get_zone(fallback_zone)
    elif value[-1:] in ("Z", "z"):
        value = value[:-1]
        tzinfo = timezone.utc
    else:
        offset_match = OFFSET_PATTERN.fullmatch(value)
        if offset_match:
            value, sign, hours, minutes = offset_match.groups()
            delta = timedelta(hours=int(hours), minutes=int(minutes))
            try:
                tzinfo = timezone(-delta if sign == "-" else delta)
            except ValueError:
                log.warning(f"Malformed iCal date (offset out of range): {token!r}")
                return None
        else:
            tzinfo = get_zone(fallback_zone)

    match = DATE_PATTERN.fullmatch(value)
    if not match:
        log.warning(f"Malformed iCal date: {token!r}")
        return None

    year, month, day, hour, minute, second = match.groups()
    try:
        parsed = datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            tzinfo=tzinfo,
        )
    except ValueError:
        log.warning(f"Malformed iCal date (impossible calendar value): {token!r}")
        return None

    return parsed.astimezone(timezone.utc)


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        raise ValueError("Instant must be timezone-aware")
    return instant.astimezone(timezone.utc)


@dataclass
class ICalInput:
    """Event data to serialize into a VCALENDAR block."""

    title: str
    start: datetime
    end: datetime
    description: Optional[str] = None
    location: Optional[str] = None
    uid: Optional[str] = None
    domain: str = DEFAULT_UID_DOMAIN


def generate_uid(domain: str = DEFAULT_UID_DOMAIN) -> str:
    """Generate a unique event identifier."""
    return f"{uuid.uuid4()}@{domain}"


def encode_event(event: ICalInput, now: Optional[datetime] = None) -> str:
    """
    Serialize an event as an RFC 5545 VCALENDAR/VEVENT block.

    icalendar takes care of TEXT escaping, line folding and CRLF endings.

    Args:
        event: Event data with aware start/end instants
        now: Optional aware instant for DTSTAMP (defaults to the system clock)

    Returns:
        iCalendar text

    Raises:
        ValueError: If start, end or now is naive
    """
    stamp = _as_utc(now or datetime.now(timezone.utc))

    cal = iCalendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")

    ievent = iEvent()
    ievent.add("uid", event.uid or generate_uid(event.domain))
    ievent.add("dtstamp", stamp)
    ievent.add("dtstart", _as_utc(event.start))
    ievent.add("dtend", _as_utc(event.end))
    ievent.add("summary", event.title)
    if event.description:
        ievent.add("description", event.description)
    if event.location:
        ievent.add("location", event.location)

    cal.add_component(ievent)
    return cal.to_ical().decode("utf-8")
