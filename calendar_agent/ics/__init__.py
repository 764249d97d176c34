"""iCalendar encoding and decoding."""

from .codec import (
    DEFAULT_UID_DOMAIN,
    ICalInput,
    decode_ics_date,
    encode_event,
    generate_uid,
)
from .events import CalendarEvent, map_ics_to_calendar_events, parse_calendar_objects
from .parser import ics_to_json

__all__ = [
    "DEFAULT_UID_DOMAIN",
    "CalendarEvent",
    "ICalInput",
    "decode_ics_date",
    "encode_event",
    "generate_uid",
    "ics_to_json",
    "map_ics_to_calendar_events",
    "parse_calendar_objects",
]
