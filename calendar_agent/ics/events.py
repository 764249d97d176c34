"""Calendar event model and conversion from iCalendar text."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from ..dates.weekday import DEFAULT_TIMEZONE
from .codec import WarningLogger, decode_ics_date
from .parser import ics_to_json


@dataclass
class CalendarEvent:
    """A calendar event with UTC start/end instants."""

    title: str
    start: Optional[datetime]
    end: Optional[datetime]
    location: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict with ISO 8601 timestamps."""
        return {
            "title": self.title,
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "location": self.location,
            "description": self.description,
        }


def map_ics_to_calendar_events(
    ics_data: str,
    fallback_zone: str = DEFAULT_TIMEZONE,
    log: Optional[WarningLogger] = None,
) -> List[CalendarEvent]:
    """
    Parse iCalendar text into CalendarEvent objects.

    Args:
        ics_data: Raw iCalendar text
        fallback_zone: Timezone for floating date values
        log: Optional warning sink for malformed dates

    Returns:
        List of events in document order
    """
    return [
        CalendarEvent(
            title=raw.get("summary") or "Untitled",
            start=decode_ics_date(raw.get("start_date"), fallback_zone, log=log),
            end=decode_ics_date(raw.get("end_date"), fallback_zone, log=log),
            location=raw.get("location") or None,
            description=raw.get("description") or None,
        )
        for raw in ics_to_json(ics_data, log=log)
    ]


def parse_calendar_objects(
    calendar_objects: Iterable[Union[str, Any]],
    fallback_zone: str = DEFAULT_TIMEZONE,
    log: Optional[WarningLogger] = None,
) -> List[CalendarEvent]:
    """
    Parse raw calendar objects into a flat list of events.

    Args:
        calendar_objects: ICS strings or objects with a ``data`` attribute
        fallback_zone: Timezone for floating date values
        log: Optional warning sink for malformed dates

    Returns:
        Events from every object that has data
    """
    events: List[CalendarEvent] = []
    for obj in calendar_objects:
        data = obj if isinstance(obj, str) else getattr(obj, "data", None)
        if not data:
            continue
        events.extend(map_ics_to_calendar_events(data, fallback_zone, log=log))
    return events
