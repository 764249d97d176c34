"""Extraction of VEVENT fields from iCalendar text."""

import logging
from typing import Dict, List, Optional

from icalendar.parser import Contentlines
from icalendar.prop import vText

from .codec import WarningLogger

logger = logging.getLogger(__name__)

DATE_KEYS = {"DTSTART": "start_date", "DTEND": "end_date"}
TEXT_KEYS = {
    "SUMMARY": "summary",
    "DESCRIPTION": "description",
    "LOCATION": "location",
    "UID": "uid",
}


def ics_to_json(ics_data: str, log: Optional[WarningLogger] = None) -> List[Dict[str, str]]:
    """
    Extract events from iCalendar text.

    Lines are unfolded and split into name, parameters and value by
    icalendar's content line parser, so quoted parameter values may contain
    colons and semicolons. Date values are kept as raw tokens for the date
    codec, with their TZID parameter as a "TZID=<zone>:" prefix. TEXT values
    are unescaped.

    Args:
        ics_data: Raw iCalendar text (one or more VCALENDAR blocks)
        log: Warning sink for unparseable lines; defaults to this module's logger

    Returns:
        List of dicts with any of start_date, end_date, summary,
        description, location, uid
    """
    log = log or logger
    events: List[Dict[str, str]] = []
    current: Dict[str, str] = {}
    # Components opened inside the current VEVENT (VALARM and the like)
    nested: List[str] = []
    in_event = False

    for line in Contentlines.from_ical(ics_data):
        if not line:
            continue

        try:
            name, params, value = line.parts()
        except ValueError as e:
            log.warning(f"Skipping unparseable iCal line {str(line)!r}: {e}")
            continue
        name = name.upper()

        if name == "BEGIN":
            if in_event:
                nested.append(value.upper())
            elif value.upper() == "VEVENT":
                current = {}
                in_event = True
            continue

        if name == "END":
            if nested:
                nested.pop()
            elif in_event and value.upper() == "VEVENT":
                events.append(current)
                in_event = False
            continue

        if not in_event or nested:
            continue

        if name in DATE_KEYS:
            tzid = params.get("TZID")
            current[DATE_KEYS[name]] = f"TZID={tzid}:{value}" if tzid else value
        elif name in TEXT_KEYS:
            current[TEXT_KEYS[name]] = str(vText.from_ical(value))

    return events
