"""CalDAV calendar store."""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import caldav

from ..dates.weekday import DEFAULT_TIMEZONE
from ..ics.codec import DEFAULT_UID_DOMAIN, ICalInput, encode_event, generate_uid
from ..ics.events import CalendarEvent, parse_calendar_objects

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "http://localhost:5232/"


class CalendarNotFoundError(Exception):
    """Raised when the CalDAV principal has no calendars."""


@dataclass
class CreatedEvent:
    """Summary of an event stored on the server."""

    uid: str
    title: str
    start: datetime
    end: datetime


class CalDAVCalendarClient:
    """
    Read and write events in the primary calendar of a CalDAV account.

    The connection is opened lazily on first use and shared afterwards. A
    failed login is not cached, so the next call tries again.

    Read operations treat an unreachable server as an empty calendar. Writes
    raise, since a lost event must not look like a success.
    """

    def __init__(
        self,
        server_url: str = DEFAULT_SERVER_URL,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: int = 30,
        uid_domain: str = DEFAULT_UID_DOMAIN,
        fallback_timezone: str = DEFAULT_TIMEZONE,
    ):
        """
        Initialize CalDAV client.

        Args:
            server_url: CalDAV server URL
            username: Basic auth username
            password: Basic auth password
            timeout: HTTP timeout in seconds
            uid_domain: Domain suffix for generated event UIDs
            fallback_timezone: Timezone for floating dates in stored events
        """
        self.server_url = server_url
        self.username = username
        self.password = password
        self.timeout = timeout
        self.uid_domain = uid_domain
        self.fallback_timezone = fallback_timezone
        self._principal = None
        self._lock = threading.Lock()

    def _get_principal(self):
        """Get or create the authenticated principal."""
        with self._lock:
            if self._principal is not None:
                return self._principal

            client = caldav.DAVClient(
                url=self.server_url,
                username=self.username,
                password=self.password,
                timeout=self.timeout,
            )
            # principal() performs the first authenticated request
            self._principal = client.principal()
            logger.info(f"Connected to CalDAV server at {self.server_url}")
            return self._principal

    def reset(self) -> None:
        """Drop the cached connection."""
        with self._lock:
            self._principal = None

    def get_primary_calendar(self):
        """
        Get the first calendar of the authenticated user.

        Raises:
            CalendarNotFoundError: If the account has no calendars
        """
        try:
            calendars = self._get_principal().calendars()
        except Exception:
            self.reset()
            raise

        if not calendars:
            raise CalendarNotFoundError("No calendars found for the user.")
        return calendars[0]

    def create_event(
        self,
        title: str,
        start: datetime,
        end: datetime,
        description: Optional[str] = None,
        location: Optional[str] = None,
    ) -> CreatedEvent:
        """
        Store a new event in the primary calendar.

        Args:
            title: Event title
            start: Aware start instant
            end: Aware end instant
            description: Optional description
            location: Optional location

        Returns:
            CreatedEvent with the generated UID
        """
        calendar = self.get_primary_calendar()
        uid = generate_uid(self.uid_domain)
        ical = encode_event(
            ICalInput(
                title=title,
                start=start,
                end=end,
                description=description,
                location=location,
                uid=uid,
            )
        )
        calendar.save_event(ical)
        logger.info(f"Created event '{title}' ({uid}) at {start.isoformat()}")
        return CreatedEvent(uid=uid, title=title, start=start, end=end)

    def list_events(self) -> List[str]:
        """
        Fetch every event in the primary calendar as raw iCalendar text.

        Returns:
            List of ICS strings, empty if the server cannot be reached
        """
        try:
            calendar = self.get_primary_calendar()
            objects = calendar.events()
        except Exception as e:
            logger.warning(f"Failed to list CalDAV events: {e}")
            return []
        return [obj.data for obj in objects if obj.data]

    def list_calendar_events(self) -> List[CalendarEvent]:
        """Fetch and parse every event in the primary calendar."""
        return parse_calendar_objects(self.list_events(), self.fallback_timezone)

    def get_events_in_range(self, start: datetime, end: datetime) -> List[CalendarEvent]:
        """
        Fetch events overlapping a time range.

        Args:
            start: Aware range start
            end: Aware range end

        Returns:
            Parsed events, empty if the server cannot be reached
        """
        try:
            calendar = self.get_primary_calendar()
            objects = calendar.search(start=start, end=end, event=True, expand=False)
        except Exception as e:
            logger.warning(
                f"Failed to fetch CalDAV events between {start.isoformat()} and {end.isoformat()}: {e}"
            )
            return []

        if not objects:
            return []
        return parse_calendar_objects(objects, self.fallback_timezone)
