"""Calendar storage backends."""

from .caldav_store import CalDAVCalendarClient, CalendarNotFoundError, CreatedEvent

__all__ = ["CalDAVCalendarClient", "CalendarNotFoundError", "CreatedEvent"]
