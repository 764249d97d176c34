"""Calendar tools driven by relative date input."""

import asyncio
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from .base import BaseTool, ToolResult
from ..agent.prompts import (
    CREATE_EVENT_DESCRIPTION,
    GET_EVENTS_IN_TIME_SLOT_DESCRIPTION,
    LIST_EVENTS_DESCRIPTION,
)
from ..context.models import ToolContext
from ..dates.errors import DateCalculationInconsistency, DateResolutionError
from ..dates.formatting import format_event_list, format_instant, format_time
from ..dates.resolver import RelativeDateInput, ResolvedSlot, resolve_slot
from ..dates.weekday import WEEKDAYS
from ..store.caldav_store import CalDAVCalendarClient

logger = logging.getLogger(__name__)

RELATIVE_DATE_PROPERTIES: Dict[str, Any] = {
    "weekOffset": {
        "type": "integer",
        "description": "0 = this week, 1 = next week, -1 = last week, etc.",
    },
    "weekday": {
        "type": "string",
        "enum": list(WEEKDAYS),
        "description": "The target day of the week",
    },
    "time": {
        "type": "string",
        "pattern": r"^[0-9]{2}:[0-9]{2}$",
        "description": "Time in HH:mm format (24-hour)",
    },
    "durationMinutes": {
        "type": "integer",
        "minimum": 1,
        "description": "Duration in minutes (optional, defaults to 60)",
    },
    "timezone": {
        "type": "string",
        "description": "IANA timezone, e.g. 'Europe/Helsinki' (optional, defaults to the user's timezone)",
    },
}

RELATIVE_DATE_REQUIRED = ["weekOffset", "weekday", "time"]

CALCULATION_FAILED_MESSAGE = "Failed to calculate the event date. Please try again."


def describe_validation_error(error: ValidationError) -> str:
    """
    Turn a pydantic validation error into a short message naming the field.

    Args:
        error: Validation error raised for RelativeDateInput

    Returns:
        Message such as "Missing required parameter: weekday"
    """
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "input"
    if first.get("type") == "missing":
        return f"Missing required parameter: {field}"

    message = first.get("msg", "invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    if message.startswith("Invalid "):
        return message
    return f"Invalid {field}: {message}"


class RelativeDateTool(BaseTool):
    """Shared handling for tools that take relative date parameters."""

    def __init__(self, name: str, description: str, calendar_client: CalDAVCalendarClient):
        """
        Initialize tool.

        Args:
            name: Tool name
            description: Tool description
            calendar_client: CalDAV store used by the tool
        """
        super().__init__(name=name, description=description)
        self.calendar_client = calendar_client

    def _resolve(self, context: ToolContext, kwargs: Dict[str, Any]):
        """
        Validate relative date parameters and resolve them to a slot.

        Returns:
            Tuple of (ResolvedSlot or None, ToolResult error or None)
        """
        try:
            relative = RelativeDateInput.model_validate(kwargs)
        except ValidationError as e:
            return None, ToolResult.failure(describe_validation_error(e))

        try:
            slot = resolve_slot(relative, now=context.now, default_timezone=context.timezone)
        except DateCalculationInconsistency as e:
            logger.error(f"{self.name}: date calculation failed: {e}")
            return None, ToolResult.failure(CALCULATION_FAILED_MESSAGE)
        except DateResolutionError as e:
            return None, ToolResult.failure(str(e))

        return slot, None

    def get_parameters(self) -> Dict[str, Any]:
        return dict(RELATIVE_DATE_PROPERTIES)

    def get_required(self) -> List[str]:
        return list(RELATIVE_DATE_REQUIRED)


class CreateEventTool(RelativeDateTool):
    """Tool for creating calendar events at a relative date."""

    def __init__(self, calendar_client: CalDAVCalendarClient):
        super().__init__(
            name="create_event",
            description=CREATE_EVENT_DESCRIPTION,
            calendar_client=calendar_client,
        )

    async def execute(self, context: ToolContext, **kwargs) -> ToolResult:
        """
        Create a calendar event.

        Args:
            context: Tool context
            **kwargs: Must contain:
                - 'title' (str): Event title
                - 'weekOffset' (int), 'weekday' (str), 'time' (str "HH:mm")
                Optional:
                - 'durationMinutes' (int), 'timezone' (str)
                - 'description' (str), 'location' (str)

        Returns:
            ToolResult with created event info
        """
        title = kwargs.get("title")
        if not title:
            return ToolResult.failure("Missing required parameter: title")

        slot, error = self._resolve(context, kwargs)
        if error:
            return error

        try:
            created = await asyncio.to_thread(
                self.calendar_client.create_event,
                title=title,
                start=slot.start,
                end=slot.end,
                description=kwargs.get("description"),
                location=kwargs.get("location"),
            )
        except Exception as e:
            logger.warning(f"Failed to create calendar event '{title}': {e}")
            return ToolResult.failure(f"Failed to create calendar event: {str(e)}")

        start_str = format_instant(slot.start, slot.timezone, context.locale)
        return ToolResult(
            success=True,
            data={
                "uid": created.uid,
                "title": title,
                "start": slot.start.isoformat(),
                "end": slot.end.isoformat(),
                "timezone": slot.timezone,
            },
            message=f'Successfully scheduled "{title}" for {start_str}',
        )

    def get_parameters(self) -> Dict[str, Any]:
        return {
            "title": {
                "type": "string",
                "description": "Short title of the event",
            },
            **RELATIVE_DATE_PROPERTIES,
            "description": {
                "type": "string",
                "description": "Optional detailed description",
            },
            "location": {
                "type": "string",
                "description": "Optional location of the event",
            },
        }

    def get_required(self) -> List[str]:
        return ["title", *RELATIVE_DATE_REQUIRED]


class ListEventsTool(BaseTool):
    """Tool for listing every event in the calendar."""

    def __init__(self, calendar_client: CalDAVCalendarClient):
        super().__init__(name="list_events", description=LIST_EVENTS_DESCRIPTION)
        self.calendar_client = calendar_client

    async def execute(self, context: ToolContext, **kwargs) -> ToolResult:
        """List events; an unreachable calendar reads as empty."""
        events = await asyncio.to_thread(self.calendar_client.list_calendar_events)

        if not events:
            text = "No events found."
        else:
            text = f"Found {len(events)} event(s):\n{format_event_list(events, timezone=context.timezone)}"

        return ToolResult(
            success=True,
            data={
                "events": [event.to_dict() for event in events],
                "count": len(events),
            },
            message=text,
        )


class GetEventsInTimeSlotTool(RelativeDateTool):
    """Tool for checking which events fall in a relative time slot."""

    def __init__(self, calendar_client: CalDAVCalendarClient):
        super().__init__(
            name="get_events_in_time_slot",
            description=GET_EVENTS_IN_TIME_SLOT_DESCRIPTION,
            calendar_client=calendar_client,
        )

    async def execute(self, context: ToolContext, **kwargs) -> ToolResult:
        """
        Check a time slot for existing events.

        Args:
            context: Tool context
            **kwargs: 'weekOffset', 'weekday', 'time' and optionally
                'durationMinutes' and 'timezone'

        Returns:
            ToolResult with availability and the events found
        """
        slot, error = self._resolve(context, kwargs)
        if error:
            return error

        events = await asyncio.to_thread(
            self.calendar_client.get_events_in_range, slot.start, slot.end
        )

        is_free = len(events) == 0
        if is_free:
            status = "AVAILABLE - This time slot is FREE, no events scheduled."
        else:
            status = f"BUSY - This time slot is NOT FREE. Found {len(events)} event(s):"
        event_list = format_event_list(events, "", slot.timezone)

        text = f"{self._describe_slot(slot, context)}\n{status}"
        if event_list:
            text += f"\n{event_list}"

        return ToolResult(
            success=True,
            data={
                "events": [event.to_dict() for event in events],
                "is_free": is_free,
                "slot": {
                    "start": slot.start.isoformat(),
                    "end": slot.end.isoformat(),
                    "timezone": slot.timezone,
                },
            },
            message=text,
        )

    @staticmethod
    def _describe_slot(slot: ResolvedSlot, context: ToolContext) -> str:
        start_str = format_instant(slot.start, slot.timezone, context.locale, include_time=True)
        end_str = format_time(slot.end, slot.timezone, context.locale)
        return f"Time slot: {start_str} - {end_str}"
