"""Tests for the relative-date calendar tools."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest

from calendar_agent.context.models import ToolContext
from calendar_agent.dates.errors import DateCalculationInconsistency
from calendar_agent.ics.events import CalendarEvent
from calendar_agent.store.caldav_store import CreatedEvent
from calendar_agent.tools.calendar_tools import (
    CALCULATION_FAILED_MESSAGE,
    CreateEventTool,
    GetEventsInTimeSlotTool,
    ListEventsTool,
)

UTC = timezone.utc

# Thursday 2025-01-09 10:00 Helsinki
REFERENCE_NOW = datetime(2025, 1, 9, 8, 0, tzinfo=UTC)


@pytest.fixture
def context():
    """Tool context pinned to the reference clock."""
    return ToolContext(timezone="Europe/Helsinki", locale="en_GB", now=REFERENCE_NOW)


@pytest.fixture
def calendar_client():
    """Mock CalDAV client."""
    client = MagicMock()
    client.create_event.side_effect = lambda title, start, end, description=None, location=None: (
        CreatedEvent(uid="uid-1@calendar-agent", title=title, start=start, end=end)
    )
    client.list_calendar_events.return_value = []
    client.get_events_in_range.return_value = []
    return client


class TestCreateEventTool:
    """Tests for create_event."""

    @pytest.mark.asyncio
    async def test_next_monday(self, context, calendar_client):
        """Next Monday 09:00 Helsinki is stored as 07:00 UTC."""
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(
            context, title="Team meeting", weekOffset=1, weekday="monday", time="09:00"
        )

        assert result.success is True
        calendar_client.create_event.assert_called_once_with(
            title="Team meeting",
            start=datetime(2025, 1, 13, 7, 0, tzinfo=UTC),
            end=datetime(2025, 1, 13, 8, 0, tzinfo=UTC),
            description=None,
            location=None,
        )
        assert result.data == {
            "uid": "uid-1@calendar-agent",
            "title": "Team meeting",
            "start": "2025-01-13T07:00:00+00:00",
            "end": "2025-01-13T08:00:00+00:00",
            "timezone": "Europe/Helsinki",
        }
        assert result.message.startswith('Successfully scheduled "Team meeting" for ')
        assert "Monday" in result.message
        assert "13 January 2025" in result.message
        assert "09:00" in result.message

    @pytest.mark.asyncio
    async def test_duration_and_optional_fields(self, context, calendar_client):
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(
            context,
            title="Review",
            weekOffset=0,
            weekday="friday",
            time="15:00",
            durationMinutes=30,
            description="Quarterly numbers",
            location="Room 2",
        )

        assert result.success is True
        kwargs = calendar_client.create_event.call_args.kwargs
        assert kwargs["start"] == datetime(2025, 1, 10, 13, 0, tzinfo=UTC)
        assert kwargs["end"] - kwargs["start"] == timedelta(minutes=30)
        assert kwargs["description"] == "Quarterly numbers"
        assert kwargs["location"] == "Room 2"

    @pytest.mark.asyncio
    async def test_timezone_override(self, context, calendar_client):
        """A timezone argument overrides the context timezone."""
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(
            context,
            title="Call",
            weekOffset=1,
            weekday="monday",
            time="09:00",
            timezone="America/New_York",
        )

        assert result.success is True
        assert result.data["timezone"] == "America/New_York"
        assert calendar_client.create_event.call_args.kwargs["start"] == datetime(
            2025, 1, 13, 14, 0, tzinfo=UTC
        )

    @pytest.mark.asyncio
    async def test_missing_title(self, context, calendar_client):
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(context, weekOffset=1, weekday="monday", time="09:00")

        assert result.success is False
        assert result.error == "Missing required parameter: title"
        calendar_client.create_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_weekday(self, context, calendar_client):
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(context, title="X", weekOffset=1, time="09:00")

        assert result.success is False
        assert result.error == "Missing required parameter: weekday"

    @pytest.mark.asyncio
    async def test_invalid_time(self, context, calendar_client):
        """Bad times are rejected with a message that echoes the value."""
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(
            context, title="X", weekOffset=0, weekday="friday", time="25:00"
        )

        assert result.success is False
        assert result.error.startswith('Invalid time format: "25:00"')
        calendar_client.create_event.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("time", ["09:00\n", "٠٩:٠٠"])
    async def test_time_must_be_ascii_digits_only(self, context, calendar_client, time):
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(context, title="X", weekOffset=0, weekday="friday", time=time)

        assert result.success is False
        assert result.error.startswith("Invalid time format")
        calendar_client.create_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_weekday(self, context, calendar_client):
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(
            context, title="X", weekOffset=0, weekday="funday", time="09:00"
        )

        assert result.success is False
        assert result.error.startswith("Invalid weekday: 'funday'")

    @pytest.mark.asyncio
    async def test_invalid_timezone(self, context, calendar_client):
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(
            context, title="X", weekOffset=0, weekday="friday", time="09:00", timezone="Mars/Base"
        )

        assert result.success is False
        assert result.error.startswith("Invalid timezone: 'Mars/Base'")

    @pytest.mark.asyncio
    async def test_non_positive_duration(self, context, calendar_client):
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(
            context, title="X", weekOffset=0, weekday="friday", time="09:00", durationMinutes=0
        )

        assert result.success is False
        assert result.error.startswith("Invalid durationMinutes")

    @pytest.mark.asyncio
    async def test_calculation_inconsistency_is_generic(self, context, calendar_client):
        """An internal arithmetic failure is reported without details."""
        tool = CreateEventTool(calendar_client)

        with patch(
            "calendar_agent.tools.calendar_tools.resolve_slot",
            side_effect=DateCalculationInconsistency("expected monday, got tuesday"),
        ):
            result = await tool.execute(
                context, title="X", weekOffset=1, weekday="monday", time="09:00"
            )

        assert result.success is False
        assert result.error == CALCULATION_FAILED_MESSAGE
        calendar_client.create_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure(self, context, calendar_client):
        calendar_client.create_event.side_effect = RuntimeError("403 Forbidden")
        tool = CreateEventTool(calendar_client)

        result = await tool.execute(
            context, title="X", weekOffset=1, weekday="monday", time="09:00"
        )

        assert result.success is False
        assert result.error == "Failed to create calendar event: 403 Forbidden"

    def test_schema(self, calendar_client):
        schema = CreateEventTool(calendar_client).get_schema()

        assert schema["name"] == "create_event"
        assert schema["parameters"]["required"] == ["title", "weekOffset", "weekday", "time"]
        properties = schema["parameters"]["properties"]
        assert properties["weekday"]["enum"][0] == "monday"
        assert "durationMinutes" in properties
        assert "timezone" in properties
        assert properties["time"]["pattern"] == r"^[0-9]{2}:[0-9]{2}$"


class TestListEventsTool:
    """Tests for list_events."""

    @pytest.mark.asyncio
    async def test_empty_calendar(self, context, calendar_client):
        result = await ListEventsTool(calendar_client).execute(context)

        assert result.success is True
        assert result.message == "No events found."
        assert result.data == {"events": [], "count": 0}

    @pytest.mark.asyncio
    async def test_lists_events_in_context_timezone(self, context, calendar_client):
        calendar_client.list_calendar_events.return_value = [
            CalendarEvent(
                title="Team meeting",
                start=datetime(2025, 1, 13, 7, 0, tzinfo=UTC),
                end=datetime(2025, 1, 13, 8, 0, tzinfo=UTC),
                location="Room 1",
            )
        ]

        result = await ListEventsTool(calendar_client).execute(context)

        assert result.success is True
        assert result.message == (
            "Found 1 event(s):\n"
            "- Team meeting: 2025-01-13 (Monday) 09:00 to 2025-01-13 (Monday) 10:00 at Room 1"
        )
        assert result.data["count"] == 1
        assert result.data["events"][0]["start"] == "2025-01-13T07:00:00+00:00"

    def test_schema_has_no_parameters(self, calendar_client):
        schema = ListEventsTool(calendar_client).get_schema()

        assert schema["name"] == "list_events"
        assert schema["parameters"]["properties"] == {}


class TestGetEventsInTimeSlotTool:
    """Tests for get_events_in_time_slot."""

    @pytest.mark.asyncio
    async def test_free_slot(self, context, calendar_client):
        tool = GetEventsInTimeSlotTool(calendar_client)

        result = await tool.execute(context, weekOffset=0, weekday="friday", time="15:00")

        calendar_client.get_events_in_range.assert_called_once_with(
            datetime(2025, 1, 10, 13, 0, tzinfo=UTC),
            datetime(2025, 1, 10, 14, 0, tzinfo=UTC),
        )
        assert result.success is True
        assert result.data["is_free"] is True
        assert result.data["events"] == []
        assert result.data["slot"] == {
            "start": "2025-01-10T13:00:00+00:00",
            "end": "2025-01-10T14:00:00+00:00",
            "timezone": "Europe/Helsinki",
        }
        first_line, status = result.message.split("\n")
        assert first_line.startswith("Time slot: ")
        assert "Friday" in first_line
        assert first_line.endswith(" - 16:00")
        assert status == "AVAILABLE - This time slot is FREE, no events scheduled."

    @pytest.mark.asyncio
    async def test_busy_slot(self, context, calendar_client):
        calendar_client.get_events_in_range.return_value = [
            CalendarEvent(
                title="Dentist",
                start=datetime(2025, 1, 10, 13, 0, tzinfo=UTC),
                end=datetime(2025, 1, 10, 13, 30, tzinfo=UTC),
            )
        ]
        tool = GetEventsInTimeSlotTool(calendar_client)

        result = await tool.execute(context, weekOffset=0, weekday="friday", time="15:00")

        assert result.success is True
        assert result.data["is_free"] is False
        lines = result.message.split("\n")
        assert lines[1] == "BUSY - This time slot is NOT FREE. Found 1 event(s):"
        assert lines[2] == "- Dentist: 2025-01-10 (Friday) 15:00 to 2025-01-10 (Friday) 15:30"

    @pytest.mark.asyncio
    async def test_invalid_input_skips_store(self, context, calendar_client):
        tool = GetEventsInTimeSlotTool(calendar_client)

        result = await tool.execute(context, weekOffset="soon", weekday="friday", time="15:00")

        assert result.success is False
        assert result.error.startswith("Invalid weekOffset")
        calendar_client.get_events_in_range.assert_not_called()

    def test_schema(self, calendar_client):
        schema = GetEventsInTimeSlotTool(calendar_client).get_schema()

        assert schema["name"] == "get_events_in_time_slot"
        assert schema["parameters"]["required"] == ["weekOffset", "weekday", "time"]
        assert "title" not in schema["parameters"]["properties"]
