"""Calendar tools exposed to the language model."""

from .base import BaseTool, ToolContext, ToolResult
from .calendar_tools import CreateEventTool, GetEventsInTimeSlotTool, ListEventsTool
from .registry import ToolRegistry

__all__ = [
    "BaseTool",
    "ToolResult",
    "ToolContext",
    "ToolRegistry",
    "CreateEventTool",
    "GetEventsInTimeSlotTool",
    "ListEventsTool",
]
