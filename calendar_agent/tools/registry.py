"""Centralized tool registry."""

import logging
from typing import Dict, List, Optional

from .base import BaseTool
from ..config.config_schema import AppConfig

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Centralized registry for all tools."""

    def __init__(self):
        """Initialize empty tool registry."""
        self._tools: Dict[str, BaseTool] = {}

    def register_tool(self, tool: BaseTool) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool instance to register
        """
        self._tools[tool.get_name()] = tool

    def get_tool(self, name: str) -> Optional[BaseTool]:
        """
        Get a tool by name.

        Args:
            name: Tool name

        Returns:
            Tool instance or None if not found
        """
        return self._tools.get(name)

    def get_all_tools(self) -> List[BaseTool]:
        """
        Get all registered tools.

        Returns:
            List of all registered tools
        """
        return list(self._tools.values())

    def get_schemas(self) -> List[Dict]:
        """Get the schema of every registered tool."""
        return [tool.get_schema() for tool in self._tools.values()]

    def initialize_tools(self, config: AppConfig, calendar_client=None) -> None:
        """
        Initialize and register all tools based on configuration.

        Args:
            config: Application configuration
            calendar_client: Optional pre-built CalDAVCalendarClient
        """
        if calendar_client is None:
            if not config.caldav:
                logger.warning("CalDAV is not configured; calendar tools are unavailable")
                return

            from ..store.caldav_store import CalDAVCalendarClient

            calendar_client = CalDAVCalendarClient(
                server_url=config.caldav.server_url,
                username=config.caldav.username,
                password=config.caldav.password,
                timeout=config.caldav.timeout,
                uid_domain=config.calendar.uid_domain,
                fallback_timezone=config.calendar.default_timezone,
            )

        from .calendar_tools import CreateEventTool, GetEventsInTimeSlotTool, ListEventsTool

        self.register_tool(CreateEventTool(calendar_client))
        self.register_tool(ListEventsTool(calendar_client))
        self.register_tool(GetEventsInTimeSlotTool(calendar_client))
        logger.debug(f"Registered calendar tools: {', '.join(self._tools)}")
