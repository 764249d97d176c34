"""Tests for tool registry."""

from unittest.mock import MagicMock, patch

import pytest

from calendar_agent.config.config_schema import AppConfig, CalDAVConfig, CalendarConfig
from calendar_agent.tools.base import BaseTool
from calendar_agent.tools.registry import ToolRegistry


class MockTool(BaseTool):
    """Mock tool for testing."""

    def __init__(self, name: str = "mock_tool"):
        super().__init__(name=name, description="A mock tool for testing")

    async def execute(self, context, **kwargs):
        return {"success": True}

    def get_schema(self):
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {"type": "object", "properties": {}},
        }


@pytest.fixture
def caldav_config():
    """Create a configuration with CalDAV enabled."""
    return AppConfig(
        calendar=CalendarConfig(default_timezone="UTC", uid_domain="example.org"),
        caldav=CalDAVConfig(
            server_url="https://dav.example.org/", username="alice", password="secret"
        ),
    )


def test_register_tool():
    """Test registering a tool."""
    registry = ToolRegistry()
    tool = MockTool("test_tool")

    registry.register_tool(tool)

    assert registry.get_tool("test_tool") == tool
    assert len(registry.get_all_tools()) == 1


def test_get_tool_not_found():
    """Test getting a non-existent tool."""
    registry = ToolRegistry()
    assert registry.get_tool("nonexistent") is None


def test_get_all_tools():
    """Test getting all tools."""
    registry = ToolRegistry()
    registry.register_tool(MockTool("tool1"))
    registry.register_tool(MockTool("tool2"))

    names = {tool.get_name() for tool in registry.get_all_tools()}
    assert names == {"tool1", "tool2"}


def test_get_schemas():
    registry = ToolRegistry()
    registry.register_tool(MockTool("tool1"))

    assert registry.get_schemas()[0]["name"] == "tool1"


def test_initialize_tools_without_caldav():
    """No calendar tools are registered when CalDAV is not configured."""
    registry = ToolRegistry()

    registry.initialize_tools(AppConfig())

    assert registry.get_all_tools() == []


def test_initialize_tools_with_client():
    """A pre-built client is shared by every calendar tool."""
    registry = ToolRegistry()
    client = MagicMock()

    registry.initialize_tools(AppConfig(), calendar_client=client)

    names = {tool.get_name() for tool in registry.get_all_tools()}
    assert names == {"create_event", "list_events", "get_events_in_time_slot"}
    assert all(tool.calendar_client is client for tool in registry.get_all_tools())


def test_initialize_tools_builds_client_from_config(caldav_config):
    registry = ToolRegistry()

    with patch("calendar_agent.store.caldav_store.CalDAVCalendarClient") as client_class:
        registry.initialize_tools(caldav_config)

    client_class.assert_called_once_with(
        server_url="https://dav.example.org/",
        username="alice",
        password="secret",
        timeout=30,
        uid_domain="example.org",
        fallback_timezone="UTC",
    )
    assert registry.get_tool("create_event").calendar_client is client_class.return_value
