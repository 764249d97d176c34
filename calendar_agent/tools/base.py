"""Base tool interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..context.models import ToolContext


@dataclass
class ToolResult:
    """Result from tool execution."""

    success: bool
    data: Any
    error: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        """Build a failed result carrying only an error message."""
        return cls(success=False, data=None, error=error)


class BaseTool(ABC):
    """
    Abstract base class for all tools.

    Subclasses describe their arguments as JSON Schema properties; the
    function-calling schema is assembled from those.
    """

    def __init__(self, name: str, description: str):
        """
        Initialize tool.

        Args:
            name: Tool name (used for registration)
            description: Tool description shown to the model
        """
        self.name = name
        self.description = description

    @abstractmethod
    async def execute(self, context: ToolContext, **kwargs) -> ToolResult:
        """
        Execute the tool.

        Args:
            context: Caller timezone, locale and reference clock
            **kwargs: Tool-specific parameters

        Returns:
            ToolResult with execution result
        """
        pass

    def get_parameters(self) -> Dict[str, Any]:
        """JSON Schema properties of the tool arguments."""
        return {}

    def get_required(self) -> List[str]:
        """Names of the required arguments."""
        return []

    def get_schema(self) -> Dict[str, Any]:
        """
        Get tool schema for function-calling registration.

        Returns:
            Dictionary with name, description and JSON Schema parameters
        """
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": self.get_parameters(),
                "required": self.get_required(),
            },
        }

    def get_name(self) -> str:
        """Get tool name."""
        return self.name

    def get_description(self) -> str:
        """Get tool description."""
        return self.description
