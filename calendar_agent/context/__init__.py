"""Tool invocation context."""

from .models import ToolContext

__all__ = ["ToolContext"]
