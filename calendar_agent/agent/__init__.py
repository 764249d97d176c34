"""Prompt text for the calendar agent."""

from .prompts import SYSTEM_PROMPT, get_system_prompt

__all__ = ["SYSTEM_PROMPT", "get_system_prompt"]
