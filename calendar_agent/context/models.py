"""Data models for per-call tool context."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..dates.formatting import DEFAULT_LOCALE
from ..dates.weekday import DEFAULT_TIMEZONE


@dataclass
class ToolContext:
    """
    Caller settings every tool invocation runs with.

    The timezone is the caller's display and resolution zone; a tool argument
    can still override it for a single call. ``now`` pins the reference clock
    (used by tests and replays); None means the system clock.
    """

    timezone: str = DEFAULT_TIMEZONE
    locale: str = DEFAULT_LOCALE
    now: Optional[datetime] = None
