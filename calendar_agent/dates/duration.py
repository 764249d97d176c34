"""Event duration arithmetic in absolute time."""

from datetime import datetime, timedelta, timezone

DEFAULT_DURATION_MINUTES = 60


def end_instant(start: datetime, duration_minutes: int = DEFAULT_DURATION_MINUTES) -> datetime:
    """
    Calculate the end of an event from its start and duration.

    The addition happens on the absolute timeline, so a 60 minute event is
    always 3600 seconds long even across a DST transition.

    Args:
        start: Timezone-aware start instant
        duration_minutes: Duration in minutes (default: 60)

    Returns:
        End instant, expressed in the same tzinfo as start

    Raises:
        ValueError: If start is naive or the duration is negative
    """
    if start.tzinfo is None:
        raise ValueError("Start instant must be timezone-aware")
    if duration_minutes < 0:
        raise ValueError(f"Duration must not be negative, got {duration_minutes}")
    # Adding to a ZoneInfo-aware datetime is wall-clock arithmetic, so go through UTC
    end = start.astimezone(timezone.utc) + timedelta(minutes=duration_minutes)
    return end.astimezone(start.tzinfo)
