"""Shared weekday definitions using ISO-8601 numbering (Monday = 1, Sunday = 7)."""

from enum import Enum
from typing import Union

from .errors import InvalidWeekday

DEFAULT_TIMEZONE = "Europe/Helsinki"


class Weekday(str, Enum):
    """Canonical weekday names."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def parse(cls, value: Union["Weekday", str]) -> "Weekday":
        """
        Resolve a weekday from an enum member or a case-insensitive name.

        Args:
            value: Weekday member or name such as "Monday"

        Returns:
            Matching Weekday

        Raises:
            InvalidWeekday: If the value is not one of the seven weekdays
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidWeekday(value)

    def to_iso(self) -> int:
        """Get the ISO-8601 weekday number (1-7)."""
        return WEEKDAY_TO_ISO[self]

    @property
    def display_name(self) -> str:
        """Capitalized English name, e.g. "Monday"."""
        return self.value.capitalize()


WEEKDAYS = tuple(w.value for w in Weekday)

WEEKDAY_TO_ISO = {weekday: index for index, weekday in enumerate(Weekday, start=1)}

ISO_TO_WEEKDAY = {index: weekday for weekday, index in WEEKDAY_TO_ISO.items()}


def to_iso(weekday: Union[Weekday, str]) -> int:
    """
    Map a weekday to its ISO-8601 number.

    Args:
        weekday: Weekday member or name

    Returns:
        1 for Monday through 7 for Sunday

    Raises:
        InvalidWeekday: If the weekday is not recognized
    """
    return Weekday.parse(weekday).to_iso()


def from_iso(iso_weekday: int) -> Weekday:
    """
    Map an ISO-8601 weekday number back to a Weekday.

    Raises:
        InvalidWeekday: If the number is outside 1-7
    """
    try:
        return ISO_TO_WEEKDAY[iso_weekday]
    except (KeyError, TypeError):
        raise InvalidWeekday(iso_weekday) from None
