"""Calendar agent: relative-date scheduling over CalDAV."""

__version__ = "0.1.0"
