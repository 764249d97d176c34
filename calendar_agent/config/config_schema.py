"""Pydantic models for configuration validation."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..dates.formatting import DEFAULT_LOCALE, get_locale
from ..dates.wall_clock import get_zone
from ..dates.weekday import DEFAULT_TIMEZONE
from ..ics.codec import DEFAULT_UID_DOMAIN


class CalendarConfig(BaseModel):
    """Calendar display and resolution preferences."""

    default_timezone: str = Field(
        default=DEFAULT_TIMEZONE,
        description="Default timezone (e.g., 'Europe/Helsinki', 'UTC', 'America/New_York')",
    )
    locale: str = Field(
        default=DEFAULT_LOCALE,
        description="Display locale (e.g., 'fi_FI', 'en_US', 'en-GB')",
    )
    uid_domain: str = Field(
        default=DEFAULT_UID_DOMAIN,
        description="Domain suffix for generated event UIDs",
    )

    @field_validator("default_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone string using zoneinfo."""
        get_zone(v)
        return v

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Validate locale is known to Babel."""
        get_locale(v)
        return v

    @field_validator("uid_domain")
    @classmethod
    def validate_uid_domain(cls, v: str) -> str:
        """UID domains must be non-empty and contain no whitespace or '@'."""
        if not v or any(c.isspace() for c in v) or "@" in v:
            raise ValueError(f"Invalid uid_domain: '{v}'")
        return v


class CalDAVConfig(BaseModel):
    """CalDAV server configuration."""

    server_url: str = Field(default="http://localhost:5232/", description="CalDAV server URL")
    username: Optional[str] = Field(default=None, description="Basic auth username")
    password: Optional[str] = Field(default=None, description="Basic auth password")
    timeout: int = Field(default=30, gt=0, description="HTTP timeout in seconds")


class AppConfig(BaseModel):
    """Main application configuration."""

    calendar: CalendarConfig = Field(
        default_factory=CalendarConfig, description="Calendar preferences"
    )
    caldav: Optional[CalDAVConfig] = Field(default=None, description="CalDAV configuration")

    def validate(self) -> None:
        """Validate configuration consistency."""
        if self.caldav and not self.caldav.server_url.startswith(("http://", "https://")):
            raise ValueError(f"caldav.server_url must be an http(s) URL: {self.caldav.server_url}")
        if self.caldav and bool(self.caldav.username) != bool(self.caldav.password):
            raise ValueError("caldav.username and caldav.password must be set together")
