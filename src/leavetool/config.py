"""
Runtime settings loaded from the environment and an optional .env file.

``LEAVE_CALENDAR_FILE``  JSON holiday calendar replacing the built-in table.
``LEAVE_REST_WEEKDAYS``  Comma-separated weekdays, e.g. ``Tue,Wed``; overrides
                         the calendar's own rest days.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from leavetool.calendar import HolidayCalendar, default_calendar, load_calendar, parse_weekday


class Settings(BaseSettings):
    calendar_file: Optional[Path] = Field(default=None, alias="LEAVE_CALENDAR_FILE")
    rest_weekdays: Optional[str] = Field(default=None, alias="LEAVE_REST_WEEKDAYS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("rest_weekdays")
    @classmethod
    def _check_weekdays(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            for part in _split(value):
                parse_weekday(part)
        return value

    def rest_weekday_list(self) -> Optional[list[str]]:
        return None if self.rest_weekdays is None else _split(self.rest_weekdays)

    def calendar(self) -> HolidayCalendar:
        """The active calendar: the configured file or the built-in table."""
        cal = load_calendar(self.calendar_file) if self.calendar_file else default_calendar()
        weekdays = self.rest_weekday_list()
        if weekdays is not None:
            cal = cal.with_rest_weekdays(*weekdays)
        return cal


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]
