"""
Reading and writing holiday calendars as JSON documents.

File layout::

    {
      "version": "2027",
      "rest_weekdays": ["Tue", "Wed"],
      "valid_from": "2024-01-01",
      "valid_until": "2027-12-31",
      "normal": ["2027-01-01", ...],
      "major": ["2027-02-06", ...]
    }

Every key is optional; ``rest_weekdays`` defaults to the built-in rest days.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import _data
from ._exceptions import CalendarError
from .calendar import HolidayCalendar

logger = logging.getLogger(__name__)


class CalendarDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: str = ""
    rest_weekdays: list[Union[int, str]] = Field(
        default_factory=lambda: list(_data.REST_WEEKDAYS)
    )
    valid_from: Optional[date] = None
    valid_until: Optional[date] = None
    normal: list[date] = Field(default_factory=list)
    major: list[date] = Field(default_factory=list)


def calendar_from_mapping(data: dict[str, Any]) -> HolidayCalendar:
    try:
        doc = CalendarDocument.model_validate(data)
    except ValidationError as exc:
        raise CalendarError(f"Invalid calendar document: {exc}") from exc
    return HolidayCalendar(
        normal=doc.normal,
        major=doc.major,
        rest_weekdays=doc.rest_weekdays,
        version=doc.version,
        valid_from=doc.valid_from,
        valid_until=doc.valid_until,
    )


def load_calendar(path: Union[str, Path]) -> HolidayCalendar:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CalendarError(f"Cannot read calendar file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CalendarError(f"Calendar file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise CalendarError(f"Calendar file {path} must hold a JSON object.")

    calendar = calendar_from_mapping(data)
    logger.info("Loaded holiday calendar %r from %s", calendar.version, path)
    return calendar


def dump_calendar(calendar: HolidayCalendar, path: Union[str, Path]) -> None:
    path = Path(path)
    path.write_text(
        json.dumps(calendar.to_mapping(), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    logger.info("Wrote holiday calendar %r to %s", calendar.version, path)
