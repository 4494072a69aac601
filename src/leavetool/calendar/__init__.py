# src/leavetool/calendar/__init__.py
"""
leavetool.calendar
~~~~~~~~~~~~~~~~~~

Holiday tables for leave accrual.  A HolidayCalendar holds two disjoint sets
of dates: normal holidays, which always earn a bonus leave day, and major
holidays, which earn one only when they fall on one of the business's rest
weekdays.

Basic usage::

    from leavetool.calendar import HolidayCalendar

    cal = HolidayCalendar(
        normal=["2025-01-01"],
        major=["2025-01-28", "2025-01-29", "2025-01-30"],
        rest_weekdays=["Tue", "Wed"],
    )
    cal.bonus_days("2025-01-01", "2025-12-31")      # → 3

NumPy ``datetime64`` arrays are accepted for the window bounds::

    import numpy as np
    joins = np.array(["2024-03-01", "2025-01-29"], dtype="datetime64[D]")
    cal.bonus_days(joins, np.datetime64("2025-12-31"))

Public API
----------
HolidayCalendar   The main class.
default_calendar  The built-in 2024-2026 table.
load_calendar     Read a calendar from a JSON file.
dump_calendar     Write a calendar to a JSON file.
parse_date        Coerce ISO strings / date objects to ``datetime.date``.
CalendarError     Base exception for all calendar-related errors.
InvalidDateError  An input could not be parsed as a calendar date.
"""

from __future__ import annotations

from leavetool.calendar._dates import WEEKDAY_NAMES, parse_date, parse_weekday
from leavetool.calendar._exceptions import CalendarError, InvalidDateError
from leavetool.calendar.calendar import HolidayCalendar, default_calendar
from leavetool.calendar.loader import calendar_from_mapping, dump_calendar, load_calendar

__all__ = [
    "HolidayCalendar",
    "default_calendar",
    "load_calendar",
    "dump_calendar",
    "calendar_from_mapping",
    "parse_date",
    "parse_weekday",
    "WEEKDAY_NAMES",
    "CalendarError",
    "InvalidDateError",
]
