import re
from datetime import date, datetime
from typing import Iterable, Union

import numpy as np

from ._exceptions import CalendarError, InvalidDateError

DateLike = Union[str, date, np.datetime64]

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_WEEKDAY_FULL_NAMES = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)


def parse_date(value: DateLike, name: str = "date") -> date:
    """
    Coerce ``value`` to a plain ``datetime.date``.

    Accepts ``date`` objects, ``datetime`` objects (the time of day is
    dropped), ``numpy.datetime64`` scalars and ``YYYY-MM-DD`` strings.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            raise InvalidDateError(f"{name} is NaT.")
        return value.astype("datetime64[D]").item()
    if isinstance(value, str):
        text = value.strip()
        if _ISO_DATE.fullmatch(text):
            try:
                return date.fromisoformat(text)
            except ValueError:
                pass
        raise InvalidDateError(f"{name} must be a YYYY-MM-DD date; got {value!r}.")
    raise InvalidDateError(
        f"{name} must be a date or an ISO date string; got {type(value).__name__}."
    )


def to_datetime64(values: Iterable[DateLike], name: str = "date") -> np.ndarray:
    """Sorted, de-duplicated ``datetime64[D]`` array of the given dates."""
    days = [parse_date(v, name) for v in values]
    return np.unique(np.array(days, dtype="datetime64[D]"))


def parse_weekday(value: Union[int, str]) -> int:
    """Weekday index, Monday == 0, from an int or an English day name."""
    if isinstance(value, bool):
        raise CalendarError(f"Invalid weekday {value!r}.")
    if isinstance(value, (int, np.integer)):
        if 0 <= int(value) <= 6:
            return int(value)
        raise CalendarError(f"Weekday index must be in 0..6; got {value}.")
    if isinstance(value, str):
        text = value.strip().lower()
        # "tue", "tues" and "tuesday" all name the same day.
        for idx, full in enumerate(_WEEKDAY_FULL_NAMES):
            if len(text) >= 3 and full.startswith(text):
                return idx
        raise CalendarError(f"Unknown weekday name {value!r}.")
    raise CalendarError(f"Invalid weekday {value!r}.")


def weekmask(weekdays: Iterable[int]) -> str:
    """NumPy busday weekmask string, Monday first."""
    chosen = set(weekdays)
    return "".join("1" if i in chosen else "0" for i in range(7))
