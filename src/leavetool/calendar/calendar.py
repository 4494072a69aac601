from datetime import date
from functools import lru_cache
from typing import Any, Iterable, Optional, Sequence, Union

import numpy as np

from . import _data
from ._dates import (
    WEEKDAY_NAMES,
    DateLike,
    parse_date,
    parse_weekday,
    to_datetime64,
    weekmask,
)
from ._exceptions import CalendarError

ArrayLike = Union[DateLike, "np.ndarray", Sequence[DateLike]]
CountLike = Union[int, "np.ndarray"]


class HolidayCalendar:
    """
    Immutable holiday table: two disjoint sorted ``datetime64[D]`` arrays.

    Normal holidays always earn a bonus day.  Major holidays earn one only
    when they fall on a rest weekday.  Window counts use ``searchsorted`` on
    the sorted arrays, so scalars and NumPy arrays of bounds are handled
    alike.
    """

    def __init__(
        self,
        normal: Iterable[DateLike] = (),
        major: Iterable[DateLike] = (),
        rest_weekdays: Iterable[Union[int, str]] = _data.REST_WEEKDAYS,
        version: str = "",
        valid_from: Optional[DateLike] = None,
        valid_until: Optional[DateLike] = None,
    ) -> None:
        self._normal: np.ndarray = to_datetime64(normal, "normal holiday")
        self._major: np.ndarray = to_datetime64(major, "major holiday")

        overlap = np.intersect1d(self._normal, self._major)
        if overlap.size:
            raise CalendarError(
                "Normal and major holidays must be disjoint; "
                f"both contain {[str(d) for d in overlap]}."
            )

        self._rest_weekdays: tuple[int, ...] = tuple(
            sorted({parse_weekday(w) for w in rest_weekdays})
        )
        if self._rest_weekdays:
            on_rest = np.is_busday(self._major, weekmask=weekmask(self._rest_weekdays))
            self._major_rest: np.ndarray = self._major[on_rest]
        else:
            self._major_rest = self._major[:0]

        self._version: str = str(version)
        self._valid_from, self._valid_until = self._coverage(valid_from, valid_until)

    def _coverage(
        self, valid_from: Optional[DateLike], valid_until: Optional[DateLike]
    ) -> tuple[Optional[date], Optional[date]]:
        listed = np.concatenate([self._normal, self._major])
        lo = parse_date(valid_from, "valid_from") if valid_from is not None else None
        hi = parse_date(valid_until, "valid_until") if valid_until is not None else None
        if listed.size:
            first: date = listed.min().item()
            last: date = listed.max().item()
            if lo is None:
                lo = date(first.year, 1, 1)
            if hi is None:
                hi = date(last.year, 12, 31)
        if lo is not None and hi is not None and lo > hi:
            raise CalendarError(f"valid_from {lo} is after valid_until {hi}.")
        return lo, hi

    # ── counting ─────────────────────────────────────────────────────────

    def bonus_days(self, start: ArrayLike, end: ArrayLike) -> CountLike:
        """
        Number of bonus-earning holidays in the inclusive window [start, end].

        ``start`` and ``end`` broadcast against each other.  An empty window
        (end before start) counts zero.
        """
        scalar = np.ndim(start) == 0 and np.ndim(end) == 0
        s = np.atleast_1d(_as_days(start, "start"))
        e = np.atleast_1d(_as_days(end, "end"))
        s, e = np.broadcast_arrays(s, e)

        counts = _count_between(self._normal, s, e) + _count_between(self._major_rest, s, e)
        counts = np.maximum(counts, 0)
        return int(counts.flat[0]) if scalar else counts

    def normal_bonus_days(self, start: DateLike, end: DateLike) -> int:
        s, e = _as_days(start, "start"), _as_days(end, "end")
        return max(int(_count_between(self._normal, s, e)), 0)

    def major_bonus_days(self, start: DateLike, end: DateLike) -> int:
        s, e = _as_days(start, "start"), _as_days(end, "end")
        return max(int(_count_between(self._major_rest, s, e)), 0)

    def holidays_between(self, start: DateLike, end: DateLike) -> list[date]:
        """The bonus-earning dates in [start, end], oldest first."""
        s, e = _as_days(start, "start"), _as_days(end, "end")
        picked = np.concatenate([
            self._normal[(self._normal >= s) & (self._normal <= e)],
            self._major_rest[(self._major_rest >= s) & (self._major_rest <= e)],
        ])
        return [d.item() for d in np.sort(picked)]

    def covers(self, day: DateLike) -> bool:
        d = parse_date(day, "day")
        if self._valid_from is not None and d < self._valid_from:
            return False
        if self._valid_until is not None and d > self._valid_until:
            return False
        return True

    # ── derived calendars ────────────────────────────────────────────────

    def with_rest_weekdays(self, *weekdays: Union[int, str]) -> "HolidayCalendar":
        return self._replace(rest_weekdays=weekdays)

    def extend(
        self,
        normal: Iterable[DateLike] = (),
        major: Iterable[DateLike] = (),
        version: Optional[str] = None,
    ) -> "HolidayCalendar":
        """New calendar with extra dates appended; coverage is recomputed."""
        return HolidayCalendar(
            normal=[*self.normal_holidays, *normal],
            major=[*self.major_holidays, *major],
            rest_weekdays=self._rest_weekdays,
            version=self._version if version is None else version,
        )

    def _replace(self, **changes: Any) -> "HolidayCalendar":
        fields: dict[str, Any] = {
            "normal": self.normal_holidays,
            "major": self.major_holidays,
            "rest_weekdays": self._rest_weekdays,
            "version": self._version,
            "valid_from": self._valid_from,
            "valid_until": self._valid_until,
        }
        fields.update(changes)
        return HolidayCalendar(**fields)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "HolidayCalendar":
        from .loader import calendar_from_mapping

        return calendar_from_mapping(data)

    def to_mapping(self) -> dict[str, Any]:
        return {
            "version": self._version,
            "rest_weekdays": list(self.rest_weekday_names),
            "valid_from": self._valid_from.isoformat() if self._valid_from else None,
            "valid_until": self._valid_until.isoformat() if self._valid_until else None,
            "normal": [d.isoformat() for d in self.normal_holidays],
            "major": [d.isoformat() for d in self.major_holidays],
        }

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def normal_holidays(self) -> tuple[date, ...]:
        return tuple(d.item() for d in self._normal)

    @property
    def major_holidays(self) -> tuple[date, ...]:
        return tuple(d.item() for d in self._major)

    @property
    def rest_weekdays(self) -> tuple[int, ...]:
        return self._rest_weekdays

    @property
    def rest_weekday_names(self) -> tuple[str, ...]:
        return tuple(WEEKDAY_NAMES[w] for w in self._rest_weekdays)

    @property
    def version(self) -> str:
        return self._version

    @property
    def valid_from(self) -> Optional[date]:
        return self._valid_from

    @property
    def valid_until(self) -> Optional[date]:
        return self._valid_until

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HolidayCalendar):
            return NotImplemented
        return self.to_mapping() == other.to_mapping()

    def __hash__(self) -> int:
        return hash((self._version, self.normal_holidays, self.major_holidays,
                     self._rest_weekdays, self._valid_from, self._valid_until))

    def __repr__(self) -> str:
        return (
            f"HolidayCalendar(version={self._version!r}, "
            f"normal={self._normal.size}, "
            f"major={self._major.size}, "
            f"rest_weekdays={list(self.rest_weekday_names)}, "
            f"valid={self._valid_from}..{self._valid_until})"
        )


def _as_days(value: ArrayLike, name: str) -> np.ndarray:
    arr = np.asarray(value)
    if arr.dtype.kind == "M":
        if np.isnat(arr).any():
            raise CalendarError(f"{name} contains NaT.")
        return arr.astype("datetime64[D]")
    days = [parse_date(v, name) for v in arr.ravel().tolist()]
    return np.array(days, dtype="datetime64[D]").reshape(arr.shape)


def _count_between(table: np.ndarray, s: np.ndarray, e: np.ndarray) -> np.ndarray:
    return (
        np.searchsorted(table, e, side="right")
        - np.searchsorted(table, s, side="left")
    )


@lru_cache(maxsize=1)
def default_calendar() -> HolidayCalendar:
    """The built-in table shipped with the package."""
    return HolidayCalendar(
        normal=_data.NORMAL_HOLIDAYS,
        major=_data.MAJOR_HOLIDAYS,
        rest_weekdays=_data.REST_WEEKDAYS,
        version=_data.VERSION,
    )
