import logging
from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from typing import NamedTuple, Optional

import numpy as np

from leavetool.calendar import HolidayCalendar, default_calendar, parse_date
from leavetool.calendar._dates import DateLike

from ._exceptions import AccrualError, InvertedRangeError

logger = logging.getLogger(__name__)


class Tenure(NamedTuple):
    years: int
    months: int
    days: int


class LeaveBreakdown(NamedTuple):
    first_year: int
    yearly: int
    holiday: int
    total: int


@dataclass(frozen=True)
class AccrualPolicy:
    """
    Grant rules of the anniversary method.

    Before the first anniversary one day accrues per completed month, up to
    ``first_year_cap``.  From then on every completed year ``i`` (1-based)
    grants ``base_grant + (i - 1) // bonus_every`` days, at most ``max_grant``.
    """

    first_year_cap: int = 11
    base_grant: int = 15
    bonus_every: int = 2
    max_grant: int = 25

    def __post_init__(self) -> None:
        if self.first_year_cap < 0 or self.base_grant < 0:
            raise AccrualError("Grants must be non-negative.")
        if self.bonus_every < 1:
            raise AccrualError(f"bonus_every must be at least 1; got {self.bonus_every}.")
        if self.max_grant < self.base_grant:
            raise AccrualError(
                f"max_grant ({self.max_grant}) must not be below base_grant ({self.base_grant})."
            )

    def first_year(self, tenure: Tenure) -> int:
        if tenure.years >= 1:
            return self.first_year_cap
        return min(tenure.months, self.first_year_cap)

    def yearly_grant(self, year: int) -> int:
        if year < 1:
            return 0
        return min(self.max_grant, self.base_grant + (year - 1) // self.bonus_every)

    def yearly(self, years: int) -> int:
        if years < 1:
            return 0
        i = np.arange(1, years + 1, dtype=np.int64)
        grants = np.minimum(self.max_grant, self.base_grant + (i - 1) // self.bonus_every)
        return int(grants.sum())


DEFAULT_POLICY = AccrualPolicy()


def _window(join_date: DateLike, cutoff_date: Optional[DateLike]) -> tuple[date, date]:
    start = parse_date(join_date, "join_date")
    end = date.today() if cutoff_date is None else parse_date(cutoff_date, "cutoff_date")
    if end < start:
        raise InvertedRangeError(start, end)
    return start, end


def _shift_months(day: date, months: int) -> date:
    year, month = divmod(day.month - 1 + months, 12)
    year += day.year
    return date(year, month + 1, min(day.day, monthrange(year, month + 1)[1]))


def tenure(join_date: DateLike, cutoff_date: Optional[DateLike] = None) -> Tenure:
    """
    Completed years, months and leftover days between the two dates.

    A month counts once the cutoff reaches the join day-of-month.  ``days``
    runs from the last month anniversary, clamped to the length of its month
    (a join on the 31st has its February anniversary on the 28th or 29th).
    """
    start, end = _window(join_date, cutoff_date)

    years = end.year - start.year
    months = end.month - start.month
    if end.day < start.day:
        months -= 1
    if months < 0:
        years -= 1
        months += 12
    anniversary = _shift_months(start, 12 * years + months)
    return Tenure(years, months, (end - anniversary).days)


def leave_breakdown(
    join_date: DateLike,
    cutoff_date: Optional[DateLike] = None,
    calendar: Optional[HolidayCalendar] = None,
    policy: Optional[AccrualPolicy] = None,
) -> LeaveBreakdown:
    """
    Cumulative leave granted from ``join_date`` through ``cutoff_date``.

    The three components are independent and simply added up.  Holidays are
    counted over the inclusive window; a missing cutoff means today.

    Raises InvalidDateError for unparsable dates and InvertedRangeError when
    the cutoff precedes the join date.
    """
    calendar = default_calendar() if calendar is None else calendar
    policy = DEFAULT_POLICY if policy is None else policy

    start, end = _window(join_date, cutoff_date)
    t = tenure(start, end)

    if calendar.valid_until is not None and end > calendar.valid_until:
        logger.warning(
            "Accrual window %s..%s runs past holiday calendar %r (valid until %s); "
            "later holidays earn no bonus.",
            start, end, calendar.version, calendar.valid_until,
        )

    first_year = policy.first_year(t)
    yearly = policy.yearly(t.years)
    holiday = calendar.bonus_days(start, end)
    total = first_year + yearly + holiday

    logger.debug(
        "Leave %s..%s: tenure=%dy%dm first_year=%d yearly=%d holiday=%d total=%d",
        start, end, t.years, t.months, first_year, yearly, holiday, total,
    )
    return LeaveBreakdown(first_year, yearly, holiday, total)


def calculate_total_leave(
    join_date: DateLike,
    cutoff_date: Optional[DateLike] = None,
    calendar: Optional[HolidayCalendar] = None,
    policy: Optional[AccrualPolicy] = None,
) -> int:
    return leave_breakdown(join_date, cutoff_date, calendar, policy).total
