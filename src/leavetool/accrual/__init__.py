# src/leavetool/accrual/__init__.py
"""
leavetool.accrual
~~~~~~~~~~~~~~~~~

Cumulative leave entitlement under the anniversary method.

The total is the sum of three independent parts:

- first-year leave: one day per completed month, capped at 11 and locked at
  11 once the first anniversary has passed;
- yearly leave: 15 days per completed year plus one day every two years of
  seniority, at most 25 in any single year;
- holiday bonus: one day per bonus-earning holiday in the window, as decided
  by a HolidayCalendar.

Basic usage::

    from leavetool.accrual import calculate_total_leave

    calculate_total_leave("2020-01-01", "2023-01-01")   # → 57

With a custom calendar and policy::

    from leavetool.accrual import AccrualPolicy, leave_breakdown
    from leavetool.calendar import HolidayCalendar

    cal = HolidayCalendar(normal=["2025-05-05"], rest_weekdays=["Mon"])
    leave_breakdown("2025-01-02", "2025-06-01", cal, AccrualPolicy(max_grant=20))

Public API
----------
calculate_total_leave  Total accrued leave as an int.
leave_breakdown        The same, split into its components.
tenure                 Completed years and months between two dates.
AccrualPolicy          Grant rules (caps, base grant, seniority step).
AccrualError           Base exception for accrual errors.
InvertedRangeError     Cutoff date before join date.
InvalidDateError       An input could not be parsed as a date.
"""

from __future__ import annotations

from leavetool.accrual._exceptions import AccrualError, InvalidDateError, InvertedRangeError
from leavetool.accrual.accrual import (
    DEFAULT_POLICY,
    AccrualPolicy,
    LeaveBreakdown,
    Tenure,
    calculate_total_leave,
    leave_breakdown,
    tenure,
)

__all__ = [
    "calculate_total_leave",
    "leave_breakdown",
    "tenure",
    "AccrualPolicy",
    "DEFAULT_POLICY",
    "LeaveBreakdown",
    "Tenure",
    "AccrualError",
    "InvertedRangeError",
    "InvalidDateError",
]
