# src/leavetool/roster/__init__.py
"""
leavetool.roster
~~~~~~~~~~~~~~~~

In-memory employee records with leave bookkeeping.  The roster recomputes
every employee's cumulative entitlement, keeps a ledger of booked leave and
converts to and from the camelCase JSON records used for storage.

Basic usage::

    from leavetool.roster import Roster

    roster = Roster.from_records([
        {"id": "1", "name": "Kim", "joinDate": "2023-03-02"},
        {"id": "2", "name": "Lee", "joinDate": "2021-07-19",
         "status": "suspended", "suspendedAt": "2025-01-31", "manualLeave": 2},
    ])
    report = roster.recalculate()
    roster.record_leave("1", "2025-08-04", 1)
    roster.get("1").remaining_leave

One bad record never aborts the batch: it is skipped, logged and reported in
``report.failures``.

Public API
----------
Roster               The employee store.
Employee             One immutable employee record.
LeaveEntry           One booked leave item.
RecalculationReport  Outcome of Roster.recalculate.
RosterError          Base exception for roster errors.
EmployeeNotFound     Unknown employee id (also a KeyError).
InvalidLeaveRequest  A booking or field failed validation.
"""

from __future__ import annotations

from leavetool.roster._exceptions import EmployeeNotFound, InvalidLeaveRequest, RosterError
from leavetool.roster.roster import (
    ACTIVE,
    SUSPENDED,
    Employee,
    LeaveEntry,
    RecalculationReport,
    Roster,
)

__all__ = [
    "Roster",
    "Employee",
    "LeaveEntry",
    "RecalculationReport",
    "ACTIVE",
    "SUSPENDED",
    "RosterError",
    "EmployeeNotFound",
    "InvalidLeaveRequest",
]
