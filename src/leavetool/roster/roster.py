import logging
import math
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from leavetool.accrual import AccrualError, AccrualPolicy, calculate_total_leave
from leavetool.calendar import CalendarError, HolidayCalendar, parse_date
from leavetool.calendar._dates import DateLike

from ._exceptions import EmployeeNotFound, InvalidLeaveRequest, RosterError

logger = logging.getLogger(__name__)

Number = Union[int, float]

ACTIVE = "active"
SUSPENDED = "suspended"


def _number(value: Any, name: str) -> Number:
    if value is None or value == "":
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidLeaveRequest(f"{name} must be a number; got {value!r}.") from None
    if not math.isfinite(value):
        raise InvalidLeaveRequest(f"{name} must be finite; got {value!r}.")
    return value


def _iso(value: Any) -> Any:
    return value.isoformat() if isinstance(value, (date, datetime)) else value


@dataclass(frozen=True)
class LeaveEntry:
    id: str
    date: date
    days: Number
    type: str = "annual"
    reason: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "LeaveEntry":
        try:
            created = record.get("createdAt")
            if isinstance(created, str):
                created = datetime.fromisoformat(created.replace("Z", "+00:00"))
            return cls(
                id=str(record["id"]),
                date=parse_date(record["date"], "leave date"),
                days=_number(record.get("days"), "days"),
                type=record.get("type") or "annual",
                reason=record.get("reason") or "",
                created_at=created,
            )
        except InvalidLeaveRequest:
            raise
        except KeyError as exc:
            raise InvalidLeaveRequest(f"Leave entry is missing {exc.args[0]!r}.") from exc
        except (CalendarError, ValueError, TypeError, AttributeError) as exc:
            raise InvalidLeaveRequest(f"Invalid leave entry: {exc}") from exc

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "type": self.type,
            "days": self.days,
            "reason": self.reason,
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class Employee:
    """
    One employee record.

    ``join_date`` and ``suspended_at`` are kept as supplied so a malformed
    record can still be loaded; they are parsed when leave is computed.
    """

    id: str
    join_date: Any
    name: str = ""
    status: str = ACTIVE
    suspended_at: Any = None
    manual_leave: Number = 0
    total_leave: Number = 0
    used_leave: Number = 0
    leave_history: tuple[LeaveEntry, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    _KNOWN = {
        "id", "name", "joinDate", "status", "suspendedAt", "manualLeave",
        "totalLeave", "usedLeave", "leaveHistory",
    }

    def __post_init__(self) -> None:
        # Read-only copy per instance, replace() included.
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def is_suspended(self) -> bool:
        return self.status == SUSPENDED

    @property
    def cutoff_date(self) -> Any:
        """Accrual stops at the suspension date; ``None`` means "today"."""
        if self.is_suspended and self.suspended_at:
            return self.suspended_at
        return None

    @property
    def remaining_leave(self) -> Number:
        return self.total_leave - self.used_leave

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Employee":
        if not record.get("id"):
            raise InvalidLeaveRequest("Employee record needs an id.")
        return cls(
            id=str(record["id"]),
            join_date=record.get("joinDate"),
            name=record.get("name") or "",
            status=record.get("status") or ACTIVE,
            suspended_at=record.get("suspendedAt"),
            manual_leave=_number(record.get("manualLeave"), "manualLeave"),
            total_leave=_number(record.get("totalLeave"), "totalLeave"),
            used_leave=_number(record.get("usedLeave"), "usedLeave"),
            leave_history=tuple(
                LeaveEntry.from_record(h) for h in record.get("leaveHistory") or ()
            ),
            extra={k: v for k, v in record.items() if k not in cls._KNOWN},
        )

    def to_record(self) -> dict[str, Any]:
        record = dict(self.extra)
        record.update({
            "id": self.id,
            "name": self.name,
            "joinDate": _iso(self.join_date),
            "status": self.status,
            "totalLeave": self.total_leave,
            "usedLeave": self.used_leave,
            "manualLeave": self.manual_leave,
            "leaveHistory": [h.to_record() for h in self.leave_history],
        })
        if self.suspended_at is not None:
            record["suspendedAt"] = _iso(self.suspended_at)
        return record


@dataclass
class RecalculationReport:
    updated: list[str] = field(default_factory=list)
    failures: dict[str, Exception] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.updated)

    @property
    def ok(self) -> bool:
        return not self.failures


class Roster:
    """
    In-memory employee store with leave bookkeeping.

    Records are immutable ``Employee`` values; every mutation swaps in a new
    value under the same id.  Callers own persistence via ``from_records`` /
    ``to_records``.
    """

    def __init__(
        self,
        employees: Iterable[Employee] = (),
        calendar: Optional[HolidayCalendar] = None,
        policy: Optional[AccrualPolicy] = None,
    ) -> None:
        self._employees: dict[str, Employee] = {}
        self._calendar = calendar
        self._policy = policy
        for emp in employees:
            self.add(emp)

    # ── CRUD ─────────────────────────────────────────────────────────────

    def add(self, employee: Employee) -> Employee:
        if employee.id in self._employees:
            raise RosterError(f"Employee id {employee.id!r} already exists.")
        self._employees[employee.id] = employee
        return employee

    def create(self, join_date: DateLike, **fields: Any) -> Employee:
        """Add a new employee under a freshly generated id."""
        return self.add(Employee(id=uuid.uuid4().hex, join_date=join_date, **fields))

    def get(self, employee_id: str) -> Employee:
        try:
            return self._employees[employee_id]
        except KeyError:
            raise EmployeeNotFound(employee_id) from None

    def update(self, employee_id: str, **changes: Any) -> Employee:
        if "id" in changes:
            raise RosterError("An employee's id cannot be changed.")
        try:
            updated = replace(self.get(employee_id), **changes)
        except TypeError as exc:
            raise RosterError(str(exc)) from exc
        self._employees[employee_id] = updated
        return updated

    def remove(self, employee_id: str) -> Employee:
        emp = self.get(employee_id)
        del self._employees[employee_id]
        return emp

    # ── accrual ──────────────────────────────────────────────────────────

    def accrued_leave(self, employee_id: str, today: Optional[DateLike] = None) -> Number:
        """Computed total for one employee, manual adjustment included."""
        return self._compute(self.get(employee_id), today)

    def _compute(self, emp: Employee, today: Optional[DateLike]) -> Number:
        cutoff = emp.cutoff_date if emp.cutoff_date is not None else today
        base = calculate_total_leave(emp.join_date, cutoff, self._calendar, self._policy)
        return base + _number(emp.manual_leave, "manual_leave")

    def recalculate(self, today: Optional[DateLike] = None) -> RecalculationReport:
        """
        Recompute ``total_leave`` for every employee.

        A record whose dates or adjustment are invalid is logged, left as it
        was and listed in ``failures``; the rest of the batch still runs.
        """
        today = date.today() if today is None else parse_date(today, "today")
        report = RecalculationReport()

        for emp_id, emp in list(self._employees.items()):
            try:
                total = self._compute(emp, today)
            except (AccrualError, CalendarError, RosterError) as exc:
                logger.warning("Skipping leave recalculation for %s: %s", emp_id, exc)
                report.failures[emp_id] = exc
                continue
            self._employees[emp_id] = replace(emp, total_leave=total)
            report.updated.append(emp_id)
            logger.debug("Employee %s total leave %s -> %s", emp_id, emp.total_leave, total)

        logger.info(
            "Recalculated leave for %d employee(s), %d failure(s).",
            report.count, len(report.failures),
        )
        return report

    # ── leave ledger ─────────────────────────────────────────────────────

    def record_leave(
        self,
        employee_id: str,
        day: DateLike,
        days: Number,
        type: str = "annual",
        reason: str = "",
        now: Optional[datetime] = None,
    ) -> LeaveEntry:
        emp = self.get(employee_id)
        amount = _number(days, "days")
        if amount <= 0:
            raise InvalidLeaveRequest(f"Leave days must be positive; got {days!r}.")
        try:
            when = parse_date(day, "leave date")
        except CalendarError as exc:
            raise InvalidLeaveRequest(str(exc)) from exc

        entry = LeaveEntry(
            id=uuid.uuid4().hex,
            date=when,
            days=amount,
            type=type,
            reason=reason,
            created_at=now or datetime.now(timezone.utc),
        )
        self._employees[employee_id] = replace(
            emp,
            used_leave=_number(emp.used_leave, "used_leave") + amount,
            leave_history=emp.leave_history + (entry,),
        )
        return entry

    def cancel_leave(self, employee_id: str, entry_id: str) -> Optional[LeaveEntry]:
        """Drop a booking and give its days back; ``None`` if no such entry."""
        emp = self.get(employee_id)
        target = next((h for h in emp.leave_history if h.id == entry_id), None)
        if target is None:
            return None
        self._employees[employee_id] = replace(
            emp,
            used_leave=max(0, _number(emp.used_leave, "used_leave") - target.days),
            leave_history=tuple(h for h in emp.leave_history if h.id != entry_id),
        )
        return target

    # ── persistence helpers ──────────────────────────────────────────────

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        calendar: Optional[HolidayCalendar] = None,
        policy: Optional[AccrualPolicy] = None,
    ) -> "Roster":
        return cls((Employee.from_record(r) for r in records), calendar, policy)

    def to_records(self) -> list[dict[str, Any]]:
        return [emp.to_record() for emp in self._employees.values()]

    # ── container protocol / repr ────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._employees)

    def __iter__(self) -> Iterator[Employee]:
        return iter(list(self._employees.values()))

    def __contains__(self, employee_id: object) -> bool:
        return employee_id in self._employees

    @property
    def calendar(self) -> Optional[HolidayCalendar]:
        return self._calendar

    @property
    def policy(self) -> Optional[AccrualPolicy]:
        return self._policy

    def __repr__(self) -> str:
        suspended = sum(1 for e in self._employees.values() if e.is_suspended)
        return (
            f"Roster(employees={len(self._employees)}, "
            f"suspended={suspended}, "
            f"calendar={self._calendar.version if self._calendar else 'default'!r})"
        )
