class RosterError(Exception):
    """Base exception for employee-roster errors."""


class EmployeeNotFound(RosterError, KeyError):
    """No employee with the requested id."""

    def __str__(self) -> str:
        return f"No employee with id {self.args[0]!r}." if self.args else "Employee not found."


class InvalidLeaveRequest(RosterError, ValueError):
    """A leave booking or employee field failed validation."""
