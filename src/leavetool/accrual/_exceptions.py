from leavetool.calendar._exceptions import InvalidDateError


class AccrualError(ValueError):
    """Base exception for leave-accrual errors."""


class InvertedRangeError(AccrualError):
    """The cutoff date lies before the join date."""

    def __init__(self, join_date, cutoff_date) -> None:
        super().__init__(f"cutoff date {cutoff_date} is before join date {join_date}.")
        self.join_date = join_date
        self.cutoff_date = cutoff_date


__all__ = ["AccrualError", "InvertedRangeError", "InvalidDateError"]
