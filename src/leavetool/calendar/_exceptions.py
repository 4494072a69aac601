class CalendarError(ValueError):
    """Base exception for all calendar-related errors."""


class InvalidDateError(CalendarError):
    """A value could not be interpreted as a calendar date."""
