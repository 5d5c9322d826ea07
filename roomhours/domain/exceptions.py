"""
Domain-specific exception hierarchy for the operating-hours engine.
"""


class HoursError(Exception):
    """Base class for all application-level errors."""


class ParseError(HoursError, ValueError):
    """Raised when an "HH:MM" time-of-day value is malformed or out of range."""


class ScheduleError(HoursError, ValueError):
    """Raised when a weekly schedule does not hold exactly one window per weekday."""


class FetchError(HoursError):
    """Raised when the persistence round-trip fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
