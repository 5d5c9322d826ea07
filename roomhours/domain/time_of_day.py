"""
Minute-of-day arithmetic for "HH:MM" values.

All windows are handled as integer minutes since midnight. A window whose
close time is earlier than its open time runs past midnight ("late night")
and its close is read as belonging to the next calendar day.
"""

import re

from .exceptions import ParseError

MINUTES_PER_DAY = 24 * 60

_HHMM_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def to_minutes(hhmm: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    Args:
        hhmm: Time of day, hour 0-23 and minute 0-59 ("9:30" is accepted)

    Returns:
        Minutes since midnight

    Raises:
        ParseError: If the value is not a well-formed time of day
    """
    if not isinstance(hhmm, str):
        raise ParseError(f"Time must be an 'HH:MM' string, got {hhmm!r}")

    match = _HHMM_PATTERN.match(hhmm.strip())
    if not match:
        raise ParseError(f"Malformed time '{hhmm}', expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    if not 0 <= hour <= 23:
        raise ParseError(f"Hour must be between 0 and 23, got {hour}")
    if not 0 <= minute <= 59:
        raise ParseError(f"Minute must be between 0 and 59, got {minute}")

    return hour * 60 + minute


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM", wrapping past 24:00."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize(hhmm: str) -> str:
    """Return the zero-padded form of a time ("9:05" -> "09:05")."""
    return format_minutes(to_minutes(hhmm))


def is_late_night(open_time: str, close_time: str) -> bool:
    """
    True iff the window closes on the following calendar day.

    Equal open and close times are not late night: they describe a
    zero-length window, which validation flags as invalid.
    """
    return to_minutes(close_time) < to_minutes(open_time)


def window_duration(open_time: str, close_time: str) -> int:
    """Length of the window in minutes, with late-night close pushed past 24:00."""
    open_minutes = to_minutes(open_time)
    close_minutes = to_minutes(close_time)

    if close_minutes < open_minutes:
        close_minutes += MINUTES_PER_DAY

    return close_minutes - open_minutes


def format_duration(minutes: int) -> str:
    """Format a duration for display, e.g. 480 -> "8h 0m"."""
    return f"{minutes // 60}h {minutes % 60}m"
