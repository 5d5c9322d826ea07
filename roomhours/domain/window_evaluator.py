"""
Open/closed and containment checks against a day's operating window.

Booking validation and "are we open" questions are answered on minute-of-day
values. Only is_within_hours looks at the calendar dates of its instants.
"""

from datetime import datetime, time
from typing import Dict

from .models import DayWindow, RangeCheck, WeeklySchedule, weekday_of
from .time_of_day import MINUTES_PER_DAY, format_duration, to_minutes, window_duration


def validate_range(open_time: str | None, close_time: str | None) -> RangeCheck:
    """
    Validate an open/close pair.

    A range is invalid when either end is missing or its duration, after
    pushing a late-night close past midnight, is not positive.
    """
    if not open_time or not close_time:
        return RangeCheck(is_valid=False)

    open_minutes = to_minutes(open_time)
    close_minutes = to_minutes(close_time)
    late_night = close_minutes < open_minutes
    duration = window_duration(open_time, close_time)

    return RangeCheck(is_valid=duration > 0, is_late_night=late_night, duration=duration)


def minute_of_day(instant: datetime | time | str) -> int:
    """Wall-clock minute of day for a datetime, time or "HH:MM" string."""
    if isinstance(instant, str):
        return to_minutes(instant)
    return instant.hour * 60 + instant.minute


def contains_interval(
    day: DayWindow,
    start: datetime | time | str,
    end: datetime | time | str,
) -> bool:
    """
    Decide whether a [start, end) booking lies inside the day's open window.

    Late-night windows cover [open, 24:00) and [00:00, close). Both endpoints
    are placed on a timeline that runs from open to close + 24h, where any
    minute earlier than open belongs to the next day. The start must lie in
    [open, close + 24h), the end in (open, close + 24h], and the end may not
    come before the start.
    """
    if day.is_closed:
        return False

    check = validate_range(day.open_time, day.close_time)
    if not check.is_valid:
        return False

    open_minutes = to_minutes(day.open_time)
    close_minutes = to_minutes(day.close_time)
    start_minutes = minute_of_day(start)
    end_minutes = minute_of_day(end)

    if check.is_late_night:
        late_close = close_minutes + MINUTES_PER_DAY
        start_extended = _past_midnight(start_minutes, open_minutes)
        end_extended = _past_midnight(end_minutes, open_minutes)
        return (
            open_minutes <= start_extended < late_close
            and open_minutes < end_extended <= late_close
            and start_extended <= end_extended
        )

    return open_minutes <= start_minutes <= end_minutes <= close_minutes


def _past_midnight(minutes: int, open_minutes: int) -> int:
    """Minutes before the open time belong to the following day."""
    if minutes < open_minutes:
        return minutes + MINUTES_PER_DAY
    return minutes


def is_open_at(day: DayWindow, instant: datetime | time | str) -> bool:
    """True when the day's window is open at the given wall-clock time."""
    if day.is_closed:
        return False

    check = validate_range(day.open_time, day.close_time)
    if not check.is_valid:
        return False

    open_minutes = to_minutes(day.open_time)
    close_minutes = to_minutes(day.close_time)
    minutes = minute_of_day(instant)

    if check.is_late_night:
        return minutes >= open_minutes or minutes < close_minutes
    return open_minutes <= minutes < close_minutes


def is_within_hours(schedule: WeeklySchedule, start: datetime, end: datetime) -> bool:
    """
    Containment check using the weekday of the booking's start.

    A booking ending on the same date must not end before it starts. Only a
    late-night window may hold a booking that ends on the next date, and that
    end must fall in the after-midnight part of the window.
    """
    day = schedule.get(weekday_of(start))
    days_apart = (end.date() - start.date()).days

    if days_apart == 0:
        if minute_of_day(end) < minute_of_day(start):
            return False
    elif days_apart == 1:
        check = validate_range(day.open_time, day.close_time)
        if day.is_closed or not check.is_late_night:
            return False
        if minute_of_day(end) >= to_minutes(day.open_time):
            return False
    else:
        return False

    return contains_interval(day, start, end)


def invalid_days(schedule: WeeklySchedule) -> Dict[int, str]:
    """
    Collect per-day warnings for open days whose range is unusable.

    Returns:
        Mapping of weekday -> human readable warning
    """
    warnings: Dict[int, str] = {}

    for day in schedule:
        if day.is_closed:
            continue
        check = validate_range(day.open_time, day.close_time)
        if check.is_valid:
            continue
        if not day.open_time or not day.close_time:
            warnings[day.weekday] = f"{day.name}: open and close times are required"
        else:
            warnings[day.weekday] = (
                f"{day.name}: {day.open_time} - {day.close_time} has no duration "
                f"({format_duration(check.duration)})"
            )

    return warnings
