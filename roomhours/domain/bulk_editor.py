"""
Group mutations over a working WeeklySchedule.

Every operation returns a new schedule and leaves its input untouched;
nothing here persists anything.
"""

from typing import Callable

from .exceptions import ScheduleError
from .models import WEEKDAYS, DayWindow, WeeklySchedule
from .presets import WEEKEND, Preset

WeekdayPredicate = Callable[[int], bool]


def is_weekday(weekday: int) -> bool:
    return 1 <= weekday <= 5


def is_weekend(weekday: int) -> bool:
    return weekday in WEEKEND


def every_day(weekday: int) -> bool:
    return True


def copy_day(schedule: WeeklySchedule, from_weekday: int, to_weekday: int) -> WeeklySchedule:
    """Copy open, close and closed flag from one weekday onto another."""
    source = schedule.get_loaded(from_weekday)
    target = schedule.get_loaded(to_weekday)
    return schedule.replace_day(
        target.with_window(source.open_time, source.close_time, source.is_closed)
    )


def copy_to_all(schedule: WeeklySchedule, from_weekday: int) -> WeeklySchedule:
    """Broadcast one weekday's window to all seven entries."""
    source = schedule.get_loaded(from_weekday)
    return set_group(schedule, every_day, source.open_time, source.close_time, source.is_closed)


def set_group(
    schedule: WeeklySchedule,
    predicate: WeekdayPredicate,
    open_time: str | None,
    close_time: str | None,
    is_closed: bool = False,
) -> WeeklySchedule:
    """
    Apply one window to every weekday matching ``predicate``.

    Args:
        schedule: Working copy to edit
        predicate: Selects the weekdays to change
        open_time: New open time
        close_time: New close time
        is_closed: New closed flag

    Returns:
        New schedule; weekdays not matching the predicate are unchanged
    """
    if not schedule.is_loaded:
        raise ScheduleError("Cannot edit a schedule that has not been loaded")

    return WeeklySchedule(
        days=tuple(
            day.with_window(open_time, close_time, is_closed) if predicate(day.weekday) else day
            for day in schedule
        )
    )


def set_all_days(schedule: WeeklySchedule, open_time: str, close_time: str, is_closed: bool = False) -> WeeklySchedule:
    return set_group(schedule, every_day, open_time, close_time, is_closed)


def set_weekdays(schedule: WeeklySchedule, open_time: str, close_time: str, is_closed: bool = False) -> WeeklySchedule:
    """Monday through Friday."""
    return set_group(schedule, is_weekday, open_time, close_time, is_closed)


def set_weekends(schedule: WeeklySchedule, open_time: str, close_time: str, is_closed: bool = False) -> WeeklySchedule:
    """Saturday and Sunday."""
    return set_group(schedule, is_weekend, open_time, close_time, is_closed)


def close_all_days(schedule: WeeklySchedule) -> WeeklySchedule:
    """Mark every day closed, keeping the configured times."""
    return WeeklySchedule(days=tuple(day.with_field("is_closed", True) for day in schedule))


def toggle_closed(schedule: WeeklySchedule, weekday: int) -> WeeklySchedule:
    day = schedule.get_loaded(weekday)
    return schedule.replace_day(day.with_field("is_closed", not day.is_closed))


def apply_preset(schedule: WeeklySchedule, preset: Preset) -> WeeklySchedule:
    """Replace the whole working copy with the preset's seven windows."""
    return preset.to_schedule()


def reset_to_defaults() -> WeeklySchedule:
    """
    Canonical default schedule.

    Saturday and Sunday open at 12:00, other days at 16:00. Friday and
    Saturday close at 23:59, other days at 23:00. No day is closed.
    """
    return WeeklySchedule(
        days=tuple(
            DayWindow(
                weekday=weekday,
                open_time="12:00" if weekday in (0, 6) else "16:00",
                close_time="23:59" if weekday in (5, 6) else "23:00",
                is_closed=False,
            )
            for weekday in WEEKDAYS
        )
    )
