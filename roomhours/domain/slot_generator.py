"""
Calendar slot generation for a day's operating window.
"""

from datetime import date
from typing import Iterator

from .models import DayWindow, TimeSlot, WeeklySchedule, weekday_of
from .time_of_day import MINUTES_PER_DAY, format_minutes, to_minutes
from .window_evaluator import validate_range

# Hard ceiling on elapsed minutes walked for one day (50 hours)
MAX_ELAPSED_MINUTES = 50 * 60


class SlotSequence:
    """
    Lazy, finite, restartable sequence of slots for one day.

    Every iteration walks the window again from the open time, so the same
    sequence can back several renders.
    """

    def __init__(self, day: DayWindow, interval_minutes: int):
        self.day = day
        self.interval_minutes = interval_minutes

    def _span(self) -> tuple[int, int]:
        """Return (open minute, minutes to walk); zero minutes means no slots."""
        day = self.day
        if day.is_closed or self.interval_minutes <= 0:
            return 0, 0

        check = validate_range(day.open_time, day.close_time)
        if not check.is_valid:
            return 0, 0

        # A valid duration is under a day; the ceiling still caps the walk
        return to_minutes(day.open_time), min(check.duration, MAX_ELAPSED_MINUTES)

    def __iter__(self) -> Iterator[TimeSlot]:
        start, span = self._span()
        elapsed = 0

        # Elapsed minutes are tracked apart from the wall clock so that a
        # late-night window wraps its labels without losing its position.
        while elapsed < span and elapsed < MAX_ELAPSED_MINUTES:
            absolute = start + elapsed
            wall_clock = absolute % MINUTES_PER_DAY
            yield TimeSlot(
                time=format_minutes(wall_clock),
                hour=wall_clock // 60,
                minute=wall_clock % 60,
                is_next_day=absolute >= MINUTES_PER_DAY,
            )
            elapsed += self.interval_minutes

    def __len__(self) -> int:
        _, span = self._span()
        if span <= 0:
            return 0
        return -(-span // self.interval_minutes)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"SlotSequence(weekday={self.day.weekday}, interval={self.interval_minutes}, slots={len(self)})"


def generate_slots(day: DayWindow, interval_minutes: int) -> SlotSequence:
    """Slots from open (inclusive) to close (exclusive) every ``interval_minutes``."""
    return SlotSequence(day, interval_minutes)


class SlotGenerator:
    """
    Generates calendar grid slots at a fixed granularity.

    Used by the calendar renderer once per visible day.
    """

    def __init__(self, interval_minutes: int = 15):
        if interval_minutes <= 0:
            raise ValueError(f"interval_minutes must be greater than zero, got {interval_minutes}")
        self.interval_minutes = interval_minutes

    def for_day(self, day: DayWindow) -> SlotSequence:
        return generate_slots(day, self.interval_minutes)

    def for_weekday(self, schedule: WeeklySchedule, weekday: int) -> SlotSequence:
        return self.for_day(schedule.get(weekday))

    def for_date(self, schedule: WeeklySchedule, on: date) -> SlotSequence:
        """Slots for the weekday a calendar date falls on."""
        return self.for_weekday(schedule, weekday_of(on))
