"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import FetchError, HoursError, ParseError, ScheduleError
from .models import DEFAULT_DAY_WINDOW, DayWindow, RangeCheck, TimeSlot, WeeklySchedule, is_dirty
from .presets import PRESETS, Preset, find_preset
from .slot_generator import SlotGenerator, generate_slots
from .window_evaluator import contains_interval, is_open_at, validate_range

__all__ = [
    "DEFAULT_DAY_WINDOW",
    "DayWindow",
    "FetchError",
    "HoursError",
    "PRESETS",
    "ParseError",
    "Preset",
    "RangeCheck",
    "ScheduleError",
    "SlotGenerator",
    "TimeSlot",
    "WeeklySchedule",
    "contains_interval",
    "find_preset",
    "generate_slots",
    "is_dirty",
    "is_open_at",
    "validate_range",
]
