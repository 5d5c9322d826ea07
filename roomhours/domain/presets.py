"""
Catalog of canned weekly schedules.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

from .models import WEEKDAYS, DayWindow, WeeklySchedule

WEEKEND = (0, 6)
LATE_WEEKEND = (5, 6)  # Friday and Saturday nights


@dataclass(frozen=True)
class Preset:
    """A named weekly schedule that replaces the working copy wholesale."""
    name: str
    description: str
    hours: Tuple[DayWindow, ...]

    def to_schedule(self) -> WeeklySchedule:
        return WeeklySchedule(days=self.hours)


def _build(rule: Callable[[int], Tuple[str, str, bool]]) -> Tuple[DayWindow, ...]:
    windows = []
    for weekday in WEEKDAYS:
        open_time, close_time, is_closed = rule(weekday)
        windows.append(DayWindow(weekday, open_time, close_time, is_closed))
    return tuple(windows)


PRESETS: List[Preset] = [
    Preset(
        name="Standard Karaoke",
        description="6 PM - 2 AM (Fri/Sat until 3 AM)",
        hours=_build(lambda d: ("18:00", "03:00" if d in LATE_WEEKEND else "02:00", False)),
    ),
    Preset(
        name="Extended Hours",
        description="8 PM - 4 AM (Fri/Sat until 5 AM)",
        hours=_build(lambda d: ("20:00", "05:00" if d in LATE_WEEKEND else "04:00", False)),
    ),
    Preset(
        name="Daytime Business",
        description="10 AM - 10 PM",
        hours=_build(lambda d: ("10:00", "22:00", False)),
    ),
    Preset(
        name="Weekend Only",
        description="Closed weekdays, 6 PM - 2 AM weekends",
        hours=_build(
            lambda d: ("18:00", "02:00", False) if d in WEEKEND else ("00:00", "00:00", True)
        ),
    ),
    Preset(
        # 23:59 rather than 00:00 so the window is not zero-length
        name="24/7",
        description="Open all day, every day",
        hours=_build(lambda d: ("00:00", "23:59", False)),
    ),
]


def find_preset(name: str) -> Preset:
    """Look up a preset by name, ignoring case."""
    for preset in PRESETS:
        if preset.name.lower() == name.strip().lower():
            return preset
    known = ", ".join(p.name for p in PRESETS)
    raise KeyError(f"Unknown preset '{name}'. Available presets: {known}")
