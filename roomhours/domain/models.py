"""
Domain models for weekly operating hours.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple

from .exceptions import ScheduleError
from .time_of_day import normalize

WEEKDAYS = tuple(range(7))  # 0=Sunday ... 6=Saturday

WEEKDAY_NAMES = {
    0: "Sunday",
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
}

EDITABLE_FIELDS = ("open_time", "close_time", "is_closed")


def weekday_of(moment) -> int:
    """Weekday index (0=Sunday) of a date or datetime."""
    return moment.isoweekday() % 7


@dataclass(frozen=True)
class DayWindow:
    """
    One weekday's operating window.

    Times are "HH:MM" strings and are normalized to zero-padded form. When
    ``is_closed`` is set the times are kept but ignored by evaluation.
    """
    weekday: int
    open_time: str | None
    close_time: str | None
    is_closed: bool = False

    def __post_init__(self):
        if self.weekday not in WEEKDAYS:
            raise ScheduleError(f"Weekday must be between 0 and 6, got {self.weekday}")
        # Parse at the boundary so malformed values never reach the arithmetic
        for name in ("open_time", "close_time"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, normalize(value))
        object.__setattr__(self, "is_closed", bool(self.is_closed))

    @property
    def name(self) -> str:
        return WEEKDAY_NAMES[self.weekday]

    def with_field(self, field_name: str, value: Any) -> "DayWindow":
        """Return a copy with one editable field replaced."""
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(
                f"Unknown field '{field_name}', expected one of {', '.join(EDITABLE_FIELDS)}"
            )
        return replace(self, **{field_name: value})

    def with_window(self, open_time: str | None, close_time: str | None, is_closed: bool) -> "DayWindow":
        """Return a copy with open/close/closed replaced, keeping the weekday."""
        return replace(self, open_time=open_time, close_time=close_time, is_closed=is_closed)

    def to_record(self) -> Dict[str, Any]:
        return {
            "weekday": self.weekday,
            "openTime": self.open_time,
            "closeTime": self.close_time,
            "isClosed": self.is_closed,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "DayWindow":
        try:
            return cls(
                weekday=int(record["weekday"]),
                open_time=record.get("openTime"),
                close_time=record.get("closeTime"),
                is_closed=_closed_flag(record.get("isClosed", False), "isClosed"),
            )
        except KeyError as exc:
            raise ScheduleError(f"Day record is missing {exc}") from exc

    def to_api_row(self) -> Dict[str, Any]:
        return {
            "day_of_week": self.weekday,
            "open_time": self.open_time,
            "close_time": self.close_time,
            "is_closed": self.is_closed,
        }

    @classmethod
    def from_api_row(cls, row: Mapping[str, Any]) -> "DayWindow":
        try:
            return cls(
                weekday=int(row["day_of_week"]),
                open_time=_trim_seconds(row.get("open_time")),
                close_time=_trim_seconds(row.get("close_time")),
                is_closed=_closed_flag(row.get("is_closed") or False, "is_closed"),
            )
        except KeyError as exc:
            raise ScheduleError(f"Day row is missing {exc}") from exc


def _closed_flag(value: Any, key: str) -> bool:
    """Only real booleans are accepted; "false" must not read as closed."""
    if not isinstance(value, bool):
        raise ScheduleError(f"{key} must be true or false, got {value!r}")
    return value


def _trim_seconds(value: str | None) -> str | None:
    """SQL TIME columns come back as "HH:MM:SS"; keep "HH:MM"."""
    if isinstance(value, str) and value.count(":") == 2:
        return value.rsplit(":", 1)[0]
    return value


# Fallback used whenever a weekday is looked up before a schedule is loaded
DEFAULT_DAY_WINDOW = DayWindow(weekday=0, open_time="16:00", close_time="23:00", is_closed=False)


def default_window_for(weekday: int) -> DayWindow:
    """The shared fallback window, stamped with the requested weekday."""
    return replace(DEFAULT_DAY_WINDOW, weekday=weekday)


@dataclass(frozen=True)
class WeeklySchedule:
    """
    Exactly seven DayWindow entries ordered by weekday.

    An empty schedule is allowed and stands for "not loaded yet"; lookups on
    it fall back to ``DEFAULT_DAY_WINDOW``. Every mutation returns a new
    instance.
    """
    days: Tuple[DayWindow, ...] = field(default_factory=tuple)

    def __post_init__(self):
        days = tuple(sorted(self.days, key=lambda d: d.weekday))
        if days:
            weekdays = [d.weekday for d in days]
            if len(days) != 7 or tuple(weekdays) != WEEKDAYS:
                raise ScheduleError(
                    f"A weekly schedule needs exactly one window per weekday 0-6, got {weekdays}"
                )
        object.__setattr__(self, "days", days)

    @classmethod
    def empty(cls) -> "WeeklySchedule":
        return cls(days=())

    @property
    def is_loaded(self) -> bool:
        return bool(self.days)

    def __iter__(self) -> Iterator[DayWindow]:
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)

    def get(self, weekday: int) -> DayWindow:
        """
        Return the window for a weekday.

        Falls back to the default window while the schedule is empty so that
        callers can render before the first load completes.
        """
        if weekday not in WEEKDAYS:
            raise ScheduleError(f"Weekday must be between 0 and 6, got {weekday}")
        if not self.days:
            return default_window_for(weekday)
        return self.days[weekday]

    def set(self, weekday: int, field_name: str, value: Any) -> "WeeklySchedule":
        """Return a new schedule with one field of one weekday replaced."""
        return self.replace_day(self.get_loaded(weekday).with_field(field_name, value))

    def get_loaded(self, weekday: int) -> DayWindow:
        if not self.days:
            raise ScheduleError("Cannot edit a schedule that has not been loaded")
        return self.get(weekday)

    def replace_day(self, day: DayWindow) -> "WeeklySchedule":
        """Return a new schedule with the entry for ``day.weekday`` swapped out."""
        if not self.days:
            raise ScheduleError("Cannot edit a schedule that has not been loaded")
        return WeeklySchedule(
            days=tuple(day if d.weekday == day.weekday else d for d in self.days)
        )

    def to_records(self) -> List[Dict[str, Any]]:
        return [day.to_record() for day in self.days]

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "WeeklySchedule":
        return cls(days=tuple(DayWindow.from_record(r) for r in records))

    def to_api_rows(self) -> List[Dict[str, Any]]:
        return [day.to_api_row() for day in self.days]

    @classmethod
    def from_api_rows(cls, rows: Sequence[Mapping[str, Any]]) -> "WeeklySchedule":
        return cls(days=tuple(DayWindow.from_api_row(r) for r in rows))


def is_dirty(working: WeeklySchedule, baseline: WeeklySchedule) -> bool:
    """True when the working copy differs structurally from the baseline."""
    return working != baseline


@dataclass(frozen=True)
class TimeSlot:
    """One labeled instant in a generated slot sequence."""
    time: str
    hour: int
    minute: int
    is_next_day: bool = False

    @property
    def display_time(self) -> str:
        """12-hour label, e.g. "6:15 PM"."""
        hour12 = self.hour % 12 or 12
        period = "AM" if self.hour < 12 else "PM"
        return f"{hour12}:{self.minute:02d} {period}"


@dataclass(frozen=True)
class RangeCheck:
    """Result of validating an open/close pair."""
    is_valid: bool
    is_late_night: bool = False
    duration: int = 0
