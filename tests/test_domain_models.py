"""
Tests for domain models.
"""

import pytest

from roomhours.domain.bulk_editor import reset_to_defaults
from roomhours.domain.exceptions import ParseError, ScheduleError
from roomhours.domain.models import (
    DEFAULT_DAY_WINDOW,
    DayWindow,
    TimeSlot,
    WeeklySchedule,
    is_dirty,
)


class TestDayWindow:
    """Tests for DayWindow model."""

    def test_times_are_normalized(self):
        day = DayWindow(weekday=1, open_time="9:00", close_time="17:30")
        assert day.open_time == "09:00"
        assert day.close_time == "17:30"
        assert day.name == "Monday"

    def test_malformed_time_raises(self):
        with pytest.raises(ParseError):
            DayWindow(weekday=1, open_time="25:00", close_time="17:00")

    def test_weekday_out_of_range_raises(self):
        with pytest.raises(ScheduleError, match="between 0 and 6"):
            DayWindow(weekday=7, open_time="09:00", close_time="17:00")

    def test_missing_times_allowed(self):
        """Missing times are representable; validation reports them."""
        day = DayWindow(weekday=3, open_time=None, close_time=None, is_closed=True)
        assert day.open_time is None

    def test_with_field_rejects_unknown_field(self):
        day = DayWindow(weekday=1, open_time="09:00", close_time="17:00")
        with pytest.raises(ValueError, match="Unknown field"):
            day.with_field("weekday", 2)


class TestWeeklySchedule:
    """Tests for the seven-day schedule."""

    def test_requires_seven_unique_weekdays(self):
        days = [DayWindow(weekday=d, open_time="09:00", close_time="17:00") for d in range(6)]
        with pytest.raises(ScheduleError):
            WeeklySchedule(days=tuple(days))

        duplicate = days + [DayWindow(weekday=5, open_time="09:00", close_time="17:00")]
        with pytest.raises(ScheduleError):
            WeeklySchedule(days=tuple(duplicate))

    def test_days_are_ordered_by_weekday(self):
        days = [DayWindow(weekday=d, open_time="09:00", close_time="17:00") for d in reversed(range(7))]
        schedule = WeeklySchedule(days=tuple(days))
        assert [d.weekday for d in schedule] == list(range(7))

    def test_empty_schedule_falls_back_to_default(self):
        """Lookups before the first load return the shared default window."""
        schedule = WeeklySchedule.empty()
        day = schedule.get(4)

        assert day.weekday == 4
        assert day.open_time == DEFAULT_DAY_WINDOW.open_time == "16:00"
        assert day.close_time == DEFAULT_DAY_WINDOW.close_time == "23:00"
        assert not day.is_closed

    def test_editing_empty_schedule_raises(self):
        with pytest.raises(ScheduleError, match="not been loaded"):
            WeeklySchedule.empty().set(1, "open_time", "10:00")

    @pytest.mark.parametrize("weekday", range(7))
    def test_set_changes_only_one_day(self, weekday):
        """Setting a field leaves every other weekday untouched."""
        schedule = reset_to_defaults()
        updated = schedule.set(weekday, "close_time", "20:15")

        assert updated.get(weekday).close_time == "20:15"
        for other in range(7):
            if other != weekday:
                assert updated.get(other) == schedule.get(other)
        # the input schedule is unchanged
        assert schedule.get(weekday).close_time != "20:15"

    def test_is_dirty(self):
        baseline = reset_to_defaults()
        assert not is_dirty(baseline, reset_to_defaults())
        assert is_dirty(baseline.set(0, "is_closed", True), baseline)

    def test_record_conversion(self):
        """The persisted camelCase shape converts both ways."""
        schedule = reset_to_defaults()
        records = schedule.to_records()

        assert len(records) == 7
        assert records[6] == {"weekday": 6, "openTime": "12:00", "closeTime": "23:59", "isClosed": False}
        assert WeeklySchedule.from_records(records) == schedule

    def test_api_rows_trim_seconds(self):
        """SQL TIME values such as "18:00:00" are accepted."""
        rows = [
            {"day_of_week": d, "open_time": "18:00:00", "close_time": "02:00:00", "is_closed": None}
            for d in range(7)
        ]
        schedule = WeeklySchedule.from_api_rows(rows)

        assert schedule.get(3).open_time == "18:00"
        assert schedule.get(3).close_time == "02:00"
        assert schedule.get(3).is_closed is False
        assert schedule.to_api_rows()[0]["day_of_week"] == 0

    def test_missing_keys_raise_schedule_error(self):
        with pytest.raises(ScheduleError, match="missing"):
            WeeklySchedule.from_records([{"openTime": "10:00"}])

    @pytest.mark.parametrize("flag", ["false", "true", 0, 1])
    def test_closed_flag_must_be_boolean(self, flag):
        """A string "false" must not be read as a closed day."""
        records = reset_to_defaults().to_records()
        records[2]["isClosed"] = flag
        with pytest.raises(ScheduleError, match="isClosed"):
            WeeklySchedule.from_records(records)

    def test_api_row_closed_flag_must_be_boolean(self):
        rows = reset_to_defaults().to_api_rows()
        rows[4]["is_closed"] = "false"
        with pytest.raises(ScheduleError, match="is_closed"):
            WeeklySchedule.from_api_rows(rows)


class TestTimeSlot:
    """Tests for slot display labels."""

    def test_display_time(self):
        assert TimeSlot(time="00:15", hour=0, minute=15).display_time == "12:15 AM"
        assert TimeSlot(time="12:00", hour=12, minute=0).display_time == "12:00 PM"
        assert TimeSlot(time="18:45", hour=18, minute=45).display_time == "6:45 PM"
