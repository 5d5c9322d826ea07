"""
Tests for slot generation.
"""

from datetime import date

import pytest

from roomhours.domain.bulk_editor import reset_to_defaults
from roomhours.domain import slot_generator
from roomhours.domain.models import DayWindow
from roomhours.domain.slot_generator import MAX_ELAPSED_MINUTES, SlotGenerator, generate_slots


class TestGenerateSlots:
    """Tests for generate_slots."""

    def test_late_night_window_wraps_past_midnight(self):
        """23:00 -> 01:00 at 15 minutes gives eight slots, four on the next day."""
        day = DayWindow(weekday=5, open_time="23:00", close_time="01:00")

        slots = list(generate_slots(day, 15))

        assert [s.time for s in slots] == [
            "23:00", "23:15", "23:30", "23:45",
            "00:00", "00:15", "00:30", "00:45",
        ]
        assert [s.is_next_day for s in slots] == [False] * 4 + [True] * 4
        assert slots[4].hour == 0
        assert slots[4].minute == 0

    def test_normal_window_excludes_close(self):
        day = DayWindow(weekday=1, open_time="16:00", close_time="17:00")
        slots = list(generate_slots(day, 15))

        assert [s.time for s in slots] == ["16:00", "16:15", "16:30", "16:45"]
        assert not any(s.is_next_day for s in slots)

    def test_uneven_interval_stops_before_close(self):
        day = DayWindow(weekday=1, open_time="16:00", close_time="17:00")
        assert [s.time for s in generate_slots(day, 25)] == ["16:00", "16:25", "16:50"]
        assert len(generate_slots(day, 25)) == 3

    def test_closed_day_is_empty(self):
        day = DayWindow(weekday=0, open_time="23:00", close_time="01:00", is_closed=True)
        assert list(generate_slots(day, 15)) == []
        assert not generate_slots(day, 15)

    @pytest.mark.parametrize("interval", [0, -15])
    def test_non_positive_interval_is_empty(self, interval):
        day = DayWindow(weekday=1, open_time="16:00", close_time="23:00")
        assert list(generate_slots(day, interval)) == []
        assert len(generate_slots(day, interval)) == 0

    def test_equal_open_and_close_is_bounded(self):
        """A zero-length open day yields nothing instead of looping."""
        day = DayWindow(weekday=2, open_time="10:00", close_time="10:00", is_closed=False)
        slots = list(generate_slots(day, 15))
        assert len(slots) <= MAX_ELAPSED_MINUTES // 15
        assert slots == []

    def test_minute_interval_stays_under_bound(self):
        """Even the longest window at one-minute steps stays within the ceiling."""
        day = DayWindow(weekday=2, open_time="10:01", close_time="10:00")
        slots = list(generate_slots(day, 1))
        assert len(slots) == 1439
        assert len(slots) <= MAX_ELAPSED_MINUTES

    def test_ceiling_caps_the_walk(self, monkeypatch):
        """Lowering the ceiling cuts the sequence and its length together."""
        monkeypatch.setattr(slot_generator, "MAX_ELAPSED_MINUTES", 60)
        sequence = generate_slots(DayWindow(weekday=5, open_time="18:00", close_time="02:00"), 15)

        assert [s.time for s in sequence] == ["18:00", "18:15", "18:30", "18:45"]
        assert len(sequence) == 4

    def test_missing_times_are_empty(self):
        day = DayWindow(weekday=2, open_time=None, close_time="10:00")
        assert list(generate_slots(day, 15)) == []

    def test_sequence_is_restartable(self):
        sequence = generate_slots(DayWindow(weekday=6, open_time="18:00", close_time="03:00"), 30)
        first = list(sequence)
        second = list(sequence)
        assert first == second
        assert len(first) == 18

    def test_all_day_window(self):
        day = DayWindow(weekday=0, open_time="00:00", close_time="23:59")
        slots = list(generate_slots(day, 15))
        assert len(slots) == 96
        assert slots[-1].time == "23:45"


class TestSlotGenerator:
    """Tests for the configured generator."""

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            SlotGenerator(0)

    def test_for_date_uses_weekday_of_date(self):
        """2024-11-30 is a Saturday: 12:00 - 23:59 in the default schedule."""
        generator = SlotGenerator(60)
        slots = list(generator.for_date(reset_to_defaults(), date(2024, 11, 30)))

        assert slots[0].time == "12:00"
        assert slots[-1].time == "23:00"
        assert len(slots) == 12
