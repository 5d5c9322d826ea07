"""
Tests for the HoursStore editing session.
"""

import asyncio
from typing import List

import pytest

from roomhours.domain import bulk_editor
from roomhours.domain.exceptions import FetchError
from roomhours.domain.models import WeeklySchedule
from roomhours.domain.presets import find_preset
from roomhours.services.hours_store import HoursStore


class StubHoursClient:
    """Minimal stub matching HoursClientProtocol."""

    def __init__(self, schedule: WeeklySchedule, fail_save: bool = False, fail_load: bool = False):
        self._schedule = schedule
        self.fail_save = fail_save
        self.fail_load = fail_load
        self.saved: List[WeeklySchedule] = []
        self.release: asyncio.Event | None = None

    async def load_weekly_schedule(self):
        if self.fail_load:
            raise FetchError("connection refused")
        return self._schedule

    async def save_weekly_schedule(self, schedule):
        if self.release is not None:
            await self.release.wait()
        if self.fail_save:
            raise FetchError("server error", status_code=500)
        self.saved.append(schedule)
        self._schedule = schedule
        return schedule


def _loaded_store(**kwargs) -> HoursStore:
    store = HoursStore(StubHoursClient(bulk_editor.reset_to_defaults(), **kwargs))
    asyncio.run(store.load())
    return store


class TestLoadAndEdit:
    """Tests for loading and editing the working copy."""

    def test_store_before_load_uses_default_window(self):
        store = HoursStore(StubHoursClient(bulk_editor.reset_to_defaults()))
        assert store.get(3).open_time == "16:00"
        assert not store.has_changes

    def test_load_sets_baseline_and_working(self):
        store = _loaded_store()
        assert store.baseline == store.working == bulk_editor.reset_to_defaults()
        assert not store.has_changes
        assert not store.can_save

    def test_edit_marks_changes_and_reset_discards(self):
        store = _loaded_store()
        store.set_day(2, "is_closed", True)

        assert store.has_changes
        assert store.can_save

        store.reset()
        assert not store.has_changes
        assert not store.get(2).is_closed

    def test_update_with_preset(self):
        store = _loaded_store()
        preset = find_preset("Daytime Business")
        store.update(lambda s: bulk_editor.apply_preset(s, preset))

        assert store.get(0).open_time == "10:00"
        assert store.has_changes

    def test_subscribers_receive_changes(self):
        store = _loaded_store()
        seen: List[WeeklySchedule] = []
        unsubscribe = store.subscribe(seen.append)

        store.set_day(1, "open_time", "17:00")
        store.set_day(1, "open_time", "17:00")  # no-op, no notification
        unsubscribe()
        store.set_day(1, "open_time", "18:00")

        assert len(seen) == 1
        assert seen[0].get(1).open_time == "17:00"

    def test_load_failure_keeps_working_copy(self):
        store = _loaded_store()
        store.set_day(4, "close_time", "22:00")
        store._client.fail_load = True

        with pytest.raises(FetchError):
            asyncio.run(store.load())

        assert store.get(4).close_time == "22:00"
        assert store.last_error is not None
        assert not store.loading

    def test_warnings_for_working_copy(self):
        store = _loaded_store()
        store.set_day(1, "close_time", "16:00")
        assert list(store.warnings()) == [1]


class TestSave:
    """Tests for the save path."""

    def test_save_replaces_baseline(self):
        store = _loaded_store()
        store.set_day(0, "open_time", "11:00")

        assert asyncio.run(store.save()) is True
        assert store.baseline.get(0).open_time == "11:00"
        assert not store.has_changes
        assert len(store._client.saved) == 1

    def test_save_without_changes_is_skipped(self):
        store = _loaded_store()
        assert asyncio.run(store.save()) is False
        assert store._client.saved == []

    def test_save_failure_keeps_edits(self):
        store = _loaded_store(fail_save=True)
        store.set_day(0, "open_time", "11:00")

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(store.save())

        assert exc_info.value.status_code == 500
        assert store.has_changes
        assert store.get(0).open_time == "11:00"
        assert not store.saving
        assert store.can_save

    def test_second_save_while_in_flight_is_rejected(self):
        """Only one save may be outstanding; edits made meanwhile are kept."""

        async def scenario():
            client = StubHoursClient(bulk_editor.reset_to_defaults())
            store = HoursStore(client)
            await store.load()
            client.release = asyncio.Event()

            store.set_day(1, "open_time", "10:00")
            first = asyncio.create_task(store.save())
            await asyncio.sleep(0)

            assert store.saving
            assert not store.can_save
            second = await store.save()

            store.set_day(2, "open_time", "11:00")
            client.release.set()
            return store, client, await first, second

        store, client, first_result, second_result = asyncio.run(scenario())

        assert first_result is True
        assert second_result is False
        assert len(client.saved) == 1
        assert store.baseline.get(1).open_time == "10:00"
        assert store.get(2).open_time == "11:00"
        assert store.has_changes
