"""
Editing-session store for the weekly schedule.

The store owns two snapshots: the persisted baseline and the working copy
being edited. Engine mutations run against the working copy; the baseline
only changes after a load or a successful save. The persistence client is
reached through a small protocol so the REST adapter or the mock can be
plugged in, and tests can use a stub.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Protocol

from ..domain.exceptions import FetchError
from ..domain.models import DayWindow, WeeklySchedule, is_dirty
from ..domain.window_evaluator import invalid_days

logger = logging.getLogger(__name__)

Subscriber = Callable[[WeeklySchedule], None]
Mutator = Callable[[WeeklySchedule], WeeklySchedule]


class HoursClientProtocol(Protocol):
    """Protocol describing the persistence behaviour needed by the store."""

    async def load_weekly_schedule(self) -> WeeklySchedule:
        """Return the persisted schedule."""

    async def save_weekly_schedule(self, schedule: WeeklySchedule) -> WeeklySchedule:
        """Persist the schedule and return what was stored."""


class HoursStore:
    """
    Holds the baseline and working copy for one editing session.

    Subscribers are called with the new working copy whenever it changes.
    Only one save may be outstanding at a time.
    """

    def __init__(self, client: HoursClientProtocol) -> None:
        self._client = client
        self._baseline = WeeklySchedule.empty()
        self._working = WeeklySchedule.empty()
        self._subscribers: List[Subscriber] = []
        self._saving = False
        self._loading = False
        self.last_error: FetchError | None = None

    @property
    def baseline(self) -> WeeklySchedule:
        return self._baseline

    @property
    def working(self) -> WeeklySchedule:
        return self._working

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def saving(self) -> bool:
        return self._saving

    @property
    def has_changes(self) -> bool:
        return is_dirty(self._working, self._baseline)

    @property
    def can_save(self) -> bool:
        """Saving needs pending changes and no save already in flight."""
        return self.has_changes and not self._saving

    def get(self, weekday: int) -> DayWindow:
        return self._working.get(weekday)

    def warnings(self) -> Dict[int, str]:
        """Per-day warnings for the working copy."""
        return invalid_days(self._working)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a change callback.

        Returns:
            A function that removes the callback again
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def load(self) -> WeeklySchedule:
        """
        Fetch the baseline and replace the working copy with it.

        Raises:
            FetchError: If the persistence call fails; the working copy is kept
        """
        self._loading = True
        try:
            schedule = await self._client.load_weekly_schedule()
        except FetchError as exc:
            self.last_error = exc
            logger.error("Failed to load business hours: %s", exc)
            raise
        finally:
            self._loading = False

        self.last_error = None
        self._baseline = schedule
        self._set_working(schedule)
        logger.info("Loaded business hours for %d day(s)", len(schedule))
        return schedule

    def update(self, mutator: Mutator) -> WeeklySchedule:
        """Apply an engine operation to the working copy."""
        self._set_working(mutator(self._working))
        return self._working

    def set_day(self, weekday: int, field_name: str, value) -> WeeklySchedule:
        return self.update(lambda schedule: schedule.set(weekday, field_name, value))

    def reset(self) -> WeeklySchedule:
        """Discard unsaved edits and return to the baseline."""
        self._set_working(self._baseline)
        return self._working

    async def save(self) -> bool:
        """
        Persist the working copy.

        Returns:
            True when the backend accepted the schedule, False when there was
            nothing to save or a save is already running

        Raises:
            FetchError: If the persistence call fails; edits are kept
        """
        if self._saving:
            logger.warning("Save ignored: a save is already in progress")
            return False
        if not self.has_changes:
            logger.info("Save skipped: no unsaved changes")
            return False

        self._saving = True
        submitted = self._working
        try:
            stored = await self._client.save_weekly_schedule(submitted)
        except FetchError as exc:
            self.last_error = exc
            logger.error("Failed to save business hours: %s", exc)
            raise
        finally:
            self._saving = False

        self.last_error = None
        self._baseline = stored
        # Keep edits made while the save was in flight
        if self._working == submitted:
            self._set_working(stored)
        logger.info("Saved business hours")
        return True

    def _set_working(self, schedule: WeeklySchedule) -> None:
        if schedule == self._working:
            self._working = schedule
            return
        self._working = schedule
        for callback in list(self._subscribers):
            callback(schedule)
