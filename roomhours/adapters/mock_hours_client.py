"""
Mock business-hours client for running without a backend.
"""

import json
import logging
from pathlib import Path

from ..domain.exceptions import FetchError, HoursError
from ..domain.models import WeeklySchedule

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "mock_business_hours.json"


class MockHoursClient:
    """
    Mock client that simulates the business-hours API.

    The schedule is read from a JSON file holding the persisted shape
    (weekday, openTime, closeTime, isClosed). Saves are kept in memory only,
    so every run starts again from the file.
    """

    def __init__(self, data_file: Path | None = None):
        """
        Initialize the mock client.
        
        Args:
            data_file: Optional JSON file; defaults to the bundled sample data
        """
        self.data_file = data_file or DEFAULT_DATA_FILE
        self._saved: WeeklySchedule | None = None
        self.save_calls = 0

    async def load_weekly_schedule(self) -> WeeklySchedule:
        if self._saved is not None:
            return self._saved
        return self._read_data_file()

    async def save_weekly_schedule(self, schedule: WeeklySchedule) -> WeeklySchedule:
        self.save_calls += 1
        self._saved = schedule
        logger.info("Mock save stored %d day(s) in memory", len(schedule))
        return schedule

    def _read_data_file(self) -> WeeklySchedule:
        """Load the schedule from the JSON data file."""
        if not self.data_file.exists():
            raise FetchError(f"Mock data file not found: {self.data_file}")

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                records = json.load(f)
            return WeeklySchedule.from_records(records)
        except (ValueError, HoursError) as e:
            raise FetchError(f"Could not read mock data from {self.data_file}: {e}") from e
