"""
REST client for the business-hours endpoint.
"""

import asyncio
import logging
from typing import Any, Dict, List

import requests

from ..domain.exceptions import FetchError, HoursError
from ..domain.models import WeeklySchedule

logger = logging.getLogger(__name__)


class HoursApiClient:
    """
    Client for the backend's weekly operating hours.

    GET  /business-hours  -> {"success": true, "data": [row, ...]}
    PUT  /business-hours  <- {"hours": [row, ...]}

    Rows use the backend's snake_case shape
    (day_of_week, open_time, close_time, is_closed).
    """

    ENDPOINT = "/business-hours"

    def __init__(self, base_url: str, access_token: str = "", timeout: float = 30):
        """
        Initialize the API client.
        
        Args:
            base_url: API root, e.g. https://example.com/api
            access_token: Bearer token; omitted from headers when empty
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        if access_token:
            self.headers["Authorization"] = f"Bearer {access_token}"

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.ENDPOINT}"

    async def load_weekly_schedule(self) -> WeeklySchedule:
        return await asyncio.to_thread(self.fetch_weekly_schedule)

    async def save_weekly_schedule(self, schedule: WeeklySchedule) -> WeeklySchedule:
        return await asyncio.to_thread(self.put_weekly_schedule, schedule)

    def fetch_weekly_schedule(self) -> WeeklySchedule:
        """
        Fetch the persisted weekly schedule.
        
        Raises:
            FetchError: If the request fails or the payload is unusable
        """
        logger.debug("GET %s", self.url)
        data = self._request("GET", None)
        return self._parse_schedule_response(data)

    def put_weekly_schedule(self, schedule: WeeklySchedule) -> WeeklySchedule:
        """
        Replace the persisted weekly schedule and return what the backend stored.
        
        Raises:
            FetchError: If the request fails or the payload is unusable
        """
        logger.debug("PUT %s", self.url)
        data = self._request("PUT", {"hours": schedule.to_api_rows()})
        return self._parse_schedule_response(data)

    def _request(self, method: str, payload: Dict[str, Any] | None) -> Dict[str, Any]:
        try:
            response = requests.request(
                method,
                self.url,
                headers=self.headers,
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FetchError(f"Business hours request failed: {e}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Failed to reach business hours API: {e}") from e
        except ValueError as e:
            raise FetchError(f"Business hours API returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or not data.get("success", False):
            error = data.get("error") if isinstance(data, dict) else None
            raise FetchError(f"Business hours API reported failure: {error or data!r}")

        return data

    def _parse_schedule_response(self, response_data: Dict[str, Any]) -> WeeklySchedule:
        """
        Parse the response into the domain model.

        Response format:
        {
            "success": true,
            "data": [
                {"day_of_week": 0, "open_time": "18:00", "close_time": "02:00", "is_closed": false},
                ...
            ]
        }
        """
        rows: List[Dict[str, Any]] = response_data.get("data") or []
        if not isinstance(rows, list):
            raise FetchError(f"Expected a list of day rows, got {type(rows).__name__}")

        try:
            return WeeklySchedule.from_api_rows(rows)
        except HoursError as e:
            raise FetchError(f"Business hours API returned an unusable schedule: {e}") from e
