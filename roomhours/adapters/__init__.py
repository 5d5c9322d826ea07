"""
Adapters layer - Persistence collaborators (business-hours REST API).
"""

from .hours_api_client import HoursApiClient
from .mock_hours_client import MockHoursClient

__all__ = ["HoursApiClient", "MockHoursClient"]
