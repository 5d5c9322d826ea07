"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .hours_store import HoursClientProtocol, HoursStore

__all__ = ["HoursClientProtocol", "HoursStore"]
