"""
roomhours - operating-hours engine for bookable rooms.
"""

__version__ = "0.1.0"
