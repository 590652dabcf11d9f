"""
Adapters layer - Calendar sources feeding events into the domain.
"""

from .calendar_file import CalendarFileReader, parse_minute_of_day

__all__ = ["CalendarFileReader", "parse_minute_of_day"]
