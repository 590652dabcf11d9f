"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import CalendarDataError, InvalidRangeError, InvalidRequestError, MeetingSlotError
from .models import END_OF_DAY, START_OF_DAY, WHOLE_DAY, Event, MeetingRequest, TimeRange
from .slot_resolver import MeetingSlotResolver, resolve

__all__ = [
    "CalendarDataError",
    "END_OF_DAY",
    "Event",
    "InvalidRangeError",
    "InvalidRequestError",
    "MeetingRequest",
    "MeetingSlotError",
    "MeetingSlotResolver",
    "START_OF_DAY",
    "TimeRange",
    "WHOLE_DAY",
    "resolve",
]
