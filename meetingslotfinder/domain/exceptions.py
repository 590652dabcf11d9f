"""
Domain-specific exception hierarchy for the meeting slot finder.
"""


class MeetingSlotError(Exception):
    """Base class for all application-level errors."""


class InvalidRangeError(MeetingSlotError, ValueError):
    """Raised when a time range is constructed with invalid bounds."""


class InvalidRequestError(MeetingSlotError, ValueError):
    """Raised when a meeting request cannot be satisfied by construction."""


class CalendarDataError(MeetingSlotError):
    """Raised when calendar data cannot be read or parsed."""
