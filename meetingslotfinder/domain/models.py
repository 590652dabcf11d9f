"""
Domain models for time ranges, calendar events and meeting requests.

All times are expressed in minutes since the start of the day.
"""

from dataclasses import dataclass, field
from operator import attrgetter
from typing import ClassVar, FrozenSet, Iterable, Union

from .exceptions import InvalidRangeError, InvalidRequestError

START_OF_DAY = 0
END_OF_DAY = 23 * 60 + 59


def normalize_attendee(identifier: str) -> str:
    """
    Normalise an attendee id for comparison.

    Email addresses (ids containing ``@``) are case-insensitive and are
    lower-cased; other ids are only stripped.
    """
    identifier = identifier.strip()
    if "@" in identifier:
        return identifier.lower()
    return identifier


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable half-open time range ``[start, end)``.

    Invariant: 0 <= start <= end <= END_OF_DAY + 1.
    """
    start: int
    end: int

    WHOLE_DAY: ClassVar["TimeRange"]
    ORDER_BY_START: ClassVar = attrgetter("start")

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidRangeError(f"Start time {self.start} must not be after end time {self.end}")
        if self.start < START_OF_DAY or self.end > END_OF_DAY + 1:
            raise InvalidRangeError(
                f"Range [{self.start}, {self.end}) is outside of the day "
                f"[{START_OF_DAY}, {END_OF_DAY + 1})"
            )

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool) -> "TimeRange":
        """
        Create a range from two points in the day.

        If ``inclusive`` is set, the minute at ``end`` is part of the range.
        """
        return cls(start=start, end=end + 1 if inclusive else end)

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        """Create a range that starts at ``start`` and lasts ``duration`` minutes."""
        return cls(start=start, end=start + duration)

    @staticmethod
    def get_time_in_minutes(hours: int, minutes: int) -> int:
        """Convert a wall clock time to minutes since the start of the day."""
        if not 0 <= hours <= 24 or not 0 <= minutes < 60 or (hours == 24 and minutes):
            raise InvalidRangeError(f"Invalid time of day {hours:02d}:{minutes:02d}")
        return hours * 60 + minutes

    @property
    def duration(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another."""
        return self.start < other.end and self.end > other.start

    def contains(self, item: Union[int, "TimeRange"]) -> bool:
        """
        Check if a point in time or a whole range lies within this range.

        An empty range is contained wherever its start point is.
        """
        if isinstance(item, TimeRange):
            if item.duration == 0:
                return self.contains(item.start)
            return self.start <= item.start and item.end <= self.end
        return self.start <= item < self.end

    def intersect(self, other: "TimeRange") -> "TimeRange | None":
        """
        Calculate the intersection of two time ranges.
        Returns None if there is no overlap.
        """
        if not self.overlaps(other):
            return None

        return TimeRange(start=max(self.start, other.start), end=min(self.end, other.end))

    def __lt__(self, other: "TimeRange") -> bool:
        if not isinstance(other, TimeRange):
            return NotImplemented
        return self.start < other.start

    def __str__(self) -> str:
        return f"{_format_minutes(self.start)} - {_format_minutes(self.end)}"


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


TimeRange.WHOLE_DAY = TimeRange(start=START_OF_DAY, end=END_OF_DAY + 1)
WHOLE_DAY = TimeRange.WHOLE_DAY


@dataclass(frozen=True)
class Event:
    """
    A calendar event: a title, the time it occupies and who attends it.
    """
    title: str
    when: TimeRange
    attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "attendees", frozenset(self.attendees))

    def involves(self, people: Iterable[str]) -> bool:
        """Check whether any of ``people`` attends this event."""
        return not self.attendees.isdisjoint(people)


@dataclass(frozen=True)
class MeetingRequest:
    """
    A request for a meeting of ``duration`` minutes.

    Mandatory attendees must all be free; optional attendees are included
    whenever the calendar allows it.
    """
    attendees: FrozenSet[str]
    duration: int
    optional_attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.duration < 0:
            raise InvalidRequestError(f"Meeting duration must not be negative, got {self.duration}")
        object.__setattr__(self, "attendees", frozenset(self.attendees))
        object.__setattr__(self, "optional_attendees", frozenset(self.optional_attendees))
