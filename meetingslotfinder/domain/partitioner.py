"""
Sweep-line partitioning of the day into atomic ranges.

Every start and end of a relevant event becomes a boundary point. Sweeping
the points in chronological order while counting, per attendee, how many
events currently cover the sweep position splits the day into slices in
which nobody's availability changes.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional

from .models import END_OF_DAY, START_OF_DAY, Event, MeetingRequest, TimeRange


class BoundaryKind(IntEnum):
    """Kind of a boundary point; the value orders points sharing a timestamp."""
    END = 0
    START = 1
    SENTINEL = 2


class BoundaryPoint(NamedTuple):
    time: int
    kind: BoundaryKind
    event: Optional[Event] = None

    def sort_key(self):
        return (self.time, self.kind)


@dataclass(frozen=True)
class AtomicRange:
    """
    A slice of the day between two consecutive boundary points.

    ``free_optional_attendees`` is only populated when ``mandatory_free`` holds.
    """
    time_range: TimeRange
    mandatory_free: bool
    free_optional_attendees: FrozenSet[str] = frozenset()


def boundary_points(events: Iterable[Event]) -> List[BoundaryPoint]:
    """
    Build the chronologically ordered boundary points for ``events``.

    At equal timestamps end points come before start points, so back to back
    events never look like a conflict. The list always ends with a sentinel
    at the end of the day.
    """
    points: List[BoundaryPoint] = []

    for event in events:
        if event.when.duration == 0:
            continue
        points.append(BoundaryPoint(event.when.start, BoundaryKind.START, event))
        points.append(BoundaryPoint(event.when.end, BoundaryKind.END, event))

    points.append(BoundaryPoint(END_OF_DAY + 1, BoundaryKind.SENTINEL))
    points.sort(key=BoundaryPoint.sort_key)
    return points


def partition_day(events: Iterable[Event], request: MeetingRequest) -> List[AtomicRange]:
    """
    Split the whole day into atomic ranges annotated with availability.

    Attendees listed as both mandatory and optional count as mandatory.
    """
    mandatory = request.attendees
    optional = request.optional_attendees - mandatory
    tracked = mandatory | optional

    live_counts: Dict[str, int] = {attendee: 0 for attendee in tracked}
    atomic_ranges: List[AtomicRange] = []
    cursor = START_OF_DAY

    for point in boundary_points(events):
        if point.time > cursor:
            atomic_ranges.append(
                _snapshot(TimeRange(start=cursor, end=point.time), live_counts, mandatory, optional)
            )
            cursor = point.time

        if point.kind is BoundaryKind.SENTINEL:
            break

        delta = 1 if point.kind is BoundaryKind.START else -1
        for attendee in point.event.attendees & tracked:
            live_counts[attendee] += delta

    return atomic_ranges


def _snapshot(
    time_range: TimeRange,
    live_counts: Dict[str, int],
    mandatory: FrozenSet[str],
    optional: FrozenSet[str]
) -> AtomicRange:
    mandatory_free = all(live_counts[attendee] == 0 for attendee in mandatory)

    if not mandatory_free:
        return AtomicRange(time_range=time_range, mandatory_free=False)

    return AtomicRange(
        time_range=time_range,
        mandatory_free=True,
        free_optional_attendees=frozenset(
            attendee for attendee in optional if live_counts[attendee] == 0
        )
    )
