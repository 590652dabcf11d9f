"""
Tests for event filtering and the sweep-line partitioner.
"""

from meetingslotfinder.domain.event_filter import filter_events
from meetingslotfinder.domain.models import END_OF_DAY, WHOLE_DAY, Event, MeetingRequest, TimeRange
from meetingslotfinder.domain.partitioner import (
    AtomicRange,
    BoundaryKind,
    boundary_points,
    partition_day,
)


def _event(start: int, end: int, *attendees: str, title: str = "Event") -> Event:
    return Event(title=title, when=TimeRange(start=start, end=end), attendees=frozenset(attendees))


class TestEventFilter:
    """Tests for filter_events."""

    def test_splits_events_by_attendee_kind(self):
        """Events are grouped by whether they block mandatory attendees."""
        mandatory_event = _event(60, 120, "A", "B")
        optional_event = _event(120, 180, "B")
        unrelated_event = _event(0, 30, "Z")

        request = MeetingRequest(attendees={"A"}, optional_attendees={"B"}, duration=30)
        relevant = filter_events([mandatory_event, optional_event, unrelated_event], request)

        assert relevant.mandatory == (mandatory_event,)
        assert relevant.optional == (optional_event,)
        assert len(relevant) == 2
        assert list(relevant) == [mandatory_event, optional_event]

    def test_no_attendees_drops_everything(self):
        """Without attendees no event is relevant."""
        request = MeetingRequest(attendees=set(), duration=30)

        relevant = filter_events([_event(0, 60, "A")], request)

        assert len(relevant) == 0


class TestBoundaryPoints:
    """Tests for boundary point ordering."""

    def test_ends_come_before_starts_at_same_time(self):
        """Back to back events produce end before start."""
        first = _event(60, 120, "A")
        second = _event(120, 180, "A")

        points = boundary_points([second, first])

        assert [(p.time, p.kind) for p in points] == [
            (60, BoundaryKind.START),
            (120, BoundaryKind.END),
            (120, BoundaryKind.START),
            (180, BoundaryKind.END),
            (END_OF_DAY + 1, BoundaryKind.SENTINEL),
        ]
        assert points[1].event is first
        assert points[2].event is second

    def test_sentinel_after_events_ending_at_midnight(self):
        """The sentinel is always the last point."""
        points = boundary_points([_event(1400, END_OF_DAY + 1, "A")])

        assert points[-1].kind is BoundaryKind.SENTINEL
        assert points[-2].kind is BoundaryKind.END

    def test_zero_duration_events_are_skipped(self):
        """Empty events contribute no boundary points."""
        points = boundary_points([_event(600, 600, "A")])

        assert len(points) == 1
        assert points[0].kind is BoundaryKind.SENTINEL


class TestPartitionDay:
    """Tests for partition_day."""

    def test_no_events_yields_whole_day(self):
        """An empty calendar is a single free slice."""
        request = MeetingRequest(attendees={"A"}, optional_attendees={"B"}, duration=30)

        assert partition_day([], request) == [
            AtomicRange(time_range=WHOLE_DAY, mandatory_free=True, free_optional_attendees=frozenset({"B"}))
        ]

    def test_annotates_availability(self):
        """Each slice knows whether mandatory attendees are free and which optional ones are."""
        events = [_event(60, 120, "A"), _event(90, 150, "B")]
        request = MeetingRequest(attendees={"A"}, optional_attendees={"B"}, duration=30)

        atomic_ranges = partition_day(events, request)

        assert [(a.time_range.start, a.time_range.end) for a in atomic_ranges] == [
            (0, 60), (60, 90), (90, 120), (120, 150), (150, END_OF_DAY + 1)
        ]
        assert [a.mandatory_free for a in atomic_ranges] == [True, False, False, True, True]
        assert [a.free_optional_attendees for a in atomic_ranges] == [
            frozenset({"B"}), frozenset(), frozenset(), frozenset(), frozenset({"B"})
        ]

    def test_slices_cover_the_day_without_gaps(self):
        """Consecutive slices touch and span the whole day."""
        events = [_event(30, 90, "A"), _event(60, 200, "B"), _event(500, 501, "A")]
        request = MeetingRequest(attendees={"A", "B"}, duration=0)

        atomic_ranges = partition_day(events, request)

        assert atomic_ranges[0].time_range.start == 0
        assert atomic_ranges[-1].time_range.end == END_OF_DAY + 1
        for previous, current in zip(atomic_ranges, atomic_ranges[1:]):
            assert previous.time_range.end == current.time_range.start
            assert current.time_range.duration > 0

    def test_back_to_back_events_leave_no_free_gap(self):
        """An event ending when another starts does not open a free slice."""
        events = [_event(60, 120, "A"), _event(120, 180, "A")]
        request = MeetingRequest(attendees={"A"}, duration=30)

        busy = [a.time_range for a in partition_day(events, request) if not a.mandatory_free]

        assert busy == [TimeRange(start=60, end=120), TimeRange(start=120, end=180)]

    def test_overlapping_events_of_one_attendee(self):
        """Live counts keep an attendee busy until the last covering event ends."""
        events = [_event(60, 180, "A"), _event(90, 120, "A")]
        request = MeetingRequest(attendees={"A"}, duration=30)

        free = [a.time_range for a in partition_day(events, request) if a.mandatory_free]

        assert free == [TimeRange(start=0, end=60), TimeRange(start=180, end=END_OF_DAY + 1)]

    def test_mandatory_takes_precedence_over_optional(self):
        """An attendee in both sets is only tracked as mandatory."""
        request = MeetingRequest(attendees={"A"}, optional_attendees={"A", "B"}, duration=30)

        atomic_ranges = partition_day([_event(60, 120, "A")], request)

        assert atomic_ranges[0].free_optional_attendees == frozenset({"B"})
        assert not atomic_ranges[1].mandatory_free
        assert atomic_ranges[1].free_optional_attendees == frozenset()

    def test_untracked_attendees_are_ignored(self):
        """Attendees outside the request do not affect availability."""
        request = MeetingRequest(attendees={"A"}, duration=30)

        atomic_ranges = partition_day([_event(60, 120, "A", "Z")], request)

        assert [a.mandatory_free for a in atomic_ranges] == [True, False, True]
