"""
Merging of atomic ranges into the final meeting slots.

Two passes are tried in order and only the first one that finds something
is returned:

1. Optional-aware: find the largest group of optional attendees that can
   meet together with all mandatory attendees for the requested duration and
   return every maximal range in which that group is free.
2. Mandatory-only: ignore optional attendees and return every maximal range
   in which all mandatory attendees are free.
"""

import logging
from typing import Callable, FrozenSet, List, Sequence, Set, Tuple

from .models import MeetingRequest, TimeRange
from .partitioner import AtomicRange

logger = logging.getLogger(__name__)


class RangeSelector:
    """
    Selects meeting slots from the atomic ranges of a day.

    When several groups of optional attendees of the same size could meet,
    the group with the longest single slot wins, then the group whose first
    slot starts earliest, then the alphabetically first group.
    """

    def select(
        self,
        atomic_ranges: Sequence[AtomicRange],
        request: MeetingRequest
    ) -> List[TimeRange]:
        """
        Select the meeting slots for ``request``.

        Returns:
            Maximal, non-overlapping ranges of at least ``request.duration``
            minutes, sorted by start time. Empty if nothing fits.
        """
        optional = request.optional_attendees - request.attendees

        if optional:
            ranges = self._select_with_optional_attendees(atomic_ranges, request.duration)
            if ranges:
                return ranges

            # Without mandatory attendees the fallback would ignore everyone
            if not request.attendees:
                logger.debug("No optional attendee can meet and nobody is mandatory")
                return []

            logger.debug("No optional attendee can be accommodated, falling back to mandatory only")

        return self._long_enough(
            self._merge_matching(atomic_ranges, lambda atomic: atomic.mandatory_free),
            request.duration
        )

    def _select_with_optional_attendees(
        self,
        atomic_ranges: Sequence[AtomicRange],
        duration: int
    ) -> List[TimeRange]:
        candidates = self._candidate_attendee_sets(atomic_ranges, duration)

        if not candidates:
            return []

        best_size = max(len(attendees) for attendees in candidates)
        options: List[Tuple[FrozenSet[str], List[TimeRange]]] = []

        for attendees in candidates:
            if len(attendees) != best_size:
                continue
            ranges = self._long_enough(
                self._merge_matching(
                    atomic_ranges,
                    lambda atomic, group=attendees: group <= atomic.free_optional_attendees
                ),
                duration
            )
            options.append((attendees, ranges))

        attendees, ranges = min(
            options,
            key=lambda option: (
                -max(r.duration for r in option[1]),
                option[1][0].start,
                sorted(option[0])
            )
        )

        logger.debug(
            "Selected optional attendees %s out of %d candidate group(s)",
            sorted(attendees),
            len(candidates)
        )
        return ranges

    def _candidate_attendee_sets(
        self,
        atomic_ranges: Sequence[AtomicRange],
        duration: int
    ) -> Set[FrozenSet[str]]:
        """
        Collect the optional attendee groups that can meet for ``duration``.

        For every starting slice, grow the window until it is long enough and
        record who is free during all of it. Growing further only shrinks the
        group, so the first long enough window gives the largest group for
        that start.
        """
        candidates: Set[FrozenSet[str]] = set()

        for index, first in enumerate(atomic_ranges):
            common = first.free_optional_attendees
            length = 0

            for atomic in atomic_ranges[index:]:
                common = common & atomic.free_optional_attendees
                if not common:
                    break

                length += atomic.time_range.duration
                if length >= duration:
                    candidates.add(common)
                    break

        return candidates

    def _merge_matching(
        self,
        atomic_ranges: Sequence[AtomicRange],
        accepts: Callable[[AtomicRange], bool]
    ) -> List[TimeRange]:
        """
        Merge adjacent accepted atomic ranges into maximal ranges.

        Example: [09:00-10:00, 10:00-11:00] -> [09:00-11:00]
        """
        merged: List[TimeRange] = []

        for atomic in atomic_ranges:
            if not accepts(atomic):
                continue

            current = atomic.time_range
            if merged and merged[-1].end == current.start:
                merged[-1] = TimeRange(start=merged[-1].start, end=current.end)
            else:
                merged.append(current)

        return merged

    @staticmethod
    def _long_enough(ranges: List[TimeRange], duration: int) -> List[TimeRange]:
        return [
            time_range for time_range in ranges
            if time_range.duration >= duration and time_range.duration > 0
        ]
