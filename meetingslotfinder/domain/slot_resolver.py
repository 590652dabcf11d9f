"""
Core business logic for resolving free meeting slots within a day.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import logging
from typing import Iterable, List

from .event_filter import filter_events
from .models import END_OF_DAY, Event, MeetingRequest, TimeRange
from .partitioner import partition_day
from .range_selector import RangeSelector

logger = logging.getLogger(__name__)


class MeetingSlotResolver:
    """
    Resolves the time ranges in which a requested meeting can take place.

    Algorithm:
    1. Drop events none of the requested attendees take part in
    2. Sweep the remaining event boundaries to split the day into atomic
       ranges, each knowing who is free during it
    3. Merge adjacent atomic ranges, preferring ranges that fit as many
       optional attendees as possible and falling back to mandatory
       attendees only
    4. Keep ranges that are long enough for the meeting

    The resolver keeps no state between calls and can be shared freely.
    """

    def __init__(self, selector: RangeSelector | None = None):
        self.selector = selector or RangeSelector()

    def resolve(self, events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
        """
        Find all time ranges suitable for the meeting.

        Args:
            events: Calendar events of the day, in any order
            request: The meeting to place

        Returns:
            Sorted, non-overlapping ranges of at least ``request.duration``
            minutes. An empty list means there is no suitable time.
        """
        if request.duration > END_OF_DAY + 1:
            logger.debug("Requested duration %d exceeds the day", request.duration)
            return []

        relevant = filter_events(events, request)
        logger.debug(
            "%d event(s) block mandatory attendees, %d only optional ones",
            len(relevant.mandatory),
            len(relevant.optional)
        )

        atomic_ranges = partition_day(relevant, request)
        logger.debug("Day split into %d atomic range(s)", len(atomic_ranges))

        ranges = self.selector.select(atomic_ranges, request)

        return sorted(set(ranges), key=TimeRange.ORDER_BY_START)


def resolve(events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
    """Find meeting slots with a default resolver."""
    return MeetingSlotResolver().resolve(events, request)
