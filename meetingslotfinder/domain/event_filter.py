"""
Selection of the calendar events that matter for a meeting request.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from .models import Event, MeetingRequest


@dataclass(frozen=True)
class RelevantEvents:
    """
    Events split by the kind of attendee they block.

    ``mandatory`` holds every event attended by at least one mandatory
    attendee; ``optional`` holds the events attended only by optional ones.
    """
    mandatory: Tuple[Event, ...]
    optional: Tuple[Event, ...]

    def __iter__(self):
        yield from self.mandatory
        yield from self.optional

    def __len__(self) -> int:
        return len(self.mandatory) + len(self.optional)


def filter_events(events: Iterable[Event], request: MeetingRequest) -> RelevantEvents:
    """Drop events no requested attendee takes part in."""
    mandatory = []
    optional = []

    for event in events:
        if event.involves(request.attendees):
            mandatory.append(event)
        elif event.involves(request.optional_attendees):
            optional.append(event)

    return RelevantEvents(mandatory=tuple(mandatory), optional=tuple(optional))
