"""
Application services for finding meeting slots.

The service coordinates loading events via a calendar source adapter and
delegates the actual availability calculation to the domain-level
``MeetingSlotResolver``. This keeps the CLI thin and improves testability by
allowing the calendar dependency to be stubbed via a simple protocol.
"""

from __future__ import annotations

import logging
from typing import List, Protocol, Sequence, Tuple

from ..domain.models import Event, MeetingRequest, TimeRange
from ..domain.slot_resolver import MeetingSlotResolver

logger = logging.getLogger(__name__)


class CalendarSourceProtocol(Protocol):
    """Protocol describing the calendar source behaviour needed by the service."""

    def load_events(self) -> List[Event]:
        """Return the events of the day."""


class MeetingFinderService:
    """
    Orchestrates event retrieval and slot resolution.
    """

    def __init__(
        self,
        calendar_source: CalendarSourceProtocol,
        resolver: MeetingSlotResolver | None = None,
    ) -> None:
        self._calendar_source = calendar_source
        self._resolver = resolver or MeetingSlotResolver()

    def find_slots(
        self,
        *,
        attendees: Sequence[str],
        duration_minutes: int,
        optional_attendees: Sequence[str] = (),
    ) -> List[TimeRange]:
        """
        Load the calendar and compute the slots for the requested meeting.
        """
        request = self.build_request(
            attendees=attendees,
            optional_attendees=optional_attendees,
            duration_minutes=duration_minutes,
        )
        return self._resolver.resolve(self.fetch_events(), request)

    def fetch_events(self) -> List[Event]:
        """Fetch the events from the calendar source."""
        return list(self._calendar_source.load_events())

    @classmethod
    def build_request(
        cls,
        *,
        attendees: Sequence[str],
        optional_attendees: Sequence[str],
        duration_minutes: int,
    ) -> MeetingRequest:
        """Build a meeting request from raw participant lists."""
        mandatory, optional = cls._normalize_participants(attendees, optional_attendees)
        return MeetingRequest(
            attendees=frozenset(mandatory),
            optional_attendees=frozenset(optional),
            duration=duration_minutes,
        )

    @staticmethod
    def _normalize_participants(
        attendees: Sequence[str],
        optional_attendees: Sequence[str],
    ) -> Tuple[List[str], List[str]]:
        """
        Strip and deduplicate identifiers.

        Someone listed as both mandatory and optional stays mandatory only.
        """
        mandatory: List[str] = []
        for attendee in attendees:
            attendee = attendee.strip()
            if attendee and attendee not in mandatory:
                mandatory.append(attendee)

        optional: List[str] = []
        for attendee in optional_attendees:
            attendee = attendee.strip()
            if not attendee or attendee in optional:
                continue
            if attendee in mandatory:
                logger.warning("%s is both mandatory and optional, treating as mandatory", attendee)
                continue
            optional.append(attendee)

        return mandatory, optional
