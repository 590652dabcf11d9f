"""
Calendar source that reads the events of a day from a JSON or YAML file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import pendulum
import yaml

from ..domain.exceptions import CalendarDataError, InvalidRangeError
from ..domain.models import END_OF_DAY, Event, TimeRange, normalize_attendee

logger = logging.getLogger(__name__)

SAMPLE_CALENDAR = Path(__file__).parent / "sample_calendar.json"


def parse_minute_of_day(value: Union[int, str]) -> int:
    """
    Convert a calendar time value to minutes since the start of the day.

    Accepts an integer minute count, ``"24:00"`` for the end of the day or
    any time string pendulum understands (``"09:30"``, ``"09:30:00"``,
    ``"2024-11-25T09:30"``).

    Raises:
        CalendarDataError: If the value is not a time of day on a full minute
    """
    if isinstance(value, bool):
        raise CalendarDataError(f"Invalid time value: {value!r}")

    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise CalendarDataError(f"Invalid time value: {value!r}")

    text = value.strip()
    if text in ("24:00", "24:00:00"):
        return END_OF_DAY + 1

    try:
        parsed = pendulum.parse(text, exact=True)
    except ValueError as e:
        raise CalendarDataError(f"Cannot parse time '{value}': {e}") from e

    # A bare date has no time of day
    if not hasattr(parsed, "hour"):
        raise CalendarDataError(f"Time value '{value}' has no time of day")

    if parsed.second or parsed.microsecond:
        raise CalendarDataError(f"Time value '{value}' is not on a full minute")

    return TimeRange.get_time_in_minutes(parsed.hour, parsed.minute)


class CalendarFileReader:
    """
    Reads calendar events from a file.

    The file holds either a list of events or a mapping with an ``events``
    list. Each event looks like::

        {"title": "Standup", "start": "09:00", "end": "09:15",
         "attendees": ["alice@example.com", "bob@example.com"]}

    Attendee emails are lower-cased so they match resolved participants.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def sample(cls) -> "CalendarFileReader":
        """Reader for the calendar bundled with the package."""
        return cls(SAMPLE_CALENDAR)

    def load_events(self) -> List[Event]:
        """
        Load all events from the calendar file.

        Raises:
            CalendarDataError: If the file is missing or malformed
        """
        raw_events = self._read_raw_events()
        events = [self._parse_event(raw, index) for index, raw in enumerate(raw_events)]

        logger.info("Loaded %d event(s) from %s", len(events), self.path)
        return events

    def _read_raw_events(self) -> List[Any]:
        if not self.path.exists():
            raise CalendarDataError(f"Calendar file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                if self.path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise CalendarDataError(f"Invalid calendar file {self.path}: {exc}") from exc

        if data is None:
            return []

        if isinstance(data, dict):
            data = data.get("events", [])

        if not isinstance(data, list):
            raise CalendarDataError(
                f"Calendar file {self.path} must contain a list of events or an 'events' list."
            )

        return data

    def _parse_event(self, raw: Dict[str, Any], index: int) -> Event:
        if not isinstance(raw, dict):
            raise CalendarDataError(f"Event #{index} must be a mapping, got {type(raw).__name__}")

        try:
            start = parse_minute_of_day(raw["start"])
            end = parse_minute_of_day(raw["end"])
            when = TimeRange(start=start, end=end)
        except KeyError as e:
            raise CalendarDataError(f"Event #{index} is missing field {e}") from e
        except (CalendarDataError, InvalidRangeError) as e:
            raise CalendarDataError(f"Event #{index}: {e}") from e

        attendees = raw.get("attendees") or []
        if isinstance(attendees, str) or not all(isinstance(a, str) for a in attendees):
            raise CalendarDataError(f"Event #{index}: attendees must be a list of strings")

        return Event(
            title=str(raw.get("title", "Untitled")),
            when=when,
            attendees=frozenset(normalize_attendee(a) for a in attendees)
        )
