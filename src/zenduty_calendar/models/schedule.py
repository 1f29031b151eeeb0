"""
Schedule: an iCalendar calendar with the filters used by the feed endpoints.

Parsing and serialization are delegated to the ``icalendar`` library. All
derived schedules are new values; the source calendar is never modified.
"""

import copy
from typing import Callable

from icalendar import Calendar, Event

from zenduty_calendar.core.errors import ParseError


def _attendees(event: Event) -> list[str]:
    """Text of every ATTENDEE property of an event (``mailto:...``)."""
    value = event.get("ATTENDEE")
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    return [str(attendee) for attendee in value]


class Schedule:
    """Calendar of on-call events."""

    def __init__(self, calendar: Calendar) -> None:
        self._calendar = calendar

    @classmethod
    def new(cls, name: str) -> "Schedule":
        """Empty calendar identified by ``name`` in its PRODID."""
        calendar = Calendar()
        calendar.add("prodid", f"-//{name}//zenduty-calendar//EN")
        calendar.add("version", "2.0")
        calendar.add("calscale", "GREGORIAN")
        return cls(calendar)

    @classmethod
    def from_ics(cls, data: bytes | str) -> "Schedule":
        """Parse an iCalendar feed body."""
        try:
            calendar = Calendar.from_ical(data)
        except (ValueError, IndexError, KeyError) as exc:
            raise ParseError(f"got error when parsing calendar: {exc}") from exc
        if getattr(calendar, "name", None) != "VCALENDAR":
            raise ParseError("got error when parsing calendar: no VCALENDAR component")
        return cls(calendar)

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    def events(self) -> list[Event]:
        return [c for c in self._calendar.subcomponents if c.name == "VEVENT"]

    def __len__(self) -> int:
        return len(self.events)

    def add_event(self, event: Event) -> None:
        self._calendar.add_component(event)

    def to_ics(self) -> bytes:
        return self._calendar.to_ical()

    def _filter(self, keep: Callable[[Event], bool]) -> "Schedule":
        out = Calendar()
        for key, value in self._calendar.items():
            out[key] = copy.deepcopy(value)
        for component in self._calendar.subcomponents:
            if component.name != "VEVENT" or keep(component):
                out.add_component(copy.deepcopy(component))
        return Schedule(out)

    def only_attendees(self, *emails: str) -> "Schedule":
        """
        Keep only events where at least one of the given emails is an attendee.

        Matching is a case-sensitive substring test on the attendee text, so
        "al@example.com" also matches "sal@example.com".
        """
        return self._filter(
            lambda event: any(
                email in attendee for attendee in _attendees(event) for email in emails
            )
        )

    def contains_event_id(self, uid: str) -> bool:
        """Return True if the schedule contains an event with the given UID."""
        for event in self.events:
            value = event.get("UID")
            if value is not None and str(value) == uid:
                return True
        return False
