"""Calendar events read from ICS files, used as a dungeon source."""

from __future__ import annotations

import datetime as dt
import os
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

_DATETIME_FORMAT = "%Y%m%dT%H%M%S"
_DATE_FORMAT = "%Y%m%d"


class CalendarError(Exception):
    """Raised when a calendar cannot be read or holds no recent events."""


class EventCategory(Enum):
    """Kind of calendar event; each maps to a room type."""

    MEETING = "Meeting"
    ONE_ON_ONE = "OneOnOne"
    ALL_HANDS = "AllHands"
    FOCUS_TIME = "FocusTime"
    BREAK = "Break"

    @classmethod
    def from_event_text(cls, summary: str, description: str | None = None) -> EventCategory:
        """Detect the category from an event's summary and description."""
        text = f"{summary.lower()} {(description or '').lower()}"

        if any(word in text for word in ("1:1", "1-1", "sync")):
            return cls.ONE_ON_ONE
        if any(word in text for word in ("all-hands", "all hands", "town hall", "company meeting")):
            return cls.ALL_HANDS
        if any(word in text for word in ("focus", "block", "deep work")):
            return cls.FOCUS_TIME
        if any(word in text for word in ("lunch", "break", "coffee")):
            return cls.BREAK
        return cls.MEETING


@dataclass
class EventData:
    """Data extracted from one calendar event."""

    uid: str
    start: dt.datetime
    end: dt.datetime
    summary: str
    description: str | None = None
    location: str | None = None
    category: EventCategory = EventCategory.MEETING
    duration_minutes: int = 0
    attendee_count: int = 0

    def date_naive(self) -> dt.date:
        """The calendar day the event starts on, in UTC."""
        moment = self.start
        if moment.tzinfo is not None:
            moment = moment.astimezone(dt.timezone.utc)
        return moment.date()

    def intensity(self) -> int:
        """One point per 15 minutes plus one per attendee other than yourself."""
        return self.duration_minutes // 15 + max(self.attendee_count - 1, 0)


@dataclass
class _EventBuilder:
    uid: str | None = None
    dtstart: dt.datetime | None = None
    dtend: dt.datetime | None = None
    summary: str | None = None
    description: str | None = None
    location: str | None = None
    attendee_count: int = 0

    def parse_line(self, line: str) -> None:
        key, sep, value = line.partition(":")
        if not sep:
            return
        match key.split(";", 1)[0]:
            case "UID":
                self.uid = value
            case "DTSTART":
                self.dtstart = parse_datetime(value)
            case "DTEND":
                self.dtend = parse_datetime(value)
            case "SUMMARY":
                self.summary = unescape_ics(value)
            case "DESCRIPTION":
                self.description = unescape_ics(value)
            case "LOCATION":
                self.location = unescape_ics(value)
            case "ATTENDEE":
                self.attendee_count += 1

    def build(self) -> EventData | None:
        start = self.dtstart
        if start is None:
            return None
        end = self.dtend if self.dtend is not None else start + dt.timedelta(hours=1)
        summary = self.summary if self.summary is not None else "Untitled"
        minutes = int((end - start) / dt.timedelta(minutes=1))
        return EventData(
            uid=self.uid if self.uid is not None else str(int(start.timestamp())),
            start=start,
            end=end,
            summary=summary,
            description=self.description,
            location=self.location,
            category=EventCategory.from_event_text(summary, self.description),
            duration_minutes=max(minutes, 0),
            attendee_count=self.attendee_count,
        )


def parse_ics_file(path: str | os.PathLike[str], days: int) -> list[EventData]:
    """Read an ICS file and return its events from the last ``days`` days."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CalendarError(f"Failed to read calendar file: {exc}") from exc
    return parse_ics_content(content, days)


def parse_ics_content(content: str, days: int) -> list[EventData]:
    """Parse ICS text; return events from the last ``days`` days, by start time."""
    cutoff = dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=days)
    events: list[EventData] = []
    builder: _EventBuilder | None = None

    for raw in content.split("\n"):
        line = raw.strip()
        if line.startswith("BEGIN:VEVENT"):
            builder = _EventBuilder()
        elif line.startswith("END:VEVENT"):
            if builder is not None:
                event = builder.build()
                if event is not None and event.start >= cutoff:
                    events.append(event)
            builder = None
        elif builder is not None:
            builder.parse_line(line)

    if not events:
        raise CalendarError(f"No events found in last {days} days")

    events.sort(key=lambda event: event.start)
    return events


def group_by_date(events: Iterable[EventData]) -> dict[dt.date, list[EventData]]:
    """Group events by day, days in ascending order, events in given order."""
    grouped: defaultdict[dt.date, list[EventData]] = defaultdict(list)
    for event in events:
        grouped[event.date_naive()].append(event)
    return dict(sorted(grouped.items()))


def _parse_naive(value: str, fmt: str) -> dt.datetime | None:
    try:
        return dt.datetime.strptime(value, fmt).replace(tzinfo=dt.timezone.utc)
    except ValueError:
        return None


def parse_datetime(value: str) -> dt.datetime | None:
    """Parse an ICS date or date-time as UTC; None if the format is unknown."""
    if value.endswith("Z"):
        parsed = _parse_naive(value.rstrip("Z"), _DATETIME_FORMAT)
        if parsed is not None:
            return parsed
    parsed = _parse_naive(value, _DATETIME_FORMAT)
    if parsed is not None:
        return parsed
    return _parse_naive(value, _DATE_FORMAT)


def unescape_ics(value: str) -> str:
    """Undo ICS text escaping of newlines, commas, semicolons and backslashes."""
    return (
        value.replace("\\n", "\n")
        .replace("\\,", ",")
        .replace("\\;", ";")
        .replace("\\\\", "\\")
    )