from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
import logging
import re
from typing import List, Optional

from .models import Event
from .timeparse import resolve_clock_time

log = logging.getLogger(__name__)

ENTRY_SEPARATOR = ";"

# One am/pm designator applies to both times.
_ENTRY_RE = re.compile(
    r"^\[?(.*?)\]?\s*(\d{1,2}:\d{2})\s*-\s*(\d{1,2}:\d{2})\s*(am|pm)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParseError:
    entry: str
    reason: str


@dataclass(frozen=True)
class ParseResult:
    entry: str
    event: Optional[Event] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.event is not None


def split_entries(text: str) -> List[str]:
    return [part.strip() for part in text.split(ENTRY_SEPARATOR) if part.strip()]


def parse_entry(entry: str, today: date) -> ParseResult:
    m = _ENTRY_RE.match(entry)
    if not m:
        return ParseResult(entry=entry, error=ParseError(entry, "Invalid format"))

    title, start_clock, end_clock, period = m.groups()
    try:
        start = resolve_clock_time(start_clock, period, today)
        end = resolve_clock_time(end_clock, period, today)
    except ValueError as e:
        return ParseResult(entry=entry, error=ParseError(entry, str(e)))

    if end < start:
        end += timedelta(days=1)

    return ParseResult(entry=entry, event=Event(title=title.strip(), start=start, end=end))


def parse_entries(text: str, today: Optional[date] = None) -> List[ParseResult]:
    """Parse every non-empty entry of a submission, keeping failures alongside successes."""
    day = today or date.today()
    return [parse_entry(entry, day) for entry in split_entries(text)]


def parse_events(text: str, today: Optional[date] = None) -> List[Event]:
    """
    Parse one submission into events, in input order.
    Entries that fail are dropped and logged; they never abort the batch.
    """
    events: List[Event] = []
    for result in parse_entries(text, today):
        if result.ok:
            events.append(result.event)
        else:
            log.warning("Failed to parse event: %r (%s)", result.error.entry, result.error.reason)
    return events
