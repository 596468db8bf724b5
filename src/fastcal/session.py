from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, List, Optional, Tuple

from .layout import LayoutConfig, compute_layout
from .models import Event, LayoutParameters, is_active_at
from .parser import parse_events


class EventStore:
    """Append-only, insertion-ordered list of events for one session."""

    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._events: List[Event] = list(events)

    def extend(self, events: Iterable[Event]) -> None:
        self._events.extend(events)

    def snapshot(self) -> Tuple[Event, ...]:
        return tuple(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(tuple(self._events))

    def __len__(self) -> int:
        return len(self._events)


@dataclass
class Session:
    layout_config: LayoutConfig = field(default_factory=LayoutConfig)
    store: EventStore = field(default_factory=EventStore)
    dark_mode: bool = False
    locked_in: bool = False
    view_day: Optional[date] = None

    def parse_and_append(self, raw_text: str, today: Optional[date] = None) -> List[Event]:
        if not raw_text.strip():
            return []
        new_events = parse_events(raw_text, today)
        self.store.extend(new_events)
        return new_events

    @property
    def layout(self) -> LayoutParameters:
        return compute_layout(self.store.snapshot(), self.layout_config)

    def active_events(self, now: datetime) -> List[Event]:
        return [e for e in self.store if is_active_at(e, now)]

    def shown_day(self, today: date) -> date:
        return self.view_day or today

    def navigate(self, action: str, today: date) -> date:
        """Move the shown day: "today", "prev" or "next"."""
        a = action.strip().lower()
        if a == "today":
            self.view_day = today
        elif a == "prev":
            self.view_day = self.shown_day(today) - timedelta(days=1)
        elif a == "next":
            self.view_day = self.shown_day(today) + timedelta(days=1)
        else:
            raise ValueError(f"Unknown navigation action {action!r}")
        return self.view_day

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    def toggle_locked_in(self) -> bool:
        self.locked_in = not self.locked_in
        return self.locked_in
