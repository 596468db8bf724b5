from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Event:
    title: str
    start: datetime             # naive, local clock
    end: datetime               # naive, local clock


@dataclass(frozen=True)
class LayoutParameters:
    max_overlap: int
    pixel_height: float
    font_scale: float


def is_active_at(event: Event, ts: datetime) -> bool:
    return event.start <= ts <= event.end


def progress_at(event: Event, ts: datetime) -> float:
    """Percentage of the event elapsed at ts; 0.0 when the event is not active."""
    if not is_active_at(event, ts):
        return 0.0
    span = (event.end - event.start).total_seconds()
    if span <= 0:
        return 0.0
    return (ts - event.start).total_seconds() / span * 100.0
