from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable

from .models import Event, LayoutParameters

HOURS_PER_DAY = 24
MIN_FONT_SCALE = 0.7
FONT_SCALE_STEP = 0.05


@dataclass(frozen=True)
class LayoutConfig:
    base_height_per_hour: float = 200
    extra_height_per_overlap: float = 50

    def __post_init__(self) -> None:
        for name in ("base_height_per_hour", "extra_height_per_overlap"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValueError(f"{name} must be a positive number, got {value!r}")


def hour_overlaps(events: Iterable[Event]) -> Dict[int, int]:
    """Count events per hour bucket, each event covering [start.hour, end.hour] inclusive."""
    slots: Dict[int, int] = {}
    for e in events:
        for h in range(e.start.hour, e.end.hour + 1):
            slots[h] = slots.get(h, 0) + 1
    return slots


def max_overlap(events: Iterable[Event]) -> int:
    return max(hour_overlaps(events).values(), default=0)


def compute_layout(events: Iterable[Event], config: LayoutConfig = LayoutConfig()) -> LayoutParameters:
    peak = max_overlap(events)
    return LayoutParameters(
        max_overlap=peak,
        pixel_height=HOURS_PER_DAY * config.base_height_per_hour + peak * config.extra_height_per_overlap,
        font_scale=max(MIN_FONT_SCALE, 1 - peak * FONT_SCALE_STEP),
    )


def scroll_offset(now: datetime, pixel_height: float, view_height: float) -> float:
    """Scroll position that centres `now` in a view of view_height over the full-day canvas."""
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    fraction_of_day = (now - start_of_day).total_seconds() / (HOURS_PER_DAY * 3600)
    return fraction_of_day * pixel_height - view_height / 2
