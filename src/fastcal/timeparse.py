from __future__ import annotations
from datetime import date, datetime, time

_PERIODS = ("am", "pm")


def resolve_clock_time(clock: str, period: str, day: date) -> datetime:
    """
    Resolve a 12-hour clock string ("9:00", "12:45") plus an am/pm designator
    to a naive datetime on the given day.
    """
    p = period.strip().lower()
    if p not in _PERIODS:
        raise ValueError(f"Unknown period {period!r}")

    hh, mm = clock.strip().split(":")
    hour, minute = int(hh), int(mm)
    if not 1 <= hour <= 12:
        raise ValueError(f"Hour out of range in {clock!r}")
    if not 0 <= minute <= 59:
        raise ValueError(f"Minute out of range in {clock!r}")

    # 12 am is midnight, 12 pm is noon
    hour = hour % 12
    if p == "pm":
        hour += 12
    return datetime.combine(day, time(hour=hour, minute=minute))


def fmt_time(dt: datetime) -> str:
    return dt.strftime("%-I:%M %p").lower()


def fmt_hour(hour: int) -> str:
    h = hour % 24
    suffix = "am" if h < 12 else "pm"
    return f"{h % 12 or 12} {suffix}"
