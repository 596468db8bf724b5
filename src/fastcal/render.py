from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .layout import HOURS_PER_DAY, scroll_offset
from .models import Event, LayoutParameters, is_active_at, progress_at
from .timeparse import fmt_hour, fmt_time

Color = Tuple[int, int, int]

PALETTES: Dict[str, Dict[str, Color]] = {
    "light": {
        "background": (244, 246, 249),
        "grid": (224, 224, 224),
        "label": (44, 62, 80),
        "event": (0, 123, 255),
        "event_accent": (102, 16, 242),
        "current": (40, 167, 69),
        "current_accent": (32, 201, 151),
        "text": (255, 255, 255),
        "now_line": (220, 53, 69),
    },
    "dark": {
        "background": (26, 26, 46),
        "grid": (58, 58, 90),
        "label": (224, 224, 224),
        "event": (0, 123, 255),
        "event_accent": (0, 196, 255),
        "current": (40, 167, 69),
        "current_accent": (32, 201, 151),
        "text": (255, 255, 255),
        "now_line": (255, 215, 0),
    },
}

BASE_TITLE_SIZE = 20
LABEL_SIZE = 16
GUTTER_W = 70
PROGRESS_BAR_H = 4
DIM_RATIO = 0.5


def _load_font(size: int) -> ImageFont.ImageFont:
    # DejaVu ships with most Linux distros; fall back to Pillow's bundled font
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default(size=size)


def _lerp_color(start: Color, end: Color, ratio: float) -> Color:
    return tuple(int(round(s + (e - s) * ratio)) for s, e in zip(start, end))


def _wrap_text(
    draw: ImageDraw.ImageDraw,
    text: str,
    font: ImageFont.ImageFont,
    max_width: float,
    max_lines: Optional[int] = 2,
) -> List[str]:
    words = text.split()
    lines: List[str] = []
    cur = ""
    for w in words:
        test = (cur + " " + w).strip()
        if draw.textlength(test, font=font) <= max_width:
            cur = test
        else:
            if cur:
                lines.append(cur)
            cur = w
    if cur:
        lines.append(cur)
    return lines if max_lines is None else lines[:max_lines]


def _assign_lanes(events: Sequence[Event]) -> List[Tuple[Event, int, int]]:
    """
    Greedy side-by-side lanes for events that overlap in time.
    Returns (event, lane, lane_count) in start order.
    """
    ordered = sorted(events, key=lambda e: (e.start, e.end))
    placed: List[Tuple[Event, int, int]] = []
    group: List[Tuple[Event, int]] = []
    lane_ends: List[datetime] = []
    group_end: Optional[datetime] = None

    def _flush() -> None:
        count = max((lane for _, lane in group), default=-1) + 1
        placed.extend((e, lane, count) for e, lane in group)

    for e in ordered:
        if group_end is not None and e.start >= group_end:
            _flush()
            group, lane_ends, group_end = [], [], None
        for lane, lane_end in enumerate(lane_ends):
            if e.start >= lane_end:
                lane_ends[lane] = e.end
                break
        else:
            lane = len(lane_ends)
            lane_ends.append(e.end)
        group.append((e, lane))
        group_end = e.end if group_end is None else max(group_end, e.end)
    _flush()
    return placed


def _y_for(ts: datetime, day_start: datetime, pixel_height: float) -> float:
    minutes = (ts - day_start).total_seconds() / 60
    minutes = min(max(minutes, 0), HOURS_PER_DAY * 60)
    return minutes / (HOURS_PER_DAY * 60) * pixel_height


def render_day_view(
    events: Sequence[Event],
    layout: LayoutParameters,
    now: datetime,
    width: int = 800,
    dark_mode: bool = False,
    locked_in: bool = False,
    view_height: Optional[int] = None,
    day: Optional[date] = None,
) -> Image.Image:
    palette = PALETTES["dark" if dark_mode else "light"]
    canvas_h = int(round(layout.pixel_height))
    img = Image.new("RGB", (width, canvas_h), palette["background"])
    d = ImageDraw.Draw(img)

    font_label = _load_font(LABEL_SIZE)
    title_size = max(1, int(round(BASE_TITLE_SIZE * layout.font_scale)))
    time_size = max(1, int(round(LABEL_SIZE * layout.font_scale)))
    font_title = _load_font(title_size)
    font_time = _load_font(time_size)

    # the shown day defaults to the one containing now
    day_start = datetime.combine(day or now.date(), datetime.min.time())
    day_end = day_start + timedelta(days=1)
    hour_h = layout.pixel_height / HOURS_PER_DAY

    # Hour grid
    for h in range(HOURS_PER_DAY):
        y = h * hour_h
        d.line((GUTTER_W, y, width, y), fill=palette["grid"], width=1)
        d.text((6, y + 4), fmt_hour(h), fill=palette["label"], font=font_label)

    visible = [e for e in events if e.end > day_start and e.start < day_end]
    column_w = width - GUTTER_W - 10
    for e, lane, lane_count in _assign_lanes(visible):
        lane_w = column_w / lane_count
        x0 = GUTTER_W + 4 + lane * lane_w
        x1 = max(x0 + 1, x0 + lane_w - 4)
        y0 = _y_for(e.start, day_start, layout.pixel_height)
        y1 = max(_y_for(e.end, day_start, layout.pixel_height), y0 + title_size + 8)

        current = is_active_at(e, now)
        fill = palette["current"] if current else palette["event"]
        accent = palette["current_accent"] if current else palette["event_accent"]
        text_fill = palette["text"]
        if locked_in and not current:
            fill = _lerp_color(fill, palette["background"], DIM_RATIO)
            accent = _lerp_color(accent, palette["background"], DIM_RATIO)
            text_fill = _lerp_color(text_fill, palette["background"], DIM_RATIO)

        d.rounded_rectangle((x0, y0, x1, y1), radius=6, fill=fill, outline=accent, width=2)

        tx, ty = x0 + 6, y0 + 2
        time_str = f"{fmt_time(e.start)}–{fmt_time(e.end)}"
        d.text((tx, ty), time_str, fill=text_fill, font=font_time)
        ty += time_size + 2
        for line in _wrap_text(d, e.title, font_title, x1 - tx - 6):
            if ty + title_size > y1:
                break
            d.text((tx, ty), line, fill=text_fill, font=font_title)
            ty += title_size + 2

        if current:
            progress_w = (x1 - x0) * progress_at(e, now) / 100
            d.rectangle(
                (x0, y1 - PROGRESS_BAR_H, x0 + progress_w, y1),
                fill=_lerp_color(fill, (255, 255, 255), DIM_RATIO),
            )

    if day_start <= now < day_end:
        now_y = _y_for(now, day_start, layout.pixel_height)
        d.line((GUTTER_W, now_y, width, now_y), fill=palette["now_line"], width=2)

    if locked_in and view_height and view_height < canvas_h:
        top = scroll_offset(now, layout.pixel_height, view_height)
        top = int(min(max(top, 0), canvas_h - view_height))
        img = img.crop((0, top, width, top + view_height))

    return img
