from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
import yaml

from .layout import LayoutConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

def parse_log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level

@dataclass
class DisplayConfig:
    width: int
    view_height: int
    dark_mode: bool
    locked_in: bool

@dataclass
class AppConfig:
    layout: LayoutConfig
    display: DisplayConfig
    log_level: str

def load_config(path: str) -> AppConfig:
    """
    Load the YAML config at `path`. A missing file yields the defaults;
    non-positive layout sizes or an unknown log_level raise ValueError.
    """
    p = Path(path)
    data: Dict[str, Any] = {}
    if p.exists():
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    layout = data.get("layout") or {}
    display = data.get("display") or {}

    return AppConfig(
        layout=LayoutConfig(
            base_height_per_hour=layout.get("base_height_per_hour", 200),
            extra_height_per_overlap=layout.get("extra_height_per_overlap", 50),
        ),
        display=DisplayConfig(
            width=int(display.get("width", 800)),
            view_height=int(display.get("view_height", 900)),
            dark_mode=bool(display.get("dark_mode", False)),
            locked_in=bool(display.get("locked_in", False)),
        ),
        log_level=parse_log_level(data.get("log_level", "WARNING")),
    )
