from __future__ import annotations

import logging
import os
from datetime import date, datetime
from typing import Iterable, List, Optional

from dotenv import load_dotenv

from .config import AppConfig, load_config, parse_log_level
from .render import render_day_view
from .session import Session

CONFIG_PATH_DEFAULT = "fastcal.yaml"
OUTPUT_PATH_DEFAULT = "fastcal.png"
PROMPT = "e.g., Meeting with Team 9:00-10:00 am; Lunch 12:00-1:00 pm"
NAV_COMMANDS = {":today": "today", ":prev": "prev", ":next": "next"}


def _summary(session: Session) -> str:
    params = session.layout
    return (
        f"{len(session.store)} events; max_overlap={params.max_overlap}, "
        f"height={params.pixel_height:g}px, font_scale={params.font_scale:.2f}"
    )


def _new_session(cfg: AppConfig, dark_mode: Optional[bool], locked_in: Optional[bool], day: Optional[date]) -> Session:
    return Session(
        layout_config=cfg.layout,
        dark_mode=cfg.display.dark_mode if dark_mode is None else dark_mode,
        locked_in=cfg.display.locked_in if locked_in is None else locked_in,
        view_day=day,
    )


def render_session(session: Session, cfg: AppConfig, now: datetime, output_path: str) -> None:
    img = render_day_view(
        session.store.snapshot(),
        session.layout,
        now,
        width=cfg.display.width,
        dark_mode=session.dark_mode,
        locked_in=session.locked_in,
        view_height=cfg.display.view_height,
        day=session.shown_day(now.date()),
    )
    img.save(output_path, format="PNG")
    print(f"Wrote {output_path}")


def run_once(
    submissions: Iterable[str],
    cfg: AppConfig,
    output_path: str = OUTPUT_PATH_DEFAULT,
    now: Optional[datetime] = None,
    dark_mode: Optional[bool] = None,
    locked_in: Optional[bool] = None,
    day: Optional[date] = None,
) -> Session:
    now = now or datetime.now()
    session = _new_session(cfg, dark_mode, locked_in, day)
    for text in submissions:
        added = session.parse_and_append(text, today=now.date())
        print(f"Added {len(added)} event(s) from {text!r}")

    print(_summary(session))
    render_session(session, cfg, now, output_path)
    return session


def interactive(
    cfg: AppConfig,
    output_path: str = OUTPUT_PATH_DEFAULT,
    now: Optional[datetime] = None,
    dark_mode: Optional[bool] = None,
    locked_in: Optional[bool] = None,
    day: Optional[date] = None,
) -> Session:
    """Read submissions and commands from stdin; a fixed `now` pins the clock."""

    def _now() -> datetime:
        return now or datetime.now()

    session = _new_session(cfg, dark_mode, locked_in, day)
    print(PROMPT)
    print("Commands: :dark, :lock, :today, :prev, :next, :render, :quit")
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        cmd = line.strip().lower()
        if cmd == ":quit":
            break
        if cmd == ":dark":
            print(f"dark_mode={session.toggle_dark_mode()}")
            continue
        if cmd == ":lock":
            print(f"locked_in={session.toggle_locked_in()}")
            continue
        if cmd in NAV_COMMANDS:
            shown = session.navigate(NAV_COMMANDS[cmd], _now().date())
            print(f"day={shown.isoformat()}")
            continue
        if cmd == ":render":
            render_session(session, cfg, _now(), output_path)
            continue
        added = session.parse_and_append(line, today=_now().date())
        print(f"Added {len(added)} event(s). {_summary(session)}")

    render_session(session, cfg, _now(), output_path)
    return session


def main(argv: Optional[List[str]] = None):
    import argparse

    load_dotenv()
    ap = argparse.ArgumentParser(description="Render a day schedule from free-text events.")
    ap.add_argument("text", nargs="*", help="Event submissions, e.g. 'Lunch 12:00-1:00 pm'")
    ap.add_argument("--config", default=os.environ.get("FASTCAL_CONFIG", CONFIG_PATH_DEFAULT))
    ap.add_argument("--output", default=os.environ.get("FASTCAL_OUTPUT", OUTPUT_PATH_DEFAULT))
    ap.add_argument("--dark", action="store_true")
    ap.add_argument("--lock", action="store_true")
    ap.add_argument("--now", type=datetime.fromisoformat, default=None)
    ap.add_argument("--day", type=date.fromisoformat, default=None, help="Day to show, YYYY-MM-DD")
    ap.add_argument("--log-level", type=parse_log_level, default=None)
    args = ap.parse_args(argv)

    cfg = load_config(args.config)
    logging.basicConfig(level=args.log_level or cfg.log_level, format="%(levelname)s %(name)s: %(message)s")

    options = dict(
        output_path=args.output,
        now=args.now,
        dark_mode=True if args.dark else None,
        locked_in=True if args.lock else None,
        day=args.day,
    )
    if args.text:
        run_once(args.text, cfg, **options)
    else:
        interactive(cfg, **options)


if __name__ == "__main__":
    main()
