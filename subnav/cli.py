from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from subnav_core.config import AppConfig
from subnav_core.models.settings import SettingsError
from subnav_core.subtitles.data import SubtitleScript
from subnav_core.subtitles.utils.timestamps import format_ass_timestamp, parse_ass_timestamp
from subnav_core.subtitles.writers import SUPPORTED_FORMATS, export_navigable

logger = logging.getLogger("subnav")


def _time_arg(value: str) -> float:
    """Accept plain seconds ("12.5") or a script timestamp ("0:00:12.50")."""
    try:
        return float(value)
    except ValueError:
        pass
    seconds = parse_ass_timestamp(value)
    if seconds is None:
        raise argparse.ArgumentTypeError(f"not a time: {value!r}")
    return seconds


def _fmt(seconds: Optional[float]) -> str:
    return "-" if seconds is None else format_ass_timestamp(seconds)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="subnav", description="Inspect and navigate multi-track dialogue scripts")
    p.add_argument("--settings", type=Path, help="settings.json to read tolerances from")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("stats", help="summary of a script")
    s.add_argument("script", type=Path)

    s = sub.add_parser("at", help="events active at a time, grouped by track")
    s.add_argument("script", type=Path)
    s.add_argument("time", type=_time_arg)

    for name in ("next", "prev"):
        s = sub.add_parser(name, help=f"{name} sentence boundary from a time")
        s.add_argument("script", type=Path)
        s.add_argument("time", type=_time_arg)
        s.add_argument("--track")

    s = sub.add_parser("export", help="write sentence units of one track")
    s.add_argument("script", type=Path)
    s.add_argument("out", type=Path)
    s.add_argument("--track")
    s.add_argument("--format", choices=SUPPORTED_FORMATS, default=None)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        cfg = AppConfig(settings_path=args.settings) if args.settings else None
        settings = cfg.navigation_settings() if cfg else None
    except SettingsError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2

    try:
        script = SubtitleScript.from_file(args.script, settings)
    except OSError as e:
        print(f"Cannot read {args.script}: {e}", file=sys.stderr)
        return 1
    if not script.is_ready():
        print(f"No dialogue found in {args.script}", file=sys.stderr)
        return 1

    if args.command == "stats":
        print(json.dumps(script.stats().to_dict(), ensure_ascii=False, indent=2))
    elif args.command == "at":
        grouped = script.active_events_by_track(args.time)
        print(json.dumps(
            {track: [e.clean_text for e in events] for track, events in grouped.items()},
            ensure_ascii=False, indent=2,
        ))
    elif args.command == "next":
        print(_fmt(script.next_event_time(args.time, args.track)))
    elif args.command == "prev":
        print(_fmt(script.prev_event_time(args.time, args.track)))
    elif args.command == "export":
        suffix = args.out.suffix.lstrip(".").lower()
        fmt = (
            args.format
            or (suffix if suffix in SUPPORTED_FORMATS else None)
            or (cfg.get("export_format") if cfg else None)
            or "srt"
        )
        encoding = cfg.get("export_encoding", "utf-8") if cfg else "utf-8"
        export_navigable(script, args.out, fmt=fmt, track=args.track, encoding=encoding)
        logger.info("Wrote %s", args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
