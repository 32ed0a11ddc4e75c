# subnav_core/subtitles/data.py
"""
Script container: style table, event store and the queries over them.

Usage:
- Load once with parse() (or from_file())
- Query many times: active_events_at() per player tick,
  next_event_time()/prev_event_time() per gesture
- Re-parse to load another script; the previous state is dropped first

All timing is FLOAT SECONDS.

Threading: parse() must not run concurrently with itself or with queries on
the same instance. Once a parse has finished, queries are read-only and may
be called from anywhere.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..models.settings import NavigationSettings
from ..models.subtitles import (
    DialogueEvent,
    NavigableEvent,
    ParseStats,
    ScriptMetadata,
    SubtitleStyle,
)
from .navigation import build_navigable, next_start, prev_start, resolve_main_track
from .parsers.ass_parser import parse_ass_text, read_script_text
from .query import EventIndex

logger = logging.getLogger(__name__)


class SubtitleScript:
    """
    Parsed multi-track dialogue script.

    Holds the style table (track name -> style), the events sorted by start
    time, and the metadata from [Script Info].
    """

    def __init__(self, settings: NavigationSettings | None = None):
        self.settings = settings or NavigationSettings()
        self.source_path: Path | None = None
        self.metadata = ScriptMetadata()
        self._styles: dict[str, SubtitleStyle] = {}
        self._events: tuple[DialogueEvent, ...] = ()
        self._index = EventIndex(())
        self._parsed = False
        self._navigable_cache: dict[str, list[NavigableEvent]] = {}

    # =========================================================================
    # Loading
    # =========================================================================

    @classmethod
    def from_text(cls, text: str, settings: NavigationSettings | None = None) -> SubtitleScript:
        script = cls(settings)
        script.parse(text)
        return script

    @classmethod
    def from_file(cls, path: str | Path, settings: NavigationSettings | None = None) -> SubtitleScript:
        """
        Read and parse a script file.

        Raises OSError if the file cannot be read. A file that reads but does
        not parse gives a script that is not ready.
        """
        script = cls(settings)
        script.load(path)
        return script

    def load(self, path: str | Path) -> bool:
        path = Path(path)
        text = read_script_text(path)
        ok = self.parse(text)
        if ok:
            self.source_path = path
        return ok

    def parse(self, text: str) -> bool:
        """
        Parse script text, replacing any previous content.

        Returns:
            True on success. On an unexpected failure the store is left
            empty and False is returned.
        """
        self.reset()
        try:
            result = parse_ass_text(text)
            # sorted() is stable, so ties keep file order
            events = tuple(sorted(result.events, key=lambda e: e.start_time))
            index = EventIndex(events)
        except Exception:
            logger.exception("Script parse failed")
            self.reset()
            return False

        self.metadata = ScriptMetadata(dict(result.metadata))
        self._styles = dict(result.styles)
        self._events = events
        self._index = index
        self._parsed = True

        logger.info(
            "Parsed script: %d events on %d tracks (%d dialogue lines dropped)",
            len(events), len(self.available_tracks()), result.dropped_events,
        )
        return True

    def reset(self) -> None:
        """Drop all parsed state."""
        self.source_path = None
        self.metadata = ScriptMetadata()
        self._styles = {}
        self._events = ()
        self._index = EventIndex(())
        self._parsed = False
        self._navigable_cache = {}

    # =========================================================================
    # Store views
    # =========================================================================

    def is_ready(self) -> bool:
        """True once a parse succeeded and kept at least one event."""
        return self._parsed and len(self._events) > 0

    def all_events(self) -> list[DialogueEvent]:
        return list(self._events)

    def available_tracks(self) -> list[str]:
        """Declared style names in file order, then undeclared event styles."""
        tracks = list(self._styles)
        seen = set(tracks)
        for event in self._events:
            if event.style not in seen:
                seen.add(event.style)
                tracks.append(event.style)
        return tracks

    def style_of(self, name: str) -> SubtitleStyle | None:
        return self._styles.get(name)

    @property
    def styles(self) -> dict[str, SubtitleStyle]:
        return dict(self._styles)

    def stats(self) -> ParseStats:
        duration = max((e.end_time for e in self._events), default=0.0)
        return ParseStats(
            total_events=len(self._events),
            tracks=tuple(self._styles),
            duration=duration,
            parsed=self._parsed,
        )

    # =========================================================================
    # Temporal queries
    # =========================================================================

    def active_events_at(self, t: float) -> list[DialogueEvent]:
        if not self.is_ready():
            return []
        return self._index.active(t)

    def active_events_by_track(self, t: float) -> dict[str, list[DialogueEvent]]:
        if not self.is_ready():
            return {}
        return self._index.active_by_track(t)

    # =========================================================================
    # Navigation
    # =========================================================================

    def main_track(self) -> str | None:
        return resolve_main_track(self.available_tracks(), self.settings.main_track_names)

    def navigable_events(self, track: str | None = None) -> list[NavigableEvent]:
        """
        Sentence units for one track (the main track by default).

        The merged list is cached per track until the next parse/reset.
        """
        if not self.is_ready():
            return []
        resolved = track or self.main_track()
        if resolved is None:
            return []

        cached = self._navigable_cache.get(resolved)
        if cached is None:
            cached = build_navigable(
                self._events,
                resolved,
                epsilon=self.settings.dedup_epsilon_s,
                gap_tolerance=self.settings.merge_gap_s,
            )
            self._navigable_cache[resolved] = cached
        return list(cached)

    def next_event_time(self, t: float, track: str | None = None) -> float | None:
        return next_start(self.navigable_events(track), t, self.settings.nav_buffer_s)

    def prev_event_time(self, t: float, track: str | None = None) -> float | None:
        return prev_start(self.navigable_events(track), t, self.settings.nav_buffer_s)

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        return (
            f"SubtitleScript(events={len(self._events)}, "
            f"tracks={len(self._styles)}, parsed={self._parsed})"
        )
