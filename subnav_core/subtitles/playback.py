# subnav_core/subtitles/playback.py
"""
Player-side helpers built on the script queries.

The player works in video time; the script works in script time. A user
offset shifts one against the other (positive offset delays subtitles):

    script_time = video_time - offset

Everything here is pure: no timers, no debouncing, no player state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..models.subtitles import DialogueEvent

if TYPE_CHECKING:
    from .data import SubtitleScript


def to_script_time(video_time: float, offset: float = 0.0) -> float:
    return video_time - offset


def to_video_time(script_time: float, offset: float = 0.0) -> float:
    return script_time + offset


def nudge_offset(offset: float, step: float) -> float:
    """Apply one offset step, rounded to 0.1 s so repeated taps do not drift."""
    return round((offset + step) * 10) / 10


@dataclass(frozen=True)
class LoopWindow:
    """A sentence being looped, in script time."""

    start: float
    end: float
    fallback: bool = False

    def should_rewind(self, t: float, tail: float = 0.15) -> bool:
        """True once playback has run tail seconds past the end."""
        return t > self.end + tail


def current_sentence(
    script: SubtitleScript, t: float, track: str | None = None
) -> DialogueEvent | None:
    """The active event with the latest start (optionally on one track)."""
    active = script.active_events_at(t)
    if track is not None:
        active = [e for e in active if e.style == track]
    if not active:
        return None
    # max() keeps the first of equal starts
    return max(active, key=lambda e: e.start_time)


def next_sentence_target(
    script: SubtitleScript, t: float, track: str | None = None
) -> float | None:
    return script.next_event_time(t, track)


def prev_sentence_target(
    script: SubtitleScript,
    t: float,
    track: str | None = None,
    restart_threshold: float | None = None,
) -> float:
    """
    Where a "previous sentence" gesture should seek.

    More than restart_threshold into the current sentence restarts it;
    otherwise jump to the previous sentence, or to 0 when there is none.
    """
    if restart_threshold is None:
        restart_threshold = script.settings.restart_threshold_s

    current = current_sentence(script, t, track)
    if current is not None and t - current.start_time > restart_threshold:
        return current.start_time

    prev_time = script.prev_event_time(t, track)
    if prev_time is not None:
        return prev_time
    return 0.0


def loop_target(
    script: SubtitleScript,
    t: float,
    track: str | None = None,
    fallback_length: float | None = None,
) -> LoopWindow:
    """
    The sentence a loop gesture should repeat.

    The current sentence if one is active; in a gap, the nearest sentence
    that already ended; with no subtitles at all, a fixed window from t.
    """
    if fallback_length is None:
        fallback_length = script.settings.loop_fallback_s

    target = current_sentence(script, t, track)
    if target is None:
        for event in reversed(script.all_events()):
            if track is not None and event.style != track:
                continue
            if event.end_time < t:
                target = event
                break

    if target is None:
        return LoopWindow(start=t, end=t + fallback_length, fallback=True)
    return LoopWindow(start=target.start_time, end=target.end_time)


def select_span(text: str, anchor: int, focus: int) -> str:
    """
    Characters between two selection indices, inclusive, in either order.

    Indices are clamped to the text, so a drag that leaves the line still
    selects up to its edge.
    """
    if not text:
        return ""
    last = len(text) - 1
    start = min(max(min(anchor, focus), 0), last)
    end = min(max(max(anchor, focus), 0), last)
    return text[start:end + 1]
