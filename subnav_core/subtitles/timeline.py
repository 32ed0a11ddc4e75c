# subnav_core/subtitles/timeline.py
"""Sliding timeline strip: sentence segments around the playhead."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .data import SubtitleScript


@dataclass(frozen=True)
class TimelineSegment:
    start_time: float
    end_time: float
    left_pct: float  # 0 = window start, 100 = window end
    width_pct: float
    active: bool


def timeline_window(
    script: SubtitleScript,
    t: float,
    window: float | None = None,
    track: str | None = None,
) -> list[TimelineSegment]:
    """
    Navigable segments overlapping [t - window/2, t + window/2].

    Positions are percentages of the window, so the playhead always sits
    at 50%. Segments crossing an edge get positions outside 0-100.
    """
    if window is None:
        window = script.settings.timeline_window_s
    half = window / 2
    window_start = t - half

    segments = []
    for event in script.navigable_events(track):
        if event.end_time < t - half or event.start_time > t + half:
            continue
        left = (event.start_time - window_start) / window * 100
        width = (event.end_time - event.start_time) / window * 100
        segments.append(
            TimelineSegment(
                start_time=event.start_time,
                end_time=event.end_time,
                left_pct=left,
                width_pct=width,
                active=event.start_time <= t <= event.end_time,
            )
        )
    return segments
