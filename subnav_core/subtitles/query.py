# subnav_core/subtitles/query.py
"""
Temporal index over the sorted event store.

"What is on screen at t" is asked on every player tick, so the index keeps
the start times in a numpy array and bounds each query with searchsorted:
only events whose start lies in [t - max_duration, t] can contain t.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from ..models.subtitles import DialogueEvent

# Slack for (end - start) round-off when t sits exactly on an end time
_WINDOW_SLACK = 1e-9


class EventIndex:
    """Read-only index over events sorted by start time."""

    def __init__(self, events: Sequence[DialogueEvent]):
        self._events = tuple(events)
        self._starts = np.fromiter(
            (e.start_time for e in self._events), dtype=np.float64, count=len(self._events)
        )
        self._ends = np.fromiter(
            (e.end_time for e in self._events), dtype=np.float64, count=len(self._events)
        )
        if len(self._events):
            # Negative durations never match, so they do not widen the window
            self._max_duration = float(max(0.0, np.max(self._ends - self._starts)))
        else:
            self._max_duration = 0.0

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> tuple[DialogueEvent, ...]:
        return self._events

    @property
    def max_duration(self) -> float:
        return self._max_duration

    def active(self, t: float) -> list[DialogueEvent]:
        """
        Every event with start <= t <= end, in store order.

        Overlaps are expected (several tracks, or stacked lines on one
        track), so the result is a list rather than a single winner.
        """
        if not self._events or t is None or math.isnan(t):
            return []

        hi = int(np.searchsorted(self._starts, t, side="right"))
        lo = int(np.searchsorted(self._starts, t - self._max_duration - _WINDOW_SLACK, side="left"))
        if hi <= lo:
            return []

        mask = self._ends[lo:hi] >= t
        return [self._events[lo + int(i)] for i in np.flatnonzero(mask)]

    def active_by_track(self, t: float) -> dict[str, list[DialogueEvent]]:
        """Group active events by style, tracks ordered by first appearance."""
        grouped: dict[str, list[DialogueEvent]] = {}
        for event in self.active(t):
            grouped.setdefault(event.style, []).append(event)
        return grouped
