# subnav_core/subtitles/navigation.py
"""
Sentence-level navigation over one track.

Scripts produced by aligners and converters often encode the same sentence
more than once: duplicate lines with the same start, or one sentence split
into several fragments carrying identical text. Navigating over raw events
would then stop on every fragment. The pipeline here is:

    filter_track -> dedup_by_start -> merge_adjacent

and next/previous boundaries are answered on the merged list.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterable, Sequence

from ..models.settings import DEFAULT_MAIN_TRACK_NAMES
from ..models.subtitles import DialogueEvent, NavigableEvent
from .utils.markup import normalize_for_compare

logger = logging.getLogger(__name__)

DEDUP_EPSILON_S = 0.001
MERGE_GAP_S = 0.18
NAV_BUFFER_S = 0.05


def resolve_main_track(
    tracks: Sequence[str],
    preferred: Iterable[str] = DEFAULT_MAIN_TRACK_NAMES,
) -> str | None:
    """
    Pick the track to navigate when the caller does not name one.

    Conventional names are tried in order (case-insensitive exact match);
    otherwise the first known track wins.
    """
    if not tracks:
        return None
    by_folded = {}
    for name in tracks:
        by_folded.setdefault(name.casefold(), name)
    for candidate in preferred:
        match = by_folded.get(candidate.casefold())
        if match is not None:
            return match
    return tracks[0]


def filter_track(events: Iterable[DialogueEvent], track: str) -> list[DialogueEvent]:
    return [e for e in events if e.style == track]


def dedup_by_start(
    events: Iterable[DialogueEvent], epsilon: float = DEDUP_EPSILON_S
) -> list[DialogueEvent]:
    """Drop events starting within epsilon of the previous kept start."""
    kept: list[DialogueEvent] = []
    for event in events:
        if event.start_time is None:
            continue
        if kept and abs(event.start_time - kept[-1].start_time) <= epsilon:
            continue
        kept.append(event)
    return kept


def merge_adjacent(
    events: Iterable[DialogueEvent], gap_tolerance: float = MERGE_GAP_S
) -> list[NavigableEvent]:
    """
    Merge consecutive fragments with the same normalized text.

    Two neighbours merge when their texts match and they overlap or the gap
    between them is at most gap_tolerance. The merged entry keeps the first
    start and the later of the two ends.
    """
    merged: list[NavigableEvent] = []
    last_key: str | None = None

    for event in events:
        start, end = event.start_time, event.end_time
        if start is None or end is None or end <= start:
            continue
        key = normalize_for_compare(event.clean_text)
        if not key:
            continue

        if merged and key == last_key and start <= merged[-1].end_time + gap_tolerance:
            prev = merged[-1]
            merged[-1] = NavigableEvent(
                style=prev.style,
                start_time=prev.start_time,
                end_time=max(prev.end_time, end),
                clean_text=prev.clean_text,
                text=prev.text,
                merged_count=prev.merged_count + 1,
            )
            continue

        merged.append(
            NavigableEvent(
                style=event.style,
                start_time=start,
                end_time=end,
                clean_text=event.clean_text,
                text=event.display_text,
            )
        )
        last_key = key

    return merged


def build_navigable(
    events: Iterable[DialogueEvent],
    track: str,
    epsilon: float = DEDUP_EPSILON_S,
    gap_tolerance: float = MERGE_GAP_S,
) -> list[NavigableEvent]:
    """filter -> dedup -> merge for one track."""
    filtered = filter_track(events, track)
    deduped = dedup_by_start(filtered, epsilon)
    merged = merge_adjacent(deduped, gap_tolerance)
    logger.debug(
        "Navigable events for %r: %d filtered, %d after dedup, %d after merge",
        track, len(filtered), len(deduped), len(merged),
    )
    return merged


def next_start(
    navigable: Sequence[NavigableEvent], t: float, buffer: float = NAV_BUFFER_S
) -> float | None:
    """Start of the first unit beginning more than buffer after t."""
    starts = [e.start_time for e in navigable]
    i = bisect.bisect_right(starts, t + buffer)
    return starts[i] if i < len(starts) else None


def prev_start(
    navigable: Sequence[NavigableEvent], t: float, buffer: float = NAV_BUFFER_S
) -> float | None:
    """
    Start of the last unit beginning more than buffer before the current one.

    The current unit is the latest-starting unit with start <= t. If it is
    still playing at t, "previous" means the unit before it, so the cutoff
    is its start; otherwise the cutoff is t. Earlier units that overlap or
    touch the current one stay eligible. Restarting the current sentence is
    the caller's choice (see playback.prev_sentence_target).
    """
    starts = [e.start_time for e in navigable]
    cutoff = t
    i = bisect.bisect_right(starts, t)
    if i and navigable[i - 1].end_time >= t:
        cutoff = starts[i - 1]

    j = bisect.bisect_left(starts, cutoff - buffer)
    return starts[j - 1] if j else None
