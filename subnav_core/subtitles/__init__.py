"""
Multi-track dialogue script processing.

This package provides:
- SubtitleScript: style table, event store, temporal and navigation queries
- Parsers for the ASS/SSA dialect
- Navigation: per-track dedup/merge and next/previous boundaries
- Playback helpers: offsets, loop windows, restart-or-previous, selections
- Writers: export of sentence units via pysubs2
"""

from .data import SubtitleScript
from .playback import (
    LoopWindow,
    current_sentence,
    loop_target,
    next_sentence_target,
    nudge_offset,
    prev_sentence_target,
    select_span,
    to_script_time,
    to_video_time,
)
from .query import EventIndex
from .timeline import TimelineSegment, timeline_window
from .track_kinds import analysis_text, classify_tracks

__all__ = [
    # Container
    'SubtitleScript',
    'EventIndex',
    # Playback
    'LoopWindow',
    'current_sentence',
    'loop_target',
    'next_sentence_target',
    'nudge_offset',
    'prev_sentence_target',
    'select_span',
    'to_script_time',
    'to_video_time',
    # Presentation
    'TimelineSegment',
    'timeline_window',
    'analysis_text',
    'classify_tracks',
]
