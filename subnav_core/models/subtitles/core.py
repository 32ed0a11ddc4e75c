# subnav_core/models/subtitles/core.py
"""
Core subtitle data models.

This module contains the canonical data structures produced by the script
parser and consumed by the query and navigation engines.

All timing is stored as FLOAT SECONDS. A decoded time of ``None`` means the
source timestamp could not be decoded; such events never reach the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# =============================================================================
# Style Definition
# =============================================================================


@dataclass(frozen=True)
class SubtitleStyle:
    """
    Track style from the [V4+ Styles] section.

    Only the attributes the player cares about are typed; every decoded
    field is kept in ``fields`` under its declared name.
    """

    name: str
    fontname: str | None = None
    fontsize: str | None = None
    primary_color: str | None = None  # ASS format: &HAABBGGRR
    secondary_color: str | None = None
    outline_color: str | None = None
    back_color: str | None = None
    bold: str | None = None
    italic: str | None = None
    alignment: str | None = None
    margin_l: str | None = None
    margin_r: str | None = None
    margin_v: str | None = None

    # Derived for display
    display_color: str = "#FFFFFF"
    display_font_size: str | None = None

    fields: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "fontname": self.fontname,
            "fontsize": self.fontsize,
            "primary_color": self.primary_color,
            "secondary_color": self.secondary_color,
            "outline_color": self.outline_color,
            "back_color": self.back_color,
            "bold": self.bold,
            "italic": self.italic,
            "alignment": self.alignment,
            "margin_l": self.margin_l,
            "margin_r": self.margin_r,
            "margin_v": self.margin_v,
            "display_color": self.display_color,
            "display_font_size": self.display_font_size,
        }


# =============================================================================
# Event Definition
# =============================================================================


@dataclass(frozen=True)
class DialogueEvent:
    """
    Single Dialogue line with FLOAT SECOND timing.

    ``text`` is the raw line text, ``clean_text`` has override tags removed
    and line breaks normalized, ``display_text`` carries span/br markup for
    renderers.
    """

    style: str
    start: str
    end: str
    start_time: float | None
    end_time: float | None
    text: str
    clean_text: str
    display_text: str

    layer: str = ""
    name: str = ""  # Actor field
    effect: str = ""

    # Position among the Dialogue lines of the source script
    original_index: int | None = None

    fields: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    @property
    def duration(self) -> float:
        """Duration in seconds (0 when either bound is missing)."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time

    def contains(self, t: float) -> bool:
        """Closed-interval test: start <= t <= end."""
        if self.start_time is None or self.end_time is None:
            return False
        return self.start_time <= t <= self.end_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.original_index,
            "style": self.style,
            "start": self.start,
            "end": self.end,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "text": self.text,
            "clean_text": self.clean_text,
            "display_text": self.display_text,
            "layer": self.layer,
            "name": self.name,
            "effect": self.effect,
        }


@dataclass(frozen=True)
class NavigableEvent:
    """
    A sentence-level unit used for next/previous jumps.

    Produced by filtering one track, dropping duplicate starts and merging
    adjacent fragments that carry the same text.
    """

    style: str
    start_time: float
    end_time: float
    clean_text: str
    text: str = ""
    merged_count: int = 1

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "style": self.style,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
            "clean_text": self.clean_text,
            "text": self.text,
            "merged_count": self.merged_count,
        }


# =============================================================================
# Document-Level Views
# =============================================================================


@dataclass
class ScriptMetadata:
    """Key/value pairs from [Script Info], in file order."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.values.get(key, default)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self.values


@dataclass(frozen=True)
class ParseStats:
    """Statistics derived from the event store; never stored separately."""

    total_events: int = 0
    tracks: tuple[str, ...] = ()
    duration: float = 0.0
    parsed: bool = False

    @property
    def track_count(self) -> int:
        return len(self.tracks)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_events": self.total_events,
            "tracks": list(self.tracks),
            "track_count": self.track_count,
            "duration": self.duration,
            "parsed": self.parsed,
        }
