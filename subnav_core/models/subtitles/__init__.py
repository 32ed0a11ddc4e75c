"""
Centralized subtitle model definitions.

Import models from here for a clean API:
    from subnav_core.models.subtitles import DialogueEvent, SubtitleStyle
"""

from .core import (
    DialogueEvent,
    NavigableEvent,
    ParseStats,
    ScriptMetadata,
    SubtitleStyle,
)

__all__ = [
    "DialogueEvent",
    "NavigableEvent",
    "ParseStats",
    "ScriptMetadata",
    "SubtitleStyle",
]
