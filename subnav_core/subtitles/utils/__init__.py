# subnav_core/subtitles/utils/__init__.py
"""Shared utilities for subtitle processing."""

from .colors import DEFAULT_COLOR, ass_color_to_rgb
from .markup import clean_text, display_text, normalize_for_compare
from .timestamps import format_ass_timestamp, parse_ass_timestamp, seconds_to_ms

__all__ = [
    "DEFAULT_COLOR",
    "ass_color_to_rgb",
    "clean_text",
    "display_text",
    "format_ass_timestamp",
    "normalize_for_compare",
    "parse_ass_timestamp",
    "seconds_to_ms",
]
