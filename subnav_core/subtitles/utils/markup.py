# subnav_core/subtitles/utils/markup.py
"""
Text transforms for Dialogue lines.

clean_text():   override tags removed, \\N and \\n turned into newlines.
                Used for matching, search and navigation.
display_text(): colour overrides turned into <span> pairs, line breaks into
                <br>, every other override removed. Consumed by renderers.
"""

from __future__ import annotations

import re

from .colors import ass_color_to_rgb

_TAG_BLOCK_RE = re.compile(r"\{[^}]*\}")
_COLOR_OPEN_RE = re.compile(r"\{\\1?c(&H[0-9A-Fa-f]{6,8}&?)\}")
_COLOR_RESET_RE = re.compile(r"\{\\1?c\}")
_LINE_BREAK_RE = re.compile(r"\\[Nn]")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(text: str | None) -> str:
    if not text:
        return ""
    text = _TAG_BLOCK_RE.sub("", text)
    text = _LINE_BREAK_RE.sub("\n", text)
    text = text.replace("\\h", " ")
    return text.strip()


def display_text(text: str | None) -> str:
    if not text:
        return ""

    def _open_span(match: re.Match) -> str:
        return f'<span style="color: {ass_color_to_rgb(match.group(1))};">'

    html = _COLOR_OPEN_RE.sub(_open_span, text)
    html = _COLOR_RESET_RE.sub("</span>", html)
    html = _LINE_BREAK_RE.sub("<br>", html)
    html = html.replace("\\h", " ")
    html = _TAG_BLOCK_RE.sub("", html)
    return html


def normalize_for_compare(text: str | None) -> str:
    """Collapse whitespace, trim and case-fold. For comparisons only."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip().casefold()
