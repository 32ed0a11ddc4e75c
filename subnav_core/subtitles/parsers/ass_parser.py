# subnav_core/subtitles/parsers/ass_parser.py
# -*- coding: utf-8 -*-
"""
ASS/SSA script parser for multi-track dialogue.

Reads the three sections the player needs:
- [Script Info]   -> free-form metadata
- [V4+ Styles]    -> one style per track (also [V4 Styles] for SSA)
- [Events]        -> Dialogue lines

Everything else (fonts, graphics, Aegisub sections, Comment: events) is
skipped. A line that cannot be decoded is dropped and parsing continues;
no single line can abort a parse.
"""
from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from ...models.subtitles import DialogueEvent, SubtitleStyle
from ..utils.colors import ass_color_to_rgb
from ..utils.markup import clean_text, display_text
from ..utils.timestamps import parse_ass_timestamp
from .fields import (
    DEFAULT_EVENT_FORMAT,
    DEFAULT_STYLE_FORMAT,
    FieldRecord,
    parse_format_line,
    split_event_values,
    split_label,
    split_style_values,
)

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = (';', '!')

_LINE_SPLIT_RE = re.compile(r'\r\n|\r|\n')

# Encodings to try when auto-detecting
ENCODINGS_TO_TRY = [
    'utf-8-sig',  # UTF-8 with BOM
    'utf-8',
    'gb18030',
    'big5',
    'shift_jis',
    'cp1252',     # Windows Western European
    'latin1',
]


@dataclass
class ParseResult:
    """Everything decoded from one script, before it is swapped into a store."""

    metadata: Dict[str, str] = field(default_factory=dict)
    styles: Dict[str, SubtitleStyle] = field(default_factory=dict)
    events: List[DialogueEvent] = field(default_factory=list)
    dialogue_lines: int = 0
    dropped_lines: int = 0
    dropped_events: int = 0


@dataclass
class _SectionState:
    """Per-parse router state: the current section and declared formats."""

    result: ParseResult
    section: Optional[str] = None
    style_format: Optional[List[str]] = None
    event_format: Optional[List[str]] = None


# UTF-32 LE starts with the UTF-16 LE mark, so it is checked first
_BOMS = (
    (codecs.BOM_UTF8, 'utf-8-sig'),
    (codecs.BOM_UTF32_LE, 'utf-32'),
    (codecs.BOM_UTF32_BE, 'utf-32'),
    (codecs.BOM_UTF16_LE, 'utf-16'),
    (codecs.BOM_UTF16_BE, 'utf-16'),
)


def sniff_encoding(raw: bytes) -> Tuple[str, bool]:
    """
    Guess the encoding of raw script bytes.

    A byte-order mark decides outright. Otherwise the first entry of
    ENCODINGS_TO_TRY that decodes the whole buffer wins.

    Returns:
        Tuple of (encoding_name, has_bom)
    """
    for bom, encoding in _BOMS:
        if raw.startswith(bom):
            return encoding, True

    for encoding in ENCODINGS_TO_TRY:
        try:
            raw.decode(encoding)
        except UnicodeDecodeError:
            continue
        return encoding, False
    return 'utf-8', False


def detect_encoding(path: Path) -> Tuple[str, bool]:
    return sniff_encoding(Path(path).read_bytes())


def read_script_text(path: Path) -> str:
    """Read a script file, decoding with the sniffed encoding."""
    raw = Path(path).read_bytes()
    encoding, _ = sniff_encoding(raw)
    return raw.decode(encoding, errors='replace')


def parse_ass_text(text: str) -> ParseResult:
    """
    Parse ASS/SSA script text.

    Args:
        text: Full script content

    Returns:
        ParseResult with metadata, styles and events in file order
        (events are NOT sorted here; the store sorts them)
    """
    state = _SectionState(result=ParseResult())

    if text.startswith('\ufeff'):
        text = text[1:]

    for raw_line in _LINE_SPLIT_RE.split(text):
        line = raw_line.strip()

        # Skip empty lines and comments
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        # Section headers
        if line.startswith('[') and line.endswith(']'):
            state.section = line[1:-1].strip().lower()
            continue

        handler = SECTION_HANDLERS.get(state.section)
        if handler is None:
            continue
        handler(state, line)

    return state.result


def _parse_script_info(state: _SectionState, line: str) -> None:
    """Parse one [Script Info] line (key: value)."""
    colon = line.find(':')
    if colon <= 0:
        state.result.dropped_lines += 1
        return
    key = line[:colon].strip()
    state.result.metadata[key] = line[colon + 1:].strip()


def _parse_styles(state: _SectionState, line: str) -> None:
    """Parse one [V4+ Styles] / [V4 Styles] line."""
    label, payload = split_label(line)

    # Format line
    if label == 'format':
        state.style_format = parse_format_line(line)
        return

    # Style line
    if label == 'style':
        format_fields = state.style_format or list(DEFAULT_STYLE_FORMAT)
        record = split_style_values(payload, format_fields)
        style = build_style(record)
        if style is None:
            state.result.dropped_lines += 1
            logger.debug("Skipping style line without a name: %r", line)
            return
        if style.name in state.result.styles:
            logger.debug("Style %r redefined; keeping the later definition", style.name)
        state.result.styles[style.name] = style
        return

    state.result.dropped_lines += 1


def _parse_events(state: _SectionState, line: str) -> None:
    """Parse one [Events] line. Only Dialogue lines produce events."""
    label, payload = split_label(line)

    # Format line
    if label == 'format':
        state.event_format = parse_format_line(line)
        return

    if label != 'dialogue':
        # Comment:, Picture:, Sound:, Movie:, Command: and garbage
        return

    format_fields = state.event_format or list(DEFAULT_EVENT_FORMAT)
    index = state.result.dialogue_lines
    state.result.dialogue_lines += 1

    record = split_event_values(payload, format_fields)
    event = build_event(record, index)
    if event is None:
        state.result.dropped_events += 1
        logger.debug("Dropping dialogue line %d: %r", index, line)
        return
    state.result.events.append(event)


SECTION_HANDLERS: Dict[Optional[str], Callable[[_SectionState, str], None]] = {
    'script info': _parse_script_info,
    'v4+ styles': _parse_styles,
    'v4 styles': _parse_styles,  # SSA format
    'events': _parse_events,
}


def build_style(record: FieldRecord) -> Optional[SubtitleStyle]:
    """Build a style from a decoded Style line; None when it has no name."""
    name = record.get('Name')
    if not name:
        return None

    primary = record.get('PrimaryColour', 'PrimaryColor')
    fontsize = record.get('Fontsize', 'FontSize')

    return SubtitleStyle(
        name=name,
        fontname=record.get('Fontname', 'FontName'),
        fontsize=fontsize,
        primary_color=primary,
        secondary_color=record.get('SecondaryColour', 'SecondaryColor'),
        outline_color=record.get('OutlineColour', 'OutlineColor'),
        back_color=record.get('BackColour', 'BackColor'),
        bold=record.get('Bold'),
        italic=record.get('Italic'),
        alignment=record.get('Alignment'),
        margin_l=record.get('MarginL'),
        margin_r=record.get('MarginR'),
        margin_v=record.get('MarginV'),
        display_color=ass_color_to_rgb(primary),
        display_font_size=f"{fontsize}px" if fontsize else None,
        fields=record.as_dict(),
    )


def build_event(record: FieldRecord, index: int) -> Optional[DialogueEvent]:
    """
    Build an event from a decoded Dialogue line.

    Returns None unless both timestamps decode and the clean text is
    non-empty.
    """
    start_raw = record.get('Start', 'StartTime')
    end_raw = record.get('End', 'EndTime')
    if not start_raw or not end_raw:
        return None

    start_time = parse_ass_timestamp(start_raw)
    end_time = parse_ass_timestamp(end_raw)
    if start_time is None or end_time is None:
        return None

    raw_text = record.get('Text') or ''
    cleaned = clean_text(raw_text)
    if not cleaned:
        return None

    return DialogueEvent(
        style=record.get('Style') or 'Default',
        start=start_raw,
        end=end_raw,
        start_time=start_time,
        end_time=end_time,
        text=raw_text,
        clean_text=cleaned,
        display_text=display_text(raw_text),
        layer=record.get('Layer') or '',
        name=record.get('Name', 'Actor') or '',
        effect=record.get('Effect') or '',
        original_index=index,
        fields=record.as_dict(),
    )
