# subnav_core/subtitles/parsers/fields.py
# -*- coding: utf-8 -*-
"""
Format-line driven field decoding.

A section declares its field order once ("Format: Name, Fontname, ...").
Every data line after it is decoded against that list:

- Style lines split on every comma, pairing values positionally.
- Dialogue lines split into at most len(fields) parts; the last field
  (Text) keeps any further commas.

Ragged lines are tolerated: pairing stops at whichever list is shorter.
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Optional, Tuple

DEFAULT_STYLE_FORMAT: Tuple[str, ...] = (
    'Name', 'Fontname', 'Fontsize', 'PrimaryColour', 'SecondaryColour',
    'OutlineColour', 'BackColour', 'Bold', 'Italic', 'Underline', 'StrikeOut',
    'ScaleX', 'ScaleY', 'Spacing', 'Angle', 'BorderStyle', 'Outline', 'Shadow',
    'Alignment', 'MarginL', 'MarginR', 'MarginV', 'Encoding',
)

DEFAULT_EVENT_FORMAT: Tuple[str, ...] = (
    'Layer', 'Start', 'End', 'Style', 'Name',
    'MarginL', 'MarginR', 'MarginV', 'Effect', 'Text',
)


class FieldRecord(Mapping[str, str]):
    """
    Decoded data line keyed by the declared field names.

    Lookups through get() ignore case and accept aliases, so "Start",
    "start" and "START" all resolve against a format that declared any
    of them.
    """

    def __init__(self, pairs: List[Tuple[str, str]]):
        self._values: Dict[str, str] = {}
        self._folded: Dict[str, str] = {}
        for name, value in pairs:
            self._values[name] = value
            self._folded.setdefault(name.casefold(), value)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get(self, name: str, *aliases: str) -> Optional[str]:  # type: ignore[override]
        for candidate in (name,) + aliases:
            if candidate in self._values:
                return self._values[candidate]
            value = self._folded.get(candidate.casefold())
            if value is not None:
                return value
        return None

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"FieldRecord({self._values!r})"


def split_label(line: str) -> Tuple[str, str]:
    """
    Split "Label: payload" at the first colon.

    Returns the lower-cased label and the payload with leading whitespace
    removed. Lines without a colon give ('', line).
    """
    if ':' not in line:
        return '', line
    label, payload = line.split(':', 1)
    return label.strip().lower(), payload.lstrip()


def parse_format_line(line: str) -> List[str]:
    """Decode "Format: A, B, C" into ['A', 'B', 'C']."""
    _, payload = split_label(line)
    if not payload.strip():
        return []
    return [name.strip() for name in payload.split(',')]


def split_style_values(payload: str, fields: List[str]) -> FieldRecord:
    values = payload.split(',')
    pairs = []
    for name, value in zip(fields, values):
        if name:
            pairs.append((name, value.strip()))
    return FieldRecord(pairs)


def split_event_values(payload: str, fields: List[str]) -> FieldRecord:
    if not fields:
        return FieldRecord([])

    # maxsplit keeps commas inside the final (Text) field
    values = payload.split(',', len(fields) - 1)
    pairs = []
    for name, value in zip(fields, values):
        if name:
            pairs.append((name, value.strip()))
    return FieldRecord(pairs)
