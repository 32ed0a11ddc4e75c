# subnav_core/subtitles/parsers/__init__.py
# -*- coding: utf-8 -*-
"""Script parsers: section routing and field decoding."""

from .ass_parser import ParseResult, detect_encoding, parse_ass_text, read_script_text, sniff_encoding
from .fields import (
    DEFAULT_EVENT_FORMAT,
    DEFAULT_STYLE_FORMAT,
    FieldRecord,
    parse_format_line,
    split_event_values,
    split_style_values,
)

__all__ = [
    'DEFAULT_EVENT_FORMAT',
    'DEFAULT_STYLE_FORMAT',
    'FieldRecord',
    'ParseResult',
    'detect_encoding',
    'parse_ass_text',
    'parse_format_line',
    'read_script_text',
    'sniff_encoding',
    'split_event_values',
    'split_style_values',
]
