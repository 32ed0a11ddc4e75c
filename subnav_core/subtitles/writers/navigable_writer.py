# subnav_core/subtitles/writers/navigable_writer.py
# -*- coding: utf-8 -*-
"""
Export sentence units (navigable events) as a standalone subtitle file.

Uses pysubs2 for the output format. Times are rounded to integer
milliseconds here; the writer for the chosen format handles its own
precision (centiseconds for ASS).
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import pysubs2

from ..utils.timestamps import seconds_to_ms

if TYPE_CHECKING:
    from ...models.subtitles import SubtitleStyle
    from ..data import SubtitleScript

SUPPORTED_FORMATS = ('srt', 'ass', 'ssa', 'vtt')


def _to_ssa_style(style: 'SubtitleStyle') -> pysubs2.SSAStyle:
    """Carry font and primary colour over; everything else stays default."""
    ssa_style = pysubs2.SSAStyle()
    if style.fontname:
        ssa_style.fontname = style.fontname
    if style.fontsize:
        try:
            ssa_style.fontsize = float(style.fontsize)
        except ValueError:
            pass
    rgb = style.display_color.lstrip('#')
    ssa_style.primarycolor = pysubs2.Color(int(rgb[0:2], 16), int(rgb[2:4], 16), int(rgb[4:6], 16))
    return ssa_style


def build_navigable_file(script: 'SubtitleScript', track: Optional[str] = None) -> pysubs2.SSAFile:
    """Build an SSAFile holding one event per navigable unit."""
    subs = pysubs2.SSAFile()
    resolved = track or script.main_track()

    style = script.style_of(resolved) if resolved else None
    if style is not None:
        subs.styles[style.name] = _to_ssa_style(style)

    for unit in script.navigable_events(track):
        subs.events.append(pysubs2.SSAEvent(
            start=seconds_to_ms(unit.start_time),
            end=seconds_to_ms(unit.end_time),
            # clean_text holds real newlines; ASS wants \N
            text=unit.clean_text.replace('\n', '\\N'),
            style=unit.style,
        ))
    return subs


def export_navigable(
    script: 'SubtitleScript',
    path: Optional[Union[str, Path]] = None,
    fmt: str = 'srt',
    track: Optional[str] = None,
    encoding: str = 'utf-8',
) -> Optional[str]:
    """
    Write navigable units to path, or return them as a string when path is None.

    Args:
        script: Parsed script
        path: Output path, or None for string output
        fmt: One of SUPPORTED_FORMATS
        track: Track to export (main track when None)
        encoding: Output file encoding
    """
    fmt = fmt.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported export format {fmt!r}; expected one of {SUPPORTED_FORMATS}")

    subs = build_navigable_file(script, track)
    if path is None:
        return subs.to_string(fmt)
    subs.save(str(path), encoding=encoding, format_=fmt)
    return None
