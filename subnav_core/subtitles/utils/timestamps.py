# subnav_core/subtitles/utils/timestamps.py
"""
Timestamp parsing and formatting for ASS scripts.

Accepted grammar: [H:]MM:SS[.f]

- Hours are optional and may have any number of digits
- Minutes and seconds are exactly two digits
- The fraction is 1-3 digits and is read positionally:
  ".5" is 500 ms, ".05" is 50 ms, ".005" is 5 ms

Anything else decodes to None. Callers treat None as "drop the record".
"""

from __future__ import annotations

import math
import re

_TIMESTAMP_RE = re.compile(r"^(?:(\d+):)?(\d{2}):(\d{2})(?:\.(\d{1,3}))?$", re.ASCII)


def parse_ass_timestamp(time_str: str | None) -> float | None:
    """
    Parse ASS timestamp to float seconds.

    Args:
        time_str: Timestamp string (e.g., "0:01:23.45", "01:23.4")

    Returns:
        Time in float seconds, or None if the string is not a timestamp
    """
    if time_str is None:
        return None
    match = _TIMESTAMP_RE.match(time_str.strip())
    if not match:
        return None

    hours, minutes, seconds, fraction = match.groups()
    total = int(hours or 0) * 3600 + int(minutes) * 60 + int(seconds)
    if fraction:
        total += int(fraction) / (10 ** len(fraction))
    return float(total)


def format_ass_timestamp(seconds: float, digits: int = 2) -> str:
    """
    Format float seconds as H:MM:SS.ff.

    Args:
        seconds: Time in seconds (negative values clamp to zero)
        digits: Fraction digits, 1-3 (2 = centiseconds, the ASS default)

    Returns:
        Timestamp string
    """
    if not 1 <= digits <= 3:
        raise ValueError(f"digits must be 1-3, got {digits}")

    scale = 10 ** digits
    total_units = int(math.floor(max(seconds, 0.0) * scale + 0.5))

    frac = total_units % scale
    total_seconds = total_units // scale
    secs = total_seconds % 60
    total_minutes = total_seconds // 60
    minutes = total_minutes % 60
    hours = total_minutes // 60

    return f"{hours}:{minutes:02d}:{secs:02d}.{frac:0{digits}d}"


def seconds_to_ms(seconds: float) -> int:
    """Round float seconds to integer milliseconds."""
    return int(math.floor(seconds * 1000 + 0.5))
