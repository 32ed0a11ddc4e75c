# subnav_core/subtitles/utils/colors.py
"""ASS colour decoding (&HAABBGGRR -> #RRGGBB)."""

from __future__ import annotations

import re

DEFAULT_COLOR = "#FFFFFF"

_HEX_RE = re.compile(r"^[0-9A-Fa-f]+$")


def ass_color_to_rgb(ass_color: str | None) -> str:
    """
    Convert an ASS colour to a CSS-style hex string.

    The last six hex digits are blue, green, red. Alpha (if present) is
    ignored. Anything that is not a valid colour gives opaque white.
    """
    if not ass_color:
        return DEFAULT_COLOR

    value = ass_color.strip()
    if value[:2].upper() == "&H":
        value = value[2:]
    elif value[:1] == "#":
        # Plain "#..." is not an ASS colour
        return DEFAULT_COLOR
    value = value.rstrip("&")

    if len(value) < 6 or not _HEX_RE.match(value):
        return DEFAULT_COLOR

    bgr = value[-6:]
    b, g, r = bgr[0:2], bgr[2:4], bgr[4:6]
    return f"#{r}{g}{b}".upper()
