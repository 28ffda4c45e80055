"""
Colour helpers.
"""

from __future__ import annotations

import math
import re

_NON_HEX = re.compile(r"[^0-9a-f]", re.IGNORECASE)


def color_luminance(hex_color: str, lum: float) -> str:
    """Lighten (lum > 0) or darken (lum < 0) a hex colour.

    Each channel becomes ``clamp(c + c * lum, 0, 255)`` rounded half up. Three-digit
    colours are expanded first. Returns lower-case ``#rrggbb``.
    """
    digits = _NON_HEX.sub("", str(hex_color))
    if len(digits) < 6:
        if len(digits) < 3:
            raise ValueError(f"Not a hex colour: {hex_color!r}")
        digits = "".join(ch * 2 for ch in digits[:3])

    out = "#"
    for i in range(3):
        c = int(digits[i * 2:i * 2 + 2], 16)
        c = math.floor(min(max(0, c + c * lum), 255) + 0.5)
        out += f"{c:02x}"
    return out
