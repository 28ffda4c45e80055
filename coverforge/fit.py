"""
Font-size fitting: the largest stepped size at which tracked text fits a box.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import FIT_MIN_SIZE, FIT_STEP
from .fonts import font_spec
from .surface import RenderSurface
from .tracking import measure_tracked

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FitResult:
    size: float
    width: float

    def overflows(self, max_width: float) -> bool:
        return self.width > max_width


def fit_text(
    surface: RenderSurface,
    text: str,
    max_width: float,
    max_size: float,
    min_size: float = FIT_MIN_SIZE,
    *,
    family: str,
    weight: str = "900",
    letter: float = 0,
) -> FitResult:
    """Step the size down from *max_size* until *text* fits *max_width*.

    Stops at *min_size*; the returned width may then still exceed
    *max_width*. Leaves the fitted font set on the surface.
    """
    size = max_size
    surface.font = font_spec(weight, size, family)
    width = measure_tracked(surface, text, letter)
    while width > max_width and size > min_size:
        size = max(size - FIT_STEP, min_size)
        surface.font = font_spec(weight, size, family)
        width = measure_tracked(surface, text, letter)

    if width > max_width:
        log.info(f"{text!r} overflows at minimum size {size:.1f}px ({width:.1f} > {max_width:.1f})")
    return FitResult(size=size, width=width)
