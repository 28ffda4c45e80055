"""
Letter-tracked text measurement and drawing.

*letter* is the spacing in pixels added between consecutive glyphs and may
be negative. Measurement adds a uniform per-gap correction to the
whole-string width; drawing advances glyph by glyph, so the drawn run can
differ slightly from the measured width.
"""

from __future__ import annotations

from typing import Iterator

from .surface import RenderSurface


def measure_tracked(surface: RenderSurface, text: str, letter: float) -> float:
    """Width of *text* in the surface's current font with tracking applied."""
    if not letter:
        return surface.measure_text(text)
    return surface.measure_text(text) + letter * max(0, len(text or "") - 1)


def tracked_glyphs(
    surface: RenderSurface, text: str, x: float, letter: float,
) -> Iterator[tuple[str, float]]:
    """Yield (glyph, x) pairs for drawing *text* from *x* with tracking."""
    for ch in text:
        yield ch, x
        x += surface.measure_text(ch) + letter


def draw_tracked(surface: RenderSurface, text: str, x: float, y: float, letter: float) -> None:
    """Draw *text* at (x, y) in the current font with tracking."""
    if not letter:
        surface.fill_text(text, x, y)
        return
    for ch, gx in tracked_glyphs(surface, text, x, letter):
        surface.fill_text(ch, gx, y)
