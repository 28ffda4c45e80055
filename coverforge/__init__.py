"""
coverforge: book-cover compositor with scale-independent text fitting.
"""

from .color import color_luminance
from .compose import Composition, PlacedBlock, compose
from .errors import AssetLoadError, CoverError, InvalidPresetError
from .fit import FitResult, fit_text
from .fonts import FontRegistry, font_spec, parse_font_spec
from .presets import Fields
from .scale import RenderState
from .session import CoverSession
from .surface import RenderSurface, measure
from .tracking import draw_tracked, measure_tracked, tracked_glyphs

__all__ = [
    "AssetLoadError",
    "Composition",
    "CoverError",
    "CoverSession",
    "Fields",
    "FitResult",
    "FontRegistry",
    "InvalidPresetError",
    "PlacedBlock",
    "RenderState",
    "RenderSurface",
    "color_luminance",
    "compose",
    "draw_tracked",
    "fit_text",
    "font_spec",
    "measure",
    "measure_tracked",
    "parse_font_spec",
    "tracked_glyphs",
]
