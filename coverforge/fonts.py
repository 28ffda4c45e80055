"""
Font registry and canvas-style font specifications.

A font spec is the string a drawing surface receives as its current font:
weight token, size in pixels, quoted family name, then a generic fallback,
e.g. ``900 260px 'TrueNo-Black', system-ui``.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import NamedTuple, Union

from fontTools.ttLib import TTFont, TTLibError
from PIL import ImageFont

from .constants import GENERIC_FAMILY
from .errors import AssetLoadError

log = logging.getLogger(__name__)

FontFace = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

_SPEC_RE = re.compile(
    r"^(?P<weight>\S+) (?P<size>\d+(?:\.\d+)?)px '(?P<family>[^']*)'(?:,\s*(?P<fallback>.+))?$"
)

_WEIGHTS = {
    "light": 300,
    "normal": 400,
    "regular": 400,
    "bold": 700,
    "black": 900,
}


class FontSpec(NamedTuple):
    weight: str
    size: float
    family: str
    fallback: str


# ---------------------------------------------------------------------------
# Spec strings
# ---------------------------------------------------------------------------

def _format_size(size: float) -> str:
    text = repr(float(size))
    return text[:-2] if text.endswith(".0") else text


def font_spec(weight: str, size: float, family: str) -> str:
    """Compose the spec string for *weight*, *size* (px) and *family*."""
    return f"{weight} {_format_size(size)}px '{family}', {GENERIC_FAMILY}"


def parse_font_spec(spec: str) -> FontSpec:
    match = _SPEC_RE.match(spec.strip())
    if match is None:
        raise ValueError(f"Unrecognised font spec: {spec!r}")
    return FontSpec(
        weight=match["weight"],
        size=float(match["size"]),
        family=match["family"],
        fallback=match["fallback"] or GENERIC_FAMILY,
    )


def weight_value(weight: str) -> int:
    """Map a weight token ("900", "normal", "black", ...) to a numeric weight."""
    if weight.isdigit():
        return int(weight)
    return _WEIGHTS.get(weight.lower(), 400)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

@lru_cache(maxsize=256)
def _load_font(font_path: str, size: float, weight: int) -> ImageFont.FreeTypeFont:
    """Load a font file at *size*, selecting *weight* on variable fonts.

    Static fonts ignore *weight*.
    """
    font = ImageFont.truetype(font_path, size)
    try:
        axes = font.get_variation_axes()
    except (OSError, NotImplementedError):
        return font

    for idx, axis in enumerate(axes):
        # Pillow may return axis names as bytes
        axis_name = axis.get("name", b"")
        if isinstance(axis_name, bytes):
            axis_name = axis_name.decode("utf-8", errors="ignore")
        if axis_name.lower() == "weight":
            lo = axis.get("minimum", 100)
            hi = axis.get("maximum", 900)
            values = [float(a.get("default", a.get("minimum", 0))) for a in axes]
            values[idx] = float(max(lo, min(hi, weight)))
            font.set_variation_by_axes(values)
            break
    return font


@lru_cache(maxsize=64)
def _default_font(size: float) -> FontFace:
    return ImageFont.load_default(size)


def read_family_name(font_path: str) -> str:
    """Return the family name stored in the font's ``name`` table."""
    try:
        with TTFont(font_path, lazy=True) as tt:
            family = tt["name"].getBestFamilyName()
    except (OSError, TTLibError, KeyError) as exc:
        raise AssetLoadError("font", font_path, str(exc)) from exc
    if not family:
        raise AssetLoadError("font", font_path, "no family name")
    return family


class FontRegistry:
    """Family name → font file lookup.

    Families that were never registered (including the generic
    ``system-ui``) resolve to Pillow's bundled scalable font.
    """

    def __init__(self):
        self._paths: dict[str, str] = {}

    def __contains__(self, family: str) -> bool:
        return family in self._paths

    def families(self) -> list[str]:
        return sorted(self._paths)

    def register(self, font_path: str, family: str | None = None) -> str:
        """Register *font_path* under *family* (read from the file if omitted).

        Raises AssetLoadError if the file is not a usable font.
        """
        if family is None:
            family = read_family_name(font_path)
        try:
            ImageFont.truetype(font_path, 12)
        except OSError as exc:
            raise AssetLoadError("font", font_path, str(exc)) from exc
        self._paths[family] = font_path
        log.info(f"Registered font family {family!r} from {font_path}")
        return family

    def get(self, family: str, size: float, weight: str = "normal") -> FontFace:
        path = self._paths.get(family)
        if path is None:
            return _default_font(size)
        return _load_font(path, size, weight_value(weight))

    def from_spec(self, spec: str) -> FontFace:
        parsed = parse_font_spec(spec)
        family = parsed.family if parsed.family in self._paths else parsed.fallback
        return self.get(family, parsed.size, parsed.weight)
