"""
Pillow-backed drawing surface with canvas-style state.

The surface carries a current font, fill style, text baseline, global alpha
and composite operation. Callers set the font immediately before every
measure or draw call; nothing else should rely on it persisting.
"""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from PIL import Image, ImageChops, ImageColor, ImageDraw

from .constants import GENERIC_FAMILY
from .fonts import FontFace, FontRegistry, font_spec

log = logging.getLogger(__name__)

# (text, font_spec) -> advance width in pixels
Measurer = Callable[[str, str], float]

_BASELINE_ANCHORS = {
    "top": "la",
    "hanging": "la",
    "middle": "lm",
    "alphabetic": "ls",
    "ideographic": "ld",
    "bottom": "ld",
}

_STATE_ATTRS = ("font", "fill_style", "text_baseline", "global_alpha", "composite_operation")


class RenderSurface:
    """A render target: an RGBA image plus its drawing state."""

    def __init__(
        self,
        image: Image.Image,
        fonts: FontRegistry | None = None,
        *,
        measurer: Measurer | None = None,
    ):
        self.image = image if image.mode == "RGBA" else image.convert("RGBA")
        self.fonts = fonts or FontRegistry()
        self._measurer = measurer
        self._stack: list[dict] = []
        self._face: FontFace | None = None
        self._font = font_spec("normal", 10, GENERIC_FAMILY)
        self.fill_style = "#000000"
        self.text_baseline = "alphabetic"
        self.global_alpha = 1.0
        self.composite_operation = "source-over"

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        fonts: FontRegistry | None = None,
        *,
        measurer: Measurer | None = None,
    ) -> "RenderSurface":
        image = Image.new("RGBA", (max(0, int(width)), max(0, int(height))), (0, 0, 0, 0))
        return cls(image, fonts, measurer=measurer)

    # --- Geometry ---------------------------------------------------------

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def resize(self, width: int, height: int) -> None:
        """Replace the raster with a cleared one of the new size."""
        self.image = Image.new("RGBA", (max(0, int(width)), max(0, int(height))), (0, 0, 0, 0))

    # --- State ------------------------------------------------------------

    @property
    def font(self) -> str:
        return self._font

    @font.setter
    def font(self, spec: str) -> None:
        self._font = spec
        self._face = None

    def _current_face(self) -> FontFace:
        if self._face is None:
            self._face = self.fonts.from_spec(self._font)
        return self._face

    def save(self) -> None:
        self._stack.append({name: getattr(self, name) for name in _STATE_ATTRS})

    def restore(self) -> None:
        if not self._stack:
            return
        for name, value in self._stack.pop().items():
            setattr(self, name, value)

    @contextmanager
    def saved(self) -> Iterator["RenderSurface"]:
        self.save()
        try:
            yield self
        finally:
            self.restore()

    # --- Measuring --------------------------------------------------------

    def measure_text(self, text: str) -> float:
        """Advance width of *text* in the current font."""
        if not text:
            return 0.0
        if self._measurer is not None:
            return float(self._measurer(text, self._font))
        draw = ImageDraw.Draw(self.image)
        return float(draw.textlength(text, font=self._current_face()))

    # --- Drawing ----------------------------------------------------------

    def _ink(self) -> tuple[tuple[int, int, int], float]:
        color = ImageColor.getrgb(self.fill_style)
        alpha = color[3] / 255.0 if len(color) == 4 else 1.0
        return color[:3], max(0.0, min(1.0, alpha * self.global_alpha))

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        rgb, alpha = self._ink()
        x0, y0 = max(0, round(x)), max(0, round(y))
        x1, y1 = min(self.width, round(x + w)), min(self.height, round(y + h))
        if x1 <= x0 or y1 <= y0 or alpha <= 0:
            return
        layer = Image.new("RGBA", (x1 - x0, y1 - y0), rgb + (round(255 * alpha),))
        self._composite(layer, (x0, y0))

    def fill_text(self, text: str, x: float, y: float) -> None:
        if not text:
            return
        rgb, alpha = self._ink()
        if alpha <= 0:
            return
        face = self._current_face()
        anchor = _BASELINE_ANCHORS.get(self.text_baseline, "ls")
        # Mask covers the text box only, clipped to the raster
        bx0, by0, bx1, by1 = ImageDraw.Draw(self.image).textbbox((x, y), text, font=face, anchor=anchor)
        x0, y0 = max(0, math.floor(bx0) - 1), max(0, math.floor(by0) - 1)
        x1, y1 = min(self.width, math.ceil(bx1) + 1), min(self.height, math.ceil(by1) + 1)
        if x1 <= x0 or y1 <= y0:
            return
        mask = Image.new("L", (x1 - x0, y1 - y0), 0)
        ImageDraw.Draw(mask).text((x - x0, y - y0), text, fill=255, font=face, anchor=anchor)
        bbox = mask.getbbox()
        if bbox is None:
            return
        mask = mask.crop(bbox)
        if alpha < 1.0:
            mask = mask.point(lambda v: round(v * alpha))
        layer = Image.new("RGBA", mask.size, rgb + (0,))
        layer.putalpha(mask)
        self._composite(layer, (x0 + bbox[0], y0 + bbox[1]))

    def draw_image(self, image: Image.Image, x: float, y: float, w: float, h: float) -> None:
        """Draw *image* stretched into the box (x, y, w, h)."""
        size = (round(w), round(h))
        if size[0] <= 0 or size[1] <= 0:
            return
        src = image.convert("RGBA").resize(size, Image.LANCZOS)
        if self.global_alpha < 1.0:
            alpha = self.global_alpha
            src.putalpha(src.getchannel("A").point(lambda v: round(v * alpha)))
        layer = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        layer.paste(src, (round(x), round(y)))
        self._composite(layer, (0, 0))

    def _composite(self, layer: Image.Image, dest: tuple[int, int]) -> None:
        if self.composite_operation == "multiply":
            box = (dest[0], dest[1], dest[0] + layer.width, dest[1] + layer.height)
            region = self.image.crop(box)
            base = region.convert("RGB")
            product = ImageChops.multiply(base, layer.convert("RGB"))
            mixed = Image.composite(product, base, layer.getchannel("A")).convert("RGBA")
            mixed.putalpha(region.getchannel("A"))
            self.image.paste(mixed, dest)
            return
        if self.composite_operation != "source-over":
            log.debug(f"Unsupported composite operation {self.composite_operation!r}, using source-over")
        self.image.alpha_composite(layer, dest=dest)

    # --- Output -----------------------------------------------------------

    def to_png(self, path: str | Path) -> str:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.image.save(path, format="PNG")
        return str(path)


def measure(surface: RenderSurface, text: str, spec: str) -> float:
    """Set *spec* as the surface font, then measure *text*."""
    surface.font = spec
    return surface.measure_text(text)
