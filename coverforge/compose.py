"""
Cover layout compositor.

One ``compose()`` call paints a complete cover onto a render target: tint
fill, multiplied background photo, tint wash, the title, subtitle and author
blocks, and the logo. Every layout constant is in native units and is
multiplied by ``state.scale``, so the live display surface and a full
native-resolution surface get the same proportions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from PIL import ImageColor

from . import constants as C
from .color import color_luminance
from .fit import fit_text
from .fonts import font_spec
from .presets import Fields
from .scale import RenderState, round_half_up
from .surface import RenderSurface
from .tracking import draw_tracked

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedBlock:
    """A text block as drawn: origin in target pixels, font size and width."""

    name: str
    text: str
    x: float
    y: float
    size: float
    width: float


@dataclass
class Composition:
    width: int
    height: int
    scale: float
    blocks: list[PlacedBlock] = field(default_factory=list)
    logo_box: tuple[float, float, float, float] | None = None

    def block(self, name: str) -> PlacedBlock | None:
        for placed in self.blocks:
            if placed.name == name:
                return placed
        return None


def _resolve_tint(tint: str) -> str:
    try:
        ImageColor.getrgb(tint)
    except ValueError:
        log.warning(f"Invalid tint {tint!r}, using {Fields.tint}")
        return Fields.tint
    return tint


# ---------------------------------------------------------------------------
# Background layers
# ---------------------------------------------------------------------------

def _paint_background(surface: RenderSurface, state: RenderState, tint: str) -> None:
    W, H = surface.width, surface.height

    surface.fill_style = tint
    surface.fill_rect(0, 0, W, H)

    if state.background is not None:
        log.debug(f"Drawing image with opacity {C.IMAGE_OPACITY}, blend {C.IMAGE_BLEND}")
        surface.global_alpha = C.IMAGE_OPACITY
        surface.composite_operation = C.IMAGE_BLEND
        surface.draw_image(state.background, 0, 0, W, H)
        surface.global_alpha = 1.0
        surface.composite_operation = "source-over"

    # Translucent wash over the photo
    surface.global_alpha = C.TINT_STRENGTH
    surface.fill_style = tint
    surface.fill_rect(0, 0, W, H)
    surface.global_alpha = 1.0


# ---------------------------------------------------------------------------
# Compositor
# ---------------------------------------------------------------------------

def compose(surface: RenderSurface, state: RenderState, fields: Fields) -> Composition | None:
    """Paint the cover described by *state* and *fields* onto *surface*.

    Returns the placement of everything drawn, or None (logged, nothing
    painted) when the target, native size or scale is not positive.
    """
    W, H = surface.width, surface.height
    native_w, native_h = state.native_width, state.native_height
    scale = state.scale

    if W <= 0 or H <= 0 or native_w <= 0 or native_h <= 0 or scale <= 0:
        log.warning(
            f"Invalid dimensions: target {W}x{H}, native {native_w}x{native_h}, scale {scale}"
        )
        return None

    log.debug(f"Rendering at scale {scale:.3f}, target {W}x{H}, native {native_w}x{native_h}")
    result = Composition(width=W, height=H, scale=scale)

    with surface.saved():
        _paint_background(surface, state, _resolve_tint(fields.tint))

        # ------------------------------------------------------------------
        # Column geometry
        # ------------------------------------------------------------------
        native_pad = round_half_up(native_w * C.PAD_RATIO)
        pad = native_pad * scale
        col_x = pad
        col_w = (native_w - native_pad * 2) * scale

        title_max = C.TITLE_MAX_SIZE * scale
        track = C.TITLE_TRACKING * scale
        title_family = state.title_family
        body_family = state.body_family

        y = pad + C.TITLE_TOP_OFFSET * scale
        surface.fill_style = C.INK

        # ------------------------------------------------------------------
        # Title line 1
        # ------------------------------------------------------------------
        title1 = fields.title1.strip()
        if title1:
            f1 = fit_text(
                surface, title1, col_w, title_max, C.FIT_MIN_SIZE * scale,
                family=title_family, weight=C.TITLE_WEIGHT, letter=track,
            )
            surface.font = font_spec(C.TITLE_WEIGHT, f1.size, title_family)
            surface.text_baseline = "top"
            draw_tracked(surface, title1, col_x, y, track)
            result.blocks.append(PlacedBlock("title1", title1, col_x, y, f1.size, f1.width))
            y += f1.size * C.TITLE1_LINE_FACTOR + C.TITLE1_GAP * scale

        # ------------------------------------------------------------------
        # Title line 2: grows up to 3x the line-1 cap, never below it
        # ------------------------------------------------------------------
        title2 = fields.title2.strip()
        if title2:
            f2 = fit_text(
                surface, title2, col_w, round_half_up(title_max * C.TITLE2_GROWTH), title_max,
                family=title_family, weight=C.TITLE_WEIGHT, letter=track,
            )
            surface.font = font_spec(C.TITLE_WEIGHT, f2.size, title_family)
            surface.text_baseline = "top"
            draw_tracked(surface, title2, col_x, y, track)
            result.blocks.append(PlacedBlock("title2", title2, col_x, y, f2.size, f2.width))
            y += f2.size * C.TITLE2_LINE_FACTOR + C.TITLE2_GAP * scale

        # ------------------------------------------------------------------
        # Subtitle
        # ------------------------------------------------------------------
        subtitle = fields.subtitle.strip()
        if subtitle:
            fs = fit_text(
                surface, subtitle, col_w,
                C.SUBTITLE_MAX_SIZE * scale, C.SUBTITLE_MIN_SIZE * scale,
                family=body_family, weight="normal", letter=0,
            )
            surface.font = font_spec("normal", fs.size, body_family)
            surface.fill_style = color_luminance(C.INK, C.SUBTITLE_LUMINANCE)
            surface.text_baseline = "alphabetic"
            y += C.SUBTITLE_GAP_BEFORE * scale
            surface.fill_text(subtitle, col_x, y)
            result.blocks.append(PlacedBlock("subtitle", subtitle, col_x, y, fs.size, fs.width))
            y += fs.size + C.SUBTITLE_GAP_AFTER * scale

        # ------------------------------------------------------------------
        # Author: fixed size, right-justified halfway down
        # ------------------------------------------------------------------
        author = fields.author.strip()
        if author:
            author_size = C.AUTHOR_SIZE * scale
            surface.font = font_spec("normal", author_size, body_family)
            surface.fill_style = C.INK
            surface.text_baseline = "alphabetic"
            text_w = surface.measure_text(author)
            ax = W - pad - text_w
            ay = H / 2
            surface.fill_text(author, ax, ay)
            result.blocks.append(PlacedBlock("author", author, ax, ay, author_size, text_w))

        # ------------------------------------------------------------------
        # Logo: bottom-right, natural size
        # ------------------------------------------------------------------
        if state.logo is not None:
            margin = C.LOGO_MARGIN * scale
            lw = state.logo.width * C.LOGO_SCALE * scale
            lh = state.logo.height * C.LOGO_SCALE * scale
            lx = W - margin - lw
            ly = H - margin - lh
            surface.draw_image(state.logo, lx, ly, lw, lh)
            result.logo_box = (lx, ly, lw, lh)

    return result
