"""
Render state and the native-resolution scale model.

Layout constants are authored in native units (pixels of the loaded
background image). ``RenderState.scale`` converts them to the pixels of
whichever render target is active.
"""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from PIL import Image

from .constants import (
    BODY_PADDING,
    CONTROL_PANEL_WIDTH,
    DEFAULT_BODY_FAMILY,
    DEFAULT_TITLE_FAMILY,
    FALLBACK_NATIVE_HEIGHT,
    FALLBACK_NATIVE_WIDTH,
    MIN_DISPLAY_HEIGHT,
    MIN_DISPLAY_WIDTH,
    PANEL_GAP,
    SAFETY_MARGIN,
)

log = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass
class RenderState:
    background: Image.Image | None = None
    logo: Image.Image | None = None
    title_family: str = DEFAULT_TITLE_FAMILY
    body_family: str = DEFAULT_BODY_FAMILY
    native_width: int = 0
    native_height: int = 0
    scale: float = 1.0

    @property
    def initialized(self) -> bool:
        return self.native_width > 0 and self.native_height > 0

    def load_background(self, image: Image.Image) -> None:
        """Adopt *image* as the background and take its size as native."""
        self.background = image
        self.native_width, self.native_height = image.size
        log.info(f"Native resolution set to: {self.native_width}x{self.native_height}")

    def background_failed(self) -> None:
        """Initialize with the fallback native size so rendering can proceed."""
        self.background = None
        self.native_width = FALLBACK_NATIVE_WIDTH
        self.native_height = FALLBACK_NATIVE_HEIGHT
        log.warning(f"Using fallback native resolution {self.native_width}x{self.native_height}")

    def fit_viewport(self, viewport_width: int, viewport_height: int) -> tuple[int, int] | None:
        """Size the display canvas for a viewport and update ``scale``.

        The control panel, body padding and a safety margin are reserved;
        the native aspect ratio is kept. Returns the display (width, height),
        or None before a native resolution exists.
        """
        if not self.initialized:
            return None

        available_w = viewport_width - CONTROL_PANEL_WIDTH - BODY_PADDING - PANEL_GAP
        available_h = viewport_height - BODY_PADDING
        max_w = max(MIN_DISPLAY_WIDTH, available_w - SAFETY_MARGIN)
        max_h = max(MIN_DISPLAY_HEIGHT, available_h - SAFETY_MARGIN)

        scale_by_width = max_w / self.native_width
        scale_by_height = max_h / self.native_height
        final_scale = min(scale_by_width, scale_by_height)

        display_w = round_half_up(self.native_width * final_scale)
        display_h = round_half_up(self.native_height * final_scale)
        self.scale = display_w / self.native_width

        log.debug(
            f"Canvas sizing: native {self.native_width}x{self.native_height}, "
            f"display {display_w}x{display_h}, scale {self.scale:.3f} "
            f"(by width {scale_by_width:.3f}, by height {scale_by_height:.3f}), "
            f"viewport {viewport_width}x{viewport_height}"
        )
        return display_w, display_h

    @contextmanager
    def scale_override(self, value: float = 1.0) -> Iterator["RenderState"]:
        """Force ``scale`` to *value* for the block, restoring it afterwards."""
        previous = self.scale
        self.scale = value
        try:
            yield self
        finally:
            self.scale = previous
