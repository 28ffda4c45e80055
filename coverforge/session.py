"""
Editing session: owns the render state, field values and live surface.

Asset loading reports back through the ``*_ready`` / ``*_failed`` event
methods; each event triggers a fresh full render of the live surface.
Compose passes never run while state is being mutated.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from . import assets
from .compose import Composition, compose
from .constants import (
    DEFAULT_BODY_FAMILY,
    DEFAULT_TITLE_FAMILY,
    FALLBACK_NATIVE_HEIGHT,
    FALLBACK_NATIVE_WIDTH,
    GENERIC_FAMILY,
)
from .errors import AssetLoadError, InvalidPresetError
from .fonts import FontRegistry
from .presets import Fields, load_preset, save_preset
from .scale import RenderState
from .surface import Measurer, RenderSurface

log = logging.getLogger(__name__)


class CoverSession:
    def __init__(
        self,
        fonts: FontRegistry | None = None,
        fields: Fields | None = None,
        *,
        measurer: Measurer | None = None,
    ):
        self.fonts = fonts or FontRegistry()
        self.fields = fields or Fields()
        self.state = RenderState()
        self._measurer = measurer
        self._viewport: tuple[int, int] | None = None
        # Placeholder size until a native resolution is known
        self.live = RenderSurface.blank(
            FALLBACK_NATIVE_WIDTH, FALLBACK_NATIVE_HEIGHT, self.fonts, measurer=measurer,
        )
        self.last_composition: Composition | None = None

    # ------------------------------------------------------------------
    # Asset events
    # ------------------------------------------------------------------

    def background_ready(self, image: Image.Image) -> None:
        self.state.load_background(image)
        self._size_live()
        self.render()

    def background_failed(self, error: Exception) -> None:
        log.error(f"Failed to load background image: {error}")
        self.state.background_failed()
        self._size_live()
        self.render()

    def logo_ready(self, image: Image.Image) -> None:
        self.state.logo = image
        if self.state.initialized:
            self.render()

    def logo_failed(self, error: Exception) -> None:
        log.warning(f"Failed to load logo, continuing without it: {error}")
        self.state.logo = None

    def fonts_ready(self, title_family: str, body_family: str) -> None:
        self.state.title_family = title_family
        self.state.body_family = body_family
        if self.state.initialized:
            self.render()

    def fonts_failed(self, error: Exception) -> None:
        log.warning(f"Font loading failed, using fallback fonts: {error}")
        self.state.title_family = GENERIC_FAMILY
        self.state.body_family = GENERIC_FAMILY
        if self.state.initialized:
            self.render()

    # ------------------------------------------------------------------
    # Loading from files
    # ------------------------------------------------------------------

    def load_fonts(
        self,
        title_path: str,
        body_path: str,
        title_family: str | None = DEFAULT_TITLE_FAMILY,
        body_family: str | None = DEFAULT_BODY_FAMILY,
    ) -> None:
        try:
            families = assets.load_fonts(self.fonts, title_path, body_path, title_family, body_family)
        except AssetLoadError as exc:
            self.fonts_failed(exc)
        else:
            log.info(f"Registered font families: {', '.join(self.fonts.families())}")
            self.fonts_ready(*families)

    def load_background(self, path: str) -> None:
        try:
            image = assets.load_background(path)
        except AssetLoadError as exc:
            self.background_failed(exc)
        else:
            self.background_ready(image)

    def load_logo(self, path: str) -> None:
        try:
            image = assets.load_logo(path)
        except AssetLoadError as exc:
            self.logo_failed(exc)
        else:
            self.logo_ready(image)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def _size_live(self) -> None:
        """Size the live surface for the current viewport (native size if none)."""
        if self._viewport is not None:
            dims = self.state.fit_viewport(*self._viewport)
            if dims is not None:
                self.live.resize(*dims)
                return
        self.state.scale = 1.0
        self.live.resize(self.state.native_width, self.state.native_height)

    def resize(self, viewport_width: int, viewport_height: int) -> None:
        """Window resize: refit the live surface and re-render."""
        self._viewport = (viewport_width, viewport_height)
        if self.state.background is not None:
            self._size_live()
            self.render()

    def set_field(self, name: str, value: str) -> None:
        self.fields = self.fields.merged({name: value})
        self.render()

    def render(self) -> Composition | None:
        self.last_composition = compose(self.live, self.state, self.fields)
        return self.last_composition

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_native(self) -> Image.Image | None:
        """Compose onto a fresh native-resolution surface at scale 1.

        The live scale is restored afterwards even if composing fails.
        """
        if not self.state.initialized:
            log.warning("No native resolution available for export")
            return None

        target = RenderSurface.blank(
            self.state.native_width, self.state.native_height, self.fonts, measurer=self._measurer,
        )
        with self.state.scale_override(1.0):
            composition = compose(target, self.state, self.fields)
        if composition is None:
            return None
        return target.image

    def export_png(self, path: str | Path) -> str | None:
        image = self.export_native()
        if image is None:
            log.error("Failed to export at native resolution")
            return None
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path, format="PNG")
        log.info(f"Saved cover: {path}")
        return str(path)

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------

    def save_preset(self, path: str | Path) -> str:
        return save_preset(self.fields, path)

    def load_preset(self, path: str | Path) -> None:
        """Apply a preset file; on InvalidPresetError the fields are unchanged."""
        try:
            values = load_preset(path)
        except InvalidPresetError:
            log.error(f"Invalid preset: {path}")
            raise
        self.fields = self.fields.merged(values)
        self.render()
