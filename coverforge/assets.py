"""
Loading of background, logo and font files.

Loaders raise AssetLoadError; the session turns failures into fallbacks.
"""

from __future__ import annotations

import logging
import os

from PIL import Image

from .errors import AssetLoadError
from .fonts import FontRegistry

log = logging.getLogger(__name__)


def load_image(path: str, kind: str = "image", mode: str = "RGBA") -> Image.Image:
    """Open and decode the image at *path*, converted to *mode*."""
    log.info(f"Attempting to load {kind} from: {path}")
    if not os.path.isfile(path):
        raise AssetLoadError(kind, path, "file not found")
    try:
        with Image.open(path) as img:
            img.load()
            image = img.convert(mode)
    except (OSError, Image.DecompressionBombError) as exc:
        raise AssetLoadError(kind, path, str(exc)) from exc
    log.info(f"{kind.capitalize()} loaded successfully {image.width} x {image.height}")
    return image


def load_background(path: str) -> Image.Image:
    return load_image(path, "background image", mode="RGB")


def load_logo(path: str) -> Image.Image:
    return load_image(path, "logo", mode="RGBA")


def load_fonts(
    registry: FontRegistry,
    title_path: str,
    body_path: str,
    title_family: str | None = None,
    body_family: str | None = None,
) -> tuple[str, str]:
    """Register the title face, then the body face.

    Returns the (title, body) family names. Families default to the name
    stored in each font file.
    """
    title = registry.register(title_path, title_family)
    log.info(f"{title} font loaded for titles")
    body = registry.register(body_path, body_family)
    log.info(f"{body} font loaded for body text")
    return title, body
