from __future__ import annotations

import string

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from PIL import Image

from coverforge.fonts import FontRegistry, parse_font_spec
from coverforge.scale import RenderState

BLOCK_FAMILY = "Test Block"
BLOCK_CHARS = string.ascii_letters + string.digits


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((450, 700))
    pen.lineTo((450, 0))
    pen.closePath()
    return pen.glyph()


def build_block_font(path) -> str:
    """Write a TrueType font whose glyphs all advance 0.5 em."""
    names = {ch: f"uni{ord(ch):04X}" for ch in BLOCK_CHARS}
    glyph_order = [".notdef", "space"] + list(names.values())

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    cmap = {ord(ch): name for ch, name in names.items()}
    cmap[ord(" ")] = "space"
    fb.setupCharacterMap(cmap)

    glyphs = {name: _box_glyph() for name in names.values()}
    glyphs[".notdef"] = _box_glyph()
    glyphs["space"] = TTGlyphPen(None).glyph()
    fb.setupGlyf(glyphs)

    metrics = {name: (500, 50) for name in glyph_order}
    metrics["space"] = (500, 0)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": BLOCK_FAMILY, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return str(path)


@pytest.fixture(scope="session")
def block_font_path(tmp_path_factory):
    return build_block_font(tmp_path_factory.mktemp("fonts") / "TestBlock.ttf")


@pytest.fixture
def fonts(block_font_path):
    registry = FontRegistry()
    registry.register(block_font_path)
    return registry


def half_em_measurer(text: str, spec: str) -> float:
    """Every character advances half the font size."""
    return len(text) * parse_font_spec(spec).size * 0.5


@pytest.fixture
def measurer():
    return half_em_measurer


@pytest.fixture
def white_background():
    return Image.new("RGB", (1000, 1600), (255, 255, 255))


@pytest.fixture
def state(white_background):
    s = RenderState(title_family=BLOCK_FAMILY, body_family=BLOCK_FAMILY)
    s.load_background(white_background)
    return s
