from __future__ import annotations

import pytest

from coverforge.fit import fit_text
from coverforge.fonts import font_spec
from coverforge.surface import RenderSurface


@pytest.fixture
def surface(fonts, measurer):
    return RenderSurface.blank(100, 100, fonts, measurer=measurer)


def test_text_that_fits_keeps_max_size(surface):
    result = fit_text(surface, "Perl", 1000, 260, family="Test Block")
    assert result.size == 260
    assert result.width == 4 * 130
    assert surface.font == font_spec("900", 260, "Test Block")


def test_shrinks_in_steps_of_two(surface):
    # 10 glyphs at size/2 each must fit in 500px -> size 100
    result = fit_text(surface, "0123456789", 500, 131, family="Test Block", weight="normal")
    assert result.size == 99
    assert result.width <= 500
    assert surface.font == font_spec("normal", 99, "Test Block")


def test_tracking_counts_toward_fit(surface):
    plain = fit_text(surface, "0123456789", 500, 200, family="Test Block")
    tight = fit_text(surface, "0123456789", 500, 200, family="Test Block", letter=-4)
    assert tight.size > plain.size


def test_overflow_at_floor_is_reported(surface):
    result = fit_text(surface, "Supercalifragilistic", 100, 260, 40, family="Test Block")
    assert result.size == 40
    assert result.width > 100
    assert result.overflows(100)


def test_never_goes_below_min_size(surface):
    result = fit_text(surface, "Supercalifragilistic", 10, 130, 41, family="Test Block")
    assert result.size == 41


def test_never_exceeds_max_size(surface):
    result = fit_text(surface, "A", 10_000, 50, 24, family="Test Block")
    assert result.size == 50


def test_default_min_size_is_24(surface):
    assert fit_text(surface, "Supercalifragilistic", 1, 100, family="Test Block").size == 24
