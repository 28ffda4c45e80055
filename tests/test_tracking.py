from __future__ import annotations

import pytest

from coverforge.fonts import font_spec
from coverforge.surface import RenderSurface, measure
from coverforge.tracking import draw_tracked, measure_tracked, tracked_glyphs


@pytest.fixture
def surface(fonts, measurer):
    s = RenderSurface.blank(400, 200, fonts, measurer=measurer)
    s.font = font_spec("900", 20, "Test Block")
    return s


def test_measure_sets_font_before_measuring(surface):
    assert measure(surface, "abcd", font_spec("normal", 50, "Test Block")) == 100
    assert surface.font == font_spec("normal", 50, "Test Block")


def test_empty_text_measures_zero(surface):
    assert surface.measure_text("") == 0
    assert measure_tracked(surface, "", -3) == 0


def test_zero_tracking_is_plain_measurement(surface):
    for text in ("Perl", "a", "Learning Perl"):
        assert measure_tracked(surface, text, 0) == surface.measure_text(text)


def test_tracking_adds_one_correction_per_gap(surface):
    # 5 glyphs at 10px, 4 gaps
    assert measure_tracked(surface, "HELLO", 3) == 50 + 12
    assert measure_tracked(surface, "HELLO", -2) == 50 - 8
    assert measure_tracked(surface, "H", -2) == 10


def test_tracked_width_non_decreasing_in_letter(surface):
    widths = [measure_tracked(surface, "Cover", letter) for letter in (-4, -2, -0.5, 0, 0.5, 2, 4)]
    assert widths == sorted(widths)


def test_tracked_glyphs_advance_by_glyph_width_plus_letter(surface):
    assert list(tracked_glyphs(surface, "ABC", 5, -2)) == [("A", 5), ("B", 13), ("C", 21)]


def test_draw_tracked_draws_each_glyph(surface, monkeypatch):
    calls = []
    monkeypatch.setattr(surface, "fill_text", lambda text, x, y: calls.append((text, x, y)))

    draw_tracked(surface, "AB", 0, 7, 4)
    assert calls == [("A", 0, 7), ("B", 14, 7)]

    calls.clear()
    draw_tracked(surface, "AB", 0, 7, 0)
    assert calls == [("AB", 0, 7)]


def test_draw_tracked_puts_ink_on_surface(fonts):
    surface = RenderSurface.blank(300, 100, fonts)
    surface.font = font_spec("900", 40, "Test Block")
    surface.fill_style = "#ffffff"
    surface.text_baseline = "top"
    draw_tracked(surface, "ABC", 10, 10, -2)
    assert surface.image.getbbox() is not None
