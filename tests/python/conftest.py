from __future__ import annotations

import pytest

from gerberforge.text import Contour, Font, FontRegistry, Glyph


def _box(x0: float, y0: float, x1: float, y1: float, dark: bool = True) -> Contour:
    return Contour(points=((x0, y0), (x1, y0), (x1, y1), (x0, y1)), dark=dark)


def make_block_font(name: str = "blocky") -> Font:
    # Every digit advances half an em; ascent + descent = 1 em.
    glyphs = {
        "0": Glyph(0.5, (_box(0.05, 0.0, 0.45, 0.7), _box(0.15, 0.1, 0.35, 0.6, dark=False))),
        "1": Glyph(0.5, (_box(0.2, 0.0, 0.3, 0.7),)),
        "2": Glyph(0.5, (Contour(((0.05, 0.0), (0.45, 0.0), (0.45, 0.7))),)),
        "g": Glyph(0.5, (_box(0.1, -0.2, 0.4, 0.5),)),
        " ": Glyph(0.25),
    }
    return Font(name=name, glyphs=glyphs, ascent=0.8, descent=0.2)


@pytest.fixture
def block_font() -> Font:
    return make_block_font()


@pytest.fixture
def fonts(block_font: Font) -> FontRegistry:
    return FontRegistry([block_font])
