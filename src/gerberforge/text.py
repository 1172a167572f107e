from __future__ import annotations

"""Glyph-to-polygon text compiler and the font registry it reads from.

Fonts are described in em units: one em is ``size_pt * scale * 25.4 / 72``
millimetres. Glyph contours are given relative to the pen position on the
baseline. A font is only visible to the compiler once it has been registered
on a ``FontRegistry``; there is no implicit global font table.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .errors import GeometryError, GlyphLookupError
from .geometry.bounds import BoundingBox, Point
from .primitives import Anchor, Polygon, Text

logger = logging.getLogger(__name__)

MM_PER_PT = 25.4 / 72.0


@dataclass(frozen=True)
class Contour:
    points: tuple[tuple[float, float], ...]
    dark: bool = True

    def __post_init__(self) -> None:
        if len(self.points) < 3:
            raise GeometryError(f"glyph contour needs at least 3 points, got {len(self.points)}")


@dataclass(frozen=True)
class Glyph:
    advance: float
    contours: tuple[Contour, ...] = ()


@dataclass
class Font:
    name: str
    glyphs: dict[str, Glyph]
    ascent: float = 0.8
    descent: float = 0.2

    @property
    def line_height(self) -> float:
        return self.ascent + self.descent

    def glyph(self, char: str) -> Glyph:
        glyph = self.glyphs.get(char)
        if glyph is None:
            raise GlyphLookupError(f"Font {self.name!r} has no glyph for {char!r}")
        return glyph

    @staticmethod
    def from_json(path: Path) -> "Font":
        data = json.loads(path.read_text(encoding="utf-8"))
        return Font.from_dict(data)

    @staticmethod
    def from_dict(data: dict) -> "Font":
        name = str(data["name"])
        ascent = float(data.get("ascent", 0.8))
        descent = float(data.get("descent", 0.2))
        glyphs: dict[str, Glyph] = {}
        for char, entry in data.get("glyphs", {}).items():
            try:
                contours = tuple(_parse_contour(c) for c in entry.get("contours", []))
            except GeometryError as exc:
                raise GeometryError(f"Font {name!r}, glyph {char!r}: {exc}") from exc
            glyphs[char] = Glyph(advance=float(entry["advance"]), contours=contours)
        return Font(name=name, glyphs=glyphs, ascent=ascent, descent=descent)


def _parse_contour(value) -> Contour:
    if isinstance(value, dict):
        points = value.get("points", [])
        dark = bool(value.get("dark", True))
    else:
        points = value
        dark = True
    return Contour(points=tuple((float(x), float(y)) for x, y in points), dark=dark)


class FontRegistry:
    def __init__(self, fonts: Iterable[Font] = ()) -> None:
        self._fonts: dict[str, Font] = {}
        for font in fonts:
            self.register(font)

    def register(self, font: Font) -> Font:
        self._fonts[font.name] = font
        logger.debug("Registered font %s (%s glyphs)", font.name, len(font.glyphs))
        return font

    def load(self, path: Path) -> Font:
        return self.register(Font.from_json(path))

    def get(self, name: str) -> Font:
        font = self._fonts.get(name)
        if font is None:
            raise GlyphLookupError(f"Unknown font: {name!r}")
        return font

    def names(self) -> list[str]:
        return sorted(self._fonts)

    def __contains__(self, name: str) -> bool:
        return name in self._fonts


@dataclass
class TextLayout:
    polygons: list[Polygon]
    width: float
    height: float
    bounding_box: BoundingBox = field(default_factory=BoundingBox.empty)


def layout_text(
    message: str,
    font: Font,
    size_pt: float,
    scale: float = 1.0,
    anchor: Anchor = Anchor.BOTTOM_LEFT,
    origin: Point = Point(0.0, 0.0),
) -> TextLayout:
    em = size_pt * scale * MM_PER_PT
    lines = message.split("\n")
    line_height = font.line_height * em

    # Resolve every glyph first so a missing one produces no output at all.
    resolved = [[font.glyph(ch) for ch in line] for line in lines]

    width = max(sum(g.advance for g in line) for line in resolved) * em
    height = len(lines) * line_height
    dx, dy = anchor.offset(width, height)
    dx += origin.x
    dy += origin.y

    polygons: list[Polygon] = []
    for row, glyphs in enumerate(resolved):
        # The last line's descender rests on the bottom of the layout frame.
        baseline = height - font.ascent * em - row * line_height
        pen_x = 0.0
        for glyph in glyphs:
            for contour in glyph.contours:
                points = [(pen_x + x * em, baseline + y * em) for x, y in contour.points]
                polygons.append(
                    Polygon(origin=(dx, dy), points=points, filled=True, dark=contour.dark)
                )
            pen_x += glyph.advance * em

    box = BoundingBox(Point(dx, dy), Point(dx + width, dy + height))
    return TextLayout(polygons=polygons, width=width, height=height, bounding_box=box)


def compile_text(text: Text, fonts: FontRegistry) -> TextLayout:
    font = fonts.get(text.font)
    return layout_text(
        text.message,
        font,
        text.size_pt,
        scale=text.scale,
        anchor=text.anchor,
        origin=text.origin,
    )
