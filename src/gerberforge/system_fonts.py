from __future__ import annotations

"""Load installed outline fonts (TrueType/OpenType) as ``Font`` objects.

Outlines come from matplotlib's ``TextPath`` and metrics from the FreeType
face matplotlib resolves for the family, so any font matplotlib can find is
usable: its bundled DejaVu families, system fonts such as FreeSerif, or an
explicit font file.

Glyph coordinates are normalised to em units. Contour polarity is taken from
nesting depth rather than winding direction, since TrueType and CFF outlines
wind their holes in opposite directions: a contour inside an odd number of
other contours is a counter and is emitted clear.
"""

import logging
from pathlib import Path

import numpy as np
from matplotlib.font_manager import FontProperties, findfont, get_font
from matplotlib.textpath import TextPath
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon

from .errors import GlyphLookupError
from .text import Contour, Font, FontRegistry, Glyph

logger = logging.getLogger(__name__)

# Outlines are extracted at this size and scaled down, so matplotlib's curve
# flattening works at a fine resolution relative to the em.
EM_POINTS = 100.0
DEFAULT_CHARSET = "".join(chr(code) for code in range(0x20, 0x7F))


def font_properties(family: str | None = None, path: Path | None = None) -> FontProperties:
    if path is not None:
        return FontProperties(fname=str(path))
    return FontProperties(family=family)


def load_system_font(
    family: str | None = None,
    path: Path | None = None,
    chars: str | None = None,
    name: str | None = None,
) -> Font:
    """Build a ``Font`` from an installed family or a font file.

    ``name`` is the registry key; it defaults to the lower-cased family name
    (or the file stem). Characters the face has no glyph for are skipped, so
    looking them up later raises ``GlyphLookupError``.
    """
    if family is None and path is None:
        raise ValueError("load_system_font needs a family or a path")
    prop = font_properties(family, path)
    try:
        font_file = path if path is not None else findfont(prop, fallback_to_default=False)
    except ValueError as exc:
        raise GlyphLookupError(f"Font family not installed: {family!r}") from exc
    face = get_font(str(font_file))
    face.set_size(EM_POINTS, 72)

    glyphs: dict[str, Glyph] = {}
    for char in chars if chars is not None else DEFAULT_CHARSET:
        if char != " " and face.get_char_index(ord(char)) == 0:
            continue
        # linearHoriAdvance is the unhinted advance in 16.16 fixed point pixels.
        advance = face.load_char(ord(char)).linearHoriAdvance / 65536.0 / EM_POINTS
        glyphs[char] = Glyph(advance=advance, contours=_glyph_contours(char, prop))

    units = float(face.units_per_EM)
    key = name or (family.lower() if family is not None else Path(path).stem.lower())
    font = Font(
        name=key,
        glyphs=glyphs,
        ascent=face.ascender / units,
        descent=-face.descender / units,
    )
    logger.info("Loaded font %s from %s (%s glyphs)", key, font_file, len(glyphs))
    return font


def register_system_font(registry: FontRegistry, family: str | None = None, **kwargs) -> Font:
    return registry.register(load_system_font(family, **kwargs))


def _glyph_contours(char: str, prop: FontProperties) -> tuple[Contour, ...]:
    if char.isspace():
        return ()
    path = TextPath((0, 0), char, size=EM_POINTS, prop=prop)
    if len(path.vertices) == 0:
        return ()
    loops = []
    for loop in path.to_polygons(closed_only=True):
        loop = np.asarray(loop, dtype=np.float64) / EM_POINTS
        if len(loop) > 1 and np.allclose(loop[0], loop[-1]):
            loop = loop[:-1]
        if len(loop) >= 3:
            loops.append(loop)
    return _with_polarity(loops)


def _with_polarity(loops: list[np.ndarray]) -> tuple[Contour, ...]:
    rings = [ShapelyPolygon(loop) for loop in loops]
    depths = []
    for index, loop in enumerate(loops):
        vertex = ShapelyPoint(loop[0])
        depths.append(
            sum(1 for other, ring in enumerate(rings) if other != index and ring.contains(vertex))
        )
    # Outer contours first, so a counter clears only ink already drawn.
    order = sorted(range(len(loops)), key=lambda i: depths[i])
    return tuple(
        Contour(
            points=tuple((float(x), float(y)) for x, y in loops[i]),
            dark=depths[i] % 2 == 0,
        )
        for i in order
    )
