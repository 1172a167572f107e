from __future__ import annotations

"""Bounding boxes for primitives.

Strokes (lines, arcs, unfilled polygons) are bounded by discs of half the
stroke width at every vertex. For a round cap that is exact; for the square
aperture of a rectangular cap the disc bound has the same axis extents, so a
single policy covers both cap shapes.
"""

from typing import Iterable

from .config import EmitConfig
from .errors import ConfigurationError
from .geometry.arcs import arc_points
from .geometry.bounds import BoundingBox, Point, merge_all
from .primitives import Arc, Circle, Line, Polygon, Primitive, Text
from .text import FontRegistry, compile_text


def bounding_box(
    primitive: Primitive,
    fonts: FontRegistry | None = None,
    config: EmitConfig | None = None,
) -> BoundingBox:
    if isinstance(primitive, Circle):
        return BoundingBox.around(primitive.center, primitive.radius)
    if isinstance(primitive, Line):
        half = 0.5 * primitive.width
        return BoundingBox.around(primitive.start, half).merge(
            BoundingBox.around(primitive.end, half)
        )
    if isinstance(primitive, Arc):
        return _arc_box(primitive, config or EmitConfig.from_dict({}))
    if isinstance(primitive, Polygon):
        box = BoundingBox.from_points(primitive.vertices())
        if not primitive.filled:
            box = box.expanded(0.5 * primitive.width)
        return box
    if isinstance(primitive, Text):
        if fonts is None:
            raise ConfigurationError("text bounding box needs a font registry")
        return compile_text(primitive, fonts).bounding_box
    raise TypeError(f"Unsupported primitive: {type(primitive).__name__}")


def _arc_box(arc: Arc, config: EmitConfig) -> BoundingBox:
    half = 0.5 * arc.width
    if arc.is_full_circle:
        rx, ry = arc.semi_axes
        return BoundingBox(
            Point(arc.center.x - rx, arc.center.y - ry),
            Point(arc.center.x + rx, arc.center.y + ry),
        ).expanded(half)
    tolerance = arc.tolerance or config.arc_tolerance_mm
    points = arc_points(
        (arc.center.x, arc.center.y),
        arc.radius,
        arc.start_angle,
        arc.sweep,
        tolerance,
        x_scale=arc.x_scale,
        y_scale=arc.y_scale,
    )
    ends = [tuple(arc.start), tuple(arc.end)]
    return BoundingBox.from_points(points.tolist() + ends).expanded(half)


def bounding_box_of(
    primitives: Iterable[Primitive],
    fonts: FontRegistry | None = None,
    config: EmitConfig | None = None,
) -> BoundingBox:
    return merge_all(bounding_box(p, fonts, config) for p in primitives)

