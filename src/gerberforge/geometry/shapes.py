from __future__ import annotations

"""Primitive -> shapely geometry, for previews and viewer collaborators."""

import logging

from shapely.geometry import LineString, Point, Polygon
from shapely.ops import unary_union

from ..config import EmitConfig
from ..primitives import Arc, CapShape, Circle, Line
from ..primitives import Polygon as PolygonPrimitive
from ..primitives import Text
from ..text import compile_text
from .arcs import arc_points

logger = logging.getLogger(__name__)

CURVE_RESOLUTION = 16


def _merge_geometries(geometries):
    if not geometries:
        return None
    return unary_union([g for g in geometries if g is not None and not g.is_empty])


class PrimitiveGeometryBuilder:
    def __init__(self, config: EmitConfig, fonts=None, resolution: int = CURVE_RESOLUTION) -> None:
        self._config = config
        self._fonts = fonts
        self._resolution = resolution

    def build(self, primitives):
        # Dark shapes are unioned, clear shapes (glyph counters) subtracted.
        dark = []
        clear = []
        for prim in self._flatten(primitives):
            geom = self._primitive_to_shape(prim)
            if geom is None or geom.is_empty:
                continue
            if isinstance(prim, PolygonPrimitive) and not prim.dark:
                clear.append(geom)
            else:
                dark.append(geom)
        merged = _merge_geometries(dark)
        if merged is not None and clear:
            merged = merged.difference(_merge_geometries(clear))
        return merged

    def _flatten(self, primitives):
        for prim in primitives:
            if isinstance(prim, Text):
                yield from compile_text(prim, self._fonts).polygons
            else:
                yield prim

    def _primitive_to_shape(self, prim):
        if isinstance(prim, Circle):
            return Point(prim.center.x, prim.center.y).buffer(
                prim.radius, resolution=self._resolution
            )
        if isinstance(prim, Line):
            return self._stroke([tuple(prim.start), tuple(prim.end)], prim.width, prim.cap)
        if isinstance(prim, Arc):
            tolerance = prim.tolerance or self._config.arc_tolerance_mm
            points = arc_points(
                (prim.center.x, prim.center.y),
                prim.radius,
                prim.start_angle,
                prim.sweep,
                tolerance,
                x_scale=prim.x_scale,
                y_scale=prim.y_scale,
            )
            return self._stroke(points.tolist(), prim.width, prim.cap)
        if isinstance(prim, PolygonPrimitive):
            vertices = prim.vertices().tolist()
            if not prim.filled:
                return self._stroke(vertices + vertices[:1], prim.width, CapShape.ROUND)
            poly = Polygon(vertices)
            if not poly.is_valid:
                poly = poly.buffer(0)
            return poly
        logger.warning("Skipping unsupported primitive: %s", type(prim).__name__)
        return None

    def _stroke(self, points, width: float, cap: CapShape):
        if len(points) < 2 or (len(points) == 2 and points[0] == points[-1]):
            return Point(points[0]).buffer(0.5 * width, resolution=self._resolution)
        return LineString(points).buffer(
            0.5 * width,
            cap_style="round" if cap is CapShape.ROUND else "square",
            join_style="round",
            resolution=self._resolution,
        )
