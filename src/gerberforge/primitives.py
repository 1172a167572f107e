from __future__ import annotations

"""Shape primitives that can be added to a layer.

Every primitive is an immutable value in millimetres. ``required_apertures``
reports the draw apertures a primitive needs; bounding boxes are computed in
``gerberforge.measure`` and commands are emitted by the writers in
``gerberforge.gerber``.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Union

import numpy as np

from .errors import GeometryError
from .geometry.arcs import is_full_turn, normalize_sweep
from .geometry.bounds import Point
from .gerber.apertures import CIRCLE, RECTANGLE, Aperture


class CapShape(str, Enum):
    ROUND = CIRCLE
    RECT = RECTANGLE


class Anchor(Enum):
    # (fraction of width, fraction of height) subtracted from the origin.
    BOTTOM_LEFT = (0.0, 0.0)
    BOTTOM_CENTER = (0.5, 0.0)
    BOTTOM_RIGHT = (1.0, 0.0)
    CENTER_LEFT = (0.0, 0.5)
    CENTER = (0.5, 0.5)
    CENTER_RIGHT = (1.0, 0.5)
    TOP_LEFT = (0.0, 1.0)
    TOP_CENTER = (0.5, 1.0)
    TOP_RIGHT = (1.0, 1.0)

    def offset(self, width: float, height: float) -> tuple[float, float]:
        fx, fy = self.value
        return (-fx * width, -fy * height)

    @staticmethod
    def parse(value) -> "Anchor":
        if isinstance(value, Anchor):
            return value
        try:
            return Anchor[str(value).upper()]
        except KeyError:
            raise ValueError(f"Unknown text anchor: {value}") from None


def _set(obj, name: str, value) -> None:
    object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class Circle:
    center: Point
    diameter: float

    def __post_init__(self) -> None:
        _set(self, "center", Point.of(self.center))
        _set(self, "diameter", float(self.diameter))
        if self.diameter <= 0:
            raise GeometryError("circle diameter must be > 0")

    @property
    def radius(self) -> float:
        return 0.5 * self.diameter

    def required_apertures(self) -> list[Aperture]:
        return [Aperture(CIRCLE, self.diameter)]


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    width: float
    cap: CapShape = CapShape.ROUND

    def __post_init__(self) -> None:
        _set(self, "start", Point.of(self.start))
        _set(self, "end", Point.of(self.end))
        _set(self, "width", float(self.width))
        _set(self, "cap", CapShape(self.cap))
        if self.width <= 0:
            raise GeometryError("line width must be > 0")

    def required_apertures(self) -> list[Aperture]:
        return [Aperture(self.cap.value, self.width)]


@dataclass(frozen=True)
class Arc:
    center: Point
    radius: float
    start_angle: float
    end_angle: float
    width: float
    cap: CapShape = CapShape.ROUND
    tolerance: float | None = None
    x_scale: float = 1.0
    y_scale: float = 1.0

    def __post_init__(self) -> None:
        _set(self, "center", Point.of(self.center))
        _set(self, "radius", float(self.radius))
        _set(self, "width", float(self.width))
        _set(self, "cap", CapShape(self.cap))
        _set(self, "x_scale", float(self.x_scale))
        _set(self, "y_scale", float(self.y_scale))
        if self.radius < 0:
            raise GeometryError("arc radius must be >= 0")
        if self.width <= 0:
            raise GeometryError("arc width must be > 0")
        if self.tolerance is not None and self.tolerance <= 0:
            raise GeometryError("arc tolerance must be > 0")
        if self.x_scale <= 0 or self.y_scale <= 0:
            raise GeometryError("arc x_scale and y_scale must be > 0")

    @property
    def sweep(self) -> float:
        return normalize_sweep(self.start_angle, self.end_angle)

    @property
    def is_full_circle(self) -> bool:
        return is_full_turn(self.sweep)

    @property
    def is_elliptical(self) -> bool:
        return self.x_scale != self.y_scale

    @property
    def semi_axes(self) -> tuple[float, float]:
        return (self.radius * self.x_scale, self.radius * self.y_scale)

    @property
    def has_native_form(self) -> bool:
        # G02/G03 only trace circles, and only with a circular aperture.
        return self.cap is CapShape.ROUND and not self.is_elliptical

    def point_at(self, angle_deg: float) -> Point:
        theta = math.radians(angle_deg)
        rx, ry = self.semi_axes
        return Point(
            self.center.x + rx * math.cos(theta),
            self.center.y + ry * math.sin(theta),
        )

    @property
    def start(self) -> Point:
        return self.point_at(self.start_angle)

    @property
    def end(self) -> Point:
        return self.point_at(self.start_angle + self.sweep)

    def required_apertures(self) -> list[Aperture]:
        return [Aperture(self.cap.value, self.width)]


@dataclass(frozen=True)
class Polygon:
    origin: Point
    points: tuple[Point, ...]
    filled: bool = True
    rotation: float = 0.0
    dark: bool = True
    width: float = 0.0

    def __post_init__(self) -> None:
        _set(self, "origin", Point.of(self.origin))
        _set(self, "points", tuple(Point.of(p) for p in self.points))
        _set(self, "rotation", float(self.rotation))
        _set(self, "width", float(self.width))
        if len(self.points) < 3:
            raise GeometryError("polygon needs at least 3 points")
        if not self.filled and self.width <= 0:
            raise GeometryError("unfilled polygon width must be > 0")

    def vertices(self) -> np.ndarray:
        """Vertices rotated about and translated to ``origin``, shape (n, 2)."""
        pts = np.array([(p.x, p.y) for p in self.points], dtype=np.float64)
        if self.rotation:
            theta = math.radians(self.rotation)
            cos_t, sin_t = math.cos(theta), math.sin(theta)
            xs = pts[:, 0] * cos_t - pts[:, 1] * sin_t
            ys = pts[:, 1] * cos_t + pts[:, 0] * sin_t
            pts = np.column_stack((xs, ys))
        pts[:, 0] += self.origin.x
        pts[:, 1] += self.origin.y
        return pts

    def required_apertures(self) -> list[Aperture]:
        if self.filled:
            return []
        return [Aperture(CIRCLE, self.width)]


@dataclass(frozen=True)
class Text:
    origin: Point
    message: str
    font: str
    size_pt: float
    scale: float = 1.0
    anchor: Anchor = field(default=Anchor.BOTTOM_LEFT)

    def __post_init__(self) -> None:
        _set(self, "origin", Point.of(self.origin))
        _set(self, "size_pt", float(self.size_pt))
        _set(self, "scale", float(self.scale))
        _set(self, "anchor", Anchor.parse(self.anchor))
        if self.size_pt <= 0:
            raise GeometryError("text size_pt must be > 0")
        if self.scale <= 0:
            raise GeometryError("text scale must be > 0")

    def required_apertures(self) -> list[Aperture]:
        # Glyphs are emitted as regions.
        return []


Primitive = Union[Circle, Line, Arc, Polygon, Text]


def rectangle_outline(
    min_point: Sequence[float],
    max_point: Sequence[float],
    width: float,
    cap: CapShape = CapShape.ROUND,
) -> list[Line]:
    """Four lines tracing an axis-aligned rectangle, e.g. a board outline."""
    x0, y0 = min_point
    x1, y1 = max_point
    corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    return [
        Line(corners[i], corners[(i + 1) % 4], width, cap)
        for i in range(4)
    ]
