from __future__ import annotations

"""Point and axis-aligned bounding box value types (millimetres)."""

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @staticmethod
    def of(value) -> "Point":
        if isinstance(value, Point):
            return value
        x, y = value
        return Point(float(x), float(y))

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class BoundingBox:
    min: Point
    max: Point

    @staticmethod
    def empty() -> "BoundingBox":
        return BoundingBox(Point(math.inf, math.inf), Point(-math.inf, -math.inf))

    @staticmethod
    def from_points(points) -> "BoundingBox":
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if pts.shape[0] == 0:
            return BoundingBox.empty()
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        return BoundingBox(Point(float(lo[0]), float(lo[1])), Point(float(hi[0]), float(hi[1])))

    @staticmethod
    def around(center: Point, radius: float) -> "BoundingBox":
        return BoundingBox(
            Point(center.x - radius, center.y - radius),
            Point(center.x + radius, center.y + radius),
        )

    @property
    def is_empty(self) -> bool:
        return self.min.x > self.max.x or self.min.y > self.max.y

    @property
    def width(self) -> float:
        return 0.0 if self.is_empty else self.max.x - self.min.x

    @property
    def height(self) -> float:
        return 0.0 if self.is_empty else self.max.y - self.min.y

    @property
    def center(self) -> Point:
        return Point(0.5 * (self.min.x + self.max.x), 0.5 * (self.min.y + self.max.y))

    def merge(self, other: "BoundingBox") -> "BoundingBox":
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        return BoundingBox(
            Point(min(self.min.x, other.min.x), min(self.min.y, other.min.y)),
            Point(max(self.max.x, other.max.x), max(self.max.y, other.max.y)),
        )

    def expanded(self, margin: float) -> "BoundingBox":
        if self.is_empty:
            return self
        return BoundingBox(
            self.min.translated(-margin, -margin),
            self.max.translated(margin, margin),
        )

    def translated(self, dx: float, dy: float) -> "BoundingBox":
        if self.is_empty:
            return self
        return BoundingBox(self.min.translated(dx, dy), self.max.translated(dx, dy))

    def as_tuple(self) -> tuple[float, float, float, float]:
        # Same order as shapely's ``bounds``.
        return (self.min.x, self.min.y, self.max.x, self.max.y)


def merge_all(boxes: Iterable[BoundingBox]) -> BoundingBox:
    result = BoundingBox.empty()
    for box in boxes:
        result = result.merge(box)
    return result
