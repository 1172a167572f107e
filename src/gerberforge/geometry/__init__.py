"""Geometry value types and helpers."""

from .bounds import BoundingBox, Point, merge_all

__all__ = ["BoundingBox", "Point", "merge_all"]
