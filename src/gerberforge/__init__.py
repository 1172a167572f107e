"""Compile 2D shapes into Gerber (RS-274X) and Excellon fabrication files."""

from .config import EmitConfig
from .document import Document, Layer, LayerRole
from .errors import (
    ConfigurationError,
    CoordinateOverflowError,
    GeometryError,
    GlyphLookupError,
    LayerWriteError,
)
from .geometry.bounds import BoundingBox, Point
from .measure import bounding_box
from .primitives import Anchor, Arc, CapShape, Circle, Line, Polygon, Text, rectangle_outline
from .system_fonts import load_system_font, register_system_font
from .text import Font, FontRegistry, Glyph, layout_text

__all__ = [
    "Anchor",
    "Arc",
    "BoundingBox",
    "CapShape",
    "Circle",
    "ConfigurationError",
    "CoordinateOverflowError",
    "Document",
    "EmitConfig",
    "Font",
    "FontRegistry",
    "GeometryError",
    "Glyph",
    "GlyphLookupError",
    "Layer",
    "LayerRole",
    "LayerWriteError",
    "Line",
    "Point",
    "Polygon",
    "Text",
    "bounding_box",
    "layout_text",
    "load_system_font",
    "rectangle_outline",
    "register_system_font",
]
