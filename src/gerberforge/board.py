from __future__ import annotations

"""Build a Document from a JSON board description."""

import json
import logging
from pathlib import Path

from .config import EmitConfig
from .document import Document
from .errors import ConfigurationError
from .primitives import Anchor, Arc, CapShape, Circle, Line, Polygon, Primitive, Text
from .system_fonts import register_system_font
from .text import FontRegistry

logger = logging.getLogger(__name__)

_CAPS = {"round": CapShape.ROUND, "rect": CapShape.RECT}


def load_board(
    path: Path,
    config: EmitConfig | None = None,
    fonts: FontRegistry | None = None,
) -> Document:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    fonts = fonts or FontRegistry()
    for font_path in data.get("fonts", []):
        fonts.load(_relative_to(path, font_path))
    for entry in data.get("system_fonts", []):
        _register_system_font(fonts, entry, path)
    return board_from_dict(data, config, fonts)


def _relative_to(board_path: Path, value) -> Path:
    candidate = Path(value)
    if not candidate.is_absolute():
        candidate = Path(board_path).parent / candidate
    return candidate


def _register_system_font(fonts: FontRegistry, entry, board_path: Path) -> None:
    # "DejaVu Sans", {"family": ..., "name": ...} or {"path": ..., "name": ...}
    if isinstance(entry, str):
        entry = {"family": entry}
    name = entry.get("name")
    key = name or str(entry.get("family") or "").lower()
    if key and key in fonts:
        return
    font_file = entry.get("path")
    register_system_font(
        fonts,
        entry.get("family"),
        path=_relative_to(board_path, font_file) if font_file else None,
        name=name,
    )


def board_from_dict(
    data: dict,
    config: EmitConfig | None = None,
    fonts: FontRegistry | None = None,
) -> Document:
    if config is None:
        config = EmitConfig.from_dict(data.get("config", {}))
    document = Document(str(data.get("prefix", "board")), config, fonts)
    for role_name, items in data.get("layers", {}).items():
        layer = document.layer(role_name)
        layer.add(*(primitive_from_dict(item) for item in items))
        logger.info("Layer %s: %s primitives", layer.role, len(layer))
    return document


def primitive_from_dict(item: dict) -> Primitive:
    kind = item.get("type")
    if kind == "circle":
        return Circle(center=item["center"], diameter=item["diameter"])
    if kind == "line":
        return Line(
            start=item["start"],
            end=item["end"],
            width=item["width"],
            cap=_cap(item.get("cap", "round")),
        )
    if kind == "arc":
        return Arc(
            center=item["center"],
            radius=item["radius"],
            start_angle=float(item["start_angle"]),
            end_angle=float(item["end_angle"]),
            width=item["width"],
            cap=_cap(item.get("cap", "round")),
            tolerance=item.get("tolerance"),
            x_scale=float(item.get("x_scale", 1.0)),
            y_scale=float(item.get("y_scale", 1.0)),
        )
    if kind == "polygon":
        return Polygon(
            origin=item.get("origin", (0.0, 0.0)),
            points=item["points"],
            filled=bool(item.get("filled", True)),
            rotation=float(item.get("rotation", 0.0)),
            dark=bool(item.get("dark", True)),
            width=float(item.get("width", 0.0)),
        )
    if kind == "text":
        return Text(
            origin=item.get("origin", (0.0, 0.0)),
            message=str(item["message"]),
            font=str(item["font"]),
            size_pt=item["size_pt"],
            scale=item.get("scale", 1.0),
            anchor=Anchor.parse(item.get("anchor", "bottom_left")),
        )
    raise ConfigurationError(f"Unknown primitive type: {kind}")


def _cap(name: str) -> CapShape:
    try:
        return _CAPS[str(name).lower()]
    except KeyError:
        raise ConfigurationError(f"cap must be round or rect, got {name}") from None
