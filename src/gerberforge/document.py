from __future__ import annotations

"""Layer catalog and the document that serializes it."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .bundle import bundle_zip
from .config import EmitConfig
from .errors import ConfigurationError
from .geometry.bounds import BoundingBox
from .geometry.shapes import PrimitiveGeometryBuilder
from .gerber.excellon import ExcellonWriter
from .gerber.writer import GerberLayerWriter
from .measure import bounding_box_of
from .primitives import Circle, Primitive
from .text import FontRegistry

logger = logging.getLogger(__name__)

_CATALOG = {
    # kind: (sort order, extension, X2 file function)
    "top_copper": (0, "gtl", "Copper,L1,Top"),
    "inner_copper": (1, None, None),
    "bottom_copper": (2, "gbl", None),
    "top_solder_mask": (3, "gts", "Soldermask,Top"),
    "bottom_solder_mask": (4, "gbs", "Soldermask,Bot"),
    "top_silkscreen": (5, "gto", "Legend,Top"),
    "bottom_silkscreen": (6, "gbo", "Legend,Bot"),
    "outline": (7, "gko", "Profile,NP"),
    "drill": (8, "xln", None),
}
_INNER_RE = re.compile(r"^inner_copper_(\d+)$")


@dataclass(frozen=True)
class LayerRole:
    kind: str
    number: int = 0

    def __post_init__(self) -> None:
        if self.kind not in _CATALOG:
            raise ConfigurationError(f"Unknown layer role: {self.kind}")
        if self.kind == "inner_copper" and self.number < 2:
            raise ConfigurationError("inner copper layer number must be >= 2")
        if self.kind != "inner_copper" and self.number != 0:
            raise ConfigurationError(f"{self.kind} does not take a layer number")

    @staticmethod
    def inner_copper(number: int) -> "LayerRole":
        return LayerRole("inner_copper", int(number))

    @staticmethod
    def parse(name: str) -> "LayerRole":
        match = _INNER_RE.match(name)
        if match:
            return LayerRole.inner_copper(int(match.group(1)))
        return LayerRole(name)

    @property
    def name(self) -> str:
        if self.kind == "inner_copper":
            return f"inner_copper_{self.number}"
        return self.kind

    @property
    def extension(self) -> str:
        if self.kind == "inner_copper":
            return f"g{self.number}l"
        return _CATALOG[self.kind][1]

    @property
    def is_drill(self) -> bool:
        return self.kind == "drill"

    def sort_key(self) -> tuple[int, int]:
        return (_CATALOG[self.kind][0], self.number)

    def __str__(self) -> str:
        return self.name


TOP_COPPER = LayerRole("top_copper")
BOTTOM_COPPER = LayerRole("bottom_copper")
TOP_SOLDER_MASK = LayerRole("top_solder_mask")
BOTTOM_SOLDER_MASK = LayerRole("bottom_solder_mask")
TOP_SILKSCREEN = LayerRole("top_silkscreen")
BOTTOM_SILKSCREEN = LayerRole("bottom_silkscreen")
OUTLINE = LayerRole("outline")
DRILL = LayerRole("drill")


class Layer:
    def __init__(self, role: LayerRole, document: "Document") -> None:
        self.role = role
        self._document = document
        self._primitives: list[Primitive] = []

    @property
    def primitives(self) -> tuple[Primitive, ...]:
        return tuple(self._primitives)

    def add(self, *primitives: Primitive) -> "Layer":
        if self.role.is_drill:
            for prim in primitives:
                if not isinstance(prim, Circle):
                    raise ConfigurationError(
                        f"drill layer only accepts Circle holes, got {type(prim).__name__}"
                    )
        self._primitives.extend(primitives)
        return self

    def bounding_box(self) -> BoundingBox:
        return bounding_box_of(self._primitives, self._document.fonts, self._document.config)

    def to_geometry(self):
        builder = PrimitiveGeometryBuilder(self._document.config, self._document.fonts)
        return builder.build(self._primitives)

    def __len__(self) -> int:
        return len(self._primitives)

    def __repr__(self) -> str:
        return f"Layer({self.role}, primitives={len(self._primitives)})"


class Document:
    def __init__(
        self,
        prefix: str,
        config: EmitConfig | None = None,
        fonts: FontRegistry | None = None,
    ) -> None:
        self.prefix = prefix
        self.config = config or EmitConfig.from_dict({})
        self.config.validate()
        self.fonts = fonts or FontRegistry()
        self._layers: dict[LayerRole, Layer] = {}
        self._written = False

    def layer(self, role: LayerRole | str) -> Layer:
        if isinstance(role, str):
            role = LayerRole.parse(role)
        layer = self._layers.get(role)
        if layer is None:
            layer = Layer(role, self)
            self._layers[role] = layer
        return layer

    def top_copper(self) -> Layer:
        return self.layer(TOP_COPPER)

    def bottom_copper(self) -> Layer:
        return self.layer(BOTTOM_COPPER)

    def inner_copper(self, number: int) -> Layer:
        return self.layer(LayerRole.inner_copper(number))

    def top_solder_mask(self) -> Layer:
        return self.layer(TOP_SOLDER_MASK)

    def bottom_solder_mask(self) -> Layer:
        return self.layer(BOTTOM_SOLDER_MASK)

    def top_silkscreen(self) -> Layer:
        return self.layer(TOP_SILKSCREEN)

    def bottom_silkscreen(self) -> Layer:
        return self.layer(BOTTOM_SILKSCREEN)

    def outline(self) -> Layer:
        return self.layer(OUTLINE)

    def drill(self) -> Layer:
        return self.layer(DRILL)

    def layers(self) -> list[Layer]:
        return [self._layers[r] for r in sorted(self._layers, key=LayerRole.sort_key)]

    def bounding_box(self) -> BoundingBox:
        box = BoundingBox.empty()
        for layer in self._layers.values():
            box = box.merge(layer.bounding_box())
        return box

    def filename(self, role: LayerRole) -> str:
        return f"{self.prefix}.{role.extension}"

    def render(self) -> dict[LayerRole, str]:
        rendered: dict[LayerRole, str] = {}
        for layer in self.layers():
            if not len(layer):
                logger.debug("Skipping empty layer: %s", layer.role)
                continue
            if layer.role.is_drill:
                writer = ExcellonWriter(self.config, label=layer.role)
            else:
                writer = GerberLayerWriter(
                    self.config,
                    self.fonts,
                    label=layer.role,
                    file_function=self._file_function(layer.role),
                )
            rendered[layer.role] = writer.render(layer.primitives)
        return rendered

    def write(self, output_dir: Path, bundle: bool = False) -> list[Path]:
        if self._written:
            raise ConfigurationError(f"Document {self.prefix!r} has already been written")
        rendered = self.render()
        self._written = True
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        paths: list[Path] = []
        for role, content in rendered.items():
            path = output_dir / self.filename(role)
            path.write_text(content, encoding="utf-8")
            logger.info("Wrote %s layer: %s", role, path.name)
            paths.append(path)
        if bundle:
            zip_path = bundle_zip(paths, output_dir / f"{self.prefix}.zip")
            logger.info("Bundled %s files: %s", len(paths), zip_path.name)
        return paths

    def _file_function(self, role: LayerRole) -> str | None:
        if role.kind == "inner_copper":
            return f"Copper,L{role.number},Inr"
        if role.kind == "bottom_copper":
            inner = [r.number for r in self._layers if r.kind == "inner_copper" and len(self._layers[r])]
            return f"Copper,L{max(inner, default=1) + 1},Bot"
        return _CATALOG[role.kind][2]
