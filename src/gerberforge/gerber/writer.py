from __future__ import annotations

"""RS-274X emitter for a single layer."""

import logging
from typing import Sequence

from ..config import EmitConfig
from ..errors import GeometryError, LayerWriteError
from ..geometry.arcs import arc_points
from ..primitives import Arc, Circle, Line, Polygon, Primitive, Text
from ..text import FontRegistry, compile_text
from .apertures import Aperture, ApertureTable
from .coords import CoordinateFormat

logger = logging.getLogger(__name__)

GENERATOR_COMMENT = "G04 Generated by gerberforge*"


class GerberLayerWriter:
    """Serialize a layer's primitives into one RS-274X document.

    The aperture table is built by a single pass over the primitives before
    any command is emitted, so definitions always precede their first use.
    """

    def __init__(
        self,
        config: EmitConfig,
        fonts: FontRegistry | None = None,
        label="layer",
        file_function: str | None = None,
    ) -> None:
        self._config = config
        self._fonts = fonts or FontRegistry()
        self._label = label
        self._file_function = file_function
        self._fmt = CoordinateFormat(config.integer_digits, config.decimal_digits)

    def build_apertures(self, primitives: Sequence[Primitive]) -> ApertureTable:
        table = ApertureTable(self._fmt)
        for index, prim in enumerate(primitives):
            try:
                for aperture in prim.required_apertures():
                    table.register(self._output_aperture(aperture))
            except (ValueError, OverflowError, LookupError) as exc:
                raise LayerWriteError(self._label, index, exc) from exc
        return table

    def render(self, primitives: Sequence[Primitive]) -> str:
        table = self.build_apertures(primitives)
        logger.debug("%s: %s apertures", self._label, len(table))
        out: list[str] = []
        self._header(out, table)
        state = _EmitState()
        for index, prim in enumerate(primitives):
            try:
                self._emit(out, state, table, prim)
            except (ValueError, OverflowError, LookupError) as exc:
                raise LayerWriteError(self._label, index, exc) from exc
        out.append("M02*")
        return "\n".join(out) + "\n"

    def _header(self, out: list[str], table: ApertureTable) -> None:
        out.append(GENERATOR_COMMENT)
        if self._file_function:
            out.append(f"%TF.FileFunction,{self._file_function}*%")
        spec = self._fmt.spec()
        out.append(f"%FSLAX{spec}Y{spec}*%")
        out.append("%MOMM*%" if self._config.unit == "mm" else "%MOIN*%")
        out.append("%LPD*%")
        out.append("G75*")
        out.append("G01*")
        for code, aperture in table.definitions():
            out.append(f"%ADD{code}{aperture.definition(self._fmt)}*%")

    def _output_aperture(self, aperture: Aperture) -> Aperture:
        return Aperture(aperture.shape, self._config.to_output_units(aperture.size))

    def _xy(self, x: float, y: float) -> str:
        conv = self._config.to_output_units
        return f"X{self._fmt.format(conv(x))}Y{self._fmt.format(conv(y))}"

    def _select(self, out: list[str], state: "_EmitState", table: ApertureTable, aperture: Aperture) -> None:
        code = table.code(self._output_aperture(aperture))
        if state.aperture != code:
            out.append(f"D{code}*")
            state.aperture = code

    def _polarity(self, out: list[str], state: "_EmitState", dark: bool) -> None:
        if state.dark != dark:
            out.append("%LPD*%" if dark else "%LPC*%")
            state.dark = dark

    def _emit(self, out: list[str], state: "_EmitState", table: ApertureTable, prim: Primitive) -> None:
        if isinstance(prim, Circle):
            self._polarity(out, state, True)
            self._select(out, state, table, prim.required_apertures()[0])
            out.append(f"{self._xy(prim.center.x, prim.center.y)}D03*")
        elif isinstance(prim, Line):
            self._polarity(out, state, True)
            self._select(out, state, table, prim.required_apertures()[0])
            out.append(f"{self._xy(prim.start.x, prim.start.y)}D02*")
            out.append(f"{self._xy(prim.end.x, prim.end.y)}D01*")
        elif isinstance(prim, Arc):
            self._polarity(out, state, True)
            self._select(out, state, table, prim.required_apertures()[0])
            self._emit_arc(out, prim)
        elif isinstance(prim, Polygon):
            self._emit_polygon(out, state, table, prim)
        elif isinstance(prim, Text):
            for polygon in compile_text(prim, self._fonts).polygons:
                self._emit_polygon(out, state, table, polygon)
        else:
            raise TypeError(f"Unsupported primitive: {type(prim).__name__}")

    def _emit_arc(self, out: list[str], arc: Arc) -> None:
        start = arc.start
        if self._config.arc_mode == "native" and arc.has_native_form:
            if arc.radius == 0 and arc.sweep != 0:
                raise GeometryError("zero-radius arc cannot be drawn with native arcs")
            start_xy = self._xy(start.x, start.y)
            out.append(f"{start_xy}D02*")
            if arc.is_full_circle:
                end_xy = start_xy
            else:
                end_xy = self._xy(arc.end.x, arc.end.y)
                if end_xy == start_xy:
                    # Under G75 equal endpoints mean a full turn; draw a dot instead.
                    out.append(f"{start_xy}D01*")
                    return
            conv = self._config.to_output_units
            i = self._fmt.format(conv(arc.center.x - start.x))
            j = self._fmt.format(conv(arc.center.y - start.y))
            out.append("G03*" if arc.sweep >= 0 else "G02*")
            out.append(f"{end_xy}I{i}J{j}D01*")
            out.append("G01*")
            return
        tolerance = arc.tolerance or self._config.arc_tolerance_mm
        points = arc_points(
            (arc.center.x, arc.center.y),
            arc.radius,
            arc.start_angle,
            arc.sweep,
            tolerance,
            x_scale=arc.x_scale,
            y_scale=arc.y_scale,
        )
        out.append(f"{self._xy(points[0][0], points[0][1])}D02*")
        for x, y in points[1:]:
            out.append(f"{self._xy(x, y)}D01*")

    def _emit_polygon(self, out: list[str], state: "_EmitState", table: ApertureTable, polygon: Polygon) -> None:
        coords = [self._xy(x, y) for x, y in polygon.vertices()]
        if coords[-1] != coords[0]:
            coords.append(coords[0])
        self._polarity(out, state, polygon.dark)
        if not polygon.filled:
            self._select(out, state, table, polygon.required_apertures()[0])
            out.append(f"{coords[0]}D02*")
            out.extend(f"{c}D01*" for c in coords[1:])
            return
        out.append("G36*")
        out.append(f"{coords[0]}D02*")
        out.extend(f"{c}D01*" for c in coords[1:])
        out.append("G37*")


class _EmitState:
    def __init__(self) -> None:
        self.aperture: int | None = None
        self.dark = True
