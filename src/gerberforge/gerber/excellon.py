from __future__ import annotations

"""Excellon drill emitter: tool definitions keyed by hole diameter."""

import logging
from typing import Sequence

from ..config import EmitConfig
from ..errors import ConfigurationError, LayerWriteError
from ..primitives import Circle, Primitive
from .apertures import FIRST_TOOL_CODE, Aperture, ApertureTable
from .coords import CoordinateFormat

logger = logging.getLogger(__name__)


class ExcellonWriter:
    def __init__(self, config: EmitConfig, label="drill") -> None:
        self._config = config
        self._label = label
        self._fmt = CoordinateFormat(config.integer_digits, config.decimal_digits)

    def build_tools(self, primitives: Sequence[Primitive]) -> tuple[ApertureTable, dict[int, list[tuple[int, Circle]]]]:
        tools = ApertureTable(self._fmt, first_code=FIRST_TOOL_CODE)
        hits: dict[int, list[tuple[int, Circle]]] = {}
        for index, prim in enumerate(primitives):
            try:
                if not isinstance(prim, Circle):
                    raise ConfigurationError(
                        f"drill layer only accepts Circle holes, got {type(prim).__name__}"
                    )
                code = tools.register(self._tool(prim))
            except (ValueError, OverflowError) as exc:
                raise LayerWriteError(self._label, index, exc) from exc
            hits.setdefault(code, []).append((index, prim))
        return tools, hits

    def render(self, primitives: Sequence[Primitive]) -> str:
        tools, hits = self.build_tools(primitives)
        logger.debug("%s: %s tools, %s holes", self._label, len(tools), len(primitives))
        units = "METRIC" if self._config.unit == "mm" else "INCH"
        spec = f"{self._fmt.integer_digits}:{self._fmt.decimal_digits}"
        out = ["M48", f";FILE_FORMAT={spec}", f"{units},TZ"]
        for code, tool in tools.definitions():
            out.append(f"T{code}C{self._fmt.format_decimal(tool.size)}")
        out.extend(["%", "G90", "G05"])
        conv = self._config.to_output_units
        for code, _tool in tools.definitions():
            out.append(f"T{code}")
            for index, hole in hits[code]:
                try:
                    x = self._fmt.format(conv(hole.center.x))
                    y = self._fmt.format(conv(hole.center.y))
                except OverflowError as exc:
                    raise LayerWriteError(self._label, index, exc) from exc
                out.append(f"X{x}Y{y}")
        out.append("M30")
        return "\n".join(out) + "\n"

    def _tool(self, hole: Circle) -> Aperture:
        return Aperture("C", self._config.to_output_units(hole.diameter))
