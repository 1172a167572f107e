from __future__ import annotations

"""Per-layer aperture table: (shape, size) keys numbered in first-use order."""

import logging
from dataclasses import dataclass
from typing import Iterator

from ..errors import GeometryError
from .coords import CoordinateFormat

logger = logging.getLogger(__name__)

FIRST_APERTURE_CODE = 10
FIRST_TOOL_CODE = 1

CIRCLE = "C"
RECTANGLE = "R"


@dataclass(frozen=True)
class Aperture:
    shape: str
    size: float

    def definition(self, fmt: CoordinateFormat) -> str:
        size = fmt.format_decimal(self.size)
        if self.shape == RECTANGLE:
            return f"R,{size}X{size}"
        return f"C,{size}"


class ApertureTable:
    def __init__(self, fmt: CoordinateFormat, first_code: int = FIRST_APERTURE_CODE) -> None:
        self._fmt = fmt
        self._next_code = first_code
        self._codes: dict[Aperture, int] = {}

    def register(self, aperture: Aperture) -> int:
        code = self._codes.get(aperture)
        if code is not None:
            return code
        if self._fmt.check(self._fmt.quantize(aperture.size)) <= 0:
            raise GeometryError(
                f"aperture size {aperture.size} is below the format resolution"
            )
        code = self._next_code
        self._codes[aperture] = code
        self._next_code += 1
        logger.debug("Aperture D%s -> %s", code, aperture)
        return code

    def code(self, aperture: Aperture) -> int:
        return self._codes[aperture]

    def definitions(self) -> Iterator[tuple[int, Aperture]]:
        # dict preserves insertion order, which is code order.
        for aperture, code in self._codes.items():
            yield code, aperture

    def __len__(self) -> int:
        return len(self._codes)
