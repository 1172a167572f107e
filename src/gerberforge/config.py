from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError

MM_PER_INCH = 25.4


@dataclass(frozen=True)
class EmitConfig:
    integer_digits: int
    decimal_digits: int
    unit: str
    arc_mode: str
    arc_tolerance_mm: float

    @staticmethod
    def from_json(path: Path) -> "EmitConfig":
        data = json.loads(path.read_text(encoding="utf-8"))
        return EmitConfig.from_dict(data)

    @staticmethod
    def from_dict(data: dict) -> "EmitConfig":
        integer_digits = int(data.get("integer_digits", 4))
        decimal_digits = int(data.get("decimal_digits", 6))
        unit = str(data.get("unit", "mm"))
        arc_mode = str(data.get("arc_mode", "native"))
        arc_tolerance_mm = float(data.get("arc_tolerance_mm", 0.01))
        return EmitConfig(
            integer_digits=integer_digits,
            decimal_digits=decimal_digits,
            unit=unit,
            arc_mode=arc_mode,
            arc_tolerance_mm=arc_tolerance_mm,
        )

    def validate(self) -> None:
        if not 1 <= self.integer_digits <= 6:
            raise ConfigurationError("integer_digits must be in [1, 6]")
        if not 1 <= self.decimal_digits <= 6:
            raise ConfigurationError("decimal_digits must be in [1, 6]")
        if self.unit not in {"mm", "inch"}:
            raise ConfigurationError("unit must be mm or inch")
        if self.arc_mode not in {"native", "tessellate"}:
            raise ConfigurationError("arc_mode must be native or tessellate")
        if self.arc_tolerance_mm <= 0:
            raise ConfigurationError("arc_tolerance_mm must be > 0")

    def to_output_units(self, value_mm: float) -> float:
        if self.unit == "inch":
            return value_mm / MM_PER_INCH
        return value_mm
