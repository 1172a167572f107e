from __future__ import annotations

"""Fixed-point coordinate quantization for RS-274X and Excellon output."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..errors import CoordinateOverflowError


@dataclass(frozen=True)
class CoordinateFormat:
    integer_digits: int
    decimal_digits: int

    @property
    def scale(self) -> int:
        return 10 ** self.decimal_digits

    @property
    def limit(self) -> int:
        return 10 ** (self.integer_digits + self.decimal_digits)

    def quantize(self, value: float) -> int:
        # ROUND_HALF_UP in decimal rounds ties away from zero.
        scaled = Decimal(repr(float(value))).scaleb(self.decimal_digits)
        return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))

    def dequantize(self, value: int) -> float:
        return value / self.scale

    def check(self, value: int) -> int:
        if abs(value) >= self.limit:
            raise CoordinateOverflowError(
                f"coordinate {self.dequantize(value)} exceeds format "
                f"{self.integer_digits}.{self.decimal_digits}"
            )
        return value

    def format(self, value: float) -> str:
        """Quantize, range-check and render with leading zeros suppressed."""
        return str(self.check(self.quantize(value)))

    def format_decimal(self, value: float) -> str:
        # Aperture and tool sizes carry an explicit decimal point.
        quantized = self.check(self.quantize(value))
        return f"{self.dequantize(quantized):.{self.decimal_digits}f}"

    def spec(self) -> str:
        return f"{self.integer_digits}{self.decimal_digits}"
