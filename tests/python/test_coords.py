from __future__ import annotations

import pytest

from gerberforge.errors import CoordinateOverflowError
from gerberforge.gerber.coords import CoordinateFormat

FMT = CoordinateFormat(4, 6)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.0, 0),
        (1.0, 1000000),
        (-2.5, -2500000),
        (0.0000005, 1),
        (-0.0000005, -1),
        (0.0000004, 0),
        (1.2345675, 1234568),
        (-1.2345675, -1234568),
    ],
)
def test_quantize_rounds_half_away_from_zero(value: float, expected: int) -> None:
    assert FMT.quantize(value) == expected


@pytest.mark.parametrize("value", [0.1, 0.123456789, -17.3333333, 999.9999996, 1e-9, 42.0])
def test_quantize_is_idempotent_after_first_rounding(value: float) -> None:
    once = FMT.quantize(value)
    assert FMT.quantize(FMT.dequantize(once)) == once


def test_format_suppresses_leading_zeros() -> None:
    assert FMT.format(0.5) == "500000"
    assert FMT.format(-1.5) == "-1500000"
    assert FMT.format(0.0) == "0"
    assert FMT.spec() == "46"


def test_format_decimal_keeps_point() -> None:
    assert FMT.format_decimal(0.5) == "0.500000"
    assert CoordinateFormat(3, 3).format_decimal(1.23456) == "1.235"


def test_overflow_is_an_error() -> None:
    assert FMT.format(9999.999999) == "9999999999"
    with pytest.raises(CoordinateOverflowError, match="exceeds format 4.6"):
        FMT.format(10000.0)
    with pytest.raises(OverflowError):
        FMT.format(-12345.0)
