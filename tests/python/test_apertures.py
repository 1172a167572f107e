from __future__ import annotations

import pytest

from gerberforge.errors import CoordinateOverflowError, GeometryError
from gerberforge.gerber.apertures import Aperture, ApertureTable
from gerberforge.gerber.coords import CoordinateFormat

FMT = CoordinateFormat(4, 6)


def test_register_is_idempotent_and_ordered() -> None:
    table = ApertureTable(FMT)
    keys = [Aperture("C", 2.0), Aperture("R", 0.5), Aperture("C", 0.25)]
    codes = [table.register(k) for k in keys]
    assert codes == [10, 11, 12]
    for key, code in zip(keys, codes):
        for _ in range(3):
            assert table.register(key) == code
    assert len(table) == 3


def test_structural_equality_not_identity() -> None:
    table = ApertureTable(FMT)
    first = table.register(Aperture("C", 0.5))
    assert table.register(Aperture("C", 0.5)) == first
    assert table.register(Aperture("R", 0.5)) == first + 1


def test_definitions_in_code_order() -> None:
    table = ApertureTable(FMT)
    table.register(Aperture("R", 1.0))
    table.register(Aperture("C", 0.2))
    table.register(Aperture("R", 1.0))
    defs = [(code, ap.definition(FMT)) for code, ap in table.definitions()]
    assert defs == [(10, "R,1.000000X1.000000"), (11, "C,0.200000")]


def test_tool_numbering_can_start_at_one() -> None:
    table = ApertureTable(FMT, first_code=1)
    assert table.register(Aperture("C", 0.3)) == 1


def test_unrepresentable_sizes_are_rejected() -> None:
    table = ApertureTable(FMT)
    with pytest.raises(GeometryError, match="below the format resolution"):
        table.register(Aperture("C", 1e-9))
    with pytest.raises(CoordinateOverflowError):
        table.register(Aperture("C", 20000.0))
    assert len(table) == 0
