from __future__ import annotations

import zipfile
from pathlib import Path

import pytest
from shapely.geometry import box

from gerberforge.document import DRILL, TOP_COPPER, Document, LayerRole
from gerberforge.errors import ConfigurationError, LayerWriteError
from gerberforge.primitives import Circle, Line, Polygon, Text, rectangle_outline
from gerberforge.text import FontRegistry


def test_layer_is_idempotent_per_role() -> None:
    doc = Document("board")
    top = doc.top_copper()
    assert doc.top_copper() is top
    assert doc.layer("top_copper") is top
    assert doc.layer(TOP_COPPER) is top
    assert doc.inner_copper(3) is doc.layer("inner_copper_3")
    assert doc.inner_copper(3) is not doc.inner_copper(2)


def test_add_preserves_order_and_duplicates() -> None:
    doc = Document("board")
    c = Circle((0, 0), 1.0)
    layer = doc.top_copper().add(c, c)
    layer.add(Line((0, 0), (1, 1), 0.1))
    assert len(layer) == 3
    assert layer.primitives[0] is c and layer.primitives[1] is c


@pytest.mark.parametrize(
    ("name", "message"),
    [("middle_copper", "Unknown layer role"), ("inner_copper_1", "must be >= 2")],
)
def test_unknown_roles(name: str, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        Document("board").layer(name)


def test_role_extensions() -> None:
    assert LayerRole.parse("top_copper").extension == "gtl"
    assert LayerRole.parse("inner_copper_4").extension == "g4l"
    assert LayerRole.parse("outline").extension == "gko"
    assert DRILL.extension == "xln"


def test_drill_layer_accepts_only_holes() -> None:
    doc = Document("board")
    with pytest.raises(ConfigurationError, match="drill layer only accepts Circle"):
        doc.drill().add(Line((0, 0), (1, 0), 0.2))


def test_empty_layers_produce_no_files(tmp_path: Path) -> None:
    doc = Document("coil")
    doc.top_copper().add(Circle((1, 1), 2.0), Line((0, 0), (3, 0), 0.5))
    doc.bottom_copper()
    doc.top_silkscreen()
    doc.drill().add(Circle((1, 1), 0.8))
    paths = doc.write(tmp_path)
    assert [p.name for p in paths] == ["coil.gtl", "coil.xln"]
    content = (tmp_path / "coil.gtl").read_text(encoding="utf-8").splitlines()
    assert content.count("%ADD10C,2.000000*%") == 1
    assert content.count("%ADD11C,0.500000*%") == 1
    assert content.count("M02*") == 1
    assert not (tmp_path / "coil.gbl").exists()


def test_layers_use_independent_aperture_tables() -> None:
    doc = Document("board")
    doc.top_copper().add(Circle((0, 0), 2.0), Circle((1, 0), 0.5))
    doc.top_solder_mask().add(Circle((1, 0), 0.5))
    rendered = doc.render()
    assert "%ADD11C,0.500000*%" in rendered[TOP_COPPER]
    mask = rendered[LayerRole("top_solder_mask")]
    assert "%ADD10C,0.500000*%" in mask
    assert "%TF.FileFunction,Soldermask,Top*%" in mask


def test_bottom_copper_file_function_counts_inner_layers() -> None:
    doc = Document("board")
    doc.inner_copper(2).add(Circle((0, 0), 1.0))
    doc.inner_copper(3).add(Circle((0, 0), 1.0))
    doc.bottom_copper().add(Circle((0, 0), 1.0))
    rendered = doc.render()
    assert "%TF.FileFunction,Copper,L4,Bot*%" in rendered[LayerRole("bottom_copper")]
    assert "%TF.FileFunction,Copper,L3,Inr*%" in rendered[LayerRole.inner_copper(3)]


def test_second_write_is_refused(tmp_path: Path) -> None:
    doc = Document("board")
    doc.top_copper().add(Circle((0, 0), 1.0))
    doc.write(tmp_path)
    with pytest.raises(ConfigurationError, match="already been written"):
        doc.write(tmp_path)


def test_failed_layer_reports_role(tmp_path: Path) -> None:
    doc = Document("board")
    doc.top_copper().add(Circle((0, 0), 1.0))
    doc.outline().add(Circle((0, 0), 1.0), Line((0, 0), (20000, 0), 0.1))
    with pytest.raises(LayerWriteError) as info:
        doc.write(tmp_path)
    assert info.value.role == LayerRole("outline")
    assert info.value.index == 1
    assert list(tmp_path.iterdir()) == []


def test_write_bundles_zip(tmp_path: Path) -> None:
    doc = Document("pack")
    doc.top_copper().add(Circle((0, 0), 1.0))
    doc.outline().add(*rectangle_outline((-5, -5), (5, 5), 0.1))
    doc.write(tmp_path, bundle=True)
    with zipfile.ZipFile(tmp_path / "pack.zip") as zf:
        assert sorted(zf.namelist()) == ["pack.gko", "pack.gtl"]


def test_document_bounding_box(fonts: FontRegistry) -> None:
    doc = Document("board", fonts=fonts)
    doc.top_copper().add(Circle((0, 0), 2.0))
    doc.top_silkscreen().add(Text((10, 20), "01", "blocky", 72))
    doc.drill().add(Circle((-5, 0), 1.0))
    bbox = doc.bounding_box()
    assert bbox.min.x == pytest.approx(-5.5)
    assert bbox.min.y == pytest.approx(-1.0)
    assert bbox.max.x == pytest.approx(10 + 25.4)
    assert bbox.max.y == pytest.approx(20 + 25.4)


def test_layer_preview_geometry(fonts: FontRegistry) -> None:
    doc = Document("board", fonts=fonts)
    layer = doc.top_copper()
    layer.add(
        Polygon((0, 0), [(0, 0), (10, 0), (10, 10), (0, 10)]),
        Polygon((0, 0), [(2, 2), (8, 2), (8, 8), (2, 8)], dark=False),
    )
    geom = layer.to_geometry()
    assert geom.area == pytest.approx(100 - 36)
    assert geom.bounds == pytest.approx(box(0, 0, 10, 10).bounds)


def test_line_preview_area() -> None:
    doc = Document("board")
    doc.top_copper().add(Line((0, 0), (10, 0), 1.0, "R"))
    geom = doc.top_copper().to_geometry()
    assert geom.area == pytest.approx(11.0)
