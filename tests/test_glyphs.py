import pytest

from dinomap.glyphs import (
    type_color, type_icon, diet_shape, diet_shape_name, type_marker,
    glyph_transform, glyph_svg, glyph_extent, build_glyphs,
)
from dinomap.projection import Mercator
from dinomap.scales import size_scale


def test_type_color_lookup_and_default():
    assert type_color("sauropod") == "#11a0d0ff"
    assert type_color("pachycephalosaur") == "#999"


@pytest.mark.parametrize("diet,shape", [
    ("carnivorous", "circle"),
    ("herbivorous", "square"),
    ("omnivorous", "triangle"),
    ("mystery", "default"),
])
def test_diet_shape_names(diet, shape):
    assert diet_shape_name(diet) == shape


def test_diet_shape_markup():
    assert diet_shape("carnivorous", 10, "#fff") == (
        '<circle class="diet-shape" r="10" fill="#fff" fill-opacity="0.9"/>'
    )
    assert 'fill-opacity="0.8"' in diet_shape("mystery", 10, "#fff")
    square = diet_shape("herbivorous", 10, "#fff")
    assert 'x="-10" y="-10" width="20" height="20" rx="6"' in square
    assert 'points="0,-13 13,13 -13,13"' in diet_shape("omnivorous", 10, "#fff")


def test_unknown_type_gets_emoji_marker(tmp_path):
    marker = type_marker("pachycephalosaur", 10, tmp_path)
    assert "🦖" in marker
    assert "font-size:14px" in marker
    assert type_icon("pachycephalosaur", tmp_path) is None


def test_known_type_without_sticker_file_gets_emoji(tmp_path):
    assert type_icon("sauropod", tmp_path) is None
    marker = type_marker("sauropod", 10, tmp_path)
    assert "🦖" in marker
    assert "<image" not in marker


def test_sticker_marker_geometry(tmp_path):
    (tmp_path / "sauropods-sticker.png").write_bytes(b"\x89PNG\r\n")
    marker = type_marker("sauropod", 10, tmp_path)
    assert marker.startswith('<image class="type-sticker" href="data:image/png;base64,')
    assert 'width="22" height="22" x="-11" y="-11"' in marker


def test_known_type_icon_inlined_when_file_exists(tmp_path):
    (tmp_path / "ceratopsians-sticker.png").write_bytes(b"\x89PNG\r\n")
    assert type_icon("ceratopsian", tmp_path).startswith("data:image/png;base64,")


def test_hover_round_trip_restores_transform():
    rest = glyph_transform(120.5, 300)
    assert rest == "translate(120.5,300) scale(1)"
    assert glyph_transform(120.5, 300, hovered=True) == "translate(120.5,300) scale(1.45)"
    assert glyph_transform(120.5, 300, hovered=False) == rest


def test_build_glyphs_keeps_every_record(records, glyphs):
    assert len(glyphs) == len(records)
    odd = glyphs[glyphs["type"] == "pachycephalosaur"].iloc[0]
    assert odd["color"] == "#999"
    assert not odd["has_icon"]
    assert odd["shape"] == "default"
    assert (glyphs["opacity"] == 1).all()
    assert glyphs["size"].between(8, 35).all()
    assert glyphs.loc[glyphs["name"] == "Alpha", "size"].iloc[0] == pytest.approx(35)


def test_glyph_svg_groups_shape_and_marker(glyphs):
    row = glyphs[glyphs["name"] == "Delta"].iloc[0]
    svg = glyph_svg(row)
    assert 'class="dino-glyph glyph-type-large-theropod"' in svg
    assert '<circle class="diet-shape"' in svg
    assert glyph_extent(float("nan")) == 0.0


def test_has_icon_follows_sticker_files(records, tmp_path):
    (tmp_path / "sauropods-sticker.png").write_bytes(b"\x89PNG\r\n")
    out = build_glyphs(records, size_scale(records["length_m"]), Mercator(), tmp_path)
    assert out.loc[out["type"] == "sauropod", "has_icon"].all()
    assert not out.loc[out["type"] != "sauropod", "has_icon"].any()
