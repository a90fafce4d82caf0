from unittest.mock import MagicMock, patch

import numpy as np
import pytest
import requests

from dinomap.loader import load_records, fetch_world, load_sources, country_shapes


def test_load_records_types_numeric_columns(records):
    assert len(records) == 5
    assert records["length_m"].dtype == float
    # whole-number columns still come back as float
    for c in ("length_m", "max_ma", "min_ma", "lng", "lat"):
        assert records[c].dtype == np.float64
    assert records.loc[0, "lng"] == 100.0
    assert records.loc[3, "max_ma"] == 68.0
    # text columns untouched
    assert records.loc[2, "region"] == "Europe"
    assert records.loc[1, "family"] == ""


def test_bad_numbers_become_nan_and_rows_stay(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text(
        "name,type,diet,length_m,max_ma,min_ma,lng,lat,region,family\n"
        "Odd,sauropod,herbivorous,huge,150,140,abc,40,Asia,X\n",
        encoding="utf-8",
    )
    df = load_records(str(path))
    assert len(df) == 1
    assert np.isnan(df.loc[0, "length_m"])
    assert np.isnan(df.loc[0, "lng"])
    assert df.loc[0, "lat"] == 40.0


def test_family_column_is_optional(tmp_path):
    path = tmp_path / "nofamily.csv"
    path.write_text(
        "name,type,diet,length_m,max_ma,min_ma,lng,lat,region\n"
        "A,sauropod,herbivorous,20,150,140,100,40,Asia\n",
        encoding="utf-8",
    )
    df = load_records(str(path))
    assert df.loc[0, "family"] == ""


def test_missing_required_columns(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text("name,type\nA,sauropod\n", encoding="utf-8")
    with pytest.raises(ValueError, match="length_m"):
        load_records(str(path))


def test_fetch_world_returns_json():
    resp = MagicMock()
    resp.json.return_value = {"type": "Topology"}
    with patch("dinomap.loader.requests.get", return_value=resp) as m_get:
        world = fetch_world("https://example.test/world.json", timeout=5)
    assert world == {"type": "Topology"}
    m_get.assert_called_once_with("https://example.test/world.json", timeout=5)
    resp.raise_for_status.assert_called_once()


def test_fetch_world_propagates_http_errors():
    resp = MagicMock()
    resp.raise_for_status.side_effect = requests.HTTPError("404")
    with patch("dinomap.loader.requests.get", return_value=resp):
        with pytest.raises(requests.HTTPError):
            fetch_world("https://example.test/missing.json")


def test_load_sources_fetches_geometry_after_table(sample_csv):
    calls = []
    with patch("dinomap.loader.load_records", side_effect=lambda p: calls.append("table") or "df"), \
         patch("dinomap.loader.fetch_world", side_effect=lambda u: calls.append("world") or {}):
        records, world = load_sources(str(sample_csv), "https://example.test/w.json")
    assert calls == ["table", "world"]
    assert records == "df"
    assert world == {}


def test_table_failure_skips_geometry_fetch(tmp_path):
    with patch("dinomap.loader.fetch_world") as m_fetch:
        with pytest.raises(FileNotFoundError):
            load_sources(str(tmp_path / "nope.csv"), "https://example.test/w.json")
    m_fetch.assert_not_called()


def test_country_shapes_decodes_topology_object(topology):
    shapes = country_shapes(topology, "countries")
    assert len(shapes) == 2
    assert set(shapes.geometry.geom_type) == {"Polygon"}
    left, right = sorted(shapes.geometry, key=lambda g: g.bounds[0])
    assert left.bounds == (0.0, 0.0, 10.0, 10.0)
    assert right.bounds == (20.0, 0.0, 30.0, 10.0)
