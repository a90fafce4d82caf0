import pandas as pd

from dinomap.filters import apply_filter
from dinomap.stats import VisibleStats, visible_stats


def _table():
    return pd.DataFrame({
        "name": ["A", "B", "C"],
        "type": ["sauropod", "sauropod", "ornithopod"],
        "length_m": [20.0, 10.0, 5.0],
        "region": ["Asia", "Asia", "Europe"],
        "opacity": [1.0, 1.0, 1.0],
    })


def test_sauropod_filter_example():
    stats = visible_stats(apply_filter(_table(), "sauropod"))
    assert stats == VisibleStats(visible_count=2, location_count=1, avg_length="15.0")


def test_all_filter():
    stats = visible_stats(apply_filter(_table(), "all"))
    assert stats == VisibleStats(visible_count=3, location_count=2, avg_length="11.7")


def test_empty_visible_set():
    stats = visible_stats(apply_filter(_table(), "ceratopsian"))
    assert stats == VisibleStats(visible_count=0, location_count=0, avg_length="0.0")


def test_visibility_is_read_from_opacity():
    table = _table()
    table["opacity"] = [0.5, 0.51, 0.08]
    stats = visible_stats(table)
    assert stats.visible_count == 1
    assert stats.avg_length == "10.0"


def test_stats_follow_filter_on_sample(glyphs):
    out = apply_filter(glyphs, "sauropod")
    expected = glyphs[glyphs["type"] == "sauropod"]
    stats = visible_stats(out)
    assert stats.visible_count == len(expected)
    assert stats.location_count == expected["region"].nunique()
    assert stats.avg_length == f"{expected['length_m'].mean():.1f}"
