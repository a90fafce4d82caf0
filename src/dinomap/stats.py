# src/dinomap/stats.py
from dataclasses import dataclass

import pandas as pd

from .config import VISIBLE_THRESHOLD
from .schema import REGION_COL, LENGTH_COL


@dataclass(frozen=True)
class VisibleStats:
    visible_count: int
    location_count: int
    avg_length: str      # one decimal, e.g. "15.0"


def visible_glyphs(glyphs: pd.DataFrame, threshold: float = VISIBLE_THRESHOLD) -> pd.DataFrame:
    """Glyphs currently drawn above the opacity threshold."""
    return glyphs[glyphs["opacity"] > threshold]


def visible_stats(glyphs: pd.DataFrame, threshold: float = VISIBLE_THRESHOLD) -> VisibleStats:
    """Count, distinct regions and mean length of the visible glyphs, read off their opacity."""
    vis = visible_glyphs(glyphs, threshold)
    mean = vis[LENGTH_COL].mean() if len(vis) else 0.0
    if pd.isna(mean):
        mean = 0.0
    return VisibleStats(
        visible_count=int(len(vis)),
        location_count=int(vis[REGION_COL].nunique(dropna=False)),
        avg_length=f"{mean:.1f}",
    )
