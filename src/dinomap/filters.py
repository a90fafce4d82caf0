# src/dinomap/filters.py
import logging
from typing import List, Optional

import pandas as pd

from .config import OPACITY_VISIBLE, OPACITY_FILTERED
from .schema import FILTER_ALL, KNOWN_TYPES, TYPE_COL

logger = logging.getLogger(__name__)


def filter_options(records: pd.DataFrame) -> List[str]:
    """Filter values: all, the known types present in the data, then unknown types as first seen."""
    present = list(dict.fromkeys(records[TYPE_COL].tolist()))
    known = [t for t in KNOWN_TYPES if t in present]
    extra = [t for t in present if t not in KNOWN_TYPES]
    return [FILTER_ALL] + known + extra


class FilterState:
    """Exactly one active filter at a time; "all" until something else is picked."""

    def __init__(self, options: List[str], active: str = FILTER_ALL):
        self.options = list(options)
        if FILTER_ALL not in self.options:
            self.options.insert(0, FILTER_ALL)
        self.active = FILTER_ALL
        self.select(active)

    def select(self, value: str) -> str:
        if value not in self.options:
            raise ValueError(f"Unknown filter {value!r}; expected one of {self.options}")
        if value != self.active:
            logger.debug("Filter %r -> %r", self.active, value)
        self.active = value
        return self.active

    def is_active(self, value: str) -> bool:
        return self.active == value


def opacity_for(dino_type: str, active: str) -> float:
    if active == FILTER_ALL or dino_type == active:
        return OPACITY_VISIBLE
    return OPACITY_FILTERED


def apply_filter(glyphs: pd.DataFrame, active: str, previous: Optional[str] = None) -> pd.DataFrame:
    """
    Glyph table with opacities for ``active``. Filtered-out glyphs stay in the table.

    ``start_opacity`` holds what each glyph showed under ``previous``; the map
    fades from it to ``opacity``. Without a previous filter nothing moves.
    """
    out = glyphs.copy()
    out["opacity"] = [opacity_for(t, active) for t in out[TYPE_COL]]
    if previous is None or previous == active:
        out["start_opacity"] = out["opacity"]
    else:
        out["start_opacity"] = [opacity_for(t, previous) for t in out[TYPE_COL]]
    return out
