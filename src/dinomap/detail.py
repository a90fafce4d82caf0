# src/dinomap/detail.py
import html
import math

from .schema import (
    NAME_COL, TYPE_COL, DIET_COL, LENGTH_COL, MAX_MA_COL, MIN_MA_COL, REGION_COL, FAMILY_COL,
)

PLACEHOLDER_HTML = "<p>Hover over a dinosaur to see details.</p>"


def _fmt(v) -> str:
    """Numbers the way they were written: 12.0 -> 12, 6.5 -> 6.5."""
    if isinstance(v, float):
        if math.isnan(v):
            return "NaN"
        if v.is_integer():
            return str(int(v))
    return str(v)


def format_duration(max_ma: float, min_ma: float) -> str:
    return f"{max_ma - min_ma:.1f}"


def family_label(family) -> str:
    if family is None or (isinstance(family, float) and math.isnan(family)):
        return "Unknown"
    return str(family).strip() or "Unknown"


def detail_html(rec) -> str:
    """Info-panel HTML for one record (dict or DataFrame row)."""
    e = lambda v: html.escape(_fmt(v))
    return (
        f'<div class="info-title">{e(rec[NAME_COL])}</div>'
        f"<p><strong>Type:</strong> {e(rec[TYPE_COL])}</p>"
        f"<p><strong>Diet:</strong> {e(rec[DIET_COL])}</p>"
        f"<p><strong>Length:</strong> {e(rec[LENGTH_COL])} m</p>"
        f"<p><strong>Time Range:</strong> {e(rec[MAX_MA_COL])} – {e(rec[MIN_MA_COL])} MYA</p>"
        f"<p><strong>Existed for:</strong> {format_duration(rec[MAX_MA_COL], rec[MIN_MA_COL])} million years</p>"
        f"<p><strong>Region:</strong> {e(rec[REGION_COL])}</p>"
        f"<p><strong>Family:</strong> {html.escape(family_label(rec.get(FAMILY_COL)))}</p>"
    )
