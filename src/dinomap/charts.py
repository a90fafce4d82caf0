# src/dinomap/charts.py
import pandas as pd
import plotly.graph_objects as go

from .glyphs import type_color
from .schema import NAME_COL, TYPE_COL, MAX_MA_COL, MIN_MA_COL
from .stats import visible_glyphs


def _opaque(color: str) -> str:
    # plotly rejects 8-digit #rrggbbaa hex
    return color[:7] if len(color) == 9 else color


def time_range_figure(glyphs: pd.DataFrame) -> go.Figure:
    """Existence interval (max_ma -> min_ma) of each visible record, oldest at the top."""
    vis = visible_glyphs(glyphs).dropna(subset=[MAX_MA_COL, MIN_MA_COL])
    fig = go.Figure()
    if vis.empty:
        fig.update_layout(title="No dinosaurs visible", height=300, template="plotly_dark")
        return fig

    vis = vis.sort_values(MAX_MA_COL, ascending=True)
    for dino_type, sub in vis.groupby(TYPE_COL, sort=False):
        fig.add_trace(go.Bar(
            y=sub[NAME_COL],
            x=sub[MAX_MA_COL] - sub[MIN_MA_COL],
            base=sub[MIN_MA_COL],
            orientation="h",
            name=str(dino_type),
            marker_color=_opaque(type_color(dino_type)),
            hovertemplate="%{y}: %{base} – %{customdata} MYA<extra></extra>",
            customdata=sub[MAX_MA_COL],
        ))
    fig.update_xaxes(title="Million years ago", autorange="reversed")
    fig.update_yaxes(categoryorder="array", categoryarray=vis[NAME_COL].tolist())
    fig.update_layout(
        title="Time ranges of visible dinosaurs",
        barmode="overlay",
        height=max(300, 22 * len(vis) + 120),
        template="plotly_dark",
    )
    return fig
