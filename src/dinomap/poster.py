# src/dinomap/poster.py
"""Static SVG rendering of the map, offered as a download next to the live view."""
import html
from pathlib import Path

import pandas as pd
from shapely.geometry import mapping

from .config import (
    WIDTH, HEIGHT, WORLD_OBJECT, ASSETS_DIR, GRATICULE_STROKE, GRATICULE_WIDTH,
    MAP_BACKGROUND, COUNTRY_FILL, COUNTRY_STROKE,
)
from .glyphs import glyph_body, glyph_transform, type_slug
from .loader import country_shapes
from .projection import Mercator, graticule, path_data
from .schema import TYPE_COL, DIET_COL


def render_poster(world: dict, glyphs: pd.DataFrame, projection: Mercator = None,
                  assets_dir: Path = ASSETS_DIR) -> str:
    projection = projection or Mercator()
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{WIDTH}" height="{HEIGHT}" '
        f'viewBox="0 0 {WIDTH} {HEIGHT}">',
        f'<rect width="100%" height="100%" fill="{MAP_BACKGROUND}"/>',
        "<g>",
    ]
    for geom in country_shapes(world, WORLD_OBJECT).geometry:
        if geom is None or geom.is_empty:
            continue
        d = path_data(mapping(geom), projection)
        if d:
            parts.append(
                f'<path class="map-path" d="{d}" fill="{COUNTRY_FILL}" stroke="{COUNTRY_STROKE}" stroke-width="0.6"/>'
            )
    parts.append("</g>")

    grid = {"type": "MultiLineString", "coordinates": graticule()}
    parts.append(
        f'<path class="graticule" d="{path_data(grid, projection)}" fill="none" '
        f'stroke="{GRATICULE_STROKE}" stroke-width="{GRATICULE_WIDTH}"/>'
    )

    parts.append('<g class="dino-layer">')
    for _, g in glyphs.iterrows():
        if pd.isna(g["x"]) or pd.isna(g["y"]):
            continue
        parts.append(
            f'<g class="dino-glyph glyph-type-{html.escape(type_slug(g[TYPE_COL]))}" '
            f'transform="{glyph_transform(g["x"], g["y"])}" opacity="{g["opacity"]}">'
            f'{glyph_body(g[TYPE_COL], g[DIET_COL], g["size"], assets_dir)}</g>'
        )
    parts.append("</g></svg>")
    return "".join(parts)
