# src/dinomap/map_view.py
import html
import logging
import math

import folium
import pandas as pd
from jinja2 import Template

from .config import (
    WIDTH, HEIGHT, WORLD_OBJECT, GRATICULE_STROKE, GRATICULE_WIDTH,
    HOVER_SCALE, FILTER_TRANSITION_MS, HOVER_TRANSITION_MS,
    MAP_BACKGROUND, COUNTRY_FILL, COUNTRY_STROKE, TYPE_COLORS, DEFAULT_COLOR, FALLBACK_EMOJI,
)
from .detail import detail_html, PLACEHOLDER_HTML
from .glyphs import glyph_svg, glyph_extent, diet_shape
from .projection import Mercator, graticule
from .schema import LAT_COL, LNG_COL, DIETS

logger = logging.getLogger(__name__)

# Rendered through jinja by folium; keep "{#" and "{{" out of it
MAP_CSS = f"""
<style>
.folium-map {{ background: {MAP_BACKGROUND}; }}
.leaflet-container {{ background: {MAP_BACKGROUND}; }}
path.graticule {{ pointer-events: none; }}
.dino-marker {{ background: none; border: none; }}
.dino-marker:hover {{ z-index: 100000 !important; }}
.dino-glyph-wrap {{
    transform-origin: center;
    transition: transform {HOVER_TRANSITION_MS}ms ease, opacity {FILTER_TRANSITION_MS}ms ease;
    cursor: pointer;
}}
.dino-marker:hover .dino-glyph-wrap {{ transform: scale({HOVER_SCALE}); }}
.dino-info {{
    position: absolute; top: 16px; right: 16px; z-index: 9999; width: 240px;
    background: rgba(12, 22, 34, .92); color: #e8eef5;
    padding: 10px 12px; border: 1px solid rgba(255,255,255,.12);
    border-radius: 8px; font-size: 13px; line-height: 1.35;
}}
.dino-info p {{ margin: 3px 0; }}
.dino-info .info-title {{ font-size: 15px; font-weight: 700; margin-bottom: 6px; }}
.dino-legend {{
    position: absolute; bottom: 16px; left: 16px; z-index: 9999;
    background: rgba(12, 22, 34, .92); color: #e8eef5;
    padding: 8px 10px; border: 1px solid rgba(255,255,255,.12);
    border-radius: 8px; font-size: 12px;
}}
</style>
"""

HOVER_PANEL_DELAY_MS = 30


class StaticTopoJson(folium.TopoJson):
    """Country layer drawn from the topology as-is, with no pointer events."""

    _template = Template(
        """
        {% macro script(this, kwargs) %}
            var {{ this.get_name() }}_data = {{ this.data|tojson }};
            var {{ this.get_name() }} = L.geoJson(
                topojson.feature(
                    {{ this.get_name() }}_data,
                    {{ this.get_name() }}_data{{ this._safe_object_path }}
                ),
                {
                    interactive: false,
                }
            ).addTo({{ this._parent.get_name() }});
            {{ this.get_name() }}.setStyle(function(feature) {
                return feature.properties.style;
            });
        {% endmacro %}
        """
    )


class HoverPanel(folium.MacroElement):
    """
    Wires the glyph markers to the info panel.

    Hovering a glyph copies its ``data-detail`` into ``#info-content``; leaving
    it puts the placeholder back. Once the markers are on the page each glyph
    is moved from its start opacity to ``data-opacity`` so the CSS transition
    plays the filter change.
    """

    _template = Template(
        """
        {% macro script(this, kwargs) %}
        (function () {
            var placeholder = {{ this.placeholder|tojson }};
            function wrapOf(el) { return el && el.closest ? el.closest(".dino-glyph-wrap") : null; }
            document.addEventListener("mouseover", function (e) {
                var g = wrapOf(e.target);
                var box = document.getElementById("info-content");
                if (g && box) { box.innerHTML = g.getAttribute("data-detail"); }
            });
            document.addEventListener("mouseout", function (e) {
                var g = wrapOf(e.target);
                var box = document.getElementById("info-content");
                if (g && box && !g.contains(e.relatedTarget)) { box.innerHTML = placeholder; }
            });
            setTimeout(function () {
                document.querySelectorAll(".dino-glyph-wrap[data-opacity]").forEach(function (g) {
                    g.style.opacity = g.getAttribute("data-opacity");
                });
            }, {{ this.delay }});
        })();
        {% endmacro %}
        """
    )

    def __init__(self, placeholder: str = PLACEHOLDER_HTML, delay: int = HOVER_PANEL_DELAY_MS):
        super().__init__()
        self._name = "HoverPanel"
        self.placeholder = placeholder
        self.delay = delay


def _legend_html() -> str:
    types = "".join(
        f'<div style="display:flex;align-items:center;margin:2px 0;">'
        f'<span style="display:inline-block;width:12px;height:12px;border-radius:50%;background:{c};margin-right:6px;"></span>'
        f'<span>{html.escape(t)}</span></div>'
        for t, c in TYPE_COLORS.items()
    )
    types += (
        f'<div style="display:flex;align-items:center;margin:2px 0;">'
        f'<span style="margin-right:6px;">{FALLBACK_EMOJI}</span><span>other</span></div>'
    )
    diets = "".join(
        f'<div style="display:flex;align-items:center;margin:2px 0;">'
        f'<svg width="16" height="16" viewBox="-8 -8 16 16" style="margin-right:6px;">'
        f'{diet_shape(d, 5, DEFAULT_COLOR)}</svg><span>{d}</span></div>'
        for d in DIETS
    )
    return (
        '<div class="dino-legend">'
        '<div style="font-weight:700;margin-bottom:4px;">Type</div>'
        f"{types}"
        '<div style="font-weight:700;margin:6px 0 4px;">Diet</div>'
        f"{diets}</div>"
    )


def glyph_marker(glyph) -> folium.Marker:
    """
    DivIcon marker carrying the glyph svg and its detail html.

    The wrapper starts at ``start_opacity`` and names the target in
    ``data-opacity``; the hover panel script moves it there.
    """
    half = glyph_extent(glyph["size"])
    side = max(1, int(math.ceil(half * 2)))
    start = glyph.get("start_opacity", glyph["opacity"])
    body = (
        f'<div class="dino-glyph-wrap" style="opacity:{start};width:{side}px;height:{side}px;" '
        f'data-opacity="{glyph["opacity"]}" '
        f'data-detail="{html.escape(detail_html(glyph), quote=True)}">{glyph_svg(glyph)}</div>'
    )
    return folium.Marker(
        location=[glyph[LAT_COL], glyph[LNG_COL]],
        icon=folium.DivIcon(
            html=body,
            icon_size=(side, side),
            icon_anchor=(side // 2, side // 2),
            class_name="dino-marker",
        ),
    )


def build_map(world: dict, glyphs: pd.DataFrame, projection: Mercator = None) -> folium.Map:
    """Static world map: countries, graticule, then one marker per glyph."""
    projection = projection or Mercator()
    m = folium.Map(
        location=list(projection.center()),
        zoom_start=projection.zoom(),
        tiles=None,
        width=WIDTH,
        height=HEIGHT,
        zoom_control=False,
        scroll_wheel_zoom=False,
        double_click_zoom=False,
        dragging=False,
        zoom_snap=0.01,
        attribution_control=False,
    )

    # --- Background layers (no interaction)
    StaticTopoJson(
        world,
        f"objects.{WORLD_OBJECT}",
        name="countries",
        control=False,
        style_function=lambda _: {
            "fillColor": COUNTRY_FILL,
            "color": COUNTRY_STROKE,
            "weight": 0.6,
            "fillOpacity": 1,
        },
    ).add_to(m)

    grid = [[(lat, lng) for lng, lat in line] for line in graticule()]
    folium.PolyLine(
        grid, color=GRATICULE_STROKE, weight=GRATICULE_WIDTH, opacity=1, className="graticule",
    ).add_to(m)

    # --- Glyph layer
    layer = folium.FeatureGroup(name="dinosaurs").add_to(m)
    skipped = 0
    for _, g in glyphs.iterrows():
        if pd.isna(g[LAT_COL]) or pd.isna(g[LNG_COL]):
            skipped += 1
            continue
        glyph_marker(g).add_to(layer)
    if skipped:
        logger.warning("Skipped %d glyph(s) with unparseable coordinates", skipped)

    # --- Info panel and legend go in the page, the hover wiring rides with the map
    root = m.get_root()
    root.header.add_child(folium.Element(MAP_CSS))
    root.html.add_child(folium.Element(
        f'<div class="dino-info"><div id="info-content">{PLACEHOLDER_HTML}</div></div>'
    ))
    root.html.add_child(folium.Element(_legend_html()))
    HoverPanel(PLACEHOLDER_HTML).add_to(m)
    return m
