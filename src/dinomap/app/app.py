# app.py
import logging
import os
from pathlib import Path

import streamlit as st
import requests

from streamlit_folium import st_folium

from dinomap.config import DATA_PATH, WORLD_URL, WIDTH, HEIGHT
from dinomap.loader import load_sources
from dinomap.projection import Mercator
from dinomap.scales import size_scale
from dinomap.glyphs import build_glyphs, type_slug
from dinomap.filters import FilterState, filter_options, apply_filter
from dinomap.stats import visible_stats, visible_glyphs
from dinomap.map_view import build_map
from dinomap.poster import render_poster
from dinomap.charts import time_range_figure
from dinomap.schema import FILTER_ALL, LENGTH_COL, NAME_COL, TYPE_COL, DIET_COL, REGION_COL, FAMILY_COL

logging.basicConfig(level=os.environ.get("DINO_LOG_LEVEL", "INFO"))
logger = logging.getLogger("dinomap.app")


# --- Page + CSS
st.set_page_config(page_title="Dino Atlas", layout="wide")

css_path = Path(__file__).parent / "style.css"
if css_path.exists():
    st.markdown(f"<style>{css_path.read_text()}</style>", unsafe_allow_html=True)
else:
    st.warning(f"Missing CSS at {css_path}")

st.markdown(
    """
    <div class="app-header">
        <h1 class="app-title">Dino Atlas</h1>
        <div class="app-subtitle">Where dinosaur fossils were found, sized by body length</div>
    </div>
    """,
    unsafe_allow_html=True,
)


# ==============================
# Load sources (table first, then geometry)
# ==============================
@st.cache_data(show_spinner="Loading fossils and world map…")
def cached_sources(path: str, url: str):
    return load_sources(path, url)


if not os.path.exists(DATA_PATH):
    st.error(f"CSV not found at {DATA_PATH}. Please place your file there.")
    st.stop()

try:
    records, world = cached_sources(DATA_PATH, WORLD_URL)
except ValueError as e:
    # missing columns, or a geometry response that is not JSON
    logger.error("Sources unavailable: %s", e)
    st.error(str(e))
    st.stop()
except requests.RequestException as e:
    logger.error("World geometry unavailable: %s", e)
    st.error(f"Could not load world geometry from {WORLD_URL}: {e}")
    st.stop()

projection = Mercator()
glyphs = build_glyphs(records, size_scale(records[LENGTH_COL]), projection)


# ==============================
# Filter buttons
# ==============================
options = filter_options(records)
if "filter" not in st.session_state or st.session_state["filter"] not in options:
    st.session_state["filter"] = FILTER_ALL
state = FilterState(options, st.session_state["filter"])


def _select_filter(value: str):
    st.session_state["prev_filter"] = state.active
    st.session_state["filter"] = state.select(value)


def filter_button(value: str):
    active = state.is_active(value)
    label = "All" if value == FILTER_ALL else value.title()
    with st.container(key=f"filter-{type_slug(value)}"):
        st.button(label, key=f"filter_{value}", on_click=_select_filter, args=(value,),
                  type="primary" if active else "secondary", use_container_width=True)


cols = st.columns(len(options))
for col, value in zip(cols, options):
    with col:
        filter_button(value)

# Stats follow the target opacities of this very render, no timer involved.
# The map fades from the previous filter only on the rerun a click triggers.
glyphs = apply_filter(glyphs, state.active, st.session_state.pop("prev_filter", None))
stats = visible_stats(glyphs)

m1, m2, m3 = st.columns(3)
m1.metric("Visible dinosaurs", stats.visible_count)
m2.metric("Fossil regions", stats.location_count)
m3.metric("Avg length (m)", stats.avg_length)


# ==============================
# Map
# ==============================
m = build_map(world, glyphs, projection)
with st.container(key="map-shell"):
    st_folium(m, width=WIDTH, height=HEIGHT, returned_objects=[])

st.download_button(
    "Download map as SVG",
    data=render_poster(world, glyphs, projection),
    file_name=f"dino-atlas-{state.active.replace(' ', '-')}.svg",
    mime="image/svg+xml",
)

with st.expander("Visible dinosaurs"):
    vis = visible_glyphs(glyphs)
    st.plotly_chart(time_range_figure(glyphs), use_container_width=True)
    st.dataframe(
        vis[[NAME_COL, TYPE_COL, DIET_COL, LENGTH_COL, REGION_COL, FAMILY_COL]],
        use_container_width=True,
        hide_index=True,
    )
