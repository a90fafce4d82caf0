# src/dinomap/loader.py
import io
import json
import logging
from typing import Tuple

import geopandas as gpd
import pandas as pd
import requests

from .config import DATA_PATH, WORLD_URL, WORLD_OBJECT, HTTP_TIMEOUT_S
from .schema import REQUIRED_COLS, NUMERIC_COLS, FAMILY_COL

logger = logging.getLogger(__name__)


def load_records(path: str = DATA_PATH) -> pd.DataFrame:
    """
    Read the fossil table and type its numeric columns.

    Numeric columns are always float; values that don't parse become NaN.
    Text columns are left as-is. Rows are never dropped, a record with bad
    numbers still gets a glyph.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    missing = set(REQUIRED_COLS) - set(df.columns)
    if missing:
        raise ValueError(f"CSV missing required columns: {sorted(missing)}")

    for c in NUMERIC_COLS:
        df[c] = pd.to_numeric(df[c].str.strip(), errors="coerce").astype(float)

    if FAMILY_COL not in df.columns:
        df[FAMILY_COL] = ""

    bad = int(df[NUMERIC_COLS].isna().any(axis=1).sum())
    if bad:
        logger.warning("%d record(s) in %s have non-numeric fields", bad, path)
    logger.info("Loaded %d fossil records from %s", len(df), path)
    return df


def fetch_world(url: str = WORLD_URL, timeout: float = HTTP_TIMEOUT_S) -> dict:
    """GET the world topology document. No retry, errors propagate."""
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    world = r.json()
    logger.info("Fetched world geometry from %s", url)
    return world


def load_sources(data_path: str = DATA_PATH, world_url: str = WORLD_URL) -> Tuple[pd.DataFrame, dict]:
    """Load the table, then the geometry. The fetch only starts once the table is in."""
    records = load_records(data_path)
    world = fetch_world(world_url)
    return records, world


def country_shapes(world: dict, object_name: str = WORLD_OBJECT) -> gpd.GeoDataFrame:
    """One row per geometry of a TopoJSON object, decoded by GDAL's TopoJSON driver."""
    buf = io.BytesIO(json.dumps(world).encode("utf-8"))
    shapes = gpd.read_file(buf, layer=object_name)
    logger.debug("Decoded %d shapes from topology object %r", len(shapes), object_name)
    return shapes
