# src/dinomap/projection.py
import math
from typing import Any, Dict, Iterable, List, Tuple

import numpy as np
from pyproj import Transformer

from .config import MERCATOR_SCALE, MERCATOR_TRANSLATE, WIDTH, HEIGHT, GRATICULE_STEP
from .schema import LAT_MAX, LON_MIN, LON_MAX

# Web-mercator cutoff; beyond this y runs off to infinity
MERCATOR_MAX_LAT = 85.0511287798
# Leaflet tile size used to convert a projection scale to a zoom level
TILE_SIZE = 256
# Sphere radius of EPSG:3857, metres
EARTH_RADIUS_M = 6378137.0


class Mercator:
    """
    Web Mercator (EPSG:3857) fitted to the canvas.

    pyproj gives metres; dividing by the sphere radius brings them back to
    radians, then ``scale`` and ``translate`` place them in pixels with y down.
    """

    def __init__(self, scale: float = MERCATOR_SCALE,
                 translate: Tuple[float, float] = MERCATOR_TRANSLATE,
                 size: Tuple[int, int] = (WIDTH, HEIGHT)):
        self.scale = float(scale)
        self.translate = (float(translate[0]), float(translate[1]))
        self.size = size
        self._forward = Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)
        self._inverse = Transformer.from_crs("EPSG:3857", "EPSG:4326", always_xy=True)

    def __call__(self, lng: float, lat: float) -> Tuple[float, float]:
        xs, ys = self.project_many([lng], [lat])
        return float(xs[0]), float(ys[0])

    def project_many(self, lngs: Iterable[float], lats: Iterable[float]) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorized projection; NaN coordinates stay NaN."""
        lng = np.asarray(lngs, dtype=float)
        lat = np.clip(np.asarray(lats, dtype=float), -MERCATOR_MAX_LAT, MERCATOR_MAX_LAT)
        x = np.full(lng.shape, np.nan)
        y = np.full(lng.shape, np.nan)
        ok = ~(np.isnan(lng) | np.isnan(lat))
        if ok.any():
            mx, my = self._forward.transform(lng[ok], lat[ok])
            x[ok] = self.translate[0] + self.scale * np.asarray(mx) / EARTH_RADIUS_M
            y[ok] = self.translate[1] - self.scale * np.asarray(my) / EARTH_RADIUS_M
        return x, y

    def invert(self, x: float, y: float) -> Tuple[float, float]:
        mx = (x - self.translate[0]) / self.scale * EARTH_RADIUS_M
        my = (self.translate[1] - y) / self.scale * EARTH_RADIUS_M
        lng, lat = self._inverse.transform(mx, my)
        return float(lng), float(lat)

    def center(self) -> Tuple[float, float]:
        """(lat, lng) shown at the middle of the canvas, as folium wants it."""
        lng, lat = self.invert(self.size[0] / 2, self.size[1] / 2)
        return lat, lng

    def zoom(self) -> float:
        """Leaflet zoom whose web-mercator scale equals this projection's."""
        return math.log2(2 * math.pi * self.scale / TILE_SIZE)


def graticule(step: float = GRATICULE_STEP) -> List[List[Tuple[float, float]]]:
    """
    Lng/lat reference grid as polylines of (lng, lat) pairs.

    Meridians every ``step`` degrees span ±80° latitude, except those on a
    multiple of 90° which run pole to pole. Parallels every ``step`` degrees
    between ±80° span the full longitude range.
    """
    minor = 80.0
    lines = []
    for lng in np.arange(LON_MIN, LON_MAX + step / 2, step):
        extent = LAT_MAX if lng % 90 == 0 else minor
        lats = np.linspace(-extent, extent, int(2 * extent / 2.5) + 1)
        lines.append([(float(lng), float(lat)) for lat in lats])
    for lat in np.arange(-minor, minor + step / 2, step):
        lngs = np.linspace(LON_MIN, LON_MAX, int((LON_MAX - LON_MIN) / 2.5) + 1)
        lines.append([(float(lng), float(lat)) for lng in lngs])
    return lines


def _ring_d(ring, projection: Mercator, close: bool) -> str:
    if not len(ring):
        return ""
    xs, ys = projection.project_many([p[0] for p in ring], [p[1] for p in ring])
    d = "M" + "L".join(f"{x:.2f},{y:.2f}" for x, y in zip(xs, ys))
    return d + "Z" if close else d


def path_data(geometry: Dict[str, Any], projection: Mercator) -> str:
    """SVG path ``d`` for a GeoJSON line/polygon geometry."""
    if not geometry:
        return ""
    kind = geometry["type"]
    coords = geometry.get("coordinates")
    if kind == "Polygon":
        return "".join(_ring_d(r, projection, True) for r in coords)
    if kind == "MultiPolygon":
        return "".join(_ring_d(r, projection, True) for poly in coords for r in poly)
    if kind == "LineString":
        return _ring_d(coords, projection, False)
    if kind == "MultiLineString":
        return "".join(_ring_d(line, projection, False) for line in coords)
    if kind == "GeometryCollection":
        return "".join(path_data(g, projection) for g in geometry["geometries"])
    return ""
