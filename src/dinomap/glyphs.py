# src/dinomap/glyphs.py
import base64
import html
import math
import mimetypes
import re
from functools import lru_cache
from pathlib import Path
from typing import Optional

import pandas as pd

from .config import (
    TYPE_COLORS, TYPE_ICONS, DEFAULT_COLOR, ASSETS_DIR, FALLBACK_EMOJI,
    HERBIVORE_CORNER, OMNIVORE_STRETCH, ICON_RATIO, EMOJI_RATIO,
    HOVER_SCALE, OPACITY_VISIBLE,
)
from .projection import Mercator
from .scales import SqrtScale
from .schema import TYPE_COL, DIET_COL, LENGTH_COL, LNG_COL, LAT_COL, CARNIVOROUS, HERBIVOROUS, OMNIVOROUS


def type_color(dino_type: str) -> str:
    return TYPE_COLORS.get(dino_type, DEFAULT_COLOR)


@lru_cache(maxsize=None)
def _data_url(path: str) -> Optional[str]:
    p = Path(path)
    if not p.exists():
        return None
    mime = mimetypes.guess_type(p.name)[0] or "image/png"
    b64 = base64.b64encode(p.read_bytes()).decode()
    return f"data:{mime};base64,{b64}"


def type_icon(dino_type: str, assets_dir: Path = ASSETS_DIR) -> Optional[str]:
    """Sticker for this type as an inline data URL; None when the type has none or the file is missing."""
    fname = TYPE_ICONS.get(dino_type)
    if fname is None:
        return None
    return _data_url(str(Path(assets_dir) / fname))


def diet_shape_name(diet: str) -> str:
    if diet == CARNIVOROUS:
        return "circle"
    if diet == HERBIVOROUS:
        return "square"
    if diet == OMNIVOROUS:
        return "triangle"
    return "default"


def _num(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")


def diet_shape(diet: str, size: float, color: str) -> str:
    """Background shape for a diet, centred on the origin."""
    shape = diet_shape_name(diet)
    if shape == "square":
        return (
            f'<rect class="diet-shape" x="{_num(-size)}" y="{_num(-size)}" '
            f'width="{_num(size * 2)}" height="{_num(size * 2)}" rx="{HERBIVORE_CORNER}" '
            f'fill="{color}" fill-opacity="0.9"/>'
        )
    if shape == "triangle":
        t = size * OMNIVORE_STRETCH
        return (
            f'<polygon class="diet-shape" points="0,{_num(-t)} {_num(t)},{_num(t)} {_num(-t)},{_num(t)}" '
            f'fill="{color}" fill-opacity="0.9"/>'
        )
    opacity = "0.9" if shape == "circle" else "0.8"
    return f'<circle class="diet-shape" r="{_num(size)}" fill="{color}" fill-opacity="{opacity}"/>'


def type_marker(dino_type: str, size: float, assets_dir: Path = ASSETS_DIR) -> str:
    """Sticker image on top of the shape, or the emoji when the type has none."""
    href = type_icon(dino_type, assets_dir)
    if href:
        side = size * ICON_RATIO
        return (
            f'<image class="type-sticker" href="{html.escape(href)}" '
            f'width="{_num(side)}" height="{_num(side)}" x="{_num(-side / 2)}" y="{_num(-side / 2)}" '
            f'preserveAspectRatio="xMidYMid meet"/>'
        )
    return (
        f'<text class="type-sticker-text" text-anchor="middle" dy="0.35em" '
        f'style="font-size:{_num(size * EMOJI_RATIO)}px">{FALLBACK_EMOJI}</text>'
    )


def type_slug(dino_type: str) -> str:
    return re.sub(r"\s+", "-", str(dino_type))


def glyph_extent(size: float) -> float:
    """Half-width of the box that holds any shape/marker of this size."""
    if size is None or math.isnan(size):
        return 0.0
    return size * max(OMNIVORE_STRETCH, ICON_RATIO / 2)


def glyph_transform(x: float, y: float, hovered: bool = False) -> str:
    scale = HOVER_SCALE if hovered else 1
    return f"translate({_num(x)},{_num(y)}) scale({scale})"


def glyph_body(dino_type: str, diet: str, size: float, assets_dir: Path = ASSETS_DIR) -> str:
    """Shape + marker for one record, unpositioned."""
    if size is None or math.isnan(size):
        size = 0.0
    return diet_shape(diet, size, type_color(dino_type)) + type_marker(dino_type, size, assets_dir)


def glyph_svg(glyph, assets_dir: Path = ASSETS_DIR) -> str:
    """Self-contained <svg> for a glyph row, used as a map marker."""
    half = glyph_extent(glyph["size"])
    side = _num(half * 2)
    body = glyph_body(glyph[TYPE_COL], glyph[DIET_COL], glyph["size"], assets_dir)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{side}" height="{side}" '
        f'viewBox="{_num(-half)} {_num(-half)} {side} {side}" overflow="visible">'
        f'<g class="dino-glyph glyph-type-{html.escape(type_slug(glyph[TYPE_COL]))}">{body}</g></svg>'
    )


def build_glyphs(records: pd.DataFrame, scale: SqrtScale, projection: Mercator,
                 assets_dir: Path = ASSETS_DIR) -> pd.DataFrame:
    """One glyph row per record with position, size, color and shape. Nothing is dropped."""
    out = records.copy()
    out["x"], out["y"] = projection.project_many(out[LNG_COL], out[LAT_COL])
    out["size"] = [scale(v) for v in out[LENGTH_COL]]
    out["color"] = out[TYPE_COL].map(type_color)
    out["shape"] = out[DIET_COL].map(diet_shape_name)
    out["has_icon"] = [type_icon(t, assets_dir) is not None for t in out[TYPE_COL]]
    out["opacity"] = OPACITY_VISIBLE
    return out
