# src/dinomap/config.py
import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).parent

# ---------- Data sources ----------
DATA_PATH = os.environ.get("DINO_DATA_PATH", os.path.join("data", "dinosaurs.csv"))
WORLD_URL = os.environ.get(
    "DINO_WORLD_URL", "https://cdn.jsdelivr.net/npm/world-atlas@2/countries-110m.json"
)
WORLD_OBJECT = "countries"   # object inside the topology holding country shapes
HTTP_TIMEOUT_S = 30
ASSETS_DIR = Path(os.environ.get("DINO_ASSETS_DIR", str(PACKAGE_DIR / "app" / "assets")))

# ---------- Canvas / projection ----------
WIDTH = 1400
HEIGHT = 750
MERCATOR_SCALE = 180
MERCATOR_TRANSLATE = (WIDTH / 2, HEIGHT / 1.6)
GRATICULE_STEP = 10          # degrees between grid lines
GRATICULE_STROKE = "rgba(255,255,255,0.06)"
GRATICULE_WIDTH = 0.5

# ---------- Glyphs ----------
RADIUS_RANGE = (8, 35)       # px, sqrt-scaled from body length
HERBIVORE_CORNER = 6         # rx of the rounded square
OMNIVORE_STRETCH = 1.3       # triangle half-extent relative to size
ICON_RATIO = 2.2             # icon side relative to size
EMOJI_RATIO = 1.4            # emoji font size relative to size
FALLBACK_EMOJI = "🦖"
DEFAULT_COLOR = "#999"

# ---------- Interaction ----------
OPACITY_VISIBLE = 1.0
OPACITY_FILTERED = 0.08
VISIBLE_THRESHOLD = 0.5      # glyphs above this opacity count as visible
HOVER_SCALE = 1.45
FILTER_TRANSITION_MS = 300
HOVER_TRANSITION_MS = 200

# Fixed palette per dinosaur type
TYPE_COLORS = {
    "small theropod": "#e7d63cff",
    "large theropod": "#c91c09ff",
    "sauropod": "#11a0d0ff",
    "ornithopod": "#5216a0ff",
    "ceratopsian": "#48ba0aff",
    "armored dinosaur": "#f39c12",
}

# Sticker per dinosaur type, relative to ASSETS_DIR
TYPE_ICONS = {
    "small theropod": "small-theropod-sticker.png",
    "large theropod": "large-theropod-sticker.png",
    "sauropod": "sauropods-sticker.png",
    "ornithopod": "ornithopods-sticker.png",
    "ceratopsian": "ceratopsians-sticker.png",
    "armored dinosaur": "armored-dinosaurs-sticker.png",
}

MAP_BACKGROUND = "#0b1622"
COUNTRY_FILL = "#1d2b3a"
COUNTRY_STROKE = "#2f4257"
