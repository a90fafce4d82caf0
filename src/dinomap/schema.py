# src/dinomap/schema.py

# Column names expected in the fossil table
NAME_COL = "name"
TYPE_COL = "type"
DIET_COL = "diet"
LENGTH_COL = "length_m"      # meters
MAX_MA_COL = "max_ma"        # million years ago, older bound
MIN_MA_COL = "min_ma"        # million years ago, younger bound
LNG_COL = "lng"              # degrees
LAT_COL = "lat"              # degrees
REGION_COL = "region"
FAMILY_COL = "family"        # optional

REQUIRED_COLS = [
    NAME_COL, TYPE_COL, DIET_COL, LENGTH_COL, MAX_MA_COL,
    MIN_MA_COL, LNG_COL, LAT_COL, REGION_COL,
]

# Parsed from text; anything unparseable becomes NaN
NUMERIC_COLS = [LENGTH_COL, MAX_MA_COL, MIN_MA_COL, LNG_COL, LAT_COL]

# Known taxonomic groups, in filter-button order
KNOWN_TYPES = [
    "small theropod",
    "large theropod",
    "sauropod",
    "ornithopod",
    "ceratopsian",
    "armored dinosaur",
]

CARNIVOROUS = "carnivorous"
HERBIVOROUS = "herbivorous"
OMNIVOROUS = "omnivorous"
DIETS = [CARNIVOROUS, HERBIVOROUS, OMNIVOROUS]

# Filter value that matches every record
FILTER_ALL = "all"

# Basic sanity bounds
LAT_MIN, LAT_MAX = -90.0, 90.0
LON_MIN, LON_MAX = -180.0, 180.0
