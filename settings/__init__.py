"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("CANVASS_DB_PATH", "canvass.duckdb")

# Logging
LOG_DIR = Path("logs")

# Seeding
STORE_BATCH_LIMIT = 500
SEED_BATCH_SIZE = int(os.getenv("CANVASS_SEED_BATCH_SIZE", "400"))
DEMO_SEED = int(os.getenv("CANVASS_DEMO_SEED", "2026"))

# Analytics - survey freshness
FRESHNESS_DAYS = int(os.getenv("CANVASS_FRESHNESS_DAYS", "14"))

# Analytics - turnout weights (0 <= low <= medium <= high <= 1)
TURNOUT_WEIGHT_HIGH = float(os.getenv("CANVASS_TURNOUT_WEIGHT_HIGH", "0.9"))
TURNOUT_WEIGHT_MEDIUM = float(os.getenv("CANVASS_TURNOUT_WEIGHT_MEDIUM", "0.6"))
TURNOUT_WEIGHT_LOW = float(os.getenv("CANVASS_TURNOUT_WEIGHT_LOW", "0.3"))

# Analytics - win probability
SWING_CONVERSION = float(os.getenv("CANVASS_SWING_CONVERSION", "0.5"))
WIN_STEEPNESS = float(os.getenv("CANVASS_WIN_STEEPNESS", "10.0"))
WIN_MIDPOINT = float(os.getenv("CANVASS_WIN_MIDPOINT", "0.5"))

# Win bands: lower bound (percent) for each band, highest first
WIN_BAND_STRONG = float(os.getenv("CANVASS_WIN_BAND_STRONG", "70"))
WIN_BAND_LEANING = float(os.getenv("CANVASS_WIN_BAND_LEANING", "55"))
WIN_BAND_TOSSUP = float(os.getenv("CANVASS_WIN_BAND_TOSSUP", "45"))
WIN_BAND_TRAILING = float(os.getenv("CANVASS_WIN_BAND_TRAILING", "30"))

# Risk pockets (percent thresholds)
DANGER_OPPOSITION_PCT = float(os.getenv("CANVASS_DANGER_OPPOSITION_PCT", "40"))
DANGER_SEVERE_PCT = float(os.getenv("CANVASS_DANGER_SEVERE_PCT", "55"))
WEAK_SUPPORT_PCT = float(os.getenv("CANVASS_WEAK_SUPPORT_PCT", "40"))
WEAK_SEVERE_PCT = float(os.getenv("CANVASS_WEAK_SEVERE_PCT", "25"))
MIN_SAMPLE_VOTERS = int(os.getenv("CANVASS_MIN_SAMPLE_VOTERS", "5"))
COVERAGE_FLOOR_PCT = float(os.getenv("CANVASS_COVERAGE_FLOOR_PCT", "50"))
COVERAGE_SEVERE_PCT = float(os.getenv("CANVASS_COVERAGE_SEVERE_PCT", "30"))
FRESHNESS_FLOOR_PCT = float(os.getenv("CANVASS_FRESHNESS_FLOOR_PCT", "50"))
UNFAVORABLE_HOUSEHOLD_PCT = float(os.getenv("CANVASS_UNFAVORABLE_HOUSEHOLD_PCT", "30"))
UNFAVORABLE_SEVERE_PCT = float(os.getenv("CANVASS_UNFAVORABLE_SEVERE_PCT", "50"))
