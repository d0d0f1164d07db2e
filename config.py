import os
from dotenv import load_dotenv

load_dotenv()

# Logging level for the service entry point
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# ── Analysis ──────────────────────────────────────────────────────────────────

DEFAULT_MAX_COLORS: int = int(os.getenv("DEFAULT_MAX_COLORS", "16"))
REGION_GROW_THRESHOLD: float = float(os.getenv("REGION_GROW_THRESHOLD", "40.0"))

# How multi-reference merges pick the style block: "first" | "majority"
STYLE_MERGE_STRATEGY: str = os.getenv("STYLE_MERGE_STRATEGY", "first")

# ── Generation ────────────────────────────────────────────────────────────────

DEFAULT_SEED: int = int(os.getenv("DEFAULT_SEED", "12345"))
SPRITE_SIZE: int = int(os.getenv("SPRITE_SIZE", "48"))          # square character frame
ITEM_ICON_SIZE: int = int(os.getenv("ITEM_ICON_SIZE", "48"))
CHARACTER_OUTLINE_THICKNESS: int = int(os.getenv("CHARACTER_OUTLINE_THICKNESS", "2"))
LEATHER_GRAIN_DENSITY: float = float(os.getenv("LEATHER_GRAIN_DENSITY", "0.15"))
EQUIPMENT_SCALE: float = 1.2   # equipment reads as "oversized"

# ── QA ────────────────────────────────────────────────────────────────────────

QA_MAX_COLORS: int = int(os.getenv("QA_MAX_COLORS", "16"))
QA_SHADING_LEVELS: int = int(os.getenv("QA_SHADING_LEVELS", "5"))

# ── Variations ────────────────────────────────────────────────────────────────

VARIATION_MIN_SIZE: int = 16
VARIATION_MAX_SIZE: int = 128
VARIATION_SEED_STRIDE: int = 1000   # seed(i) = base_seed + i × stride
VARIATION_COLOR: float = 0.1        # ±10% per channel
VARIATION_SIZE: float = 0.05        # ±5% uniform scale

# ── Palette persistence ───────────────────────────────────────────────────────

PALETTE_SAVE_DIR: str = os.getenv("PALETTE_SAVE_DIR", "palettes")
