"""Closed vocabularies shared by analysis and generation."""
from __future__ import annotations

from enum import Enum


class Material(str, Enum):
    METAL = "metal"
    CLOTH = "cloth"
    LEATHER = "leather"
    SKIN = "skin"
    WOOD = "wood"
    GLOW = "glow"
    ACCENT = "accent"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value):
        # Unknown material names land in the fallback arm instead of raising
        return cls.OTHER


# Palette buckets are keyed by material name; metal is mirrored into "armor"
ARMOR_BUCKET = "armor"


class ShadingMethod(str, Enum):
    CEL = "cel-shading"
    GRADIENT = "gradient"
    FLAT = "flat"

    @classmethod
    def _missing_(cls, value):
        return cls.FLAT


class LightDirection(str, Enum):
    TOP_LEFT = "top-left"
    TOP = "top"
    TOP_RIGHT = "top-right"
    LEFT = "left"
    CENTER = "center"
    BOTTOM = "bottom"

    @classmethod
    def _missing_(cls, value):
        return cls.TOP_LEFT
