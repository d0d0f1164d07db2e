"""HSV rules mapping a colour to the material it most likely depicts."""
from __future__ import annotations

from engine.color import rgb_to_hsv, to_rgb
from engine.materials import ARMOR_BUCKET, Material

# Bucket order of groupings; matches the order materials are listed in a StyleConfig
_BUCKET_ORDER = [
    Material.METAL.value,
    ARMOR_BUCKET,
    Material.CLOTH.value,
    Material.SKIN.value,
    Material.WOOD.value,
    Material.GLOW.value,
    Material.ACCENT.value,
    Material.OTHER.value,
]


class MaterialClassifier:
    """Stateless: classify(c) depends on c alone."""

    def classify(self, color: int) -> Material:
        h, s, v = rgb_to_hsv(*to_rgb(color))

        # Metal/armor: bright and desaturated
        if v > 0.7 and s < 0.3:
            return Material.METAL

        # Glow: bright, saturated yellows and cyans
        if v > 0.8 and s > 0.6 and (40 <= h <= 80 or 160 <= h <= 200):
            return Material.GLOW

        if 15 <= h <= 35 and 0.3 <= s <= 0.7 and 0.5 <= v <= 0.9:
            return Material.SKIN

        # Wood/leather browns
        if 15 <= h <= 45 and 0.2 <= v <= 0.6 and 0.3 <= s <= 0.7:
            return Material.WOOD

        if 0.3 <= v <= 0.7:
            return Material.CLOTH

        if s > 0.6:
            return Material.ACCENT

        return Material.OTHER

    def group_by_material(self, palette: list[int]) -> dict[str, list[int]]:
        """Bucket a palette by material, dropping empty buckets.

        Metal colours are listed under both "metal" and "armor".
        """
        grouped: dict[str, list[int]] = {key: [] for key in _BUCKET_ORDER}
        for color in palette:
            material = self.classify(color)
            grouped[material.value].append(color)
            if material is Material.METAL:
                grouped[ARMOR_BUCKET].append(color)
        return {k: v for k, v in grouped.items() if v}
