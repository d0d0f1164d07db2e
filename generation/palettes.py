"""Named palette registry and colour-derivation helpers."""
from __future__ import annotations

import copy
import logging
from typing import Optional

from engine.color import darken, from_rgb, lighten, to_rgb
from engine.records import StyleConfig
from engine.rng import SeededRng
from store.base import BasePaletteStore

logger = logging.getLogger(__name__)

Palette = dict[str, list[int]]

FALLBACK_COLOR = 0xFFFFFF

BUILTIN_PALETTES: dict[str, Palette] = {
    "paladin": {
        "armor": [0xC0C0C0, 0xE0E0E0, 0xA0A0A0, 0x808080],
        "accent": [0x4169E1, 0x5A7FFF, 0x2E4DB8],
        "cloth": [0x2C3E50, 0x34495E, 0x1A252F],
        "skin": [0xFFDBAC, 0xF4C2A1, 0xE8B896],
        "metal": [0xE0E0E0, 0xC0C0C0, 0xA0A0A0, 0x808080],
        "gold": [0xFFD700, 0xFFA500, 0xFF8C00],
        "glow": [0xFFFF00, 0xFFFA00, 0xFFF500],
    },
    "warm": {
        "skin": [0xFFDBAC, 0xF4C2A1, 0xE8B896],
        "cloth": [0x8B4513, 0xA0522D, 0xCD853F],
        "metal": [0xC0C0C0, 0xA0A0A0, 0x808080],
    },
    "cool": {
        "skin": [0xFFDBAC, 0xF4C2A1, 0xE8B896],
        "cloth": [0x2C3E50, 0x34495E, 0x1A252F],
        "metal": [0x708090, 0x778899, 0x5F7F8F],
    },
    "metallic": {
        "armor": [0xC0C0C0, 0xE0E0E0, 0xA0A0A0, 0x808080],
        "metal": [0xD3D3D3, 0xC0C0C0, 0xA9A9A9],
    },
    "ancient_warrior": {
        "armor": [0xFFD700, 0xDAA520, 0xB8860B],
        "accent": [0xC0C0C0, 0x808080, 0x404040],
        "cloth": [0x800000, 0x600000, 0x400000],
        "glow": [0xFFFF80, 0xFFFFCC, 0xFFFFFF],
    },
    "arcane_scholar": {
        "armor": [0x1A237E, 0x283593, 0x3949AB],
        "accent": [0x7E57C2, 0x9575CD, 0xB39DDB],
        "cloth": [0x4A148C, 0x6A1B9A, 0x8E24AA],
        "glow": [0x00E5FF, 0x18FFFF, 0x84FFFF],
    },
    "shadow_assassin": {
        "armor": [0x212121, 0x424242, 0x616161],
        "accent": [0x4A148C, 0x000000, 0x311B92],
        "cloth": [0x000000, 0x121212, 0x1A1A1B],
        "glow": [0xAA00FF, 0xD500F9, 0xE1F5FE],
    },
    "dragon_born": {
        "armor": [0xB71C1C, 0xD32F2F, 0xE53935],
        "accent": [0xFF6F00, 0xFFA000, 0xFFC107],
        "cloth": [0x3E2723, 0x4E342E, 0x5D4037],
        "glow": [0xFF3D00, 0xFF9100, 0xFFFF00],
    },
    "nature_blessed": {
        "armor": [0x1B5E20, 0x2E7D32, 0x388E3C],
        "accent": [0x795548, 0x8D6E63, 0xA1887F],
        "cloth": [0xDCEDC8, 0xC5E1A5, 0xAED581],
        "glow": [0x76FF03, 0xB2FF59, 0xCCFF90],
    },
}


class PaletteManager:
    """Get/set named palettes; an optional store makes registrations durable.

    Lookups never raise: a missing palette is None and a missing colour is
    FALLBACK_COLOR.
    """

    def __init__(self, store: Optional[BasePaletteStore] = None):
        self.palettes: dict[str, Palette] = copy.deepcopy(BUILTIN_PALETTES)
        self.store = store
        if store is not None:
            for name in store.list_palettes():
                loaded = store.load_palette(name)
                if loaded is not None:
                    self.palettes[name] = loaded

    def names(self) -> list[str]:
        return list(self.palettes.keys())

    def get_palette(self, name: str) -> Optional[Palette]:
        palette = self.palettes.get(name)
        return copy.deepcopy(palette) if palette is not None else None

    def set_palette(self, name: str, palette: Palette):
        self.palettes[name] = {k: [int(c) for c in v] for k, v in palette.items()}
        if self.store is not None:
            self.store.save_palette(name, self.palettes[name])
        logger.info(f"Palette registered: {name} ({len(palette)} categories)")

    def delete_palette(self, name: str) -> bool:
        existed = self.palettes.pop(name, None) is not None
        if self.store is not None:
            self.store.delete_palette(name)
        if existed:
            logger.info(f"Palette deleted: {name}")
        return existed

    def register_style_config(self, name: str, style_config: StyleConfig):
        """Adopt an analysed palette under `name`."""
        self.set_palette(name, style_config.palette)

    def get_color(self, palette_name: str, category: str, rng: SeededRng) -> int:
        palette = self.palettes.get(palette_name)
        if not palette or not palette.get(category):
            logger.warning(f"No '{category}' colours in palette '{palette_name}', using white")
            return FALLBACK_COLOR
        return rng.choice(palette[category])

    def get_varied_color(self, base_color: int, rng: SeededRng, variation: float = 0.1) -> int:
        """Scale all three channels by one random factor in 1 ± variation."""
        r, g, b = to_rgb(base_color)
        factor = 1 + (rng.random() - 0.5) * 2 * variation
        return from_rgb(r * factor, g * factor, b * factor)

    def lighten(self, color: int, factor: float = 0.3) -> int:
        return lighten(color, factor)

    def darken(self, color: int, factor: float = 0.3) -> int:
        return darken(color, factor)
