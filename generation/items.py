"""Inventory icons: weapons, armor and accessories tinted by rarity."""
from __future__ import annotations

import logging
from typing import Optional

from engine.color import parse_color
from engine.materials import LightDirection, Material
from engine.pixels import PixelBuffer
from engine.records import StyleConfig
from engine.rng import SeededRng
from generation.descriptors import ItemDescriptor, ItemType, Rarity, WeaponType
from generation.glow import GlowRenderer
from generation.shader import MaterialShader
from generation.textures import TextureGenerator

logger = logging.getLogger(__name__)

RARITY_COLORS: dict[Rarity, dict[str, int]] = {
    Rarity.COMMON: {"base": parse_color("#C0C0C0"), "accent": parse_color("#FFFFFF")},
    Rarity.UNCOMMON: {"base": parse_color("#1EFF00"), "accent": parse_color("#FFFFFF")},
    Rarity.RARE: {"base": parse_color("#0070DD"), "accent": parse_color("#88CCFF")},
    Rarity.EPIC: {"base": parse_color("#A335EE"), "accent": parse_color("#FF88FF")},
    Rarity.LEGENDARY: {"base": parse_color("#FF8000"), "accent": parse_color("#FFFF00")},
}

BLADE_COLOR = 0xE2E2E2
GRIP_COLOR = 0x8B4513
ARMOR_COLOR = 0xCFCFCF
OUTLINE_COLOR = 0x000000

GEM_RARITIES = (Rarity.RARE, Rarity.EPIC, Rarity.LEGENDARY)
STAFF_GLOW_RADIUS = 7
BLADE_GLOW_STEP = 4     # pixels between glow points along the blade


def _ring(buffer: PixelBuffer, cx: int, cy: int, outer: int, inner: int, color: int):
    """Pixels with inner < distance ≤ outer from the centre."""
    o2 = outer * outer
    i2 = inner * inner
    for dy in range(-outer, outer + 1):
        for dx in range(-outer, outer + 1):
            d2 = dx * dx + dy * dy
            if i2 < d2 <= o2:
                buffer.set_pixel(cx + dx, cy + dy, color)


class ItemGenerator:
    def __init__(self):
        self.shader = MaterialShader()
        self.glow = GlowRenderer()

    def generate(
        self,
        descriptor: ItemDescriptor,
        rng: SeededRng,
        style_config: Optional[StyleConfig] = None,
    ) -> PixelBuffer:
        size = descriptor.size
        buffer = PixelBuffer(size, size)
        colors = RARITY_COLORS[descriptor.rarity]
        textures = TextureGenerator(rng)

        metal = self._style_color(style_config, rng, "metal", BLADE_COLOR)
        wood = self._style_color(style_config, rng, "wood", GRIP_COLOR)

        if descriptor.item_type is ItemType.WEAPON:
            self._draw_weapon(buffer, descriptor, colors, metal, wood, textures)
        elif descriptor.item_type is ItemType.ARMOR:
            self._draw_armor(buffer, size, colors, self._style_color(style_config, rng, "armor", ARMOR_COLOR), textures)
        else:
            self._draw_accessory(buffer, size, colors)

        outline = style_config.style.outline_color if style_config else OUTLINE_COLOR
        buffer.draw_outline(outline, 1)
        if descriptor.item_type is ItemType.WEAPON:
            self._draw_weapon_glow(buffer, descriptor, colors)

        logger.info(
            f"Generated {descriptor.rarity.value} {descriptor.item_type.value} icon {size}x{size}"
        )
        return buffer

    def _style_color(self, style_config: Optional[StyleConfig], rng: SeededRng, category: str, default: int) -> int:
        if style_config is not None:
            colors = style_config.colors_for(category)
            if colors:
                return rng.choice(colors)
        return default

    def _shade(self, buffer: PixelBuffer, x: int, y: int, w: int, h: int, color: int,
               material: Material, textures: TextureGenerator):
        palette = self.shader.generate_palette(color, material)
        self.shader.apply_cel_shade(buffer, x, y, w, h, palette, LightDirection.TOP_LEFT)
        textures.apply_texture(material, buffer, x, y, w, h, color)

    def _draw_weapon(self, buffer: PixelBuffer, descriptor: ItemDescriptor, colors: dict,
                     metal: int, wood: int, textures: TextureGenerator):
        size = descriptor.size
        cx = cy = size // 2
        length = int(size * 0.7)
        top = cy - length // 2
        grip_y = cy + int(length * 0.15)
        grip_h = max(1, int(length * 0.25))
        kind = descriptor.weapon_type

        if kind is WeaponType.SWORD:
            self._shade(buffer, cx - 2, top, 4, int(length * 0.7), metal, Material.METAL, textures)
            # Tip narrows over six rows above the blade
            for i in range(6):
                half = (2 * (6 - i)) // 6
                buffer.fill_rect(cx - max(1, half), top - 1 - i, max(1, 2 * half), 1, metal)
            self._shade(buffer, cx - 3, grip_y, 6, grip_h, wood, Material.LEATHER, textures)
            buffer.fill_rect(cx - 10, cy + int(length * 0.12), 20, 3, colors["accent"])
            if descriptor.rarity in GEM_RARITIES:
                buffer.fill_circle(cx, cy + int(length * 0.40), 3, colors["base"])
        elif kind is WeaponType.AXE:
            self._shade(buffer, cx - 2, top, 4, int(length * 0.7), metal, Material.METAL, textures)
            buffer.fill_rect(cx - 8, top - 4, 16, 4, colors["accent"])
            self._shade(buffer, cx - 3, grip_y, 6, grip_h, wood, Material.LEATHER, textures)
        elif kind is WeaponType.MACE:
            self._shade(buffer, cx - 3, top, 6, int(length * 0.5), metal, Material.METAL, textures)
            head = self.shader.generate_palette(metal, Material.METAL)
            self.shader.apply_cel_shade_circle(buffer, cx, top, 6, head, LightDirection.TOP_LEFT)
            self._shade(buffer, cx - 3, grip_y, 6, grip_h, wood, Material.LEATHER, textures)
        else:
            self._shade(buffer, cx - 1, top, 2, length, wood, Material.WOOD, textures)
            orb = self.shader.generate_palette(colors["base"], Material.GLOW)
            self.shader.apply_cel_shade_circle(buffer, cx, top, 4, orb, LightDirection.TOP_LEFT)
            buffer.fill_circle(cx, top, 2, colors["accent"])

    def _draw_weapon_glow(self, buffer: PixelBuffer, descriptor: ItemDescriptor, colors: dict):
        """Staff orbs always glow; legendary weapons glow from the grip up to the tip."""
        size = descriptor.size
        cx = cy = size // 2
        length = int(size * 0.7)
        top = cy - length // 2
        if descriptor.weapon_type is WeaponType.STAFF:
            self.glow.render_glow(buffer, cx, top, STAFF_GLOW_RADIUS, colors["base"])
        if descriptor.rarity is Rarity.LEGENDARY:
            grip_y = cy + int(length * 0.15)
            path = [(cx, y) for y in range(grip_y, top - 1, -BLADE_GLOW_STEP)]
            self.glow.render_weapon_glow(buffer, path, colors["accent"])

    def _draw_armor(self, buffer: PixelBuffer, size: int, colors: dict, color: int,
                    textures: TextureGenerator):
        cx = cy = size // 2
        w = int(size * 0.6)
        h = int(size * 0.7)
        x = cx - w // 2
        y = cy - h // 2
        self._shade(buffer, x, y, w, h, color, Material.METAL, textures)
        buffer.fill_rect(x, y, w, 4, colors["accent"])

    def _draw_accessory(self, buffer: PixelBuffer, size: int, colors: dict):
        cx = cy = size // 2
        outer = int(size * 0.22)
        mid = int(size * 0.18)
        inner = int(size * 0.14)
        _ring(buffer, cx, cy, outer, mid, OUTLINE_COLOR)
        _ring(buffer, cx, cy, mid, inner, colors["accent"])
        buffer.fill_circle(cx + int(size * 0.12), cy - int(size * 0.10), max(1, int(size * 0.05)), colors["accent"])
