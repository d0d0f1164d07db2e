"""Procedural chibi humanoid sprites."""
from __future__ import annotations

import logging
from typing import Optional

import config
from engine.materials import LightDirection, Material
from engine.pixels import PixelBuffer
from engine.records import StyleConfig
from engine.rng import SeededRng
from generation.descriptors import CharacterDescriptor
from generation.glow import GlowRenderer
from generation.palettes import PaletteManager
from generation.proportions import Bounds, ProportionManager
from generation.shader import MaterialShader
from generation.textures import TextureGenerator

logger = logging.getLogger(__name__)

DEFAULT_PALETTE = "warm"
EYE_COLOR = 0x000000
HELMET_COVERAGE = 0.4    # share of the helmet box above the eyes
WEAPON_GAP = 2           # pixels between the right arm and the blade
CLASS_GLOW_RADIUS = 8


class HumanoidGenerator:
    """Draws one character per `generate()` call into a fresh buffer.

    Colours are looked up in the StyleConfig palette first, then in the
    descriptor's named palette, then in the default palette. An instance
    holds per-call state, so concurrent tasks each need their own.
    """

    def __init__(self, palettes: Optional[PaletteManager] = None):
        self.palettes = palettes or PaletteManager()
        self.shader = MaterialShader()
        self.glow = GlowRenderer()

    def generate(
        self,
        descriptor: CharacterDescriptor,
        rng: SeededRng,
        style_config: Optional[StyleConfig] = None,
    ) -> PixelBuffer:
        self.descriptor = descriptor
        self.rng = rng
        self.style_config = style_config
        self.textures = TextureGenerator(rng)
        self.light = style_config.style.light_direction if style_config else LightDirection.TOP_LEFT

        buffer = PixelBuffer(descriptor.width, descriptor.height)
        self.proportions = ProportionManager(descriptor.height)
        center_x = descriptor.width // 2

        # Back to front: legs and arms sit behind torso and head
        self._draw_legs(buffer, center_x)
        self._draw_arms(buffer, center_x)
        self._draw_torso(buffer, center_x)
        self._draw_head(buffer, center_x)

        buffer.mirror_horizontal()

        glows: list[tuple[int, int, int, int]] = []
        if descriptor.bloodline:
            glows = self._draw_bloodline_details(buffer, center_x, descriptor.height // 2)
        self._draw_equipment(buffer, center_x)

        outline_color, thickness = self._outline()
        buffer.draw_outline(outline_color, thickness)

        # Halos last, over the outlined sprite
        for x, y, radius, color in glows:
            self.glow.render_glow(buffer, x, y, radius, color)
        if descriptor.glow:
            head = self.proportions.get_head_bounds(center_x)
            self.glow.render_class_glow(buffer, head.center_x, head.center_y, CLASS_GLOW_RADIUS, descriptor.class_id)

        logger.info(
            f"Generated {descriptor.class_id} {descriptor.width}x{descriptor.height} "
            f"(palette={descriptor.effective_palette}, seed={rng.seed})"
        )
        return buffer

    # ── Colour lookup ─────────────────────────────────────────────────────────

    def _pick(self, *categories: str) -> int:
        if self.style_config is not None:
            for category in categories:
                colors = self.style_config.colors_for(category)
                if colors:
                    return self.rng.choice(colors)
        for name in (self.descriptor.effective_palette, DEFAULT_PALETTE):
            palette = self.palettes.get_palette(name) or {}
            for category in categories:
                if palette.get(category):
                    return self.rng.choice(palette[category])
        return self.palettes.get_color(DEFAULT_PALETTE, categories[0], self.rng)

    def _outline(self) -> tuple[int, int]:
        color = self.style_config.style.outline_color if self.style_config else 0x000000
        if self.descriptor.outline_thickness is not None:
            thickness = self.descriptor.outline_thickness
        elif self.style_config is not None and self.style_config.sources:
            thickness = self.style_config.style.outline_thickness
        else:
            thickness = config.CHARACTER_OUTLINE_THICKNESS
        return color, thickness

    def _wants(self, flag: Optional[bool], item: str) -> bool:
        if flag is not None:
            return flag
        return self.style_config is not None and self.style_config.equipment_present(item)

    # ── Body ──────────────────────────────────────────────────────────────────

    def _shade_region(self, buffer: PixelBuffer, bounds: Bounds, color: int, material: Material):
        palette = self.shader.generate_palette(color, material)
        self.shader.apply_cel_shade(
            buffer, bounds.x, bounds.y, bounds.width, bounds.height, palette, self.light
        )
        self.textures.apply_texture(
            material, buffer, bounds.x, bounds.y, bounds.width, bounds.height, color
        )

    def _draw_legs(self, buffer: PixelBuffer, center_x: int):
        # Left side only; the mirror supplies the right
        bounds = self.proportions.get_leg_bounds(center_x, "left")
        self._shade_region(buffer, bounds, self._pick("cloth"), Material.CLOTH)

    def _draw_arms(self, buffer: PixelBuffer, center_x: int):
        bounds = self.proportions.get_arm_bounds(center_x, "left")
        self._shade_region(buffer, bounds, self._pick("skin"), Material.SKIN)

    def _draw_torso(self, buffer: PixelBuffer, center_x: int):
        bounds = self.proportions.get_torso_bounds(center_x)
        self._shade_region(buffer, bounds, self._pick("cloth"), Material.CLOTH)

    def _draw_head(self, buffer: PixelBuffer, center_x: int):
        bounds = self.proportions.get_head_bounds(center_x)
        radius = bounds.width // 2
        palette = self.shader.generate_palette(self._pick("skin"), Material.SKIN)
        self.shader.apply_cel_shade_circle(
            buffer, bounds.center_x, bounds.center_y, radius, palette, self.light
        )
        eye_y = bounds.center_y - 1
        buffer.set_pixel(center_x - 2, eye_y, EYE_COLOR)
        buffer.set_pixel(center_x + 2, eye_y, EYE_COLOR)

    # ── Equipment ─────────────────────────────────────────────────────────────

    def _draw_equipment(self, buffer: PixelBuffer, center_x: int):
        d = self.descriptor
        if self._wants(d.chest_armor, "chestArmor"):
            self._draw_chest_armor(buffer, center_x)
        if self._wants(d.helmet, "helmet"):
            self._draw_helmet(buffer, center_x)
        if self._wants(d.weapon, "weapon"):
            self._draw_weapon(buffer, center_x)

    def _draw_chest_armor(self, buffer: PixelBuffer, center_x: int):
        torso = self.proportions.get_torso_bounds(center_x)
        plate = self.proportions.get_equipment_bounds(torso)
        chest = Bounds(plate.x, plate.y, plate.width, max(1, plate.height // 2))
        self._shade_region(buffer, chest, self._pick("armor", "metal"), Material.METAL)

    def _draw_helmet(self, buffer: PixelBuffer, center_x: int):
        head = self.proportions.get_head_bounds(center_x)
        box = self.proportions.get_equipment_bounds(head)
        cap = Bounds(box.x, box.y, box.width, max(1, int(box.height * HELMET_COVERAGE)))
        self._shade_region(buffer, cap, self._pick("armor", "metal"), Material.METAL)

    def _draw_weapon(self, buffer: PixelBuffer, center_x: int):
        arm = self.proportions.get_arm_bounds(center_x, "right")
        length = self.proportions.limbs + 2
        blade = Bounds(arm.x + arm.width + WEAPON_GAP, arm.y - length // 2, 2, length)
        self._shade_region(buffer, blade, self._pick("metal", "armor"), Material.METAL)

        guard_y = blade.y + blade.height
        buffer.fill_rect(blade.x - 2, guard_y, blade.width + 4, 1, self._pick("accent", "gold"))
        grip = Bounds(blade.x, guard_y + 1, blade.width, 3)
        self._shade_region(buffer, grip, self._pick("wood", "cloth"), Material.LEATHER)

    def _draw_bloodline_details(self, buffer: PixelBuffer, cx: int, cy: int) -> list[tuple[int, int, int, int]]:
        """Solid bloodline marks; returns the (x, y, radius, colour) glows to add after the outline."""
        name = self.descriptor.bloodline
        glow = self._pick("glow")
        armor = self._pick("armor", "metal")
        accent = self._pick("accent")

        if name == "ancient_warrior":
            buffer.fill_rect(cx - 10, cy - 14, 6, 6, armor)   # pauldron
            buffer.fill_rect(cx - 4, cy - 10, 8, 12, armor)   # chestplate
            buffer.fill_circle(cx, cy - 24, 2, glow)          # crown
            return [(cx, cy - 24, 4, glow)]
        elif name == "arcane_scholar":
            buffer.fill_rect(cx - 2, cy - 6, 4, 4, glow)      # chest rune
            # Floating motes either side of the head
            return [(cx - 14, cy - 18, 3, glow), (cx + 14, cy - 18, 3, glow), (cx, cy - 4, 4, glow)]
        elif name == "shadow_assassin":
            buffer.set_pixel(cx - 2, cy - 21, 0xAA00FF)
            buffer.set_pixel(cx + 2, cy - 21, 0xAA00FF)
            buffer.fill_rect(cx - 8, cy - 12, 2, 16, accent)  # cloak trim
        elif name == "dragon_born":
            buffer.set_pixel(cx - 3, cy - 8, accent)
            buffer.set_pixel(cx + 3, cy - 4, accent)
            buffer.set_pixel(cx - 2, cy - 21, 0xFF3D00)
            buffer.set_pixel(cx + 2, cy - 21, 0xFF3D00)
        elif name == "nature_blessed":
            buffer.fill_rect(cx - 9, cy - 10, 4, 12, armor)   # leaf cloak
            buffer.set_pixel(cx - 5, cy + 8, accent)
            buffer.set_pixel(cx + 5, cy + 12, accent)
        return []
