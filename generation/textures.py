"""Seeded procedural texture overlays (cloth weave, leather grain, metal streaks)."""
from __future__ import annotations

from typing import Optional

import config
from engine.color import darken, lighten
from engine.materials import Material
from engine.pixels import PixelBuffer
from engine.rng import SeededRng

WEAVE_SIZE = 2
STREAK_STEP = 3
STREAK_PERIOD = 6


class TextureGenerator:
    """Paints over already-opaque pixels only; transparent pixels stay untouched."""

    def __init__(self, rng: SeededRng):
        self.rng = rng

    def set_seed(self, seed: int):
        self.rng = SeededRng(seed)

    def apply_cloth_texture(self, buffer: PixelBuffer, x: int, y: int, width: int, height: int, base_color: int):
        darker = darken(base_color, 0.15)
        lighter = lighten(base_color, 0.1)
        period = WEAVE_SIZE * 2

        for py in range(y, y + height):
            for px in range(x, x + width):
                if not buffer.is_opaque(px, py):
                    continue
                rel_x = px - x
                rel_y = py - y
                if rel_x % period < WEAVE_SIZE:
                    buffer.set_pixel(px, py, darker)
                elif rel_y % period < WEAVE_SIZE:
                    buffer.set_pixel(px, py, lighter)

    def apply_leather_texture(
        self,
        buffer: PixelBuffer,
        x: int,
        y: int,
        width: int,
        height: int,
        base_color: int,
        density: Optional[float] = None,
    ):
        if density is None:
            density = config.LEATHER_GRAIN_DENSITY
        darker = darken(base_color, 0.2)
        lighter = lighten(base_color, 0.15)
        mask = self.generate_noise_pattern(width, height, density)

        for py in range(y, y + height):
            for px in range(x, x + width):
                if not buffer.is_opaque(px, py):
                    continue
                rel_x = px - x
                rel_y = py - y
                if mask[rel_y * width + rel_x]:
                    buffer.set_pixel(px, py, darker if (rel_x + rel_y) % 2 == 0 else lighter)

    def apply_metal_texture(self, buffer: PixelBuffer, x: int, y: int, width: int, height: int, base_color: int):
        highlight = lighten(base_color, 0.5)
        streak = lighten(base_color, 0.3)

        for px in range(x, x + width, STREAK_STEP):
            rel_x = px - x
            for py in range(y, y + height):
                if not buffer.is_opaque(px, py):
                    continue
                if rel_x % STREAK_PERIOD == 0:
                    buffer.set_pixel(px, py, highlight)
                elif rel_x % STREAK_PERIOD == STREAK_STEP:
                    buffer.set_pixel(px, py, streak)

        # Reflection of the light source along the top edge
        for px in range(x, x + width):
            if buffer.is_opaque(px, y):
                buffer.set_pixel(px, y, highlight)

    def apply_texture(
        self,
        material: Material | str,
        buffer: PixelBuffer,
        x: int,
        y: int,
        width: int,
        height: int,
        base_color: int,
    ):
        material = Material(material)
        if material is Material.METAL:
            self.apply_metal_texture(buffer, x, y, width, height, base_color)
        elif material is Material.CLOTH:
            self.apply_cloth_texture(buffer, x, y, width, height, base_color)
        elif material in (Material.LEATHER, Material.WOOD):
            self.apply_leather_texture(buffer, x, y, width, height, base_color)

    def generate_noise_pattern(self, width: int, height: int, density: float) -> list[bool]:
        """Boolean mask of floor(width·height·density) random picks (repeats allowed)."""
        total = max(0, width) * max(0, height)
        pattern = [False] * total
        if total == 0:
            return pattern
        for _ in range(int(total * density)):
            pattern[self.rng.randint(0, total - 1)] = True
        return pattern
