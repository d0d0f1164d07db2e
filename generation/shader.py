"""Five-tone material palettes and light-driven cel shading."""
from __future__ import annotations

import math
from dataclasses import dataclass

from engine.color import darken, lighten
from engine.materials import LightDirection, Material
from engine.pixels import PixelBuffer


@dataclass(frozen=True)
class MaterialRule:
    highlight: float
    shadow: float
    contrast: str


MATERIAL_RULES: dict[Material, MaterialRule] = {
    Material.METAL: MaterialRule(0.6, 0.5, "high"),
    Material.CLOTH: MaterialRule(0.3, 0.4, "medium"),
    Material.LEATHER: MaterialRule(0.25, 0.35, "medium"),
    Material.SKIN: MaterialRule(0.35, 0.3, "low"),
}

# Light factor thresholds, brightest first: light2, light1, base, dark1, else dark2
TONE_THRESHOLDS = (0.7, 0.5, 0.3, 0.15)

_MAX_DISTANCE = math.sqrt(2)


@dataclass(frozen=True)
class MaterialPalette:
    light2: int
    light1: int
    base: int
    dark1: int
    dark2: int

    def tones(self) -> tuple[int, int, int, int, int]:
        return self.light2, self.light1, self.base, self.dark1, self.dark2

    def to_dict(self) -> dict:
        return {
            "light2": self.light2, "light1": self.light1, "base": self.base,
            "dark1": self.dark1, "dark2": self.dark2,
        }


def _anchor(direction: LightDirection, width: float, height: float) -> tuple[float, float]:
    if direction is LightDirection.TOP:
        return width / 2, 0
    if direction is LightDirection.TOP_RIGHT:
        return width, 0
    if direction is LightDirection.LEFT:
        return 0, height / 2
    if direction is LightDirection.CENTER:
        return width / 2, height / 2
    if direction is LightDirection.BOTTOM:
        return width / 2, height
    return 0, 0


class MaterialShader:
    def get_material_rules(self, material: Material | str) -> MaterialRule:
        return MATERIAL_RULES.get(Material(material), MATERIAL_RULES[Material.CLOTH])

    def generate_palette(self, base_color: int, material: Material | str) -> MaterialPalette:
        rule = self.get_material_rules(material)
        return MaterialPalette(
            light2=lighten(base_color, rule.highlight * 1.5),
            light1=lighten(base_color, rule.highlight),
            base=base_color,
            dark1=darken(base_color, rule.shadow),
            dark2=darken(base_color, rule.shadow * 1.5),
        )

    def calculate_light_factor(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        direction: LightDirection | str = LightDirection.TOP_LEFT,
    ) -> float:
        """Illumination proxy in [0, 1]; 1 at the light anchor, falling off with distance."""
        width = max(1, width)
        height = max(1, height)
        lx, ly = _anchor(LightDirection(direction), width, height)
        dx = (x - lx) / width
        dy = (y - ly) / height
        distance = math.sqrt(dx * dx + dy * dy)
        return 1 - min(distance / _MAX_DISTANCE, 1)

    def pick_tone(self, palette: MaterialPalette, light_factor: float) -> int:
        for threshold, tone in zip(TONE_THRESHOLDS, palette.tones()):
            if light_factor > threshold:
                return tone
        return palette.dark2

    def apply_cel_shade(
        self,
        buffer: PixelBuffer,
        x: int,
        y: int,
        width: int,
        height: int,
        palette: MaterialPalette,
        direction: LightDirection | str = LightDirection.TOP_LEFT,
    ):
        for py in range(y, y + height):
            for px in range(x, x + width):
                factor = self.calculate_light_factor(px - x, py - y, width, height, direction)
                buffer.set_pixel(px, py, self.pick_tone(palette, factor))

    def apply_cel_shade_circle(
        self,
        buffer: PixelBuffer,
        cx: int,
        cy: int,
        radius: int,
        palette: MaterialPalette,
        direction: LightDirection | str = LightDirection.TOP_LEFT,
    ):
        r2 = radius * radius
        size = radius * 2
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if dx * dx + dy * dy > r2:
                    continue
                factor = self.calculate_light_factor(dx + radius, dy + radius, size, size, direction)
                buffer.set_pixel(cx + dx, cy + dy, self.pick_tone(palette, factor))
