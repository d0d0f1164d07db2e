"""Soft multi-layer glow halos, alpha-composited over a finished sprite."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from PIL import Image

from engine.color import to_rgb
from engine.pixels import TRANSPARENT, PixelBuffer

logger = logging.getLogger(__name__)

# Layer alphas at or below this are not drawn
MIN_VISIBLE_ALPHA = 0.1

CORE_SHARE = 0.3
OUTER_SHARE = 0.7
OUTER_ALPHA = 0.6
SOFT_ALPHA = 0.3

WEAPON_GLOW_RADIUS = 3
TIP_RADIUS_SCALE = 1.5
TIP_INTENSITY_SCALE = 1.2


@dataclass(frozen=True)
class GlowStyle:
    color: int
    intensity: float


CLASS_GLOWS: dict[str, GlowStyle] = {
    "paladin": GlowStyle(0xFFFF00, 0.8),
    "mage": GlowStyle(0x00FFFF, 0.6),
    "warlock": GlowStyle(0xFF00FF, 1.0),
    "priest": GlowStyle(0xFFFF00, 0.8),
    "death_knight": GlowStyle(0xFF0000, 0.9),
    "shaman": GlowStyle(0x00CED1, 0.7),
    "hunter": GlowStyle(0x228B22, 0.6),
    "rogue": GlowStyle(0x9370DB, 0.7),
    "warrior": GlowStyle(0x8B0000, 0.8),
}
DEFAULT_GLOW = GlowStyle(0xFFFFFF, 0.5)


def class_glow(class_id: str) -> GlowStyle:
    return CLASS_GLOWS.get(class_id.lower(), DEFAULT_GLOW)


def glow_alpha(distance: float, max_alpha: float) -> float:
    """Cosine falloff: `max_alpha` at the centre, 0 at normalised distance 1."""
    return max_alpha * math.cos(distance * math.pi / 2)


class GlowRenderer:
    """Draws core, outer and soft-edge layers, each composited separately.

    Over opaque pixels a layer blends toward the glow colour; over
    transparent ones it leaves a partly transparent halo.
    """

    def render_layer(self, buffer: PixelBuffer, x: int, y: int, radius: int, color: int, alpha: float):
        x, y, radius = int(x), int(y), int(radius)
        if radius <= 0:
            return
        r, g, b = to_rgb(color)
        layer = Image.new("RGBA", buffer.image.size, TRANSPARENT)
        drawn = False
        r2 = radius * radius
        for py in range(-radius, radius + 1):
            for px in range(-radius, radius + 1):
                d2 = px * px + py * py
                if d2 > r2 or not buffer.in_bounds(x + px, y + py):
                    continue
                a = glow_alpha(math.sqrt(d2) / radius, alpha)
                if a <= MIN_VISIBLE_ALPHA:
                    continue
                layer.putpixel((x + px, y + py), (r, g, b, min(255, int(a * 255 + 0.5))))
                drawn = True
        if drawn:
            buffer.image.alpha_composite(layer)

    def render_glow(self, buffer: PixelBuffer, x: int, y: int, radius: float, color: int, intensity: float = 0.8):
        self.render_layer(buffer, x, y, int(radius * CORE_SHARE), color, 1.0)
        self.render_layer(buffer, x, y, int(radius * OUTER_SHARE), color, intensity * OUTER_ALPHA)
        self.render_layer(buffer, x, y, int(radius), color, intensity * SOFT_ALPHA)

    def render_class_glow(self, buffer: PixelBuffer, x: int, y: int, radius: float, class_id: str):
        glow = class_glow(class_id)
        self.render_glow(buffer, x, y, radius, glow.color, glow.intensity)

    def render_weapon_glow(self, buffer: PixelBuffer, path: list[tuple[int, int]], color: int, intensity: float = 0.8):
        """Glow every point of `path`; the last point is the tip and glows larger and brighter."""
        if not path:
            return
        for px, py in path:
            self.render_glow(buffer, px, py, WEAPON_GLOW_RADIUS, color, intensity)
        tip_x, tip_y = path[-1]
        self.render_glow(
            buffer, tip_x, tip_y,
            WEAPON_GLOW_RADIUS * TIP_RADIUS_SCALE, color, intensity * TIP_INTENSITY_SCALE,
        )
        logger.debug(f"Weapon glow along {len(path)} points")
