"""Detection of outline, shading, dithering and highlight conventions."""
from __future__ import annotations

import logging
from collections import Counter

from engine.color import brightness, from_rgb
from engine.materials import LightDirection, ShadingMethod
from engine.pixels import PixelBuffer
from engine.records import StyleBlock

logger = logging.getLogger(__name__)

OUTLINE_MAX_BRIGHTNESS = 100
MAX_OUTLINE_THICKNESS = 3
HIGHLIGHT_MIN_BRIGHTNESS = 200

CEL_LARGE_DELTA = 50
CEL_MIN_RATIO = 0.1
CEL_MIN_MEAN = 30
GRADIENT_MAX_MEAN = 20
GRADIENT_MAX_RATIO = 0.05

DITHER_CONTRAST = 30
DITHER_NEIGHBOR_MATCH = 10
DITHER_MIN_RATIO = 0.05


def _pixel_brightness(p) -> float:
    return brightness(p[0], p[1], p[2])


class StyleDetector:
    def is_edge_pixel(self, buffer: PixelBuffer, x: int, y: int) -> bool:
        """Opaque pixel with a transparent or out-of-bounds 4-neighbour."""
        if not buffer.is_opaque(x, y):
            return False
        return not (
            buffer.is_opaque(x - 1, y)
            and buffer.is_opaque(x + 1, y)
            and buffer.is_opaque(x, y - 1)
            and buffer.is_opaque(x, y + 1)
        )

    def edge_mask(self, buffer: PixelBuffer) -> list[list[bool]]:
        return [
            [self.is_edge_pixel(buffer, x, y) for x in range(buffer.width)]
            for y in range(buffer.height)
        ]

    # ── Outline ───────────────────────────────────────────────────────────────

    def detect_outline(self, buffer: PixelBuffer, edges: list[list[bool]] | None = None) -> dict:
        """Most frequent dark edge colour plus the longest horizontal edge run (≤3)."""
        if edges is None:
            edges = self.edge_mask(buffer)
        w, h = buffer.width, buffer.height

        counts: Counter = Counter()
        for y in range(h):
            for x in range(w):
                if edges[y][x]:
                    r, g, b, _ = buffer.get_pixel(x, y)
                    counts[from_rgb(r, g, b)] += 1

        outline_color = 0x000000
        best = 0
        # Counter preserves first-seen order, so the earliest colour wins ties
        for color, count in counts.items():
            r, g, b = (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF
            if brightness(r, g, b) < OUTLINE_MAX_BRIGHTNESS and count > best:
                best = count
                outline_color = color

        thickness = 1
        for y in range(1, h - 1):
            run = 0
            for x in range(1, w):
                if edges[y][x]:
                    run += 1
                    thickness = max(thickness, min(run, MAX_OUTLINE_THICKNESS))
                else:
                    run = 0

        return {"color": outline_color, "thickness": min(thickness, MAX_OUTLINE_THICKNESS)}

    # ── Shading ───────────────────────────────────────────────────────────────

    def detect_shading(self, buffer: PixelBuffer) -> ShadingMethod:
        w, h = buffer.width, buffer.height
        deltas: list[float] = []
        for y in range(1, h - 1):
            for x in range(1, w - 1):
                p1 = buffer.get_pixel(x, y)
                p2 = buffer.get_pixel(x + 1, y)
                if p1[3] > 0 and p2 is not None and p2[3] > 0:
                    deltas.append(abs(_pixel_brightness(p1) - _pixel_brightness(p2)))

        if not deltas:
            return ShadingMethod.FLAT

        mean = sum(deltas) / len(deltas)
        ratio = sum(1 for d in deltas if d > CEL_LARGE_DELTA) / len(deltas)

        if ratio > CEL_MIN_RATIO and mean > CEL_MIN_MEAN:
            return ShadingMethod.CEL
        if mean < GRADIENT_MAX_MEAN and ratio < GRADIENT_MAX_RATIO:
            return ShadingMethod.GRADIENT
        return ShadingMethod.FLAT

    def detect_dithering(self, buffer: PixelBuffer) -> bool:
        """Checkerboard test: a pixel unlike both its right and lower neighbours, which match each other."""
        w, h = buffer.width, buffer.height
        samples = 0
        hits = 0
        for y in range(1, h - 1):
            for x in range(1, w - 1):
                p = buffer.get_pixel(x, y)
                right = buffer.get_pixel(x + 1, y)
                below = buffer.get_pixel(x, y + 1)
                if p[3] == 0 or right is None or below is None or right[3] == 0 or below[3] == 0:
                    continue
                samples += 1
                b0 = _pixel_brightness(p)
                b1 = _pixel_brightness(right)
                b2 = _pixel_brightness(below)
                if (abs(b0 - b1) > DITHER_CONTRAST and abs(b0 - b2) > DITHER_CONTRAST
                        and abs(b1 - b2) < DITHER_NEIGHBOR_MATCH):
                    hits += 1
        return samples > 0 and hits / samples > DITHER_MIN_RATIO

    # ── Highlights ────────────────────────────────────────────────────────────

    def detect_highlights(self, buffer: PixelBuffer, edges: list[list[bool]] | None = None) -> dict:
        if edges is None:
            edges = self.edge_mask(buffer)
        w, h = buffer.width, buffer.height

        bright: list[tuple[int, int, int]] = []
        for y in range(h):
            for x in range(w):
                if not edges[y][x]:
                    continue
                r, g, b, _ = buffer.get_pixel(x, y)
                if brightness(r, g, b) > HIGHLIGHT_MIN_BRIGHTNESS:
                    bright.append((x, y, from_rgb(r, g, b)))

        highlight_color = 0xFFFFFF
        if bright:
            highlight_color = Counter(c for _, _, c in bright).most_common(1)[0][0]

        left = sum(1 for x, _, _ in bright if x < w / 2)
        right = len(bright) - left
        top = sum(1 for _, y, _ in bright if y < h / 2)

        direction = LightDirection.TOP
        if left > right * 1.5:
            direction = LightDirection.TOP_LEFT
        elif right > left * 1.5:
            direction = LightDirection.TOP_RIGHT
        elif top < len(bright) * 0.3:
            direction = LightDirection.BOTTOM

        return {
            "hasHighlights": bool(bright),
            "color": highlight_color,
            "lightDirection": direction,
        }

    def count_colors(self, buffer: PixelBuffer) -> int:
        return len({(p[0], p[1], p[2]) for _, _, p in buffer.opaque_pixels()})

    def detect(self, buffer: PixelBuffer) -> StyleBlock:
        """Run every detector and assemble the style block."""
        edges = self.edge_mask(buffer)
        outline = self.detect_outline(buffer, edges)
        highlights = self.detect_highlights(buffer, edges)
        block = StyleBlock(
            outline_color=outline["color"],
            outline_thickness=outline["thickness"],
            shading_method=self.detect_shading(buffer),
            dithering=self.detect_dithering(buffer),
            color_count=self.count_colors(buffer),
            has_highlights=highlights["hasHighlights"],
            highlight_color=highlights["color"],
            light_direction=highlights["lightDirection"],
        )
        logger.debug(
            f"Style: outline #{block.outline_color:06x}×{block.outline_thickness}, "
            f"{block.shading_method.value}, {block.color_count} colours"
        )
        return block
