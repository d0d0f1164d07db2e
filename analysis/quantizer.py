"""Median-cut palette extraction."""
from __future__ import annotations

import logging

from engine.color import from_rgb
from engine.pixels import PixelBuffer

logger = logging.getLogger(__name__)

Sample = tuple[int, int, int]


class ColorBox:
    """A set of RGB samples plus its per-channel bounds."""

    def __init__(self, samples: list[Sample]):
        self.samples = samples
        if samples:
            self.min_r = min(s[0] for s in samples)
            self.max_r = max(s[0] for s in samples)
            self.min_g = min(s[1] for s in samples)
            self.max_g = max(s[1] for s in samples)
            self.min_b = min(s[2] for s in samples)
            self.max_b = max(s[2] for s in samples)
        else:
            self.min_r = self.min_g = self.min_b = 255
            self.max_r = self.max_g = self.max_b = 0

    def channel_ranges(self) -> tuple[int, int, int]:
        return (
            max(0, self.max_r - self.min_r),
            max(0, self.max_g - self.min_g),
            max(0, self.max_b - self.min_b),
        )

    def range(self) -> int:
        return max(self.channel_ranges())

    def longest_axis(self) -> int:
        """0/1/2 for r/g/b; earlier channels win ties."""
        r, g, b = self.channel_ranges()
        if r >= g and r >= b:
            return 0
        if g >= b:
            return 1
        return 2

    def split(self) -> tuple["ColorBox", "ColorBox"]:
        """Cut at the median along the longest axis.

        The cut is moved to the nearest change of value on that axis, so
        samples sharing an axis value (and therefore any one colour) always
        end up on the same side.
        """
        axis = self.longest_axis()
        ordered = sorted(self.samples, key=lambda s: s[axis])
        n = len(ordered)
        median = n // 2

        cut = median
        if 0 < median < n and ordered[median - 1][axis] == ordered[median][axis]:
            value = ordered[median][axis]
            lo = median
            while lo > 0 and ordered[lo - 1][axis] == value:
                lo -= 1
            hi = median
            while hi < n and ordered[hi][axis] == value:
                hi += 1
            candidates = [c for c in (lo, hi) if 0 < c < n]
            cut = min(candidates, key=lambda c: abs(c - median))
        return ColorBox(ordered[:cut]), ColorBox(ordered[cut:])

    def average(self) -> Sample:
        if not self.samples:
            return 128, 128, 128
        n = len(self.samples)
        return (
            int(sum(s[0] for s in self.samples) / n + 0.5),
            int(sum(s[1] for s in self.samples) / n + 0.5),
            int(sum(s[2] for s in self.samples) / n + 0.5),
        )


class ColorQuantizer:
    def median_cut(self, samples: list[Sample], max_colors: int) -> list[Sample]:
        """Reduce `samples` to at most `max_colors` representative colours."""
        if not samples or max_colors <= 0:
            return []

        boxes = [ColorBox(list(samples))]
        while len(boxes) < max_colors and len(boxes) < len(samples):
            # Widest box wins; the earliest box wins ties
            target = boxes[0]
            widest = target.range()
            for box in boxes[1:]:
                r = box.range()
                if r > widest:
                    widest = r
                    target = box
            if widest == 0:
                break
            first, second = target.split()
            boxes = [b for b in boxes if b is not target]
            boxes.extend([first, second])

        return [box.average() for box in boxes]

    def extract_palette(self, buffer: PixelBuffer, max_colors: int = 16) -> list[int]:
        """Median-cut palette of the buffer's opaque pixels as packed ints."""
        samples = [(p[0], p[1], p[2]) for _, _, p in buffer.opaque_pixels()]
        if not samples:
            return []
        colors = self.median_cut(samples, max_colors)
        logger.debug(f"Quantized {len(samples)} samples to {len(colors)} colours")
        return [from_rgb(r, g, b) for r, g, b in colors]
