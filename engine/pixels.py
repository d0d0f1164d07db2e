"""In-memory RGBA pixel grid with pixel-art drawing primitives."""
from __future__ import annotations

import math
from typing import Iterator, Optional, Union

from PIL import Image, ImageDraw

from engine.color import to_rgb

Pixel = tuple[int, int, int, int]
PixelColor = Union[int, tuple]

TRANSPARENT: Pixel = (0, 0, 0, 0)


def _rgba(color: PixelColor, alpha: int = 255) -> Pixel:
    """Packed 0xRRGGBB int or an (r, g, b[, a]) tuple → RGBA tuple."""
    if isinstance(color, int):
        r, g, b = to_rgb(color)
        return r, g, b, alpha
    if len(color) == 4:
        return tuple(int(c) & 0xFF for c in color)
    r, g, b = color[:3]
    return int(r) & 0xFF, int(g) & 0xFF, int(b) & 0xFF, alpha


class PixelBuffer:
    """RGBA Pillow image addressed by (x, y).

    Reads outside [0, width) × [0, height) return None and writes there are
    silently dropped, so shape arithmetic never has to clip first. Shape
    drawing replaces pixels outright; nothing is alpha-composited.
    """

    def __init__(self, width: int, height: int, data: Optional[bytes] = None):
        if width < 0 or height < 0:
            raise ValueError(f"invalid buffer size {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        if data is None:
            self.image = Image.new("RGBA", (self.width, self.height), TRANSPARENT)
        else:
            size = self.width * self.height * 4
            if len(data) != size:
                raise ValueError(f"expected {size} bytes of RGBA data, got {len(data)}")
            self.image = Image.frombytes("RGBA", (self.width, self.height), bytes(data))
        self._draw: Optional[ImageDraw.ImageDraw] = None

    @property
    def draw(self) -> ImageDraw.ImageDraw:
        if self._draw is None:
            self._draw = ImageDraw.Draw(self.image)
        return self._draw

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        rgba = img.convert("RGBA")
        return cls(rgba.width, rgba.height, rgba.tobytes())

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and self.to_bytes() == other.to_bytes()

    # ── Point access ──────────────────────────────────────────────────────────

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Optional[Pixel]:
        x, y = int(x), int(y)
        if not self.in_bounds(x, y):
            return None
        return self.image.getpixel((x, y))

    def set_pixel(self, x: int, y: int, color: PixelColor, alpha: int = 255):
        x, y = int(x), int(y)
        if not self.in_bounds(x, y):
            return
        self.image.putpixel((x, y), _rgba(color, alpha))

    def is_opaque(self, x: int, y: int) -> bool:
        """True for an in-bounds pixel with non-zero alpha."""
        p = self.get_pixel(x, y)
        return p is not None and p[3] > 0

    def opaque_pixels(self) -> Iterator[tuple[int, int, Pixel]]:
        """Yield (x, y, rgba) for every pixel with alpha > 0, row-major."""
        d = self.to_bytes()
        w = self.width
        for i in range(0, len(d), 4):
            if d[i + 3] > 0:
                n = i // 4
                yield n % w, n // w, (d[i], d[i + 1], d[i + 2], d[i + 3])

    # ── Shapes ────────────────────────────────────────────────────────────────

    def fill_rect(self, x: int, y: int, width: int, height: int, color: PixelColor):
        x, y, width, height = int(x), int(y), int(width), int(height)
        if width <= 0 or height <= 0:
            return
        self.draw.rectangle([x, y, x + width - 1, y + height - 1], fill=_rgba(color))

    def draw_rect_outline(self, x: int, y: int, width: int, height: int, color: PixelColor):
        x, y, width, height = int(x), int(y), int(width), int(height)
        if width <= 0 or height <= 0:
            return
        self.draw.rectangle([x, y, x + width - 1, y + height - 1], outline=_rgba(color))

    def fill_circle(self, cx: int, cy: int, radius: int, color: PixelColor):
        """Every pixel with dx² + dy² <= radius², drawn one row span at a time."""
        cx, cy, radius = int(cx), int(cy), int(radius)
        fill = _rgba(color)
        for dy in range(-radius, radius + 1):
            span = math.isqrt(radius * radius - dy * dy)
            self.draw.rectangle([cx - span, cy + dy, cx + span, cy + dy], fill=fill)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: PixelColor):
        """One-pixel line, both endpoints included."""
        self.draw.line([(int(x1), int(y1)), (int(x2), int(y2))], fill=_rgba(color), width=1)

    # ── Whole-buffer operations ───────────────────────────────────────────────

    def mirror_horizontal(self, center_x: Optional[float] = None):
        """Copy every opaque pixel left of the axis onto its mirror image.

        `center_x` is the axis position in pixel units; it defaults to the
        middle of the buffer, (width - 1) / 2, so column x maps to width-1-x.
        Transparent source pixels leave their mirror untouched.
        """
        axis = (self.width - 1) / 2 if center_x is None else float(center_x)
        for y in range(self.height):
            x = 0
            while x < axis:
                p = self.get_pixel(x, y)
                if p is not None and p[3] > 0:
                    self.set_pixel(int(round(2 * axis - x)), y, p)
                x += 1

    def draw_outline(self, color: PixelColor, thickness: int = 1):
        """Recolour opaque pixels that border transparency, `thickness` layers deep.

        Layer k (1-based) looks k pixels away in all eight directions; all
        layers are computed against the unmodified buffer and painted at once.
        """
        outline: list[tuple[int, int]] = []
        for layer in range(1, max(0, int(thickness)) + 1):
            for y in range(self.height):
                for x in range(self.width):
                    if not self.is_opaque(x, y):
                        continue
                    for dx, dy in ((-layer, 0), (layer, 0), (0, -layer), (0, layer),
                                   (-layer, -layer), (layer, -layer),
                                   (-layer, layer), (layer, layer)):
                        if not self.is_opaque(x + dx, y + dy):
                            outline.append((x, y))
                            break
        for x, y in outline:
            self.set_pixel(x, y, color)

    @staticmethod
    def dither(x: int, y: int, color1: PixelColor, color2: PixelColor) -> PixelColor:
        """Checkerboard pick between two colours."""
        return color1 if (x + y) % 2 == 0 else color2

    def clear(self, color: Optional[PixelColor] = None, alpha: int = 255):
        fill = TRANSPARENT if color is None else _rgba(color, alpha)
        if self.width and self.height:
            self.draw.rectangle([0, 0, self.width - 1, self.height - 1], fill=fill)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.to_bytes())

    def scaled(self, width: int, height: int) -> "PixelBuffer":
        """Nearest-neighbour resample to a new size; no smoothing."""
        width, height = max(1, int(width)), max(1, int(height))
        if self.width == 0 or self.height == 0:
            return PixelBuffer(width, height)
        return PixelBuffer.from_image(self.image.resize((width, height), Image.Resampling.NEAREST))

    def to_image(self) -> Image.Image:
        return self.image.copy()

    def to_bytes(self) -> bytes:
        return self.image.tobytes()
