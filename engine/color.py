"""Colour helpers on packed 0xRRGGBB integers."""
from __future__ import annotations

from typing import Union

ColorLike = Union[int, str]


def _clamp(n: float, lo: int = 0, hi: int = 255) -> int:
    return max(lo, min(hi, int(n)))


def to_rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def from_rgb(r: float, g: float, b: float) -> int:
    return (_clamp(r) << 16) | (_clamp(g) << 8) | _clamp(b)


def hex_to_rgb(h: str) -> tuple[int, int, int]:
    h = h.strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) != 6:
        raise ValueError(f"not a hex colour: {h!r}")
    return tuple(int(h[i:i + 2], 16) for i in (0, 2, 4))


def parse_color(value: ColorLike) -> int:
    """Accept a packed int or a "#RGB"/"#RRGGBB" string."""
    if isinstance(value, str):
        return from_rgb(*hex_to_rgb(value))
    return int(value) & 0xFFFFFF


def to_hex_string(color: int) -> str:
    return f"#{color & 0xFFFFFF:06x}"


def brightness(r: int, g: int, b: int) -> float:
    """Plain channel mean, 0-255; what the style heuristics threshold on."""
    return (r + g + b) / 3


def luminance(color: int) -> float:
    """Perceived luminance (Rec. 709 weights), 0-255."""
    r, g, b = to_rgb(color)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def rgb_to_hsv(r: int, g: int, b: int) -> tuple[int, float, float]:
    """Return (h, s, v): h in whole degrees 0-359, s and v in [0, 1]."""
    rf, gf, bf = r / 255, g / 255, b / 255
    mx = max(rf, gf, bf)
    mn = min(rf, gf, bf)
    delta = mx - mn

    h = 0.0
    if delta != 0:
        if mx == rf:
            h = ((gf - bf) / delta) % 6
        elif mx == gf:
            h = (bf - rf) / delta + 2
        else:
            h = (rf - gf) / delta + 4
    hue = int(h * 60 + 0.5) % 360

    s = 0.0 if mx == 0 else delta / mx
    return hue, s, mx


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[int, int, int]:
    h = h % 360
    c = v * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = v - c
    if h < 60:
        rf, gf, bf = c, x, 0.0
    elif h < 120:
        rf, gf, bf = x, c, 0.0
    elif h < 180:
        rf, gf, bf = 0.0, c, x
    elif h < 240:
        rf, gf, bf = 0.0, x, c
    elif h < 300:
        rf, gf, bf = x, 0.0, c
    else:
        rf, gf, bf = c, 0.0, x
    return (
        int(round((rf + m) * 255)),
        int(round((gf + m) * 255)),
        int(round((bf + m) * 255)),
    )


def lighten(color: int, factor: float) -> int:
    """Move each channel toward white by `factor` (0 = unchanged)."""
    r, g, b = to_rgb(color)
    return from_rgb(
        min(255, r + (255 - r) * factor),
        min(255, g + (255 - g) * factor),
        min(255, b + (255 - b) * factor),
    )


def darken(color: int, factor: float) -> int:
    """Scale each channel toward black by `factor` (0 = unchanged)."""
    r, g, b = to_rgb(color)
    return from_rgb(
        max(0, r * (1 - factor)),
        max(0, g * (1 - factor)),
        max(0, b * (1 - factor)),
    )


def blend(a: int, b: int, t: float) -> int:
    """Linear mix: t=0 gives a, t=1 gives b."""
    t = max(0.0, min(1.0, t))
    ar, ag, ab = to_rgb(a)
    br, bg, bb = to_rgb(b)
    return from_rgb(
        round(ar + (br - ar) * t),
        round(ag + (bg - ag) * t),
        round(ab + (bb - ab) * t),
    )
