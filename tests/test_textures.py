from __future__ import annotations

from engine.color import darken, lighten
from engine.pixels import PixelBuffer
from engine.rng import SeededRng
from generation.textures import TextureGenerator

BASE = 0x808080


def _filled(w: int, h: int) -> PixelBuffer:
    buf = PixelBuffer(w, h)
    buf.fill_rect(0, 0, w, h, BASE)
    return buf


def _color(buf: PixelBuffer, x: int, y: int) -> int:
    r, g, b, _ = buf.get_pixel(x, y)
    return (r << 16) | (g << 8) | b


def test_cloth_weave_pattern() -> None:
    buf = _filled(8, 8)
    TextureGenerator(SeededRng(1)).apply_cloth_texture(buf, 0, 0, 8, 8, BASE)
    assert _color(buf, 0, 0) == darken(BASE, 0.15)
    assert _color(buf, 1, 5) == darken(BASE, 0.15)
    assert _color(buf, 2, 0) == lighten(BASE, 0.1)
    assert _color(buf, 2, 2) == BASE
    assert _color(buf, 4, 0) == darken(BASE, 0.15)


def test_textures_leave_transparent_pixels_alone() -> None:
    gen = TextureGenerator(SeededRng(1))
    buf = PixelBuffer(8, 8)
    gen.apply_cloth_texture(buf, 0, 0, 8, 8, BASE)
    gen.apply_metal_texture(buf, 0, 0, 8, 8, BASE)
    gen.apply_leather_texture(buf, 0, 0, 8, 8, BASE, density=1.0)
    assert buf == PixelBuffer(8, 8)


def test_leather_grain_is_seeded() -> None:
    a, b = _filled(12, 12), _filled(12, 12)
    TextureGenerator(SeededRng(99)).apply_leather_texture(a, 0, 0, 12, 12, BASE)
    TextureGenerator(SeededRng(99)).apply_leather_texture(b, 0, 0, 12, 12, BASE)
    assert a == b
    allowed = {BASE, darken(BASE, 0.2), lighten(BASE, 0.15)}
    assert {_color(a, x, y) for x in range(12) for y in range(12)} <= allowed
    assert a != _filled(12, 12)


def test_metal_streaks_and_top_highlight() -> None:
    buf = _filled(8, 4)
    TextureGenerator(SeededRng(1)).apply_metal_texture(buf, 0, 0, 8, 4, BASE)
    highlight = lighten(BASE, 0.5)
    assert _color(buf, 0, 2) == highlight
    assert _color(buf, 3, 2) == lighten(BASE, 0.3)
    assert _color(buf, 6, 2) == highlight
    assert _color(buf, 1, 2) == BASE
    assert all(_color(buf, x, 0) == highlight for x in range(8))


def test_apply_texture_dispatch() -> None:
    gen = TextureGenerator(SeededRng(1))
    skin = _filled(6, 6)
    gen.apply_texture("skin", skin, 0, 0, 6, 6, BASE)
    assert skin == _filled(6, 6)

    cloth = _filled(6, 6)
    gen.apply_texture("cloth", cloth, 0, 0, 6, 6, BASE)
    assert _color(cloth, 0, 0) == darken(BASE, 0.15)


def test_noise_pattern() -> None:
    gen = TextureGenerator(SeededRng(5))
    mask = gen.generate_noise_pattern(10, 10, 0.2)
    assert len(mask) == 100
    assert 1 <= sum(mask) <= 20
    assert gen.generate_noise_pattern(0, 10, 0.5) == []

    gen.set_seed(5)
    assert gen.generate_noise_pattern(10, 10, 0.2) == mask
