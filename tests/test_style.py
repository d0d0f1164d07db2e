from __future__ import annotations

from analysis.style import StyleDetector
from engine.materials import LightDirection, ShadingMethod
from engine.pixels import PixelBuffer


def _filled(w: int, h: int, color: int) -> PixelBuffer:
    buf = PixelBuffer(w, h)
    buf.fill_rect(0, 0, w, h, color)
    return buf


def _checkerboard(w: int, h: int) -> PixelBuffer:
    buf = PixelBuffer(w, h)
    for y in range(h):
        for x in range(w):
            buf.set_pixel(x, y, 0x000000 if (x + y) % 2 == 0 else 0xFFFFFF)
    return buf


def test_edge_pixels() -> None:
    buf = _filled(3, 3, 0x808080)
    d = StyleDetector()
    assert d.is_edge_pixel(buf, 0, 0)
    assert not d.is_edge_pixel(buf, 1, 1)
    assert not d.is_edge_pixel(PixelBuffer(3, 3), 1, 1)


def test_outline_colour_and_thickness() -> None:
    buf = _filled(10, 10, 0x101040)
    buf.fill_rect(1, 1, 8, 8, 0x808080)
    outline = StyleDetector().detect_outline(buf)
    assert outline == {"color": 0x101040, "thickness": 1}


def test_bright_edges_leave_black_default() -> None:
    outline = StyleDetector().detect_outline(_filled(6, 6, 0xE0E0E0))
    assert outline["color"] == 0x000000


def test_outline_thickness_is_capped() -> None:
    buf = PixelBuffer(10, 10)
    buf.fill_rect(0, 4, 10, 1, 0x000000)   # one-pixel line: every pixel is an edge
    assert StyleDetector().detect_outline(buf)["thickness"] == 3


def test_shading_classification() -> None:
    d = StyleDetector()
    assert d.detect_shading(_filled(6, 6, 0x808080)) is ShadingMethod.GRADIENT
    assert d.detect_shading(PixelBuffer(6, 6)) is ShadingMethod.FLAT

    stripes = PixelBuffer(6, 6)
    for x in range(6):
        stripes.fill_rect(x, 0, 1, 6, 0x000000 if x % 2 == 0 else 0xFFFFFF)
    assert d.detect_shading(stripes) is ShadingMethod.CEL


def test_dithering() -> None:
    d = StyleDetector()
    assert d.detect_dithering(_checkerboard(6, 6)) is True
    assert d.detect_dithering(_filled(6, 6, 0x808080)) is False
    assert d.detect_dithering(PixelBuffer(6, 6)) is False


def test_highlights_on_left_side() -> None:
    buf = _filled(10, 10, 0x404040)
    buf.fill_rect(0, 0, 1, 10, 0xFFFFFF)
    h = StyleDetector().detect_highlights(buf)
    assert h["hasHighlights"] is True
    assert h["color"] == 0xFFFFFF
    assert h["lightDirection"] is LightDirection.TOP_LEFT


def test_highlights_on_right_side() -> None:
    buf = _filled(10, 10, 0x404040)
    buf.fill_rect(9, 0, 1, 10, 0xF0F0F0)
    h = StyleDetector().detect_highlights(buf)
    assert h["color"] == 0xF0F0F0
    assert h["lightDirection"] is LightDirection.TOP_RIGHT


def test_no_highlights() -> None:
    h = StyleDetector().detect_highlights(_filled(10, 10, 0x404040))
    assert h == {"hasHighlights": False, "color": 0xFFFFFF, "lightDirection": LightDirection.TOP}


def test_detect_assembles_block(two_tone) -> None:
    block = StyleDetector().detect(two_tone)
    assert block.color_count == 2
    assert block.outline_color == 0x000000
    assert block.has_highlights is True


def test_detect_on_empty_buffer() -> None:
    block = StyleDetector().detect(PixelBuffer(8, 8))
    assert block.color_count == 0
    assert block.shading_method is ShadingMethod.FLAT
    assert block.dithering is False
    assert block.has_highlights is False
