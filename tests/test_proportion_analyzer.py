from __future__ import annotations

from analysis.proportions import ProportionAnalyzer, color_distance, region_bounds
from engine.pixels import PixelBuffer


def _filled(w: int, h: int, color: int) -> PixelBuffer:
    buf = PixelBuffer(w, h)
    buf.fill_rect(0, 0, w, h, color)
    return buf


def test_color_distance() -> None:
    assert color_distance((0, 0, 0, 255), (3, 4, 0, 255)) == 5.0
    assert color_distance(None, (0, 0, 0, 255)) == float("inf")


def test_region_bounds() -> None:
    assert region_bounds([]) is None
    b = region_bounds([(2, 3), (5, 4), (3, 7)])
    assert (b["minX"], b["maxX"], b["minY"], b["maxY"]) == (2, 5, 3, 7)
    assert (b["width"], b["height"]) == (4, 5)


def test_region_growing_stops_at_colour_change() -> None:
    buf = _filled(4, 4, 0xFF0000)
    buf.set_pixel(3, 3, 0x0000FF)
    region = ProportionAnalyzer().region_growing(buf, 0, 0)
    assert len(region) == 15
    assert (3, 3) not in region
    assert len(set(region)) == len(region)


def test_region_growing_from_transparent_or_outside_seed() -> None:
    buf = PixelBuffer(4, 4)
    a = ProportionAnalyzer()
    assert a.region_growing(buf, 1, 1) == []
    assert a.region_growing(_filled(4, 4, 0xFF0000), 10, 10) == []


def test_region_growing_skips_transparent_pixels() -> None:
    buf = _filled(5, 1, 0x00FF00)
    buf.set_pixel(2, 0, 0x00FF00, alpha=0)
    region = ProportionAnalyzer().region_growing(buf, 0, 0)
    assert sorted(region) == [(0, 0), (1, 0)]


def test_region_growing_threshold_is_inclusive_range() -> None:
    buf = _filled(3, 1, 0x000000)
    buf.set_pixel(2, 0, (30, 40, 0))   # distance 50
    a = ProportionAnalyzer()
    assert len(a.region_growing(buf, 0, 0, threshold=50)) == 3
    assert len(a.region_growing(buf, 0, 0, threshold=49)) == 2


def test_edges_zero_on_uniform_buffer() -> None:
    edges = ProportionAnalyzer().detect_edges(_filled(5, 5, 0x808080))
    assert all(v == 0 for row in edges for v in row)


def test_edges_respond_to_step_and_skip_border() -> None:
    buf = _filled(6, 6, 0xFFFFFF)
    buf.fill_rect(0, 0, 3, 6, 0x000000)
    edges = ProportionAnalyzer().detect_edges(buf)
    assert edges[2][2] > 0
    assert edges[0] == [0.0] * 6
    assert all(row[0] == 0 and row[5] == 0 for row in edges)


def test_measure_proportions_defaults() -> None:
    m = ProportionAnalyzer().measure_proportions({}, total_height=48)
    assert m["headSize"] == 8
    assert m["torsoHeight"] == 16
    assert m["legLength"] == 12
    assert m["centerX"] == 32
    assert m["head"] == 16.7
    assert m["torso"] == 33.3
    assert m["limbs"] == 25.0


def test_measure_proportions_without_height_has_no_percentages() -> None:
    m = ProportionAnalyzer().measure_proportions({})
    assert "head" not in m


def test_measure_proportions_from_regions() -> None:
    head = [(x, y) for x in range(10, 18) for y in range(2, 8)]
    torso = [(x, y) for x in range(8, 20) for y in range(10, 20)]
    m = ProportionAnalyzer().measure_proportions({"head": head, "torso": torso}, total_height=40)
    assert m["headSize"] == 8
    assert m["torsoWidth"] == 12
    assert m["torsoHeight"] == 10
    assert m["centerX"] == 13
    assert m["centerY"] == 14
    assert m["symmetryAxis"] == m["centerX"]
    assert m["head"] == 20.0


def test_weapon_detected_right_of_body() -> None:
    buf = PixelBuffer(48, 48)
    buf.set_pixel(40, 20, 0xCCCCCC)
    eq = ProportionAnalyzer().detect_equipment(buf, {"head": [(1, 1)], "torso": []})
    assert eq["weapon"] == {"present": True, "type": "sword", "position": {"x": 40, "y": 20}}
    assert eq["helmet"]["present"] is True
    assert eq["chestArmor"]["present"] is False


def test_no_weapon_on_empty_buffer() -> None:
    eq = ProportionAnalyzer().detect_equipment(PixelBuffer(48, 48), {})
    assert eq["weapon"] == {"present": False, "type": "unknown"}


def test_body_regions_on_generated_character(character) -> None:
    regions = ProportionAnalyzer().detect_body_regions(character)
    assert set(regions) == {"head", "torso", "leftLeg", "rightLeg", "leftArm", "rightArm"}
    assert regions["torso"]
    assert all(character.is_opaque(x, y) for x, y in regions["torso"])
