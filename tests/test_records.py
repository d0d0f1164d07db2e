from __future__ import annotations

import json

import pytest

from engine.materials import LightDirection, Material, ShadingMethod
from engine.records import StyleBlock, StyleConfig


def _sample() -> StyleConfig:
    return StyleConfig(
        palette={"metal": [0xC0C0C0], "armor": [0xC0C0C0], "skin": [0xE3B590]},
        proportions={"head": 33.3, "headSize": 16.0},
        style=StyleBlock(
            outline_color=0x101040,
            outline_thickness=2,
            shading_method=ShadingMethod.CEL,
            color_count=12,
            has_highlights=True,
            light_direction=LightDirection.TOP_RIGHT,
        ),
        equipment={"weapon": {"present": True, "type": "sword"}},
        sources=["hero.png"],
        analyzed_at="2024-01-01T00:00:00+00:00",
    )


def test_round_trip_through_json() -> None:
    cfg = _sample()
    restored = StyleConfig.from_dict(json.loads(json.dumps(cfg.to_dict())))
    assert restored == cfg


def test_to_dict_uses_wire_names() -> None:
    d = _sample().to_dict()
    assert d["analyzedAt"] == "2024-01-01T00:00:00+00:00"
    assert d["style"]["shadingMethod"] == "cel-shading"
    assert d["style"]["lightDirection"] == "top-right"
    assert d["style"]["outlineColor"] == 0x101040


def test_legacy_single_source_key() -> None:
    cfg = StyleConfig.from_dict({"source": "old.png"})
    assert cfg.sources == ("old.png",)


def test_missing_fields_take_defaults() -> None:
    cfg = StyleConfig.from_dict({})
    assert cfg.palette == {}
    assert cfg.style == StyleBlock()
    assert cfg.analyzed_at


def test_unknown_enum_values_fall_back() -> None:
    block = StyleBlock.from_dict({"shadingMethod": "painterly", "lightDirection": "up"})
    assert block.shading_method is ShadingMethod.FLAT
    assert block.light_direction is LightDirection.TOP_LEFT


def test_colors_for_and_equipment_present() -> None:
    cfg = _sample()
    assert cfg.colors_for(Material.SKIN) == [0xE3B590]
    assert cfg.colors_for("wood") == []
    assert cfg.equipment_present("weapon") is True
    assert cfg.equipment_present("helmet") is False


def test_mapping_fields_are_read_only() -> None:
    palette = {"skin": [0xE3B590]}
    cfg = StyleConfig(palette=palette, equipment={"weapon": {"present": True}}, sources=["a.png"])
    palette["skin"].append(0x000000)
    assert cfg.palette["skin"] == (0xE3B590,)
    with pytest.raises(TypeError):
        cfg.palette["skin"] = (0x111111,)
    with pytest.raises(TypeError):
        cfg.proportions["head"] = 40.0
    with pytest.raises(TypeError):
        cfg.equipment["weapon"]["present"] = False
    assert isinstance(cfg.sources, tuple)


def test_hex_colours_accepted() -> None:
    cfg = StyleConfig.from_dict({
        "palette": {"cloth": ["#ff0000", 255]},
        "style": {"outlineColor": "#000", "highlightColor": "#FFFFCC"},
    })
    assert cfg.palette["cloth"] == (0xFF0000, 0x0000FF)
    assert cfg.style.outline_color == 0x000000
    assert cfg.style.highlight_color == 0xFFFFCC


@pytest.mark.parametrize("bad", [
    {"palette": {"cloth": ["#zzzzzz"]}},
    {"palette": {"cloth": "#ff0000"}},
    {"palette": ["#ff0000"]},
    {"proportions": {"head": "x"}},
    {"equipment": {"helmet": True}},
    {"style": "cel"},
    {"sources": "ref.png"},
])
def test_malformed_values_raise(bad: dict) -> None:
    with pytest.raises((ValueError, TypeError)):
        StyleConfig.from_dict(bad)
