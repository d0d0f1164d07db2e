from __future__ import annotations

from engine.records import StyleConfig
from engine.rng import SeededRng
from generation.palettes import BUILTIN_PALETTES, FALLBACK_COLOR, PaletteManager
from store import JSONPaletteStore


def test_builtin_palettes() -> None:
    names = PaletteManager().names()
    assert len(names) == 9
    assert {"paladin", "warm", "cool", "metallic", "dragon_born"} <= set(names)


def test_get_palette_returns_a_copy() -> None:
    pm = PaletteManager()
    warm = pm.get_palette("warm")
    warm["skin"].append(0x000000)
    assert pm.get_palette("warm") == BUILTIN_PALETTES["warm"]
    assert pm.get_palette("missing") is None


def test_get_color_picks_from_category() -> None:
    pm = PaletteManager()
    rng = SeededRng(3)
    for _ in range(20):
        assert pm.get_color("warm", "cloth", rng) in BUILTIN_PALETTES["warm"]["cloth"]


def test_get_color_falls_back_to_white() -> None:
    pm = PaletteManager()
    rng = SeededRng(3)
    assert pm.get_color("nope", "skin", rng) == FALLBACK_COLOR
    assert pm.get_color("warm", "glow", rng) == FALLBACK_COLOR


def test_varied_color() -> None:
    pm = PaletteManager()
    assert pm.get_varied_color(0x8B4513, SeededRng(1), variation=0) == 0x8B4513
    varied = pm.get_varied_color(0x808080, SeededRng(1), variation=0.1)
    r = (varied >> 16) & 0xFF
    assert 115 <= r <= 141


def test_lighten_darken_helpers() -> None:
    pm = PaletteManager()
    assert pm.darken(0x808080, 0.5) == 0x404040
    assert pm.lighten(0x000000, 0.0) == 0x000000


def test_set_palette_writes_through_to_store(tmp_path) -> None:
    pm = PaletteManager(JSONPaletteStore(tmp_path))
    pm.set_palette("mine", {"cloth": [0x112233]})
    assert (tmp_path / "mine.json").exists()

    reloaded = PaletteManager(JSONPaletteStore(tmp_path))
    assert reloaded.get_palette("mine") == {"cloth": [0x112233]}


def test_delete_palette(tmp_path) -> None:
    pm = PaletteManager(JSONPaletteStore(tmp_path))
    pm.set_palette("mine", {"cloth": [1]})
    assert pm.delete_palette("mine") is True
    assert pm.delete_palette("mine") is False
    assert not (tmp_path / "mine.json").exists()
    assert "mine" not in PaletteManager(JSONPaletteStore(tmp_path)).names()


def test_register_style_config() -> None:
    pm = PaletteManager()
    cfg = StyleConfig(palette={"metal": [0xC0C0C0], "armor": [0xC0C0C0]})
    pm.register_style_config("ref", cfg)
    assert pm.get_palette("ref") == {"metal": [0xC0C0C0], "armor": [0xC0C0C0]}
