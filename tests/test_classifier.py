from __future__ import annotations

import pytest

from analysis.classifier import MaterialClassifier
from engine.materials import Material


@pytest.mark.parametrize("color, expected", [
    (0xE3B590, Material.SKIN),
    (0xC0C0C0, Material.METAL),
    (0xFFFFFF, Material.METAL),
    (0xFFFF00, Material.GLOW),
    (0x785032, Material.WOOD),
    (0x2C3E50, Material.CLOTH),
    (0xFF0000, Material.ACCENT),
    (0x000000, Material.OTHER),
])
def test_classify(color: int, expected: Material) -> None:
    assert MaterialClassifier().classify(color) is expected


def test_classification_is_pure() -> None:
    c = MaterialClassifier()
    assert c.classify(0x4169E1) == c.classify(0x4169E1)
    assert MaterialClassifier().classify(0x4169E1) == c.classify(0x4169E1)


def test_group_by_material_mirrors_metal_and_drops_empty() -> None:
    grouped = MaterialClassifier().group_by_material([0xC0C0C0, 0xE3B590, 0x000000])
    assert grouped == {
        "metal": [0xC0C0C0],
        "armor": [0xC0C0C0],
        "skin": [0xE3B590],
        "other": [0x000000],
    }
    assert list(grouped) == ["metal", "armor", "skin", "other"]
    assert MaterialClassifier().group_by_material([]) == {}


def test_unknown_material_name_falls_back() -> None:
    assert Material("chainmail") is Material.OTHER
