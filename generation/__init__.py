"""Deterministic sprite generation.

Every entry point takes an explicit SeededRng; the same seed and descriptor
always produce the same pixels.
"""
from __future__ import annotations

from typing import Optional, Union

from engine.pixels import PixelBuffer
from engine.records import StyleConfig
from engine.rng import SeededRng
from generation.descriptors import CharacterDescriptor, ItemDescriptor
from generation.humanoid import HumanoidGenerator
from generation.items import ItemGenerator
from generation.palettes import PaletteManager

Descriptor = Union[CharacterDescriptor, ItemDescriptor]


def generate_sprite(
    style_config: Optional[StyleConfig],
    descriptor: Descriptor,
    rng: SeededRng,
    palettes: Optional[PaletteManager] = None,
) -> PixelBuffer:
    if isinstance(descriptor, ItemDescriptor):
        return ItemGenerator().generate(descriptor, rng, style_config)
    return HumanoidGenerator(palettes).generate(descriptor, rng, style_config)


__all__ = [
    "CharacterDescriptor",
    "HumanoidGenerator",
    "ItemDescriptor",
    "ItemGenerator",
    "PaletteManager",
    "generate_sprite",
]
