from __future__ import annotations

import pytest

from engine.pixels import PixelBuffer
from engine.rng import SeededRng
from generation import CharacterDescriptor, generate_sprite


@pytest.fixture
def two_tone() -> PixelBuffer:
    """2×2: top row black, bottom row white."""
    buf = PixelBuffer(2, 2)
    buf.set_pixel(0, 0, 0x000000)
    buf.set_pixel(1, 0, 0x000000)
    buf.set_pixel(0, 1, 0xFFFFFF)
    buf.set_pixel(1, 1, 0xFFFFFF)
    return buf


@pytest.fixture
def character() -> PixelBuffer:
    return generate_sprite(None, CharacterDescriptor(), SeededRng(7))
