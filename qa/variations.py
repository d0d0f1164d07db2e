"""Seeded sprite variants: colour jitter, uniform rescale and pluggable extras."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import config
from engine.pixels import PixelBuffer
from engine.rng import SeededRng

logger = logging.getLogger(__name__)


def _round_channel(value: float) -> int:
    return max(0, min(255, int(value + 0.5)))


class VariationStrategy(ABC):
    """Extension point for structural variation (equipment swaps, pose shifts)."""

    @abstractmethod
    def apply(self, buffer: PixelBuffer, rng: SeededRng) -> PixelBuffer:
        """Return the varied buffer; may modify and return `buffer` itself."""


class NoOpVariation(VariationStrategy):
    def apply(self, buffer: PixelBuffer, rng: SeededRng) -> PixelBuffer:
        return buffer


@dataclass
class VariationConfig:
    color_variation: float = field(default_factory=lambda: config.VARIATION_COLOR)
    size_variation: float = field(default_factory=lambda: config.VARIATION_SIZE)
    equipment_variation: bool = False
    pose_variation: bool = False
    seed: Optional[int] = None


@dataclass
class Variation:
    buffer: PixelBuffer
    seed: int
    index: int


@dataclass
class VariationCheck:
    valid: bool
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "issues": list(self.issues)}


class VariationManager:
    def __init__(
        self,
        rng: SeededRng,
        equipment_strategy: Optional[VariationStrategy] = None,
        pose_strategy: Optional[VariationStrategy] = None,
    ):
        self.rng = rng
        self.equipment_strategy = equipment_strategy or NoOpVariation()
        self.pose_strategy = pose_strategy or NoOpVariation()

    def apply_variation(
        self,
        base: PixelBuffer,
        variation: Optional[VariationConfig] = None,
        rng: Optional[SeededRng] = None,
    ) -> PixelBuffer:
        """Derive one variant from `base`; the base buffer is never modified."""
        variation = variation or VariationConfig()
        rng = rng or self.rng
        buffer = base.copy()

        if variation.color_variation > 0:
            self.apply_color_variation(buffer, variation.color_variation, rng)
        if variation.size_variation > 0:
            buffer = self.apply_size_variation(buffer, variation.size_variation, rng)
        if variation.equipment_variation:
            buffer = self.equipment_strategy.apply(buffer, rng)
        if variation.pose_variation:
            buffer = self.pose_strategy.apply(buffer, rng)
        return buffer

    def apply_color_variation(self, buffer: PixelBuffer, amount: float, rng: SeededRng):
        """Scale each channel of every opaque pixel by its own 1 ± amount factor."""
        for x, y, (*rgb, a) in list(buffer.opaque_pixels()):
            varied = [_round_channel(c * (1 + (rng.random() - 0.5) * 2 * amount)) for c in rgb]
            buffer.set_pixel(x, y, (*varied, a))

    def apply_size_variation(self, buffer: PixelBuffer, amount: float, rng: SeededRng) -> PixelBuffer:
        factor = 1 + (rng.random() - 0.5) * 2 * amount
        width = int(buffer.width * factor + 0.5)
        height = int(buffer.height * factor + 0.5)
        return buffer.scaled(width, height)

    def generate_variations(
        self,
        base: PixelBuffer,
        count: int,
        variation: Optional[VariationConfig] = None,
    ) -> list[Variation]:
        """`count` variants, each from its own generator seeded base_seed + index × stride.

        The manager's own rng is not consumed, so variants are independent
        of call order and can be produced in parallel.
        """
        variation = variation or VariationConfig()
        base_seed = variation.seed if variation.seed is not None else config.DEFAULT_SEED
        results = []
        for index in range(max(0, count)):
            seed = base_seed + index * config.VARIATION_SEED_STRIDE
            buffer = self.apply_variation(base, variation, SeededRng(seed))
            results.append(Variation(buffer=buffer, seed=seed, index=index))
        logger.info(f"Generated {len(results)} variations from seed {base_seed}")
        return results

    def validate_variation(self, buffer: Optional[PixelBuffer]) -> VariationCheck:
        """Structural sanity only: a buffer exists and its size is within bounds."""
        issues = []
        if buffer is None:
            issues.append("Variation missing buffer")
        else:
            lo, hi = config.VARIATION_MIN_SIZE, config.VARIATION_MAX_SIZE
            if buffer.width < lo or buffer.width > hi:
                issues.append(f"Invalid width: {buffer.width} (expected {lo}-{hi})")
            if buffer.height < lo or buffer.height > hi:
                issues.append(f"Invalid height: {buffer.height} (expected {lo}-{hi})")
        if issues:
            logger.warning(f"Variation failed structural check: {'; '.join(issues)}")
        return VariationCheck(valid=not issues, issues=issues)
