"""Deterministic pseudo-random source for sprite generation.

Every generation entry point takes a SeededRng explicitly; nothing in the
pipeline falls back to the `random` module, so (seed, call sequence) always
yields the same pixels.
"""
from __future__ import annotations

from typing import Optional, Sequence, TypeVar

import config

T = TypeVar("T")

_MODULUS = 2 ** 32
_MULTIPLIER = 1664525       # Numerical Recipes LCG constants
_INCREMENT = 1013904223


class SeededRng:
    """Linear congruential generator over a single 32-bit state."""

    def __init__(self, seed: int = config.DEFAULT_SEED):
        self.seed = int(seed) % _MODULUS
        self.state = self.seed

    def random(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self.state = (self.state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self.state / _MODULUS

    def randint(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi], both ends inclusive."""
        return int(self.random() * (hi - lo + 1)) + lo

    def uniform(self, lo: float, hi: float) -> float:
        return lo + self.random() * (hi - lo)

    def choice(self, seq: Sequence[T]) -> Optional[T]:
        if not seq:
            return None
        return seq[self.randint(0, len(seq) - 1)]

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> Optional[T]:
        """Pick one item with probability proportional to its weight.

        Non-positive weights never win; returns None when nothing can be picked.
        """
        pairs = [(item, w) for item, w in zip(items, weights) if w > 0]
        if not pairs:
            return None
        total = sum(w for _, w in pairs)
        target = self.random() * total
        acc = 0.0
        for item, w in pairs:
            acc += w
            if target < acc:
                return item
        return pairs[-1][0]

    def reset(self):
        self.state = self.seed

    def set_seed(self, seed: int):
        self.seed = int(seed) % _MODULUS
        self.state = self.seed

    def derive(self, offset: int) -> "SeededRng":
        """Fresh generator seeded at `seed + offset`; this one is left untouched."""
        return SeededRng(self.seed + offset)
