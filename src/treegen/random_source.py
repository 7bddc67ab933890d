from __future__ import annotations

"""Seeded random stream shared by every component of a generation run."""

import math
from typing import Optional

import numpy as np

SEED_MASK = 2**64 - 1
MAX_DRAW = 2**31 - 1


def derive_seed() -> int:
    """Return a fresh 64-bit seed taken from OS entropy."""
    return int(np.random.SeedSequence().entropy) & SEED_MASK


class RandomSource:
    """
    Deterministic sequence of draws over a numpy PCG64 bit generator.

    Every primitive draw increments ``draws``, so callers can assert that
    nothing consumed entropy (e.g. when a configuration is rejected up
    front). The instance is passed explicitly to every component that
    draws; nothing reaches for a global generator.
    """

    __slots__ = ("seed", "seed_was_derived", "_rng", "_draws")

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed_was_derived = seed is None
        self.seed = derive_seed() if seed is None else int(seed) & SEED_MASK
        self._rng = np.random.Generator(np.random.PCG64(self.seed))
        self._draws = 0

    @property
    def draws(self) -> int:
        return self._draws

    def next_normal_nonnegative_int(self, mean: float, stddev: float) -> int:
        """
        Draw N(mean, stddev), round half away from zero, clamp to [0, MAX_DRAW].
        """
        self._draws += 1
        value = float(self._rng.normal(mean, stddev))
        if math.isnan(value) or value <= 0.0:
            return 0
        if value >= MAX_DRAW:
            return MAX_DRAW
        return int(math.floor(value + 0.5))

    def next_index(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"next_index requires n > 0, got {n}")
        self._draws += 1
        return int(self._rng.integers(0, n))

    def next_bytes(self, n: int) -> bytes:
        self._draws += 1
        return self._rng.bytes(n)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed}, draws={self._draws})"
