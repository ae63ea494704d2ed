"""Injectable 64-bit random sources.

The picker draws from a RandomSource only in its jitter and weighted-draw
steps, so swapping the source is enough to make a whole session replayable.

Usage:
    rng = Xorshift64StarSource(seed=42)   # deterministic (tests, simulation)
    rng = SystemRandomSource()            # OS entropy (production)
    value = rng.next()                    # int in [0, 2**64)

RandomSource instances are single-owner and not safe to share across threads.
"""

from __future__ import annotations

import secrets
from abc import ABC, abstractmethod

UINT64_MASK = (1 << 64) - 1
UNIT_SCALE = 1.0 / (1 << 53)

XORSHIFT_MULTIPLIER = 2685821657736338717
ZERO_SEED_FALLBACK = 0xDEADBEEFCAFEBABE


class RandomSource(ABC):
    """Abstract 64-bit random source."""

    @abstractmethod
    def next(self) -> int:
        """Return a random integer in [0, 2**64)."""
        pass


class SystemRandomSource(RandomSource):
    """Production source backed by the OS cryptographic generator."""

    def next(self) -> int:
        return secrets.randbits(64)


class Xorshift64StarSource(RandomSource):
    """Deterministic xorshift64* generator.

    A zero seed would lock the generator at zero forever, so it is replaced
    by a fixed nonzero constant.
    """

    def __init__(self, seed: int):
        seed &= UINT64_MASK
        self._seed = seed
        self._state = seed if seed != 0 else ZERO_SEED_FALLBACK

    @property
    def seed(self) -> int:
        return self._seed

    def next(self) -> int:
        x = self._state
        x ^= x >> 12
        x ^= (x << 25) & UINT64_MASK
        x ^= x >> 27
        self._state = x
        return (x * XORSHIFT_MULTIPLIER) & UINT64_MASK


def next_unit(rng: RandomSource) -> float:
    """Draw one value from rng normalized to [0, 1).

    Uses the top 53 bits so the result is exact in a double and never 1.0.
    """
    return (rng.next() >> 11) * UNIT_SCALE


def random_seed() -> int:
    """Fresh 64-bit seed from OS entropy."""
    return SystemRandomSource().next()
