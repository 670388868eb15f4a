"""
Deterministic seeded sampling.

Every pseudo-random aspect of a flower (petal jitter, wind profile,
droplet timing) comes from one sine-hash:

    x = sin(seed + offset) * 10000
    sample = lo + frac(x) * (hi - lo)

It is not a PRNG in any statistical sense. What matters is that the same
(seed, offset) always yields the same value, so a flower re-rendered from
its stored seed looks and moves exactly as it did when it was planted.
Scalar math is done with `math` in float64 so results are bit-identical
across calls.
"""

import math
from collections.abc import Callable

HASH_SCALE = 10000.0

RandomFn = Callable[..., float]


def seeded_random(seed: float, offset: float, lo: float, hi: float) -> float:
    """
    Sample a value in [lo, hi) keyed by (seed, offset).

    Args:
        seed: Flower seed
        offset: Bucket distinguishing independent draws for one seed
        lo: Lower bound (inclusive)
        hi: Upper bound (exclusive)

    Returns:
        Deterministic value in [lo, hi)
    """
    x = math.sin(seed + offset) * HASH_SCALE
    return lo + (x - math.floor(x)) * (hi - lo)


def make_random(seed: float) -> RandomFn:
    """Bind a seed, returning `random(lo, hi, offset=0.0)`."""

    def random(lo: float, hi: float, offset: float = 0.0) -> float:
        return seeded_random(seed, offset, lo, hi)

    return random
