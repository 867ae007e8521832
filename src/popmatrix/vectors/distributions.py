"""
Random Deviate Source
=====================

The only nondeterministic piece of popmatrix. Everything random goes through
a RandomSource so tests can pin the stream with a seed.

Distribution codes match the LAPACK dlarnv convention:
    1 = uniform (0, 1)
    2 = uniform (-1, 1)
    3 = normal (0, 1)
"""

from enum import IntEnum
from typing import Optional

import numpy as np


class Distribution(IntEnum):
    """Distributions available for random vectors, ordered by code."""
    UNIFORM_0_1 = 1
    UNIFORM_NEG1_1 = 2
    NORMAL_0_1 = 3


class RandomSource:
    """
    Seedable source of uniform and normal deviates.

    Args:
        seed: seed for numpy.random.default_rng. None draws fresh entropy.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def draw(self, distribution: Distribution, count: int) -> np.ndarray:
        """
        Draw `count` deviates from `distribution`.

        Returns:
            (count,) float64 array
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")

        distribution = Distribution(distribution)
        if distribution is Distribution.UNIFORM_0_1:
            return self._rng.uniform(0.0, 1.0, size=count)
        if distribution is Distribution.UNIFORM_NEG1_1:
            return self._rng.uniform(-1.0, 1.0, size=count)
        return self._rng.standard_normal(size=count)

    def __repr__(self):
        return f"RandomSource(seed={self.seed!r})"
