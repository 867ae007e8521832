"""
Vector Primitives
=================

A Vector is a 1-D float64 numpy array. Every function here is pure: inputs are
never modified and a new array is returned.

Accepts any sequence of numbers; it is converted with np.asarray first.

FAIL-SOFT:
    smallest / largest return the left operand unchanged when lengths differ.
    Every other length mismatch raises ShapeMismatchError.
"""

import math
from typing import Iterable, Optional, Sequence

import numpy as np

from ..errors import ShapeMismatchError
from .distributions import Distribution, RandomSource


def _as_vector(v: Sequence[float]) -> np.ndarray:
    return np.asarray(v, dtype=np.float64).reshape(-1)


def vector_sum(v: Sequence[float]) -> float:
    """Arithmetic sum of the elements (0.0 for an empty vector)."""
    return float(np.sum(_as_vector(v)))


def magnitude(v: Sequence[float]) -> float:
    """Euclidean (L2) length."""
    v = _as_vector(v)
    return math.sqrt(float(np.sum(v * v)))


def normal(v: Sequence[float]) -> np.ndarray:
    """
    Unit vector in the direction of v.

    Raises:
        ZeroDivisionError: if v has zero magnitude (including empty v).
    """
    v = _as_vector(v)
    mag = magnitude(v)
    if mag == 0.0:
        raise ZeroDivisionError("Cannot normalize a vector with zero magnitude")
    return v / mag


def smallest(v: Sequence[float], other: Sequence[float]) -> np.ndarray:
    """Elementwise minimum; returns v unchanged if lengths differ."""
    v = _as_vector(v)
    other = _as_vector(other)
    if v.size != other.size:
        return v
    return np.minimum(v, other)


def largest(v: Sequence[float], other: Sequence[float]) -> np.ndarray:
    """Elementwise maximum; returns v unchanged if lengths differ."""
    v = _as_vector(v)
    other = _as_vector(other)
    if v.size != other.size:
        return v
    return np.maximum(v, other)


def constrain(v: Sequence[float], minimum: float, maximum: float) -> np.ndarray:
    """
    Clamp each element into [minimum, maximum].

    Values below minimum are checked first, so when minimum > maximum the
    low side wins for small values. NaN passes through.
    """
    v = _as_vector(v)
    return np.where(v < minimum, minimum, np.where(v > maximum, maximum, v))


def limit_annealing_magnitude(v: Sequence[float], temp: float) -> np.ndarray:
    """
    Clamp |v_i| to temp while keeping the sign of v_i.

    Used by iterative callers to bound step sizes:
        v_i <  0  ->  -min(temp, |v_i|)
        v_i >= 0  ->   min(temp, v_i)
    """
    v = _as_vector(v)
    return np.where(v < 0, -np.minimum(temp, np.abs(v)), np.minimum(temp, v))


def zeros(length: int) -> np.ndarray:
    """All-zero vector of the given length."""
    return np.zeros(length, dtype=np.float64)


def random_vector(length: int,
                  distribution: Distribution = Distribution.UNIFORM_0_1,
                  source: Optional[RandomSource] = None) -> np.ndarray:
    """
    Vector of random deviates.

    Args:
        length: number of elements
        distribution: UNIFORM_0_1, UNIFORM_NEG1_1 or NORMAL_0_1
        source: RandomSource to draw from (default: a fresh unseeded one)
    """
    if source is None:
        source = RandomSource()
    return source.draw(distribution, length)


def centroid(vectors: Iterable[Sequence[float]]) -> Optional[np.ndarray]:
    """
    Elementwise mean of a collection of equal-length vectors.

    Returns:
        (N,) mean vector, or None if the collection is empty or its first
        member has no elements.

    Raises:
        ShapeMismatchError: if members have different lengths.
    """
    members = [_as_vector(v) for v in vectors]
    if not members or members[0].size == 0:
        return None

    N = members[0].size
    for idx, member in enumerate(members):
        if member.size != N:
            raise ShapeMismatchError(
                f"centroid: vector {idx} has length {member.size}, expected {N}"
            )

    return np.mean(np.vstack(members), axis=0)


def format_r_number(x: float) -> str:
    """One number as R source (NaN, Inf and -Inf spelled the R way)."""
    x = float(x)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Inf" if x > 0 else "-Inf"
    return repr(x)


def vector_to_r(v: Sequence[float]) -> str:
    """R source for the vector, e.g. 'c(1.0, 2.5)'."""
    return "c(" + ", ".join(format_r_number(x) for x in _as_vector(v)) + ")"
