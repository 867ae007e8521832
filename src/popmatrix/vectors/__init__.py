"""Vector primitives - no dependency on Matrix."""

from .distributions import Distribution, RandomSource

from .vector import (
    vector_sum,
    magnitude,
    normal,
    smallest,
    largest,
    constrain,
    limit_annealing_magnitude,
    zeros,
    random_vector,
    centroid,
    format_r_number,
    vector_to_r,
)
