"""
popmatrix
=========

Dense matrix algebra and graph centrality for spatial / population-genetic
data.

Layers (no upward imports):
    config    - tolerances, defaults, logging setup
    vectors   - Vector primitives, random deviates, centroid
    matrices  - Matrix type, design/hat matrices, generalized inverse, R export
    graphs    - shortest paths, diameter, degree, closeness, betweenness

Typical flow:
    A = Matrix(3, 3, [0, 1, 0,
                      1, 0, 1,
                      0, 1, 0])
    shortest_paths(A)   # Matrix of path lengths, NaN where unreachable
    closeness(A)        # array([3., 2., 3.])

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.11
"""

import sys

if sys.version_info < (3, 9):
    raise ImportError(f"popmatrix requires Python >= 3.9, got {sys.version}")

# scipy version check (pinv rtol/atol keywords)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 11):
    raise ImportError(f"popmatrix requires scipy >= 1.11, got {scipy.__version__}")

import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"popmatrix requires numpy >= 1.20, got {np.__version__}")

__version__ = "0.1.0"

from .errors import PopMatrixError, ShapeMismatchError
from .config import setup_logging

from .vectors import (
    Distribution,
    RandomSource,
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
    vector_to_r,
)

from .matrices import (
    Matrix,
    generalized_inverse,
    identity,
    design_matrix,
    idempotent_hat_matrix,
)

from .graphs import (
    shortest_paths,
    diameter,
    degree,
    closeness,
    betweenness,
)
