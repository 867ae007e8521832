"""Matrix core - depends on vectors and the generalized inverse."""

from .matrix import Matrix
from .linalg import generalized_inverse, satisfies_penrose
from .constructors import identity, design_matrix, idempotent_hat_matrix
from .export import to_r_source
