"""
Generalized Inverse
===================

Moore-Penrose pseudo-inverse, defined for singular and non-square matrices.

DEFINING IDENTITIES (G = pinv(M)):
    1. M G M = M
    2. G M G = G
    3. (M G)ᵀ = M G
    4. (G M)ᵀ = G M

Only idempotent_hat_matrix consumes this; it is passed in as a callable so
another implementation can be swapped in.
"""

import numpy as np
import scipy.linalg

from ..config.constants import EPS_CLOSE, PSEUDOINVERSE_CUTOFF
from .matrix import Matrix


def generalized_inverse(M: Matrix, rtol: float = PSEUDOINVERSE_CUTOFF) -> Matrix:
    """
    Moore-Penrose pseudo-inverse of M via SVD.

    Args:
        M: (r, c) matrix
        rtol: singular values below rtol * s_max are treated as zero

    Returns:
        (c, r) matrix. Axis names are swapped like a transpose.
    """
    if M.rows == 0 or M.cols == 0:
        return Matrix(M.cols, M.rows)

    G = scipy.linalg.pinv(M.to_numpy(), atol=0.0, rtol=rtol)
    return Matrix.from_array(G, row_names=M.col_names, col_names=M.row_names)


def satisfies_penrose(M: Matrix, G: Matrix, tol: float = EPS_CLOSE) -> bool:
    """True if G satisfies all four Moore-Penrose identities for M within tol."""
    m = M.to_numpy()
    g = G.to_numpy()
    mg = m @ g
    gm = g @ m
    return (np.allclose(mg @ m, m, atol=tol)
            and np.allclose(gm @ g, g, atol=tol)
            and np.allclose(mg, mg.T, atol=tol)
            and np.allclose(gm, gm.T, atol=tol))
