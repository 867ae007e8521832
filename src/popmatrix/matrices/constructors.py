"""
Structured Matrix Constructors
==============================

Identity, one-hot design matrices over group strata, and the idempotent
"hat" projection built from them.

HAT MATRIX:
    X = design_matrix(strata)                (R x K, one 1 per row)
    H = X · pinv(XᵀX) · Xᵀ                   (R x R)

    With a Moore-Penrose inverse H is symmetric and idempotent (H·H = H).
    For one-hot X, XᵀX = diag(group sizes), so H[i, j] = 1/n_g when rows i
    and j share group g and 0 otherwise.
"""

import logging
from typing import Callable, Sequence

import numpy as np

from .linalg import generalized_inverse
from .matrix import Matrix

logger = logging.getLogger(__name__)


def identity(n: int) -> Matrix:
    """n x n identity."""
    return Matrix(n, n, np.eye(n))


def design_matrix(strata: Sequence[str]) -> Matrix:
    """
    One-hot indicator matrix for group labels.

    Args:
        strata: R group labels (duplicates expected)

    Returns:
        R x K matrix, K = number of distinct labels. Columns are the labels
        sorted lexicographically (also used as column names); row i has a
        single 1 in the column of strata[i]. Row names are the strata.
    """
    strata = [str(s) for s in strata]
    levels = sorted(set(strata))
    column_of = {level: c for c, level in enumerate(levels)}

    X = np.zeros((len(strata), len(levels)))
    for i, label in enumerate(strata):
        X[i, column_of[label]] = 1.0

    return Matrix.from_array(X, row_names=strata, col_names=levels)


def idempotent_hat_matrix(strata: Sequence[str],
                          pinv: Callable[[Matrix], Matrix] = generalized_inverse) -> Matrix:
    """
    Projection onto the group-mean space of the strata.

    Args:
        strata: R group labels
        pinv: generalized inverse to use (default: Moore-Penrose via SVD)

    Returns:
        R x R matrix H = X · pinv(XᵀX) · Xᵀ, rows and columns named by strata.
    """
    X = design_matrix(strata)
    Xt = X.transpose
    H = X @ pinv(Xt @ X) @ Xt
    logger.debug("Hat matrix for %d rows over %d strata, trace=%.6g", H.rows, X.cols, H.trace)
    return H
