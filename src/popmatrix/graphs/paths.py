"""
All-Pairs Shortest Paths
========================

Floyd-Warshall over a weighted adjacency Matrix, with the "0 means no edge"
convention (see config/constants.py).

RELAXATION (one routine shared by every metric):
    D starts at gMax off-diagonal, 0 on the diagonal, then direct edges.
    For k = 0..N-1, every ordered pair (i, j) with i, j, k distinct:

        cur = D[i, j]
        new = D[i, k] + D[k, j]

        cur < gMax and new < gMax   ->  D[i, j] = min(cur, new)
        only new < gMax             ->  D[i, j] = new
        new >= gMax                 ->  unchanged

    The pair ROUTES THROUGH k when new < gMax and (cur >= gMax or new <= cur).
    Ties route through k. Unreachable pairs never route.

VECTORIZATION:
    Row k and column k cannot change during sweep k (their pairs are
    excluded), so each sweep is one numpy expression and gives exactly the
    result of the scalar i, j loop.

EDGE MASK:
    Every function takes an optional boolean `edges` mask (N x N). When given
    it decides which entries are edges, so zero-weight edges can be
    expressed. Without it, edges are the entries > 0. Diagonal entries are
    never edges.
"""

import logging
from typing import Callable, Optional, Tuple

import numpy as np

from ..config.constants import SENTINEL_PAD
from ..errors import ShapeMismatchError
from ..matrices.matrix import Matrix

logger = logging.getLogger(__name__)

OnImprove = Callable[[int, np.ndarray], None]


def adjacency_arrays(A: Matrix,
                     edges: Optional[np.ndarray] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Weights and edge mask of a square adjacency matrix.

    Args:
        A: (N, N) adjacency matrix (not modified)
        edges: optional (N, N) boolean edge mask

    Returns:
        W: (N, N) weights (copy)
        mask: (N, N) bool, True where an edge i -> j exists, False on the diagonal

    Raises:
        ShapeMismatchError: A is not square, or edges has the wrong shape
    """
    if not A.is_square:
        raise ShapeMismatchError(f"Adjacency matrix must be square, got {A.rows}x{A.cols}")

    W = A.to_numpy()
    if edges is None:
        mask = W > 0
    else:
        mask = np.array(edges, dtype=bool)
        if mask.shape != W.shape:
            raise ShapeMismatchError(
                f"Edge mask shape {mask.shape} does not match adjacency shape {W.shape}"
            )
    np.fill_diagonal(mask, False)
    return W, mask


def edge_sentinel(W: np.ndarray, mask: np.ndarray) -> float:
    """gMax: twice the total edge weight plus SENTINEL_PAD, above any simple path length."""
    total = float(np.sum(np.abs(W[mask])))
    return 2.0 * total + SENTINEL_PAD


def initial_distances(W: np.ndarray, mask: np.ndarray, sentinel: float) -> np.ndarray:
    """Direct-edge distances: edge weight, 0 on the diagonal, sentinel elsewhere."""
    D = np.full(W.shape, sentinel, dtype=np.float64)
    D[mask] = W[mask]
    np.fill_diagonal(D, 0.0)
    return D


def floyd_warshall(D: np.ndarray,
                   sentinel: float,
                   on_improve: Optional[OnImprove] = None) -> np.ndarray:
    """
    Relax D through every intermediate node in increasing order.

    Args:
        D: (N, N) initial distances, sentinel for "no path yet" (not modified)
        sentinel: gMax
        on_improve: called as on_improve(k, routed) after computing sweep k,
                    where routed is the (N, N) bool mask of pairs that route
                    through k

    Returns:
        (N, N) relaxed distances; unreachable pairs keep the sentinel
    """
    D = np.array(D, dtype=np.float64)
    N = D.shape[0]
    off_diagonal = ~np.eye(N, dtype=bool)

    for k in range(N):
        cur = D
        new = D[:, k, np.newaxis] + D[np.newaxis, k, :]

        routed = (new < sentinel) & ((cur >= sentinel) | (new <= cur))
        routed &= off_diagonal
        routed[k, :] = False
        routed[:, k] = False

        if on_improve is not None:
            on_improve(k, routed)

        D = np.where(routed, new, cur)

    return D


def shortest_path_array(A: Matrix, edges: Optional[np.ndarray] = None) -> np.ndarray:
    """(N, N) shortest-path lengths, 0 on the diagonal, NaN if unreachable."""
    W, mask = adjacency_arrays(A, edges)
    sentinel = edge_sentinel(W, mask)
    logger.debug("Shortest paths: N=%d, edges=%d, gMax=%g", W.shape[0], int(mask.sum()), sentinel)

    D = floyd_warshall(initial_distances(W, mask, sentinel), sentinel)
    D[D >= sentinel] = np.nan
    np.fill_diagonal(D, 0.0)
    return D


def shortest_paths(A: Matrix, edges: Optional[np.ndarray] = None) -> Matrix:
    """
    Least-cost distance between every pair of nodes.

    Args:
        A: (N, N) weighted adjacency matrix
        edges: optional (N, N) boolean edge mask

    Returns:
        (N, N) Matrix with A's axis names. Diagonal is exactly 0; pairs with
        no connecting path are NaN.
    """
    D = shortest_path_array(A, edges)
    return Matrix.from_array(D, row_names=A.row_names, col_names=A.col_names)


def diameter(A: Matrix, edges: Optional[np.ndarray] = None) -> float:
    """
    Longest of all finite shortest paths.

    Returns:
        max finite shortest-path length; 0.0 if there is none (fewer than
        two nodes, or no edges at all)
    """
    D = shortest_path_array(A, edges)
    finite = D[np.isfinite(D)]
    if finite.size == 0:
        return 0.0
    return float(finite.max())
