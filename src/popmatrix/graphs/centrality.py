"""
Node Centrality
===============

Per-node summaries of a weighted adjacency Matrix. Each returns a Vector
ordered like the rows of A.

    degree       weighted out-degree (row sums of A)
    closeness    SUM of finite shortest-path lengths to every other node
    betweenness  shortest-path routings through each node, scaled

CLOSENESS:
    This is the raw distance sum, not its reciprocal. Smaller means more
    central. Unreachable nodes add nothing.

BETWEENNESS:
    Counts, for each intermediate k, the ordered pairs (i, j) that route
    through k during relaxation (see paths.py), then multiplies the counts
    by (N-1)(N-2)/2.
"""

import logging
from typing import Optional

import numpy as np

from ..matrices.matrix import Matrix
from .paths import (
    adjacency_arrays,
    edge_sentinel,
    floyd_warshall,
    initial_distances,
    shortest_path_array,
)

logger = logging.getLogger(__name__)


def degree(A: Matrix) -> np.ndarray:
    """Weighted out-degree: A.row_sum."""
    return A.row_sum


def closeness(A: Matrix, edges: Optional[np.ndarray] = None) -> np.ndarray:
    """Sum of finite shortest-path lengths from each node to all others."""
    D = shortest_path_array(A, edges)
    return np.nansum(D, axis=1)


def betweenness(A: Matrix, edges: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Node betweenness from Floyd-Warshall routings.

    Returns:
        (N,) routing count per node times (N-1)(N-2)/2
    """
    W, mask = adjacency_arrays(A, edges)
    N = W.shape[0]
    sentinel = edge_sentinel(W, mask)
    counts = np.zeros(N)

    def count_routings(k: int, routed: np.ndarray):
        counts[k] += np.count_nonzero(routed)

    floyd_warshall(initial_distances(W, mask, sentinel), sentinel, on_improve=count_routings)
    logger.debug("Betweenness: N=%d, total routings=%d", N, int(counts.sum()))

    return counts * ((N - 1.0) * (N - 2.0) / 2.0)
