"""
Graph metrics - depend only on the Matrix core.

A square Matrix is read as a weighted adjacency: A[i, j] > 0 is an edge.
"""

from .paths import (
    adjacency_arrays,
    edge_sentinel,
    initial_distances,
    floyd_warshall,
    shortest_paths,
    diameter,
)

from .centrality import (
    degree,
    closeness,
    betweenness,
)
