"""
Global constants for popmatrix
==============================

All tolerances and defaults in ONE place.
"""

# Numerical tolerances
EPS_CLOSE = 1e-9       # For "are these equal?" (idempotency, symmetry, round trips)

# Presentation
DEFAULT_DIGITS = 4     # Fraction digits per column when a Matrix is printed

# Default random seed (for reproducibility)
DEFAULT_SEED = 42

# Cutoff for the generalized inverse, relative to the largest singular value.
# Singular values below cutoff * s_max are treated as zero (hard threshold).
PSEUDOINVERSE_CUTOFF = 1e-10

# =============================================================================
# GRAPH CONVENTIONS
# =============================================================================
#
# ADJACENCY:
#   A[i, j] > 0   edge i -> j with weight A[i, j]
#   A[i, j] == 0  no direct edge (self-loops and zero weights are not edges)
#
# SENTINEL (gMax):
#   gMax = 2 * (sum of edge weights) + SENTINEL_PAD
#
#   A simple path uses each edge at most once, so its length is bounded by the
#   weight total. Doubling keeps a path that uses every edge strictly below
#   gMax even where adding the pad alone is lost to rounding (totals near
#   2**53 and up). The pad keeps gMax positive for a graph with no edges.
#   Distances still at gMax after relaxation are unreachable and are
#   reported as NaN.
#
SENTINEL_PAD = 1.0
