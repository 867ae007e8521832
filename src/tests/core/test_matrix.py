"""
Tests for the Matrix Core
=========================

Construction, reductions, transforms and algebra.
Fail-soft indexing and shape guards live in test_matrix_guards.py.

Run: python -m pytest tests/core/test_matrix.py -v
"""

import numpy as np
import pytest

from popmatrix.config.constants import DEFAULT_SEED, EPS_CLOSE
from popmatrix.matrices import Matrix


@pytest.fixture
def M23():
    """2x3 holding 1..6 by row."""
    return Matrix(2, 3, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


@pytest.fixture(scope='module')
def points():
    """12 random points in the plane (seeded)."""
    rng = np.random.default_rng(DEFAULT_SEED)
    return rng.normal(size=(12, 2))


@pytest.fixture(scope='module')
def squared_distances(points):
    diff = points[:, np.newaxis, :] - points[np.newaxis, :, :]
    return Matrix.from_array(np.sum(diff ** 2, axis=2))


# =============================================================================
# TEST A: Construction
# =============================================================================

class TestConstruction:

    def test_scalar_fill(self):
        M = Matrix(2, 3, 7.0)
        assert M.shape == (2, 3)
        assert M.sum == 42.0
        assert M.row_names == ["", ""]
        assert M.col_names == ["", "", ""]
        assert M.digits == [4, 4, 4]

    def test_values_fill_by_row(self, M23):
        assert M23[0, 1] == 2.0
        assert M23[1, 0] == 4.0
        np.testing.assert_array_equal(M23.values, [[1, 2, 3], [4, 5, 6]])

    def test_from_range(self):
        M = Matrix.from_range(2, 3, 0.0, 5.0)
        np.testing.assert_allclose(M.values, [[0, 1, 2], [3, 4, 5]])

    def test_from_range_single_cell(self):
        M = Matrix.from_range(1, 1, 2.0, 9.0)
        assert M[0, 0] == 2.0

    def test_with_names(self):
        M = Matrix.with_names(["a", "b"], ["x", "y", "z"])
        assert M.shape == (2, 3)
        assert M.sum == 0.0
        assert M.col_names == ["x", "y", "z"]

    def test_default_matrix(self):
        M = Matrix.default()
        assert M.shape == (3, 5)
        assert M[2, 4] == 15.0
        assert M.row_names[0] == "Row 1"
        assert M.col_names[-1] == "Col 5"

    def test_copy_is_independent(self, M23):
        C = M23.copy()
        C[0, 0] = 100.0
        assert M23[0, 0] == 1.0
        assert C != M23


# =============================================================================
# TEST B: Reductions
# =============================================================================

class TestReductions:

    def test_diagonal_and_trace(self):
        M = Matrix.default()
        np.testing.assert_array_equal(M.diagonal, [1.0, 7.0, 13.0])
        assert M.trace == 21.0

    def test_diagonal_setter_truncates(self):
        M = Matrix(2, 3)
        M.diagonal = [9.0, 8.0, 7.0]
        np.testing.assert_array_equal(M.diagonal, [9.0, 8.0])
        assert M.sum == 17.0

    def test_diagonal_setter_short_input(self):
        M = Matrix(3, 3, 1.0)
        M.diagonal = [5.0]
        np.testing.assert_array_equal(M.diagonal, [5.0, 1.0, 1.0])

    def test_sum(self):
        assert Matrix.default().sum == 120.0

    def test_row_and_col_sums(self):
        M = Matrix.default()
        np.testing.assert_array_equal(M.row_sum, [15.0, 40.0, 65.0])
        np.testing.assert_array_equal(M.col_sum, [18.0, 21.0, 24.0, 27.0, 30.0])

    def test_row_matrix_broadcasts_along_rows(self):
        """X[i, j] = row_sum[j]: every row is the full row-sum vector."""
        M = Matrix(2, 2, [1.0, 2.0, 3.0, 4.0])
        np.testing.assert_array_equal(M.row_matrix.values, [[3.0, 7.0], [3.0, 7.0]])

    def test_row_matrix_tall(self):
        """3x2: only the first cols row sums are used."""
        M = Matrix(3, 2, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        X = M.row_matrix
        assert X.shape == (3, 2)
        np.testing.assert_array_equal(X.values, [[3.0, 7.0]] * 3)


# =============================================================================
# TEST C: Transpose, centering, submatrix
# =============================================================================

class TestStructure:

    def test_transpose_values(self, M23):
        T = M23.transpose
        assert T.shape == (3, 2)
        np.testing.assert_array_equal(T.values, [[1, 4], [2, 5], [3, 6]])

    def test_transpose_swaps_names(self):
        M = Matrix.default()
        T = M.T
        assert T.row_names == M.col_names
        assert T.col_names == M.row_names

    def test_double_transpose_is_identity(self):
        M = Matrix.default()
        assert M.transpose.transpose == M

    def test_center_removes_column_means(self):
        M = Matrix(3, 2, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        M.center()
        np.testing.assert_allclose(M.values, [[-2, -2], [0, 0], [2, 2]])
        np.testing.assert_allclose(M.col_sum, [0.0, 0.0], atol=1e-15)

    def test_submatrix_reorders_and_repeats(self):
        M = Matrix.default()
        S = M.submatrix([2, 0], [1, 1])
        np.testing.assert_array_equal(S.values, [[12.0, 12.0], [2.0, 2.0]])
        assert S.row_names == ["Row 3", "Row 1"]
        assert S.col_names == ["Col 2", "Col 2"]


# =============================================================================
# TEST D: Covariance <-> distance
# =============================================================================

class TestTransforms:

    def test_distance_of_identity(self):
        I = Matrix(2, 2, [1.0, 0.0, 0.0, 1.0])
        np.testing.assert_array_equal(I.as_distance.values, [[0.0, 2.0], [2.0, 0.0]])

    def test_covariance_is_centered_gram(self, points, squared_distances):
        """Gower: -1/2 J D J = Xc Xcᵀ for squared Euclidean D."""
        Xc = points - points.mean(axis=0)
        C = squared_distances.as_covariance
        np.testing.assert_allclose(C.values, Xc @ Xc.T, atol=EPS_CLOSE)

    def test_covariance_rows_sum_to_zero(self, squared_distances):
        C = squared_distances.as_covariance
        np.testing.assert_allclose(C.row_sum, 0.0, atol=EPS_CLOSE)

    def test_distance_covariance_round_trip(self, squared_distances):
        """Symmetric D with zero diagonal comes back exactly (within EPS_CLOSE)."""
        D2 = squared_distances.as_covariance.as_distance
        np.testing.assert_allclose(D2.values, squared_distances.values, atol=EPS_CLOSE)

    def test_transforms_keep_names(self):
        D = Matrix.from_array(np.array([[0.0, 1.0], [1.0, 0.0]]),
                              row_names=["p", "q"], col_names=["p", "q"])
        assert D.as_covariance.row_names == ["p", "q"]
        assert D.as_distance.col_names == ["p", "q"]


# =============================================================================
# TEST E: Algebra and equality
# =============================================================================

class TestAlgebra:

    def test_matmul_matches_numpy(self, M23):
        P = M23 @ M23.T
        np.testing.assert_array_equal(P.values, M23.to_numpy() @ M23.to_numpy().T)
        assert P.shape == (2, 2)

    def test_matmul_names(self):
        A = Matrix.with_names(["r1", "r2"], ["k"])
        B = Matrix.with_names(["k"], ["c1", "c2", "c3"])
        P = A @ B
        assert P.row_names == ["r1", "r2"]
        assert P.col_names == ["c1", "c2", "c3"]

    def test_elementwise(self, M23):
        np.testing.assert_array_equal((M23 + M23).values, 2 * M23.to_numpy())
        np.testing.assert_array_equal((M23 - M23).values, np.zeros((2, 3)))
        np.testing.assert_array_equal((M23 * M23).values, M23.to_numpy() ** 2)

    def test_scalar_ops(self, M23):
        np.testing.assert_array_equal((M23 * 2.0).values, [[2, 4, 6], [8, 10, 12]])
        np.testing.assert_array_equal((2.0 * M23).values, [[2, 4, 6], [8, 10, 12]])
        np.testing.assert_array_equal((M23 + 1).values, [[2, 3, 4], [5, 6, 7]])
        np.testing.assert_array_equal((10 - M23).values, [[9, 8, 7], [6, 5, 4]])
        np.testing.assert_array_equal((M23 / 2).values, [[0.5, 1, 1.5], [2, 2.5, 3]])
        np.testing.assert_array_equal((-M23).values, -M23.to_numpy())

    def test_operands_not_modified(self, M23):
        before = M23.copy()
        _ = M23 + M23
        _ = M23 * 3.0
        _ = M23 @ M23.T
        assert M23 == before

    def test_equality_requires_names(self):
        A = Matrix(2, 2, [1.0, 2.0, 3.0, 4.0])
        B = Matrix(2, 2, [1.0, 2.0, 3.0, 4.0])
        assert A == B
        B.row_names = ["x", "y"]
        assert A != B

    def test_equality_requires_shape(self):
        assert Matrix(2, 3) != Matrix(3, 2)
        assert Matrix(0, 3) != Matrix(3, 0)

    def test_nan_never_equal(self):
        A = Matrix(1, 1, float("nan"))
        assert A != A.copy()
