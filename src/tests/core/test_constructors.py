"""
Tests for Structured Constructors
=================================

Identity, design matrices, generalized inverse, idempotent hat matrices.

Run: python -m pytest tests/core/test_constructors.py -v
"""

import numpy as np
import pytest

from popmatrix.config.constants import EPS_CLOSE
from popmatrix.matrices import (
    Matrix,
    identity,
    design_matrix,
    idempotent_hat_matrix,
    generalized_inverse,
    satisfies_penrose,
)


STRATA = ["pop3", "pop1", "pop2", "pop1", "pop3", "pop3"]


# =============================================================================
# TEST A: Identity and design matrices
# =============================================================================

def test_identity():
    I = identity(3)
    np.testing.assert_array_equal(I.values, np.eye(3))
    assert I.trace == 3.0


def test_identity_is_neutral():
    M = Matrix.default()
    left = identity(3) @ M
    np.testing.assert_array_equal(left.values, M.values)
    assert left.col_names == M.col_names
    assert left.row_names == ["", "", ""]
    assert M @ identity(5) == Matrix.from_array(M.to_numpy(), row_names=M.row_names)


def test_design_matrix_example():
    """["a","b","a"] -> columns a, b; rows [1,0], [0,1], [1,0]"""
    X = design_matrix(["a", "b", "a"])
    assert X.shape == (3, 2)
    assert X.col_names == ["a", "b"]
    assert X.row_names == ["a", "b", "a"]
    np.testing.assert_array_equal(X.values, [[1, 0], [0, 1], [1, 0]])


def test_design_matrix_sorted_columns():
    X = design_matrix(STRATA)
    assert X.col_names == ["pop1", "pop2", "pop3"]
    np.testing.assert_array_equal(X.row_sum, np.ones(len(STRATA)))
    np.testing.assert_array_equal(X.col_sum, [2.0, 1.0, 3.0])


# =============================================================================
# TEST B: Generalized inverse
# =============================================================================

class TestGeneralizedInverse:

    def test_singular_matrix(self):
        M = Matrix(2, 2, [1.0, 2.0, 2.0, 4.0])
        G = generalized_inverse(M)
        assert satisfies_penrose(M, G)
        np.testing.assert_allclose((M @ G @ M).values, M.values, atol=EPS_CLOSE)

    def test_invertible_matches_inverse(self):
        M = Matrix(2, 2, [4.0, 7.0, 2.0, 6.0])
        G = generalized_inverse(M)
        np.testing.assert_allclose(G.values, np.linalg.inv(M.to_numpy()), atol=EPS_CLOSE)

    def test_rectangular_shape_and_names(self):
        M = Matrix.default()
        G = generalized_inverse(M)
        assert G.shape == (5, 3)
        assert G.row_names == M.col_names
        assert satisfies_penrose(M, G)

    def test_empty(self):
        assert generalized_inverse(Matrix(0, 3)).shape == (3, 0)

    def test_penrose_default_tolerance_is_eps_close(self):
        """An off-diagonal error of 10 * EPS_CLOSE fails by default, passes when loosened."""
        M = identity(2)
        G = identity(2)
        G[0, 1] = 10 * EPS_CLOSE
        assert not satisfies_penrose(M, G)
        assert satisfies_penrose(M, G, tol=100 * EPS_CLOSE)


# =============================================================================
# TEST C: Idempotent hat matrix
# =============================================================================

class TestHatMatrix:

    @pytest.fixture(scope='class')
    def H(self):
        return idempotent_hat_matrix(STRATA)

    def test_idempotent(self, H):
        np.testing.assert_allclose((H @ H).values, H.values, atol=EPS_CLOSE)

    def test_symmetric(self, H):
        np.testing.assert_allclose(H.values, H.T.values, atol=EPS_CLOSE)

    def test_trace_is_number_of_strata(self, H):
        assert abs(H.trace - 3.0) < EPS_CLOSE

    def test_group_mean_entries(self):
        """H[i, j] = 1/n_g within a group, 0 across groups."""
        H = idempotent_hat_matrix(["a", "b", "a"])
        np.testing.assert_allclose(H.values, [[0.5, 0.0, 0.5],
                                              [0.0, 1.0, 0.0],
                                              [0.5, 0.0, 0.5]], atol=EPS_CLOSE)
        assert H.row_names == ["a", "b", "a"]
        assert H.col_names == ["a", "b", "a"]

    def test_single_stratum_averages(self):
        H = idempotent_hat_matrix(["x"] * 4)
        np.testing.assert_allclose(H.values, np.full((4, 4), 0.25), atol=EPS_CLOSE)

    def test_injected_inverse_is_used(self):
        calls = []

        def tracking_pinv(M):
            calls.append(M.shape)
            return generalized_inverse(M)

        idempotent_hat_matrix(STRATA, pinv=tracking_pinv)
        assert calls == [(3, 3)]
