"""
Tests for LU factorization with partial pivoting.

Validates:
    - PA = LU round trip on random matrices
    - |L[i, k]| <= 1 for every multiplier
    - Agreement with scipy.linalg.lu
    - The pivoting example that defeats the unpivoted factorization
    - Tie-breaking toward the lowest row index
    - Exactly singular matrices raise SingularPivotError
"""

import numpy as np
import pytest
import scipy.linalg

from pylinsolve.core.exceptions import SingularMatrixError, SingularPivotError
from pylinsolve.lu import factorize_lu_pivoted, permutation_vector_to_matrix


# ═══════════════════════════════════════════════════════════════════════
# Round trip and structure
# ═══════════════════════════════════════════════════════════════════════


class TestRoundTrip:

    @pytest.mark.parametrize("n", [1, 2, 5, 20, 50])
    def test_lu_equals_pa(self, rng, n):
        A = rng.standard_normal((n, n))
        L, U, p = factorize_lu_pivoted(A)
        np.testing.assert_allclose(L @ U, A[p], rtol=1e-10, atol=1e-12)

    def test_matrix_form(self, rng):
        A = rng.standard_normal((6, 6))
        L, U, p = factorize_lu_pivoted(A)
        P = permutation_vector_to_matrix(p)
        np.testing.assert_allclose(L @ U, P @ A, rtol=1e-10, atol=1e-12)

    def test_structure(self, rng):
        A = rng.standard_normal((10, 10))
        L, U, p = factorize_lu_pivoted(A)
        np.testing.assert_array_equal(np.diag(L), np.ones(10))
        np.testing.assert_array_equal(np.triu(L, k=1), 0.0)
        np.testing.assert_array_equal(np.tril(U, k=-1), 0.0)
        np.testing.assert_array_equal(np.sort(p), np.arange(10))

    def test_input_not_mutated(self, rng):
        A = rng.standard_normal((5, 5))
        original = A.copy()
        factorize_lu_pivoted(A)
        np.testing.assert_array_equal(A, original)


class TestMultiplierBound:
    """Partial pivoting keeps every multiplier at most 1 in magnitude."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_matrices(self, seed):
        A = np.random.default_rng(seed).standard_normal((15, 15))
        L, _, _ = factorize_lu_pivoted(A)
        assert np.max(np.abs(L)) <= 1.0

    def test_graded_matrix(self):
        A = np.vander(np.linspace(0.1, 1.0, 6), increasing=True)
        L, U, p = factorize_lu_pivoted(A)
        assert np.max(np.abs(L)) <= 1.0
        np.testing.assert_allclose(L @ U, A[p], rtol=1e-10, atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Reference comparison
# ═══════════════════════════════════════════════════════════════════════


class TestAgainstScipy:

    @pytest.mark.parametrize("n", [3, 8, 25])
    def test_matches_scipy_lu(self, rng, n):
        A = rng.standard_normal((n, n))
        L, U, p = factorize_lu_pivoted(A)
        P_scipy, L_scipy, U_scipy = scipy.linalg.lu(A)
        # scipy returns A = P L U, so our row permutation is P_scipy.T
        np.testing.assert_array_equal(permutation_vector_to_matrix(p), P_scipy.T)
        np.testing.assert_allclose(L, L_scipy, rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(U, U_scipy, rtol=1e-10, atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Known examples
# ═══════════════════════════════════════════════════════════════════════


class TestPivotingExample:

    def test_factors(self, pivoting_matrix):
        L, U, p = factorize_lu_pivoted(pivoting_matrix)
        np.testing.assert_array_equal(p, [2, 1, 0])
        np.testing.assert_allclose(
            L,
            [[1.0, 0.0, 0.0], [2.0 / 7.0, 1.0, 0.0], [1.0 / 7.0, 0.5, 1.0]],
            rtol=1e-12, atol=1e-14,
        )
        np.testing.assert_allclose(
            U,
            [[7.0, 8.0, 9.0], [0.0, 12.0 / 7.0, 17.0 / 7.0], [0.0, 0.0, 0.5]],
            rtol=1e-12, atol=1e-14,
        )

    def test_identity_needs_no_exchange(self):
        L, U, p = factorize_lu_pivoted(np.eye(4))
        np.testing.assert_array_equal(p, np.arange(4))
        np.testing.assert_array_equal(L, np.eye(4))
        np.testing.assert_array_equal(U, np.eye(4))

    def test_negative_entries_compared_by_magnitude(self):
        L, U, p = factorize_lu_pivoted([[1.0, 2.0], [-3.0, 1.0]])
        np.testing.assert_array_equal(p, [1, 0])
        assert U[0, 0] == -3.0


class TestTieBreak:

    def test_lowest_index_wins(self):
        _, _, p = factorize_lu_pivoted([[1.0, 1.0], [1.0, 2.0]])
        np.testing.assert_array_equal(p, [0, 1])

    def test_tie_on_magnitude(self):
        _, U, p = factorize_lu_pivoted([[-2.0, 1.0], [2.0, 3.0]])
        np.testing.assert_array_equal(p, [0, 1])
        assert U[0, 0] == -2.0


# ═══════════════════════════════════════════════════════════════════════
# Singular matrices
# ═══════════════════════════════════════════════════════════════════════


class TestSingular:

    def test_dependent_columns(self, singular_matrix):
        with pytest.raises(SingularPivotError, match="column 1") as exc_info:
            factorize_lu_pivoted(singular_matrix)
        assert exc_info.value.step == 1
        assert exc_info.value.matrix_name == 'A'
        assert exc_info.value.expected_rank == 3

    def test_zero_matrix(self):
        with pytest.raises(SingularPivotError) as exc_info:
            factorize_lu_pivoted(np.zeros((3, 3)))
        assert exc_info.value.step == 0

    def test_zero_last_pivot(self):
        with pytest.raises(SingularPivotError) as exc_info:
            factorize_lu_pivoted([[1.0, 2.0], [2.0, 4.0]])
        assert exc_info.value.step == 1

    def test_catchable_as_singular_matrix_error(self):
        with pytest.raises(SingularMatrixError):
            factorize_lu_pivoted([[0.0]])
