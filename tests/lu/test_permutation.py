"""
Tests for permutation vector/matrix views.
"""

import numpy as np
import pytest

from pylinsolve.core.exceptions import DimensionError, ValidationError
from pylinsolve.lu import (
    apply_permutation,
    check_permutation,
    invert_permutation,
    permutation_matrix_to_vector,
    permutation_vector_to_matrix,
)


# ═══════════════════════════════════════════════════════════════════════
# Conversions
# ═══════════════════════════════════════════════════════════════════════


class TestConversions:

    def test_vector_to_matrix(self):
        P = permutation_vector_to_matrix([2, 0, 1])
        np.testing.assert_array_equal(P, [[0, 0, 1], [1, 0, 0], [0, 1, 0]])

    def test_matrix_rows_select_original_rows(self, rng):
        p = np.array([3, 1, 0, 2])
        A = rng.standard_normal((4, 4))
        np.testing.assert_array_equal(permutation_vector_to_matrix(p) @ A, A[p])

    def test_matrix_to_vector(self):
        p = permutation_matrix_to_vector([[0, 1, 0], [0, 0, 1], [1, 0, 0]])
        np.testing.assert_array_equal(p, [1, 2, 0])
        assert p.dtype == np.intp

    @pytest.mark.parametrize("seed", range(5))
    def test_both_views_agree(self, seed):
        p = np.random.default_rng(seed).permutation(7)
        np.testing.assert_array_equal(
            permutation_matrix_to_vector(permutation_vector_to_matrix(p)), p
        )

    def test_matrix_rejects_non_binary(self):
        with pytest.raises(ValidationError, match="0 or 1"):
            permutation_matrix_to_vector([[0.5, 0.5], [0.5, 0.5]])

    def test_matrix_rejects_duplicate_column(self):
        with pytest.raises(ValidationError, match="exactly one 1"):
            permutation_matrix_to_vector([[1, 0], [1, 0]])

    def test_matrix_rejects_rectangular(self):
        with pytest.raises(DimensionError):
            permutation_matrix_to_vector(np.ones((2, 3)))


# ═══════════════════════════════════════════════════════════════════════
# Applying and inverting
# ═══════════════════════════════════════════════════════════════════════


class TestApplyPermutation:

    def test_vector(self):
        np.testing.assert_array_equal(
            apply_permutation([2, 0, 1], [10.0, 20.0, 30.0]), [30.0, 10.0, 20.0]
        )

    def test_row_stack(self, rng):
        p = [1, 2, 0]
        M = rng.standard_normal((3, 4))
        np.testing.assert_array_equal(apply_permutation(p, M), permutation_vector_to_matrix(p) @ M)

    def test_returns_new_array(self):
        v = np.array([1.0, 2.0])
        out = apply_permutation([1, 0], v)
        out[0] = 99.0
        np.testing.assert_array_equal(v, [1.0, 2.0])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            apply_permutation([0, 1], [1.0, 2.0, 3.0])


class TestInvertPermutation:

    def test_undoes_permutation(self, rng):
        p = rng.permutation(6)
        v = rng.standard_normal(6)
        q = invert_permutation(p)
        np.testing.assert_array_equal(apply_permutation(q, apply_permutation(p, v)), v)

    def test_matrix_is_transpose(self):
        p = [2, 0, 3, 1]
        np.testing.assert_array_equal(
            permutation_vector_to_matrix(invert_permutation(p)),
            permutation_vector_to_matrix(p).T,
        )


# ═══════════════════════════════════════════════════════════════════════
# check_permutation
# ═══════════════════════════════════════════════════════════════════════


class TestCheckPermutation:

    def test_valid(self):
        np.testing.assert_array_equal(check_permutation([1, 0, 2]), [1, 0, 2])

    def test_integral_floats_accepted(self):
        assert check_permutation([1.0, 0.0]).dtype == np.intp

    def test_repeated_index(self):
        with pytest.raises(ValidationError, match="not a permutation"):
            check_permutation([0, 0, 1])

    def test_out_of_range(self):
        with pytest.raises(ValidationError, match="not a permutation"):
            check_permutation([0, 2])

    def test_fractional(self):
        with pytest.raises(ValidationError, match="integer indices"):
            check_permutation([0.5, 1.0])

    def test_2d(self):
        with pytest.raises(DimensionError):
            check_permutation([[0, 1]])
