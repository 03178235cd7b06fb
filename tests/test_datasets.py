"""
Tests for the reference matrices.
"""

import numpy as np
import pytest
import scipy.linalg

from pylinsolve import datasets
from pylinsolve.core.exceptions import ValidationError


class TestHilbert:

    def test_entries(self):
        H = datasets.hilbert(3)
        np.testing.assert_allclose(
            H,
            [[1.0, 1 / 2, 1 / 3], [1 / 2, 1 / 3, 1 / 4], [1 / 3, 1 / 4, 1 / 5]],
        )

    def test_matches_scipy(self):
        np.testing.assert_array_equal(datasets.hilbert(6), scipy.linalg.hilbert(6))

    def test_symmetric_positive_definite(self):
        H = datasets.hilbert(6)
        np.testing.assert_array_equal(H, H.T)
        assert np.all(np.linalg.eigvalsh(H) > 0)

    @pytest.mark.parametrize("n", [0, -1, 2.5])
    def test_rejects_bad_order(self, n):
        with pytest.raises(ValidationError):
            datasets.hilbert(n)


class TestWorkedExamples:

    def test_worked_solution(self):
        np.testing.assert_allclose(
            datasets.WORKED_EXAMPLE_A @ np.array([1.0, 2.0, 0.0]),
            datasets.WORKED_EXAMPLE_B,
        )

    def test_pivoting_example_nonsingular(self):
        assert abs(np.linalg.det(datasets.PIVOTING_EXAMPLE)) > 1e-8

    def test_near_singular_exact_solution(self):
        np.testing.assert_array_equal(
            datasets.NEAR_SINGULAR_A @ np.array([1.0, 0.0]),
            datasets.NEAR_SINGULAR_B,
        )
