"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pylinsolve import datasets


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def worked_system():
    """3x3 system whose unpivoted factors and solution are known exactly."""
    return datasets.WORKED_EXAMPLE_A.copy(), datasets.WORKED_EXAMPLE_B.copy()


@pytest.fixture
def pivoting_matrix():
    """Nonsingular matrix with a zero pivot at step 1 without row exchanges."""
    return datasets.PIVOTING_EXAMPLE.copy()


@pytest.fixture
def random_system(rng):
    """Well-conditioned random 8x8 system with a known solution."""
    n = 8
    A = rng.standard_normal((n, n)) + n * np.eye(n)
    x_true = rng.standard_normal(n)
    b = A @ x_true
    return A, b, x_true


@pytest.fixture
def spd_matrix(rng):
    """Random symmetric positive definite 6x6 matrix."""
    M = rng.standard_normal((6, 6))
    return M @ M.T + 6 * np.eye(6)


@pytest.fixture
def singular_matrix():
    """Exactly singular 3x3 matrix (second column = 2 x first)."""
    return np.array([
        [2.0, 4.0, 1.0],
        [1.0, 2.0, 3.0],
        [4.0, 8.0, 5.0],
    ])
