"""
GPU backend tests for LU factorization and solves.

Validates GPU results against the CPU reference backend.
Skipped if no GPU is available.
"""

from __future__ import annotations

import numpy as np
import pytest

try:
    import torch
    HAS_GPU = torch.cuda.is_available() or (
        hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()
    )
except ImportError:
    HAS_GPU = False

pytestmark = pytest.mark.skipif(not HAS_GPU, reason="No GPU available")

from pylinsolve.core.compute.tolerances import select_tolerance
from pylinsolve.core.exceptions import SingularPivotError, ValidationError
from pylinsolve.lu import factorize, solve


class TestGPUvsCPU:
    """Compare GPU results against the CPU reference."""

    @pytest.fixture
    def system(self):
        rng = np.random.default_rng(42)
        n = 64
        A = rng.standard_normal((n, n)) + n * np.eye(n)
        b = rng.standard_normal(n)
        return A, b

    def test_solve_matches_cpu(self, system):
        A, b = system
        cpu = solve(A, b)
        gpu = solve(A, b, backend='gpu')
        tol = select_tolerance(gpu.backend_name)
        np.testing.assert_allclose(gpu.x, cpu.x, rtol=tol.rtol, atol=tol.atol)

    def test_factorize_matches_cpu(self, system):
        A, _ = system
        cpu = factorize(A)
        gpu = factorize(A, backend='gpu')
        tol = select_tolerance(gpu.backend_name)
        np.testing.assert_array_equal(gpu.p, cpu.p)
        np.testing.assert_allclose(gpu.L, cpu.L, rtol=tol.rtol, atol=tol.atol)
        np.testing.assert_allclose(gpu.U, cpu.U, rtol=tol.rtol, atol=tol.atol * 100)

    def test_outputs_are_float64(self, system):
        A, b = system
        sol = solve(A, b, backend='gpu')
        assert sol.x.dtype == np.float64
        assert sol.backend_name.startswith('gpu_lu')

    def test_pivoting_example(self, pivoting_matrix):
        fac = factorize(pivoting_matrix, backend='gpu')
        np.testing.assert_array_equal(fac.p, [2, 1, 0])

    def test_singular_raises(self, singular_matrix):
        with pytest.raises(SingularPivotError):
            solve(singular_matrix, np.ones(3), backend='gpu')

    def test_unpivoted_not_supported(self, system):
        A, _ = system
        with pytest.raises(ValidationError, match="CPU backend"):
            factorize(A, pivoting=False, backend='gpu')
