"""
Tests for right-hand side perturbation experiments.

The relative error in x is bounded by κ(A) times the relative error in b.
For the 2x2 near-singular example a one-ulp change in b moves x by O(1).
"""

import numpy as np
import pytest

from pylinsolve import datasets
from pylinsolve.conditioning import (
    PerturbationSolution,
    perturbation_analysis,
    relative_perturbation,
)
from pylinsolve.core.exceptions import DimensionError, SingularPivotError, ValidationError


# One ulp at 1.0; a perturbation of 1e-16 would round away entirely
ULP = np.nextafter(1.0, 2.0) - 1.0


# ═══════════════════════════════════════════════════════════════════════
# Error model
# ═══════════════════════════════════════════════════════════════════════


class TestRelativePerturbation:

    def test_scales_every_entry(self):
        b = np.array([1.0, -2.0, 4.0])
        np.testing.assert_allclose(relative_perturbation(b, 1e-3), b * 1.001)

    def test_below_half_ulp_rounds_away(self):
        b = np.array([1.0, 1.0])
        np.testing.assert_array_equal(relative_perturbation(b, 1e-17), b)

    def test_default_is_machine_epsilon(self):
        b = np.array([1.0])
        assert relative_perturbation(b)[0] == 1.0 + ULP

    def test_input_not_mutated(self):
        b = np.array([1.0, 2.0])
        relative_perturbation(b, 0.5)
        np.testing.assert_array_equal(b, [1.0, 2.0])


# ═══════════════════════════════════════════════════════════════════════
# Near-singular 2x2 example
# ═══════════════════════════════════════════════════════════════════════


class TestNearSingularExample:

    @pytest.fixture
    def analysis(self):
        b = datasets.NEAR_SINGULAR_B
        b_tilde = b + np.array([0.0, ULP])
        return perturbation_analysis(datasets.NEAR_SINGULAR_A, b, b_tilde)

    def test_exact_solution(self, analysis):
        np.testing.assert_allclose(analysis.x, [1.0, 0.0], atol=1e-12)

    def test_solution_moves_by_order_one(self, analysis):
        assert abs(analysis.x_perturbed[1]) == pytest.approx(ULP / 1e-16, rel=1e-6)
        assert analysis.relative_error_x > 1.0

    def test_relative_error_in_b_is_tiny(self, analysis):
        assert analysis.relative_error_b == pytest.approx(ULP / np.sqrt(2.0), rel=1e-10)

    def test_condition_number(self, analysis):
        assert analysis.condition_number == pytest.approx(2e16, rel=1e-3)

    def test_bound_holds(self, analysis):
        assert analysis.bound >= analysis.relative_error_x
        assert analysis.bound_holds
        assert analysis.amplification <= analysis.condition_number

    def test_records_ill_conditioning(self, analysis):
        assert any("ill-conditioned" in w for w in analysis.warnings)

    def test_result_wrapper(self, analysis):
        assert isinstance(analysis, PerturbationSolution)
        assert analysis.backend_name == 'cpu_lu'
        assert 'solve' in analysis.timing
        assert "Bound holds: yes" in analysis.summary()
        assert repr(analysis).startswith("PerturbationSolution(cond=")


# ═══════════════════════════════════════════════════════════════════════
# Well-conditioned systems
# ═══════════════════════════════════════════════════════════════════════


class TestWellConditioned:

    @pytest.mark.parametrize("seed", range(5))
    def test_bound_holds_on_random_systems(self, seed):
        rng = np.random.default_rng(seed)
        A = rng.standard_normal((8, 8))
        b = rng.standard_normal(8)
        b_tilde = b + 1e-6 * rng.standard_normal(8)
        result = perturbation_analysis(A, b, b_tilde)
        assert result.bound_holds
        assert result.warnings == ()

    def test_uniform_scaling_changes_x_by_eps(self, random_system):
        A, b, _ = random_system
        result = perturbation_analysis(A, b, relative_perturbation(b, 1e-8))
        assert result.relative_error_b == pytest.approx(1e-8, rel=1e-6)
        assert result.relative_error_x == pytest.approx(1e-8, rel=1e-4)

    def test_identical_rhs(self, random_system):
        A, b, _ = random_system
        result = perturbation_analysis(A, b, b.copy())
        assert result.relative_error_b == 0.0
        assert result.relative_error_x == 0.0
        assert result.bound == 0.0
        assert result.amplification == 0.0
        assert result.bound_holds


# ═══════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════


class TestValidation:

    def test_zero_rhs(self):
        with pytest.raises(ValidationError, match="nonzero"):
            perturbation_analysis(np.eye(2), [0.0, 0.0], [1e-16, 0.0])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            perturbation_analysis(np.eye(2), [1.0, 1.0], [1.0, 1.0, 1.0])

    def test_singular(self, singular_matrix):
        with pytest.raises(SingularPivotError):
            perturbation_analysis(singular_matrix, np.ones(3), np.ones(3))
