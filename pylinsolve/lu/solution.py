"""
LU solution types.

Contains the parameter payloads produced by backends and the user-facing
wrappers around them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.result import Result
from pylinsolve.core.compute.precision import EPSILON_64
from pylinsolve.core.compute.tolerances import ILL_CONDITIONED_THRESHOLD
from pylinsolve.core.validation import as_vector, check_array, check_finite, check_consistent_length
from pylinsolve.lu._permutation import permutation_vector_to_matrix
from pylinsolve.lu._triangular import forward_substitution, backward_substitution

if TYPE_CHECKING:
    from pylinsolve.lu.design import SystemDesign


@dataclass(frozen=True)
class LUParams:
    """
    Factors of a square matrix.

    L is unit lower-triangular and U upper-triangular. For the pivoted
    factorization L @ U == A[p] (that is, P @ A); for the unpivoted one
    p is None and L @ U == A whenever no zero pivot was met.
    """
    L: NDArray[np.floating[Any]]
    U: NDArray[np.floating[Any]]
    p: NDArray[np.intp] | None = None

    def __iter__(self):
        # Allows `L, U, p = params` and `L, U = params` for the unpivoted case
        if self.p is None:
            return iter((self.L, self.U))
        return iter((self.L, self.U, self.p))


@dataclass(frozen=True)
class SolveParams:
    """Parameter payload for a solved system."""
    x: NDArray[np.floating[Any]]
    residual: NDArray[np.floating[Any]]
    factors: LUParams
    condition_number: float | None = None


@dataclass
class LUFactorization:
    """
    User-facing LU factorization.

    Wraps Result[LUParams]. Once a matrix is factored, further right-hand
    sides are solved with solve(b) at O(n²) cost instead of the O(n³) of
    refactoring.
    """
    _result: Result[LUParams]
    _design: 'SystemDesign'

    @property
    def L(self) -> NDArray[np.floating[Any]]:
        """Unit lower-triangular factor (n x n)."""
        return self._result.params.L

    @property
    def U(self) -> NDArray[np.floating[Any]]:
        """Upper-triangular factor (n x n)."""
        return self._result.params.U

    @property
    def p(self) -> NDArray[np.intp] | None:
        """Pivot vector, or None for an unpivoted factorization."""
        return self._result.params.p

    @property
    def P(self) -> NDArray[np.floating[Any]]:
        """Permutation matrix (identity when unpivoted)."""
        if self.p is None:
            return np.eye(self.n)
        return permutation_vector_to_matrix(self.p)

    @property
    def pivoted(self) -> bool:
        return self.p is not None

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def A(self) -> NDArray[np.floating[Any]]:
        """The factored matrix."""
        return self._design.A

    @property
    def is_finite(self) -> bool:
        """False if a zero pivot poisoned the factors with Inf/NaN."""
        return bool(np.all(np.isfinite(self.L)) and np.all(np.isfinite(self.U)))

    @property
    def max_multiplier(self) -> float:
        """
        Largest |L[i, k]| below the diagonal.

        Partial pivoting guarantees this is at most 1; without pivoting it
        is unbounded and large values signal error amplification.
        """
        below = np.tril(self.L, k=-1)
        if self.n < 2:
            return 0.0
        return float(np.max(np.abs(below)))

    def reconstruct(self) -> NDArray[np.floating[Any]]:
        """L @ U, which equals P @ A up to rounding."""
        return self.L @ self.U

    def permuted_matrix(self) -> NDArray[np.floating[Any]]:
        """P @ A, computed by row indexing."""
        if self.p is None:
            return self.A.copy()
        return self.A[self.p]

    def factorization_error(self) -> float:
        """Relative backward error ‖LU − PA‖_F / ‖A‖_F."""
        norm_A = np.linalg.norm(self.A)
        diff = np.linalg.norm(self.reconstruct() - self.permuted_matrix())
        if norm_A == 0.0:
            return float(diff)
        return float(diff / norm_A)

    def solve(self, b: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Solve Ax = b reusing the stored factors.

        Applies the row permutation to b, then forward substitution with L
        and backward substitution with U.

        Raises
        ------
        ValidationError
            If b is non-numeric or contains NaN/Inf.
        DimensionError
            If b does not have length n.
        """
        b_arr = as_vector(check_array(b, 'b'), 'b')
        check_consistent_length(self.A, b_arr, names=('A', 'b'))
        check_finite(b_arr, 'b')

        b_perm = b_arr if self.p is None else b_arr[self.p]
        z = forward_substitution(self.L, b_perm)
        return backward_substitution(self.U, z)

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Text summary of the factorization."""
        kind = "PA = LU (partial pivoting)" if self.pivoted else "A = LU (no pivoting)"
        lines = [
            "LU Factorization",
            "=" * 60,
            f"Form: {kind}",
            f"Order: {self.n}",
            f"Finite factors: {'yes' if self.is_finite else 'NO'}",
        ]
        if self.is_finite:
            lines.append(f"Max |multiplier|: {self.max_multiplier:.6g}")
            lines.append(f"Backward error: {self.factorization_error():.3e}")
        if self.p is not None:
            lines.append(f"Pivot rows: {self.p.tolist()}")
        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"LUFactorization(n={self.n}, pivoted={self.pivoted}, finite={self.is_finite})"


@dataclass
class LinearSystemSolution:
    """
    User-facing solution of Ax = b.

    Wraps Result[SolveParams] and relates the computed x to its
    trustworthiness: the residual says how well x satisfies the system,
    the condition number says how much of x can be believed.
    """
    _result: Result[SolveParams]
    _design: 'SystemDesign'

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Solution vector (n,)."""
        return self._result.params.x

    @property
    def residual(self) -> NDArray[np.floating[Any]]:
        """b − Ax."""
        return self._result.params.residual

    @property
    def residual_norm(self) -> float:
        return float(np.linalg.norm(self.residual))

    @property
    def relative_residual(self) -> float:
        """‖b − Ax‖ / ‖b‖ (absolute residual norm if b == 0)."""
        norm_b = float(np.linalg.norm(self._design.b))
        if norm_b == 0.0:
            return self.residual_norm
        return self.residual_norm / norm_b

    @property
    def condition_number(self) -> float | None:
        """κ(A), or None if the solve ran with check_condition=False."""
        return self._result.params.condition_number

    @property
    def error_bound(self) -> float | None:
        """
        Predicted bound κ(A)·ε on ‖x − x̃‖/‖x‖ for double precision input.
        """
        if self.condition_number is None:
            return None
        return self.condition_number * EPSILON_64

    @property
    def is_ill_conditioned(self) -> bool | None:
        if self.condition_number is None:
            return None
        return self.condition_number > ILL_CONDITIONED_THRESHOLD

    @property
    def factorization(self) -> LUFactorization:
        """The pivoted factors used, ready for further solves."""
        r = self._result
        return LUFactorization(
            _result=Result(
                params=r.params.factors,
                info={'method': r.info.get('method'), 'n': self._design.n},
                timing=None,
                backend_name=r.backend_name,
            ),
            _design=self._design,
        )

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Text summary of the solve."""
        lines = [
            "Linear System Solution",
            "=" * 60,
            f"Order: {self._design.n}",
            f"Residual norm: {self.residual_norm:.3e}",
            f"Relative residual: {self.relative_residual:.3e}",
        ]
        if self.condition_number is not None:
            lines.append(f"Condition number: {self.condition_number:.6e}")
            lines.append(f"Relative error bound (κ·ε): {self.error_bound:.3e}")
        lines.append("")
        lines.append("Solution:")
        lines.append("-" * 60)
        for i, xi in enumerate(self.x):
            lines.append(f"  x[{i}]: {xi:20.12g}")
        lines.append("-" * 60)
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        kappa = "" if self.condition_number is None else f", cond={self.condition_number:.3e}"
        return f"LinearSystemSolution(n={self._design.n}{kappa})"
