"""
Perturbation analysis solution types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.result import Result


@dataclass(frozen=True)
class PerturbationParams:
    """
    Parameter payload for a right-hand side perturbation experiment.

    x solves Ax = b and x_perturbed solves Ax̃ = b̃ with the same A.
    """
    x: NDArray[np.floating[Any]]
    x_perturbed: NDArray[np.floating[Any]]
    relative_error_x: float
    relative_error_b: float
    condition_number: float
    bound: float


@dataclass
class PerturbationSolution:
    """
    User-facing result of perturbation_analysis().

    The central guarantee is

        ‖x − x̃‖/‖x‖  <=  κ(A) · ‖b − b̃‖/‖b‖

    so a large κ(A) can turn an invisible change in b into an O(1) change
    in x.
    """
    _result: Result[PerturbationParams]

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._result.params.x

    @property
    def x_perturbed(self) -> NDArray[np.floating[Any]]:
        return self._result.params.x_perturbed

    @property
    def relative_error_x(self) -> float:
        """‖x − x̃‖ / ‖x‖."""
        return self._result.params.relative_error_x

    @property
    def relative_error_b(self) -> float:
        """‖b − b̃‖ / ‖b‖."""
        return self._result.params.relative_error_b

    @property
    def condition_number(self) -> float:
        return self._result.params.condition_number

    @property
    def bound(self) -> float:
        """κ(A) · ‖b − b̃‖/‖b‖."""
        return self._result.params.bound

    @property
    def amplification(self) -> float:
        """Observed ratio of relative errors, never more than κ(A)."""
        if self.relative_error_b == 0.0:
            return 0.0 if self.relative_error_x == 0.0 else float('inf')
        return self.relative_error_x / self.relative_error_b

    @property
    def bound_holds(self) -> bool:
        # Slack for the rounding of the two solves themselves
        slack = 1e-12 * max(1.0, self.bound)
        return self.relative_error_x <= self.bound + slack

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
        lines = [
            "Right-hand Side Perturbation Analysis",
            "=" * 60,
            f"Condition number κ(A): {self.condition_number:.6e}",
            f"Relative error in b:   {self.relative_error_b:.6e}",
            f"Relative error in x:   {self.relative_error_x:.6e}",
            f"Bound κ(A)·rel.err(b): {self.bound:.6e}",
            f"Amplification:         {self.amplification:.6e}",
            f"Bound holds: {'yes' if self.bound_holds else 'NO'}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PerturbationSolution(cond={self.condition_number:.3e}, "
            f"rel_err_x={self.relative_error_x:.3e}, bound={self.bound:.3e})"
        )
