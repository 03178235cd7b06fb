"""
Stability analysis for dense linear solves.

Public API:
    vector_norm(v)                  - Euclidean norm
    matrix_norm(M, method=...)      - Spectral norm via SVD or eig(MᵀM)
    inverse_norm(A)                 - ‖A⁻¹‖ without forming the inverse
    condition_number(A, method=...) - κ(A) = ‖A‖ ‖A⁻¹‖
    stability_bound(A, eps)         - κ(A)·ε bound on the relative error
    perturbation_analysis(A, b, b̃)  - Observed vs bounded error change

Helpers:
    relative_perturbation, digits_lost, is_trustworthy, is_symmetric

Example:
    >>> from pylinsolve.conditioning import condition_number
    >>> condition_number([[1, 1e-16], [1, 0]])
"""

from pylinsolve.conditioning.solution import PerturbationParams, PerturbationSolution
from pylinsolve.conditioning.solvers import (
    vector_norm,
    matrix_norm,
    inverse_norm,
    condition_number,
    stability_bound,
    relative_perturbation,
    perturbation_analysis,
    digits_lost,
    is_trustworthy,
    is_symmetric,
)

__all__ = [
    "vector_norm",
    "matrix_norm",
    "inverse_norm",
    "condition_number",
    "stability_bound",
    "relative_perturbation",
    "perturbation_analysis",
    "digits_lost",
    "is_trustworthy",
    "is_symmetric",
    "PerturbationParams",
    "PerturbationSolution",
]
