"""
Norms, condition numbers and the stability of linear solves.

Error model: A is stored exactly, while every entry of b carries the same
relative rounding error ε, b̃_i = b_i (1 + ε). Then

    ‖x − x̃‖ / ‖x‖  <=  κ(A) ε,      κ(A) = ‖A‖ ‖A⁻¹‖,

so κ(A) alone predicts how many digits a solve can lose. With ε ≈ 1e-16,
κ ≈ 1e16 means no correct digits at all; above 1e8 fewer than eight
digits can be trusted.

Nothing here raises for an ill-conditioned matrix. The numbers are
reported and interpreting them is up to the caller.
"""

from __future__ import annotations

from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.exceptions import NotPositiveDefiniteError, ValidationError
from pylinsolve.core.result import Result
from pylinsolve.core.compute.precision import EPSILON_64
from pylinsolve.core.compute.timing import Timer
from pylinsolve.core.compute.tolerances import ILL_CONDITIONED_THRESHOLD
from pylinsolve.core.compute.linalg.spectral import (
    condition_number_gram,
    condition_number_svd,
    gram_eigenvalues,
    singular_values,
    spectral_norm_eig,
    spectral_norm_svd,
    symmetric_eigenvalues,
)
from pylinsolve.core.validation import (
    as_vector,
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_square,
)
from pylinsolve.conditioning.solution import PerturbationParams, PerturbationSolution
from pylinsolve.lu.design import SystemDesign
from pylinsolve.lu.backends.cpu import CPULUBackend


NormMethod = Literal['svd', 'eig']
ConditionMethod = Literal['general', 'eig', 'symmetric', 'spd']

_NORM_METHODS = ('svd', 'eig')
_CONDITION_METHODS = ('general', 'eig', 'symmetric', 'spd')


def _check_matrix(M: ArrayLike, name: str, *, square: bool) -> NDArray[np.floating[Any]]:
    M_arr = check_array(M, name)
    if square:
        check_square(M_arr, name)
    else:
        check_2d(M_arr, name)
    check_finite(M_arr, name)
    return M_arr


def _check_vector(v: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    v_arr = as_vector(check_array(v, name), name)
    check_finite(v_arr, name)
    return v_arr


def is_symmetric(A: ArrayLike, *, rtol: float = 1e-12, atol: float = 0.0) -> bool:
    """True if A is square and A == Aᵀ within tolerance."""
    A_arr = check_array(A, 'A')
    if A_arr.ndim != 2 or A_arr.shape[0] != A_arr.shape[1]:
        return False
    return bool(np.allclose(A_arr, A_arr.T, rtol=rtol, atol=atol))


# ═══════════════════════════════════════════════════════════════════════
# Norms
# ═══════════════════════════════════════════════════════════════════════


def vector_norm(v: ArrayLike) -> float:
    """Euclidean norm ‖v‖ = sqrt(Σ v_i²)."""
    return float(np.linalg.norm(_check_vector(v, 'v')))


def matrix_norm(M: ArrayLike, *, method: NormMethod = 'svd') -> float:
    """
    Spectral (operator 2-) norm ‖M‖ = max ‖Mv‖/‖v‖ = sqrt(λ_max(MᵀM)).

    Parameters
    ----------
    M : array-like
        Any real matrix, not necessarily square.
    method : str
        'svd' (default): largest singular value of M.
        'eig': square root of the largest eigenvalue of MᵀM.
    """
    if method not in _NORM_METHODS:
        raise ValidationError(f"method must be one of {_NORM_METHODS}, got {method!r}")
    M_arr = _check_matrix(M, 'M', square=False)
    if method == 'eig':
        return spectral_norm_eig(M_arr)
    return spectral_norm_svd(M_arr)


def inverse_norm(A: ArrayLike, *, method: NormMethod = 'svd') -> float:
    """
    ‖A⁻¹‖ = 1 / sqrt(λ_min(AᵀA)) = 1 / σ_min(A), without forming A⁻¹.

    'svd' (default) uses the smallest singular value of A, 'eig' the
    smallest eigenvalue of AᵀA. Returns inf for a singular A.
    """
    if method not in _NORM_METHODS:
        raise ValidationError(f"method must be one of {_NORM_METHODS}, got {method!r}")
    A_arr = _check_matrix(A, 'A', square=True)
    if method == 'eig':
        lam_min = gram_eigenvalues(A_arr)[0]
        if lam_min <= 0.0:
            return float('inf')
        return float(1.0 / np.sqrt(lam_min))
    s_min = singular_values(A_arr)[-1]
    if s_min == 0.0:
        return float('inf')
    return float(1.0 / s_min)


# ═══════════════════════════════════════════════════════════════════════
# Condition numbers
# ═══════════════════════════════════════════════════════════════════════


def condition_number(A: ArrayLike, *, method: ConditionMethod = 'general') -> float:
    """
    Condition number κ(A) = ‖A‖ ‖A⁻¹‖ in the spectral norm.

    Parameters
    ----------
    A : array-like
        Square matrix.
    method : str
        'general' (default): σ_max / σ_min from the singular values.
        'eig': sqrt(λ_max(AᵀA) / λ_min(AᵀA)). Mathematically equal, but
            forming AᵀA squares κ, so beyond κ ≈ 1e8 the result is
            unreliable and often inf.
        'symmetric': max|λ_i(A)| / min|λ_i(A)|, for symmetric A.
        'spd': λ_max(A) / λ_min(A), for symmetric positive definite A.

    Returns
    -------
    float
        κ(A) >= 1, or inf if A is singular.

    Raises
    ------
    ValidationError
        If method is 'symmetric' or 'spd' and A is not symmetric.
    NotPositiveDefiniteError
        If method is 'spd' and A has a non-positive eigenvalue.

    Examples
    --------
    >>> condition_number([[1, 1e-16], [1, 0]])   # doctest: +SKIP
    2.0000000000000004e+16
    """
    if method not in _CONDITION_METHODS:
        raise ValidationError(f"method must be one of {_CONDITION_METHODS}, got {method!r}")
    A_arr = _check_matrix(A, 'A', square=True)

    if method == 'general':
        return condition_number_svd(A_arr)
    if method == 'eig':
        return condition_number_gram(A_arr)

    if not np.allclose(A_arr, A_arr.T, rtol=1e-12, atol=0.0):
        raise ValidationError(f"A: method={method!r} requires a symmetric matrix")
    lam = symmetric_eigenvalues(A_arr)

    if method == 'spd':
        if lam[0] <= 0.0:
            raise NotPositiveDefiniteError(
                f"A is not positive definite: smallest eigenvalue {lam[0]:.6e}",
                matrix_name='A',
                min_eigenvalue=float(lam[0]),
            )
        return float(lam[-1] / lam[0])

    abs_lam = np.abs(lam)
    if abs_lam.min() == 0.0:
        return float('inf')
    return float(abs_lam.max() / abs_lam.min())


def stability_bound(A: ArrayLike | float, *, eps: float = EPSILON_64) -> float:
    """
    Upper bound κ(A)·ε on the relative error ‖x − x̃‖/‖x‖.

    Parameters
    ----------
    A : array-like or float
        The system matrix, or an already computed condition number.
    eps : float
        Relative error of the stored right-hand side. Defaults to double
        precision machine epsilon.
    """
    if eps < 0:
        raise ValidationError(f"eps: must be non-negative, got {eps}")
    if np.ndim(A) == 0:
        kappa = float(A)
        if not kappa >= 1.0:
            raise ValidationError(f"A: a condition number must be >= 1, got {kappa}")
    else:
        kappa = condition_number(A)
    if eps == 0.0:
        return 0.0
    return kappa * eps


def digits_lost(kappa: float) -> float:
    """Significant decimal digits a solve may lose: log10 κ."""
    if not kappa >= 1.0:
        raise ValidationError(f"kappa: a condition number must be >= 1, got {kappa}")
    return float(np.log10(kappa))


def is_trustworthy(kappa: float, *, threshold: float = ILL_CONDITIONED_THRESHOLD) -> bool:
    """True if κ is at most the trust threshold (default 1e8)."""
    return bool(kappa <= threshold)


# ═══════════════════════════════════════════════════════════════════════
# Perturbation experiments
# ═══════════════════════════════════════════════════════════════════════


def relative_perturbation(b: ArrayLike, eps: float = EPSILON_64) -> NDArray[np.floating[Any]]:
    """
    Apply the error model b̃_i = b_i (1 + ε) to every entry of b.

    Note that for |ε| below half an ulp the rounding of 1 + ε makes b̃
    equal to b.
    """
    b_arr = _check_vector(b, 'b')
    return b_arr * (1.0 + eps)


def perturbation_analysis(
    A: ArrayLike,
    b: ArrayLike,
    b_perturbed: ArrayLike,
) -> PerturbationSolution:
    """
    Solve Ax = b and Ax̃ = b̃ and compare the change in x with its bound.

    Both systems are solved with the pivoted LU solver; κ(A) comes from
    the singular values of A.

    Parameters
    ----------
    A : array-like
        Square nonsingular matrix.
    b, b_perturbed : array-like
        Exact and perturbed right-hand sides of length n. b must be nonzero.

    Returns
    -------
    PerturbationSolution

    Raises
    ------
    ValidationError, DimensionError
        Malformed input, or b == 0.
    SingularPivotError
        A is exactly singular.
    """
    design = SystemDesign.from_arrays(A, b)
    b_tilde = _check_vector(b_perturbed, 'b_perturbed')
    check_consistent_length(design.b, b_tilde, names=('b', 'b_perturbed'))

    norm_b = float(np.linalg.norm(design.b))
    if norm_b == 0.0:
        raise ValidationError("b: must be nonzero for relative errors")

    timer = Timer()
    timer.start()

    backend = CPULUBackend()
    with timer.section('solve'):
        exact = backend.solve(design, check_condition=False)
        perturbed = backend.solve(design.with_rhs(b_tilde), check_condition=False)

    with timer.section('condition_number'):
        kappa = condition_number_svd(design.A)

    timer.stop()

    x = exact.params.x
    x_tilde = perturbed.params.x
    norm_x = float(np.linalg.norm(x))
    diff_x = float(np.linalg.norm(x - x_tilde))
    if norm_x == 0.0:
        rel_x = 0.0 if diff_x == 0.0 else float('inf')
    else:
        rel_x = diff_x / norm_x
    rel_b = float(np.linalg.norm(design.b - b_tilde)) / norm_b
    bound = 0.0 if rel_b == 0.0 else kappa * rel_b

    params = PerturbationParams(
        x=x,
        x_perturbed=x_tilde,
        relative_error_x=rel_x,
        relative_error_b=rel_b,
        condition_number=kappa,
        bound=bound,
    )
    warnings_list: list[str] = []
    if kappa > ILL_CONDITIONED_THRESHOLD:
        warnings_list.append(f"A is ill-conditioned (condition number {kappa:.3e})")

    return PerturbationSolution(
        _result=Result(
            params=params,
            info={'method': 'lu_partial_pivoting', 'n': design.n},
            timing=timer.result(),
            backend_name=backend.name,
            warnings=tuple(warnings_list),
        )
    )
