"""
Solver dispatch for dense linear systems.

Public API for the triangular solvers, the three LU factorizations and the
factor-and-solve orchestration. Every function validates its inputs here,
at the boundary, and trusts them everywhere else.
"""

from __future__ import annotations

from typing import Any, Literal
import warnings
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.compute.device import select_device
from pylinsolve.core.exceptions import IllConditionedWarning, ValidationError
from pylinsolve.core.validation import (
    as_vector,
    check_array,
    check_consistent_length,
    check_finite,
    check_nonnegative_int,
    check_square,
)
from pylinsolve.lu.design import SystemDesign
from pylinsolve.lu.solution import LUFactorization, LinearSystemSolution
from pylinsolve.lu.backends.cpu import CPULUBackend
from pylinsolve.lu._factorize import lu_pivoted, lu_steps, lu_unpivoted
from pylinsolve.lu._triangular import backward_substitution, forward_substitution


BackendChoice = Literal['auto', 'cpu', 'gpu']


def _check_matrix(A: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    A_arr = check_array(A, name)
    check_square(A_arr, name)
    check_finite(A_arr, name)
    return A_arr


def _check_system(
    T: ArrayLike, b: ArrayLike, name: str
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    T_arr = _check_matrix(T, name)
    b_arr = as_vector(check_array(b, 'b'), 'b')
    check_consistent_length(T_arr, b_arr, names=(name, 'b'))
    check_finite(b_arr, 'b')
    return T_arr, b_arr


def _ensure_design(A: ArrayLike | SystemDesign, b: ArrayLike | None) -> SystemDesign:
    """Convert raw arrays to SystemDesign if needed."""
    if isinstance(A, SystemDesign):
        if b is None:
            return A
        return A.with_rhs(b)
    return SystemDesign.from_arrays(A, b)


def _get_backend(backend: BackendChoice):
    """Select backend based on preference."""
    if backend == 'cpu':
        return CPULUBackend()

    if backend == 'auto':
        device = select_device('auto')
        if device.is_gpu:
            from pylinsolve.lu.backends.gpu import GPULUBackend
            return GPULUBackend(device=device)
        return CPULUBackend()

    if backend == 'gpu':
        device = select_device('gpu')
        from pylinsolve.lu.backends.gpu import GPULUBackend
        return GPULUBackend(device=device)

    raise ValidationError(f"Unknown backend: {backend!r}")


# ═══════════════════════════════════════════════════════════════════════
# Triangular solves
# ═══════════════════════════════════════════════════════════════════════


def forward_substitute(L: ArrayLike, b: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Solve Lx = b for lower-triangular L by forward substitution.

    Only the lower triangle of L (diagonal included) is read.

    Parameters
    ----------
    L : array-like
        Lower-triangular matrix (n x n) with nonzero diagonal.
    b : array-like
        Right-hand side of length n.

    Returns
    -------
    ndarray
        x of length n. If some L[i, i] == 0 the result contains Inf/NaN and
        a NumericDegeneracyWarning is emitted; no exception is raised.

    Raises
    ------
    ValidationError, DimensionError
        For malformed inputs, before any computation.
    """
    L_arr, b_arr = _check_system(L, b, 'L')
    return forward_substitution(L_arr, b_arr)


def backward_substitute(U: ArrayLike, b: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Solve Ux = b for upper-triangular U by backward substitution.

    Only the upper triangle of U (diagonal included) is read. Failure
    semantics match forward_substitute().
    """
    U_arr, b_arr = _check_system(U, b, 'U')
    return backward_substitution(U_arr, b_arr)


# ═══════════════════════════════════════════════════════════════════════
# Factorizations
# ═══════════════════════════════════════════════════════════════════════


def factorize_lu(A: ArrayLike) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Unpivoted LU factorization A = LU.

    Outer-product Gaussian elimination without row exchanges. Correct only
    if no pivot U[k, k] is zero along the way. A zero pivot is NOT repaired:
    L and U then contain Inf/NaN and a NumericDegeneracyWarning is emitted.
    Use factorize_lu_pivoted() for arbitrary nonsingular matrices.

    Returns
    -------
    (L, U)
        Unit lower-triangular L and upper-triangular U, both (n x n).

    Examples
    --------
    >>> L, U = factorize_lu([[2, 1, 0], [-4, 3, -1], [4, -3, 4]])
    >>> L
    array([[ 1.,  0.,  0.],
           [-2.,  1.,  0.],
           [ 2., -1.,  1.]])
    """
    A_arr = _check_matrix(A, 'A')
    return lu_unpivoted(A_arr)


def factorize_lu_steps(
    A: ArrayLike, nstep: int
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Snapshot of the unpivoted elimination after nstep steps.

    nstep = 0 returns (zeros, A); nstep >= n returns the same pair as
    factorize_lu(). In between, the first nstep columns of L and rows of U
    are final and the trailing block of U still holds the partially
    eliminated matrix.

    Raises
    ------
    ValidationError
        If nstep is not a non-negative integer.
    """
    A_arr = _check_matrix(A, 'A')
    nstep = check_nonnegative_int(nstep, 'nstep')
    return lu_steps(A_arr, nstep)


def factorize_lu_pivoted(
    A: ArrayLike,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.intp]]:
    """
    LU factorization with partial (row) pivoting, PA = LU.

    Returns
    -------
    (L, U, p)
        L unit lower-triangular with |L[i, k]| <= 1, U upper-triangular and
        pivot vector p such that L @ U == A[p] up to rounding.

    Raises
    ------
    SingularPivotError
        If some pivot column has only zero candidates (A is singular).
    """
    A_arr = _check_matrix(A, 'A')
    return lu_pivoted(A_arr)


def factorize(
    A: ArrayLike | SystemDesign,
    *,
    pivoting: bool = True,
    backend: BackendChoice = 'cpu',
) -> LUFactorization:
    """
    Factor A once for repeated solves.

    Parameters
    ----------
    A : array-like or SystemDesign
        Square matrix.
    pivoting : bool
        Partial pivoting (default). False gives the plain A = LU form,
        only supported on the CPU backend.
    backend : str
        'cpu' (default, float64 reference), 'gpu', or 'auto'.

    Returns
    -------
    LUFactorization
        Use .solve(b) or solve_factored() for each right-hand side.
    """
    design = _ensure_design(A, None)
    be = _get_backend(backend)
    if pivoting:
        result = be.factorize(design)
    elif isinstance(be, CPULUBackend):
        result = be.factorize(design, pivoting=False)
    else:
        raise ValidationError("pivoting=False is only available on the CPU backend")
    return LUFactorization(_result=result, _design=design)


# ═══════════════════════════════════════════════════════════════════════
# Linear systems
# ═══════════════════════════════════════════════════════════════════════


def solve(
    A: ArrayLike | SystemDesign,
    b: ArrayLike | None = None,
    *,
    backend: BackendChoice = 'cpu',
    check_condition: bool = True,
) -> LinearSystemSolution:
    """
    Solve the dense linear system Ax = b.

    Factors PA = LU with partial pivoting, permutes b, then runs forward
    and backward substitution.

    Malformed input is rejected before any computation; an exactly
    singular A raises; an ill-conditioned A is solved anyway, but an
    IllConditionedWarning is emitted and recorded on the solution.

    Parameters
    ----------
    A : array-like or SystemDesign
        Square nonsingular matrix (n x n).
    b : array-like, optional
        Right-hand side of length n. Optional only if A is a SystemDesign
        that already carries one.
    backend : str
        'cpu' (default), 'gpu', or 'auto'.
    check_condition : bool
        Compute κ(A) (an extra O(n³) SVD) and warn above 1e8.

    Returns
    -------
    LinearSystemSolution

    Raises
    ------
    ValidationError, DimensionError
        Malformed input.
    SingularPivotError
        A is exactly singular.

    Examples
    --------
    >>> sol = solve([[2, 1, 0], [-4, 3, -1], [4, -3, 4]], [4, 2, -2])
    >>> np.allclose(sol.x, [1.0, 2.0, 0.0])
    True
    """
    if b is None and not isinstance(A, SystemDesign):
        raise ValidationError("b: right-hand side required when A is an array")
    design = _ensure_design(A, b)
    if not design.has_rhs:
        raise ValidationError("b: design has no right-hand side")

    be = _get_backend(backend)
    result = be.solve(design, check_condition=check_condition)

    for message in result.warnings:
        warnings.warn(message, IllConditionedWarning, stacklevel=2)

    return LinearSystemSolution(_result=result, _design=design)


def solve_factored(factorization: LUFactorization, b: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Solve Ax = b with an existing factorization of A.

    Skips the O(n³) factorization: only the permutation and the two O(n²)
    triangular solves run. Gives the same x as solve(A, b).x.
    """
    if not isinstance(factorization, LUFactorization):
        raise ValidationError(
            f"factorization: expected LUFactorization, got {type(factorization).__name__}"
        )
    return factorization.solve(b)
