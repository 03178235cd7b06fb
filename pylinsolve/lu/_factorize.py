"""
LU factorization kernels: unpivoted, stepwise and partially pivoted.

All kernels take a validated float64 square matrix, work on a private copy
and return freshly allocated factors. The caller's array is never written.

Cost: the innermost update A[i, j] -= L[i, k] A[k, j] runs once per
(i, j, k) triple, so a factorization is O(n³) time and O(n²) storage.
Each elimination step k is written as a rank-1 update over all rows at
once. Rows are independent for fixed k; the loop over k is sequential.

For sparse matrices the factors are generally much denser than A
(fill-in), so nothing here tries to preserve sparsity.
"""

from __future__ import annotations

from typing import Any
import warnings
import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.exceptions import NumericDegeneracyWarning, SingularPivotError


def lu_steps(
    A: NDArray[np.floating[Any]],
    nstep: int,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Unpivoted outer-product elimination stopped after nstep steps.

    Returns the intermediate (L, U). With nstep >= n the pair is the full
    factorization and L[n-1, n-1] is set to 1.

    A zero pivot is not repaired: the multipliers become ±Inf/NaN and
    poison the rest of the elimination. This is the failure that partial
    pivoting exists to avoid, so it is reported with a warning and left
    visible in the output.
    """
    n = A.shape[0]
    L = np.zeros((n, n))
    U = A.copy()

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        for k in range(n - 1):
            if k >= nstep:
                break

            if U[k, k] == 0.0:
                warnings.warn(
                    f"zero pivot U[{k}, {k}] at elimination step {k}; "
                    f"the factors will contain non-finite values. "
                    f"Use factorize_lu_pivoted() instead",
                    NumericDegeneracyWarning,
                    stacklevel=4,
                )

            L[k, k] = 1.0
            L[k + 1:, k] = U[k + 1:, k] / U[k, k]
            # Columns < k are already zero below row k
            U[k + 1:, k:] -= np.outer(L[k + 1:, k], U[k, k:])

    if nstep >= n:
        L[n - 1, n - 1] = 1.0

    return L, U


def lu_unpivoted(
    A: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Full unpivoted factorization A = LU."""
    return lu_steps(A, A.shape[0])


def _select_pivot(Ak: NDArray[np.floating[Any]], k: int) -> int:
    # Full-range argmax: rows already used as pivots were zeroed exactly in
    # their own step (multiplier 1), so they can only win when the whole
    # column is zero. Ties go to the lowest row index.
    row = int(np.argmax(np.abs(Ak[:, k])))
    if Ak[row, k] == 0.0:
        n = Ak.shape[0]
        raise SingularPivotError(
            f"A is singular: no nonzero pivot in column {k} at elimination "
            f"step {k}, no LU factorization exists",
            step=k,
            matrix_name='A',
            expected_rank=n,
        )
    return row


def lu_pivoted(
    A: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.intp]]:
    """
    Row-pivoted factorization PA = LU.

    At step k the row with the largest |Ak[i, k]| becomes the pivot row and
    is copied into U[k]. Rows are not swapped in place; every row is
    updated with its multiplier and the row order is fixed up once at the
    end by L = L[p]. All multipliers satisfy |L[i, k]| <= 1.

    Raises
    ------
    SingularPivotError
        If every candidate in the pivot column is exactly zero.
    """
    n = A.shape[0]
    Ak = A.copy()
    L = np.zeros((n, n))
    U = np.zeros((n, n))
    p = np.zeros(n, dtype=np.intp)

    for k in range(n - 1):
        p[k] = _select_pivot(Ak, k)
        U[k, :] = Ak[p[k], :]
        L[:, k] = Ak[:, k] / U[k, k]
        Ak -= np.outer(L[:, k], U[k, :])

    p[n - 1] = _select_pivot(Ak, n - 1)
    U[n - 1, n - 1] = Ak[p[n - 1], n - 1]
    L[:, n - 1] = Ak[:, n - 1] / U[n - 1, n - 1]

    # Rounding leaves O(ε) residue where exact arithmetic gives zeros
    L = np.tril(L[p, :])
    U = np.triu(U)
    return L, U, p
