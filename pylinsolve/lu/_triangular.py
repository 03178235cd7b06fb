"""
Forward and backward substitution kernels.

Both kernels assume validated float64 inputs of matching size and read only
their own triangle (diagonal included); whatever is stored in the other
half is never touched.

Each row costs one dot product of growing length, so a solve is O(n²).
The loop over rows is strictly sequential because x[i] depends on every
previously computed entry; the per-row accumulation is a single
vectorised dot product.

A zero on the diagonal is not an error here. The division produces
±Inf or NaN, which propagates through the remaining entries, and a
NumericDegeneracyWarning is emitted so the failure is visible.
"""

from __future__ import annotations

from typing import Any
import warnings
import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.exceptions import NumericDegeneracyWarning


def _warn_zero_diagonal(T: NDArray[np.floating[Any]], name: str) -> None:
    zero_idx = np.flatnonzero(np.diag(T) == 0.0)
    if zero_idx.size:
        warnings.warn(
            f"{name} has a zero diagonal entry at index {int(zero_idx[0])}; "
            f"the solution will contain non-finite values",
            NumericDegeneracyWarning,
            stacklevel=4,
        )


def forward_substitution(
    L: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve Lx = b for lower-triangular L.

    x[i] = (b[i] - sum_{j<i} L[i, j] x[j]) / L[i, i],  i = 0, ..., n-1
    """
    n = L.shape[0]
    x = np.zeros(n)
    _warn_zero_diagonal(L, 'L')

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        for i in range(n):
            row_sum = L[i, :i] @ x[:i]
            x[i] = (b[i] - row_sum) / L[i, i]
    return x


def backward_substitution(
    U: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve Ux = b for upper-triangular U.

    x[i] = (b[i] - sum_{j>i} U[i, j] x[j]) / U[i, i],  i = n-1, ..., 0
    """
    n = U.shape[0]
    x = np.zeros(n)
    _warn_zero_diagonal(U, 'U')

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        for i in range(n - 1, -1, -1):
            row_sum = U[i, i + 1:] @ x[i + 1:]
            x[i] = (b[i] - row_sum) / U[i, i]
    return x
