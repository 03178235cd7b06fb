"""
Operation counts and storage estimates for dense direct solvers.

Rule of thumb: find the innermost loop, count its operations, and multiply
by the range of every enclosing loop. For n x n problems this gives

    operation                     cost
    dot product v'w               O(n)
    matrix-vector product Av      O(n²)
    triangular solve              O(n²)
    LU factorization              O(n³)
    matrix-matrix product AB      O(n³)

Dense storage grows as n², which is what makes direct methods impractical
for very large systems long before the O(n³) time does.
"""

from __future__ import annotations

import numpy as np

from pylinsolve.core.validation import check_nonnegative_int


def substitution_flops(n: int) -> int:
    """
    Exact flop count of one forward or backward substitution.

    Row i needs i multiply-adds for the sum, one subtraction and one
    division: sum_{i=0}^{n-1} (2i + 2) = n² + n.
    """
    n = check_nonnegative_int(n, 'n')
    return n * n + n


def lu_flops(n: int) -> int:
    """
    Flop count of the unpivoted elimination in lu_steps().

    Step k computes n-k-1 multipliers and updates (n-k-1) x (n-k) entries
    with one multiply and one subtraction each.
    """
    n = check_nonnegative_int(n, 'n')
    total = 0
    for k in range(n - 1):
        rows = n - k - 1
        total += rows + 2 * rows * (n - k)
    return total


def solve_flops(n: int) -> int:
    """Flops for factor-and-solve: one factorization plus two substitutions."""
    return lu_flops(n) + 2 * substitution_flops(n)


def dense_storage_bytes(n: int, dtype: np.dtype | type = np.float64) -> int:
    """
    Bytes needed to hold a dense n x n matrix.

    A 10⁶ x 10⁶ float64 matrix needs 8·10¹² bytes, about 7.3 TiB.
    """
    n = check_nonnegative_int(n, 'n')
    return n * n * np.dtype(dtype).itemsize
