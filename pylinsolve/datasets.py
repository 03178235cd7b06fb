"""
Reference matrices for examples and validation.

Small systems whose factors and solutions are known exactly, plus the
Hilbert family as the standard ill-conditioned test case.
"""

import numpy as np

from pylinsolve.core.exceptions import ValidationError
from pylinsolve.core.validation import check_nonnegative_int

# Unpivoted LU works without a zero pivot:
#   L = [[1, 0, 0], [-2, 1, 0], [2, -1, 1]]
#   U = [[2, 1, 0], [0, 5, -1], [0, 0, 3]]
# and with WORKED_EXAMPLE_B the solution is x = [1, 2, 0]
WORKED_EXAMPLE_A = np.array([
    [2.0, 1.0, 0.0],
    [-4.0, 3.0, -1.0],
    [4.0, -3.0, 4.0],
])

WORKED_EXAMPLE_B = np.array([4.0, 2.0, -2.0])

# Nonsingular, but the second pivot is exactly zero without row exchanges.
# Partial pivoting gives p = [2, 1, 0]
PIVOTING_EXAMPLE = np.array([
    [1.0, 2.0, 3.0],
    [2.0, 4.0, 5.0],
    [7.0, 8.0, 9.0],
])

# Condition number about 2e16: a relative change of one ulp in b moves
# x by O(1). Exact solution x = [1, 0]
NEAR_SINGULAR_A = np.array([
    [1.0, 1e-16],
    [1.0, 0.0],
])

NEAR_SINGULAR_B = np.array([1.0, 1.0])


def hilbert(n: int) -> np.ndarray:
    """
    Hilbert matrix H[i, j] = 1 / (i + j + 1), 0-based.

    Symmetric positive definite, with κ(H) growing like e^(3.5 n):
    about 1.5e10 at n = 8 and beyond 1e16 at n = 12.
    """
    n = check_nonnegative_int(n, "n")
    if n == 0:
        raise ValidationError("n: must be at least 1")
    i = np.arange(n)
    return 1.0 / (i[:, None] + i[None, :] + 1.0)
