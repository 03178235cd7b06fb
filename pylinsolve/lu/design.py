"""
SystemDesign: validated linear system Ax = b.

Wraps the system matrix and (optionally) a right-hand side. It is the
boundary where shapes and values are checked, so backends can trust
everything they receive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.validation import (
    as_vector,
    check_array,
    check_consistent_length,
    check_finite,
    check_square,
)


@dataclass(frozen=True)
class SystemDesign:
    """
    Design for a dense square linear system.

    Holds private float64 copies of A (n x n) and b (n,), so later
    mutation of the caller's arrays cannot affect a computation.
    Immutable after construction.

    Construction:
        SystemDesign.from_arrays(A, b)
        SystemDesign.from_arrays(A)        # factorization only
    """
    _A: NDArray[np.floating[Any]]
    _b: NDArray[np.floating[Any]] | None
    _n: int

    @classmethod
    def from_arrays(cls, A: ArrayLike, b: ArrayLike | None = None) -> SystemDesign:
        """
        Build SystemDesign from array-likes.

        Parameters
        ----------
        A : array-like
            Square system matrix.
        b : array-like, optional
            Right-hand side of length n, 1D or a single column.

        Raises
        ------
        ValidationError
            If inputs are non-numeric or contain NaN/Inf.
        DimensionError
            If A is not square or b does not have length n.
        """
        A_arr = check_array(A, 'A')
        b_arr = None
        if b is not None:
            b_arr = as_vector(check_array(b, 'b'), 'b')
        return cls._build(A_arr, b_arr)

    @classmethod
    def _build(
        cls,
        A: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]] | None,
    ) -> SystemDesign:
        """Internal builder with validation."""
        check_square(A, 'A')
        check_finite(A, 'A')
        if b is not None:
            check_consistent_length(A, b, names=('A', 'b'))
            check_finite(b, 'b')
        return cls(_A=A, _b=b, _n=A.shape[0])

    @property
    def A(self) -> NDArray[np.floating[Any]]:
        """System matrix (n x n)."""
        return self._A

    @property
    def b(self) -> NDArray[np.floating[Any]] | None:
        """Right-hand side (n,), or None for a factorization-only design."""
        return self._b

    @property
    def n(self) -> int:
        """Matrix order."""
        return self._n

    @property
    def has_rhs(self) -> bool:
        return self._b is not None

    def with_rhs(self, b: ArrayLike) -> SystemDesign:
        """Same matrix, new right-hand side."""
        b_arr = as_vector(check_array(b, 'b'), 'b')
        return SystemDesign._build(self._A, b_arr)

    def __repr__(self) -> str:
        rhs = ", rhs" if self.has_rhs else ""
        return f"SystemDesign(n={self._n}{rhs})"
