"""
Exception and warning hierarchy for pylinsolve.

All exceptions inherit from PyLinsolveError to allow catching any
library-specific error. Non-fatal numerical diagnostics are Python
warnings, so callers can escalate them with the warnings filter.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinsolveError(Exception):
    """Base exception for all pylinsolve errors."""
    pass


class ValidationError(PyLinsolveError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks. Always raised
    before any computation begins.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised for non-square system matrices and right-hand sides whose
    length does not match the matrix order.
    """
    pass


class NumericalError(PyLinsolveError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (the matrix order)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class SingularPivotError(SingularMatrixError):
    """
    No nonzero pivot exists at some elimination step.

    Raised by the pivoted LU factorizer when every candidate entry of the
    pivot column is exactly zero. The matrix is then provably singular and
    no LU factorization exists.

    Attributes:
        step: Zero-based elimination step at which the failure occurred
        column: Column whose candidates were all zero (equals step)
    """

    def __init__(
        self,
        message: str,
        step: int,
        matrix_name: str | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(
            message,
            matrix_name=matrix_name,
            condition_number=float('inf'),
            expected_rank=expected_rank,
        )
        self.step = step
        self.column = step


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when an operation requires a symmetric positive definite matrix
    (e.g., the λ_max/λ_min condition number shortcut) but the matrix fails
    this requirement.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        min_eigenvalue: Minimum eigenvalue, if computed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        min_eigenvalue: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.min_eigenvalue = min_eigenvalue


class NumericDegeneracyWarning(RuntimeWarning):
    """
    A zero pivot or zero diagonal entry was divided by.

    Emitted by the unpivoted factorizer and the triangular solvers. The
    computation is not stopped: Inf/NaN values propagate into the output
    and the caller is expected to check np.isfinite on the result.
    """
    pass


class IllConditionedWarning(RuntimeWarning):
    """
    The system matrix is ill-conditioned.

    Emitted when the condition number exceeds the trust threshold. The
    solution is still returned, but roughly log10(κ) significant digits
    may have been lost.
    """
    pass
