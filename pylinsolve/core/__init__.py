"""
Core infrastructure for pylinsolve.

This module provides shared abstractions and utilities used by the
factorization (lu) and stability analysis (conditioning) subpackages.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception and warning hierarchy
    validation: Input validators
    compute: Hardware detection, timing, precision, tolerances
"""

from pylinsolve.core.result import Result
from pylinsolve.core.protocols import Backend
from pylinsolve.core.exceptions import (
    PyLinsolveError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    SingularPivotError,
    NotPositiveDefiniteError,
    NumericDegeneracyWarning,
    IllConditionedWarning,
)

__all__ = [
    # Result
    "Result",
    # Protocols
    "Backend",
    # Exceptions
    "PyLinsolveError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "SingularPivotError",
    "NotPositiveDefiniteError",
    # Warnings
    "NumericDegeneracyWarning",
    "IllConditionedWarning",
]
