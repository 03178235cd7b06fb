"""
Core protocols for pylinsolve.

These define structural interfaces that backend implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so a
backend only has to provide the right methods.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from pylinsolve.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
F = TypeVar('F', covariant=True)      # Factorization payload type
S = TypeVar('S', covariant=True)      # Solve payload type


@runtime_checkable
class Backend(Protocol[D, F, S]):
    """
    Protocol for factorization backends.

    A backend takes a validated design and produces either the factors of
    its matrix or the solution of the full system. Backends are stateless:
    all configuration is passed at construction time or per call, which
    makes them easy to test and swap.

    Type Parameters:
        D: The design type this backend accepts
        F: The factorization payload type
        S: The solve payload type
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}[_{precision}]'
        Examples: 'cpu_lu', 'gpu_lu_fp64', 'gpu_lu_fp32'
        """
        ...

    def factorize(self, design: D) -> 'Result[F]':
        """
        Factor the design matrix.

        Raises:
            SingularPivotError: If no nonzero pivot exists at some step
        """
        ...

    def solve(self, design: D, *, check_condition: bool = True) -> 'Result[S]':
        """
        Solve the design's linear system.

        Raises:
            SingularPivotError: If the matrix is exactly singular
            ValidationError: If the design has no right-hand side
        """
        ...
