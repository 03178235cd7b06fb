"""
CPU reference backend for LU factorization and linear solves.

Runs the pivoted elimination in NumPy float64. This is the reference
implementation every other backend is validated against.
"""

from typing import Any
import numpy as np

from pylinsolve.core.exceptions import ValidationError
from pylinsolve.core.result import Result
from pylinsolve.core.compute.timing import Timer
from pylinsolve.core.compute.linalg.spectral import condition_number_svd
from pylinsolve.lu.design import SystemDesign
from pylinsolve.lu.solution import LUParams, SolveParams
from pylinsolve.lu._common import condition_warnings
from pylinsolve.lu._factorize import lu_pivoted, lu_unpivoted
from pylinsolve.lu._triangular import forward_substitution, backward_substitution


class CPULUBackend:
    """
    CPU backend using LU factorization.

    Implements the Backend protocol for SystemDesign -> LUParams / SolveParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_lu'

    def factorize(self, design: SystemDesign, *, pivoting: bool = True) -> Result[LUParams]:
        """
        Factor the design matrix.

        Parameters
        ----------
        design : SystemDesign
        pivoting : bool
            True for PA = LU with partial pivoting, False for plain A = LU.

        Raises
        ------
        SingularPivotError
            If pivoting and the matrix is exactly singular.
        """
        timer = Timer()
        timer.start()

        with timer.section('factorization'):
            if pivoting:
                L, U, p = lu_pivoted(design.A)
            else:
                L, U = lu_unpivoted(design.A)
                p = None

        timer.stop()

        params = LUParams(L=L, U=U, p=p)
        warnings_list: list[str] = []
        if not pivoting and not (np.all(np.isfinite(L)) and np.all(np.isfinite(U))):
            warnings_list.append("zero pivot encountered: factors contain non-finite values")

        info: dict[str, Any] = {
            'method': 'lu_partial_pivoting' if pivoting else 'lu_no_pivoting',
            'n': design.n,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def solve(self, design: SystemDesign, *, check_condition: bool = True) -> Result[SolveParams]:
        """
        Solve Ax = b.

        Algorithm:
            1. Factor PA = LU with partial pivoting
            2. Permute the right-hand side: b' = Pb
            3. Forward substitution: Lz = b'
            4. Backward substitution: Ux = z
            5. Residual b - Ax and, optionally, κ(A)

        Raises
        ------
        ValidationError
            If the design has no right-hand side.
        SingularPivotError
            If A is exactly singular.
        """
        if not design.has_rhs:
            raise ValidationError("b: design has no right-hand side")

        timer = Timer()
        timer.start()

        A = design.A
        b = design.b

        with timer.section('factorization'):
            L, U, p = lu_pivoted(A)

        with timer.section('permutation'):
            b_perm = b[p]

        with timer.section('forward_substitution'):
            z = forward_substitution(L, b_perm)

        with timer.section('backward_substitution'):
            x = backward_substitution(U, z)

        with timer.section('residual'):
            residual = b - A @ x

        kappa = None
        if check_condition:
            with timer.section('condition_number'):
                kappa = condition_number_svd(A)

        timer.stop()

        params = SolveParams(
            x=x,
            residual=residual,
            factors=LUParams(L=L, U=U, p=p),
            condition_number=kappa,
        )

        info: dict[str, Any] = {
            'method': 'lu_partial_pivoting',
            'n': design.n,
            'condition_number': kappa,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=condition_warnings(kappa),
        )
