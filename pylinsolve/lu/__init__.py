"""
Dense direct solvers: triangular substitution and LU factorization.

Public API:
    forward_substitute(L, b)      - Solve Lx = b, L lower-triangular
    backward_substitute(U, b)     - Solve Ux = b, U upper-triangular
    factorize_lu(A)               - A = LU, no pivoting
    factorize_lu_steps(A, nstep)  - Elimination snapshot after nstep steps
    factorize_lu_pivoted(A)       - PA = LU, partial pivoting
    factorize(A)                  - LUFactorization for repeated solves
    solve(A, b)                   - Factor-and-solve Ax = b
    solve_factored(fac, b)        - Re-solve with existing factors

Permutations:
    permutation_vector_to_matrix, permutation_matrix_to_vector,
    apply_permutation, invert_permutation

Cost model:
    substitution_flops, lu_flops, solve_flops, dense_storage_bytes

Example:
    >>> from pylinsolve.lu import factorize
    >>> fac = factorize(A)
    >>> x1 = fac.solve(b1)
    >>> x2 = fac.solve(b2)
"""

from pylinsolve.lu.design import SystemDesign
from pylinsolve.lu.solution import (
    LUParams,
    SolveParams,
    LUFactorization,
    LinearSystemSolution,
)
from pylinsolve.lu.solvers import (
    forward_substitute,
    backward_substitute,
    factorize_lu,
    factorize_lu_steps,
    factorize_lu_pivoted,
    factorize,
    solve,
    solve_factored,
)
from pylinsolve.lu._permutation import (
    check_permutation,
    permutation_vector_to_matrix,
    permutation_matrix_to_vector,
    apply_permutation,
    invert_permutation,
)
from pylinsolve.lu._cost import (
    substitution_flops,
    lu_flops,
    solve_flops,
    dense_storage_bytes,
)

__all__ = [
    "forward_substitute",
    "backward_substitute",
    "factorize_lu",
    "factorize_lu_steps",
    "factorize_lu_pivoted",
    "factorize",
    "solve",
    "solve_factored",
    "check_permutation",
    "permutation_vector_to_matrix",
    "permutation_matrix_to_vector",
    "apply_permutation",
    "invert_permutation",
    "substitution_flops",
    "lu_flops",
    "solve_flops",
    "dense_storage_bytes",
    "SystemDesign",
    "LUParams",
    "SolveParams",
    "LUFactorization",
    "LinearSystemSolution",
]
