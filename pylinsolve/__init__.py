"""
pylinsolve: dense linear systems by LU factorization, with stability analysis.

Solves Ax = b through PA = LU with partial pivoting and reports how far
the answer can be trusted through the condition number of A.

Submodules:
    lu: Triangular substitution, LU factorizations, solve orchestration
    conditioning: Norms, condition numbers, perturbation analysis
    datasets: Reference matrices
"""

__version__ = "0.1.0"

from pylinsolve import lu
from pylinsolve import conditioning
from pylinsolve.lu import solve, factorize
from pylinsolve.conditioning import condition_number

__all__ = [
    "__version__",
    "lu",
    "conditioning",
    "solve",
    "factorize",
    "condition_number",
]
