"""
Spectral quantities of dense matrices.

Thin wrappers over LAPACK (via SciPy) for singular values and symmetric
eigenvalues. These are the library routines the stability analysis relies
on; nothing here validates inputs.

The spectral 2-norm satisfies
    ‖M‖ = sqrt(λ_max(MᵀM)) = σ_max(M)
and for invertible square A
    ‖A⁻¹‖ = 1 / sqrt(λ_min(AᵀA)) = 1 / σ_min(A).

Singular values are preferred: forming AᵀA squares the condition number
and loses every eigenvalue below ε·λ_max to rounding.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import eigvalsh, svdvals


def singular_values(M: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Singular values of M in descending order."""
    if M.size == 0:
        return np.zeros(0)
    return svdvals(M)


def gram_eigenvalues(M: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Eigenvalues of MᵀM in ascending order."""
    if M.size == 0:
        return np.zeros(0)
    return eigvalsh(M.T @ M)


def symmetric_eigenvalues(A: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Eigenvalues of a symmetric matrix in ascending order."""
    return eigvalsh(A)


def spectral_norm_svd(M: NDArray[np.floating[Any]]) -> float:
    """‖M‖₂ as the largest singular value."""
    s = singular_values(M)
    return float(s[0]) if s.size else 0.0


def spectral_norm_eig(M: NDArray[np.floating[Any]]) -> float:
    """‖M‖₂ as sqrt(λ_max(MᵀM))."""
    lam = gram_eigenvalues(M)
    if lam.size == 0:
        return 0.0
    # Rounding can push a zero eigenvalue slightly negative
    return float(np.sqrt(max(lam[-1], 0.0)))


def condition_number_svd(A: NDArray[np.floating[Any]]) -> float:
    """
    κ(A) = σ_max / σ_min.

    Returns inf if A is singular (σ_min == 0).
    """
    s = singular_values(A)
    if s[-1] == 0.0:
        return float('inf')
    return float(s[0] / s[-1])


def condition_number_gram(A: NDArray[np.floating[Any]]) -> float:
    """
    κ(A) = sqrt(λ_max(AᵀA) / λ_min(AᵀA)).

    Returns inf when λ_min(AᵀA) <= 0, which for an ill-conditioned A can
    happen through rounding alone.
    """
    lam = gram_eigenvalues(A)
    if lam[0] <= 0.0:
        return float('inf')
    return float(np.sqrt(lam[-1] / lam[0]))
