"""
Linear algebra kernels for pylinsolve.

All functions follow these conventions:
    - CPU functions use NumPy/SciPy (LAPACK under the hood)
    - Inputs are trusted; validation happens at the public API boundary
    - Errors are raised immediately with clear messages

Submodules:
    spectral: singular values, symmetric eigenvalues, spectral norms,
              condition numbers
"""

from pylinsolve.core.compute.linalg.spectral import (
    singular_values,
    gram_eigenvalues,
    symmetric_eigenvalues,
    spectral_norm_svd,
    spectral_norm_eig,
    condition_number_svd,
    condition_number_gram,
)

__all__ = [
    "singular_values",
    "gram_eigenvalues",
    "symmetric_eigenvalues",
    "spectral_norm_svd",
    "spectral_norm_eig",
    "condition_number_svd",
    "condition_number_gram",
]
