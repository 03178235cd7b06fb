"""
Row permutations in vector and matrix form.

A permutation is stored as a pivot vector p of length n, where p[k] is the
original row index used as the k-th pivot row. The equivalent permutation
matrix P has row k equal to the standard basis vector e_{p[k]}, so that
(P @ A)[k] == A[p[k]]. Both views convert into each other explicitly;
applying a permutation never builds P.

This is a standalone utility module (no Design/Backend pipeline).
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.exceptions import ValidationError, DimensionError
from pylinsolve.core.validation import check_array, check_consistent_length


def check_permutation(p: ArrayLike, name: str = 'p') -> NDArray[np.intp]:
    """
    Validate a pivot vector and return it as an integer array.

    Parameters
    ----------
    p : array-like
        Candidate permutation of {0, ..., n-1}.
    name : str
        Parameter name for error messages.

    Raises
    ------
    ValidationError
        If p contains non-integers or is not a bijection.
    DimensionError
        If p is not 1D.
    """
    p_arr = np.asarray(p)
    if p_arr.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {p_arr.ndim}D with shape {p_arr.shape}"
        )
    if p_arr.size and not np.issubdtype(p_arr.dtype, np.integer):
        if not np.issubdtype(p_arr.dtype, np.floating) or not np.all(p_arr == np.round(p_arr)):
            raise ValidationError(f"{name}: expected integer indices, got dtype {p_arr.dtype}")
    p_int = p_arr.astype(np.intp)

    n = p_int.shape[0]
    if not np.array_equal(np.sort(p_int), np.arange(n)):
        raise ValidationError(
            f"{name}: not a permutation of 0..{n - 1}: {p_int.tolist()}"
        )
    return p_int


def permutation_vector_to_matrix(p: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Build the permutation matrix P from a pivot vector.

    Row k of P is the standard basis vector indexed by p[k].

    Examples
    --------
    >>> permutation_vector_to_matrix([0, 2, 1])
    array([[1., 0., 0.],
           [0., 0., 1.],
           [0., 1., 0.]])
    """
    p_int = check_permutation(p)
    n = p_int.shape[0]
    return np.eye(n)[p_int, :]


def permutation_matrix_to_vector(P: ArrayLike) -> NDArray[np.intp]:
    """
    Recover the pivot vector from a permutation matrix.

    Raises
    ------
    ValidationError
        If P is not a 0/1 matrix with exactly one 1 per row and column.
    """
    P_arr = check_array(P, 'P')
    if P_arr.ndim != 2 or P_arr.shape[0] != P_arr.shape[1]:
        raise DimensionError(f"P: expected square matrix, got shape {P_arr.shape}")
    if not np.all((P_arr == 0.0) | (P_arr == 1.0)):
        raise ValidationError("P: entries must be 0 or 1")
    if not (np.all(P_arr.sum(axis=0) == 1.0) and np.all(P_arr.sum(axis=1) == 1.0)):
        raise ValidationError("P: must have exactly one 1 per row and per column")
    return np.argmax(P_arr, axis=1).astype(np.intp)


def apply_permutation(p: ArrayLike, v: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Compute P @ v without forming P.

    Parameters
    ----------
    p : array-like
        Pivot vector of length n.
    v : array-like
        Vector of length n, or a stack of n rows (n x m).

    Returns
    -------
    ndarray
        New array whose k-th entry (row) is v[p[k]].
    """
    p_int = check_permutation(p)
    v_arr = check_array(v, 'v')
    if v_arr.ndim not in (1, 2):
        raise DimensionError(f"v: expected 1D or 2D array, got {v_arr.ndim}D")
    check_consistent_length(p_int, v_arr, names=('p', 'v'))
    return v_arr[p_int]


def invert_permutation(p: ArrayLike) -> NDArray[np.intp]:
    """
    Return q with q[p[k]] = k, so that applying q undoes applying p.

    In matrix form this is P.T, the inverse of an orthogonal permutation
    matrix.
    """
    p_int = check_permutation(p)
    q = np.empty_like(p_int)
    q[p_int] = np.arange(p_int.shape[0], dtype=np.intp)
    return q
