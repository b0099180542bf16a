"""
Matrix primitives for onsite and hopping energy operators.

Energies enter the lattice as Python scalars, real vectors or full matrices
and are stored as read-only complex numpy arrays. All checks here are exact:
no tolerance is applied, so a matrix is Hermitian only if it equals its
adjoint element by element.
"""

import numpy as np
from typing import Union, Sequence

from .errors import InvalidArgumentError, InvalidOnsiteError

EnergyLike = Union[complex, float, int, Sequence, np.ndarray]


def _frozen(matrix: np.ndarray) -> np.ndarray:
    matrix = np.array(matrix, dtype=complex)
    matrix.setflags(write=False)
    return matrix


def to_onsite_matrix(energy: EnergyLike) -> np.ndarray:
    """
    Convert an onsite energy to a complex matrix.

    Parameters
    ----------
    energy : scalar, 1D array_like or 2D array_like
        A scalar becomes a 1x1 matrix, a vector becomes a diagonal matrix.

    Returns
    -------
    matrix : np.ndarray, complex, read-only
        Not yet validated; see :func:`validate_onsite`.
    """
    energy = np.asarray(energy)

    if energy.ndim == 0:
        return _frozen(energy.reshape(1, 1))
    if energy.ndim == 1 and energy.size > 0:
        return _frozen(np.diag(energy.astype(complex)))
    if energy.ndim == 2 and energy.size > 0:
        return _frozen(energy)

    raise InvalidOnsiteError(
        "square", "The onsite hopping term must be a real vector or a square matrix"
    )


def to_hopping_matrix(energy: EnergyLike) -> np.ndarray:
    """Convert a scalar or matrix hopping energy to a read-only complex matrix."""
    energy = np.asarray(energy)

    if energy.ndim == 0:
        return _frozen(energy.reshape(1, 1))
    if energy.ndim == 2 and energy.size > 0:
        return _frozen(energy)

    raise InvalidArgumentError(
        f"Hopping energy must be a scalar or a non-empty matrix, got shape {energy.shape}"
    )


def is_square(matrix: np.ndarray) -> bool:
    return matrix.ndim == 2 and matrix.shape[0] == matrix.shape[1]


def has_real_diagonal(matrix: np.ndarray) -> bool:
    return not np.any(np.imag(np.diagonal(matrix)))


def is_upper_triangular(matrix: np.ndarray) -> bool:
    return np.array_equal(matrix, np.triu(matrix))


def is_hermitian(matrix: np.ndarray) -> bool:
    return np.array_equal(matrix, matrix.conj().T)


def validate_onsite(matrix: np.ndarray) -> None:
    """
    Check that an onsite matrix is a valid onsite energy operator.

    Rules, checked in order:

    1. 'square': the matrix must be square with at least one orbital
    2. 'real_diagonal': the main diagonal must be real
    3. 'hermitian': the matrix must be upper triangular or Hermitian.
       An upper triangular matrix implies the Hermitian lower triangle.

    Raises
    ------
    InvalidOnsiteError
        With ``rule`` set to the first rule that failed.
    """
    if not is_square(matrix) or matrix.size == 0:
        raise InvalidOnsiteError(
            "square", "The onsite hopping term must be a real vector or a square matrix"
        )
    if not has_real_diagonal(matrix):
        raise InvalidOnsiteError(
            "real_diagonal", "The main diagonal of the onsite hopping term must be real"
        )
    if not is_upper_triangular(matrix) and not is_hermitian(matrix):
        raise InvalidOnsiteError(
            "hermitian", "The onsite hopping matrix must be upper triangular or Hermitian"
        )


def energies_equal(a: np.ndarray, b: np.ndarray) -> bool:
    """Exact element-wise equality, shapes included."""
    return a.shape == b.shape and np.array_equal(a, b)
