"""
Conversions between Cartesian positions and lattice-vector coordinates.

Positions are always 3D: shorter inputs are zero-padded, so 1D and 2D
lattices use the same code path as 3D ones. Only the leading ``ndim``
components take part in the basis solve.
"""

import numpy as np
import scipy.linalg
from typing import Sequence, Tuple, Optional

from ..errors import InvalidArgumentError

Index3D = Tuple[int, int, int]


def to_cartesian(vector: Optional[Sequence[float]]) -> np.ndarray:
    """
    Convert a 1-3 component vector to a read-only 3D float array.

    ``None`` is treated as the zero vector.
    """
    if vector is None:
        vector = ()

    v = np.asarray(vector, dtype=float).ravel()
    if v.size > 3:
        raise InvalidArgumentError(f"Expected at most 3 components, got {v.size}")

    result = np.zeros(3)
    result[:v.size] = v
    result.setflags(write=False)
    return result


def to_index3d(index: Sequence[int]) -> Index3D:
    """Convert a 1-3 component integer index to a hashable 3-tuple."""
    values = np.asarray(index).ravel()
    if values.size > 3:
        raise InvalidArgumentError(f"Relative index must have at most 3 components, got {values.size}")
    if values.size and not np.all(np.equal(np.mod(values, 1), 0)):
        raise InvalidArgumentError(f"Relative index must be integer valued, got {tuple(values)}")

    padded = [int(x) for x in values] + [0] * (3 - values.size)
    return tuple(padded)


def negate_index(index: Index3D) -> Index3D:
    return tuple(-i for i in index)


def lattice_matrix(vectors: Sequence[np.ndarray]) -> np.ndarray:
    """
    Square matrix whose columns are the leading ``ndim`` components
    of the primitive vectors.
    """
    ndim = len(vectors)
    return np.column_stack([v[:ndim] for v in vectors])


def translate_coordinates(vectors: Sequence[np.ndarray], position: Sequence[float]) -> np.ndarray:
    """
    Express a Cartesian position in lattice-vector coordinates.

    Parameters
    ----------
    vectors : sequence of np.ndarray, shape (3,)
        Primitive vectors a1..a_ndim
    position : array_like
        Cartesian position

    Returns
    -------
    coordinates : np.ndarray, shape (3,)
        (n1, n2, n3) such that position = n1*a1 + n2*a2 + n3*a3 in the
        first ``ndim`` components. Components beyond ``ndim`` are zero.

    Notes
    -----
    Uses a column-pivoted QR least-squares solve (LAPACK gelsy), which
    stays well defined for near-degenerate bases.
    """
    ndim = len(vectors)
    p = to_cartesian(position)[:ndim]

    solution, _, _, _ = scipy.linalg.lstsq(lattice_matrix(vectors), p, lapack_driver='gelsy')

    coordinates = np.zeros(3)
    coordinates[:ndim] = solution
    return coordinates


def calc_position(vectors: Sequence[np.ndarray],
                  offset: np.ndarray,
                  index: Sequence[int],
                  sublattice_position: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Cartesian position of a unit cell (and optionally a site inside it).

    position = offset + sum_i index[i] * a_i (+ sublattice position)
    """
    index = to_index3d(index)

    position = np.array(offset, dtype=float)
    for i, vector in enumerate(vectors):
        position += index[i] * vector

    if sublattice_position is not None:
        position += sublattice_position

    return position


def reciprocal_vectors(vectors: Sequence[np.ndarray]) -> np.ndarray:
    """
    Reciprocal lattice vectors.

    Returns
    -------
    vectors : np.ndarray, shape (ndim, 3)
        Rows b_j satisfying a_i · b_j = 2π δ_ij. For ndim < 3 the b_j lie
        in the span of the primitive vectors.
    """
    a = np.vstack(vectors)
    return 2 * np.pi * np.linalg.pinv(a).T
