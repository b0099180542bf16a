"""
Lattice: the declarative description of a periodic tight-binding model.

A lattice is built once, by registering sublattices and hoppings, and then
handed (read-only) to Hamiltonian assembly and shape generation. It contains
NO information about:
- The finite system shape or boundary conditions
- The Hamiltonian matrix itself

Design Philosophy
-----------------
Declarations are name-keyed and single-direction (each bond is written once),
which is convenient for users. Consumers get the dense, id-indexed,
bidirectional view from :meth:`Lattice.optimized_structure`.
"""

import copy
import logging
import numpy as np
from typing import List, Dict, Tuple, Optional, Sequence, Union

from ..errors import InvalidArgumentError, DuplicateHoppingError, HoppingSizeMismatchError
from ..operators import EnergyLike, to_hopping_matrix
from ...utils.constants import OFFSET_LIMIT, OFFSET_ROUNDING, ANONYMOUS_PREFIX
from .catalogs import Sublattice, HoppingFamily, HoppingTerm, SublatticeCatalog, HoppingCatalog
from .canonical import find_conjugate_match
from .coordinates import (
    to_cartesian,
    to_index3d,
    translate_coordinates,
    calc_position,
    reciprocal_vectors,
)
from .structure import OptimizedLatticeStructure, build_optimized_structure, max_hoppings

logger = logging.getLogger(__name__)


class Lattice:
    """
    Unit cell, sublattices and hoppings of a periodic tight-binding model.

    Parameters
    ----------
    a1, a2, a3 : array_like
        Primitive lattice vectors with up to 3 components each. ``a1`` is
        required; zero or missing ``a2``/``a3`` are dropped, so a 2D lattice
        can be written as ``Lattice([1, 0], [0, 1])``.
    offset : array_like, optional
        Cartesian shift of the lattice origin, see :meth:`set_offset`.
    min_neighbors : int, optional
        Minimum number of neighbors a site needs to be kept by the
        shape-generation stage. Not used by the lattice itself. Default 1.

    Attributes
    ----------
    min_neighbors : int

    Examples
    --------
    One-dimensional chain with nearest-neighbor hopping:

    >>> lattice = Lattice(a1=[1, 0, 0])
    >>> lattice.add_sublattice('A', [0, 0, 0], onsite=0.0)
    >>> lattice.add_hopping([1, 0, 0], 'A', 'A', -1.0)
    >>> lattice.max_hoppings()
    2

    Two orbitals per site with a named hopping matrix:

    >>> lattice = Lattice([1, 0], [0, 1])
    >>> lattice.add_sublattice('A', [0, 0], onsite=[0.1, -0.1])
    >>> lattice.register_hopping_energy('t', [[1, 0], [0, -1]])
    >>> lattice.add_hopping([1, 0], 'A', 'A', 't')
    >>> lattice.add_hopping([0, 1], 'A', 'A', 't')
    """

    def __init__(self,
                 a1: Sequence[float],
                 a2: Optional[Sequence[float]] = None,
                 a3: Optional[Sequence[float]] = None,
                 offset: Optional[Sequence[float]] = None,
                 min_neighbors: int = 1):
        first = to_cartesian(a1)
        if not np.any(first):
            raise InvalidArgumentError("The first primitive vector must be non-zero")

        vectors = [first]
        for vector in (a2, a3):
            vector = to_cartesian(vector)
            if np.any(vector):
                vectors.append(vector)

        if np.linalg.matrix_rank(np.vstack(vectors)) < len(vectors):
            raise InvalidArgumentError("Primitive lattice vectors must be linearly independent")

        self._vectors: Tuple[np.ndarray, ...] = tuple(vectors)
        self._offset = to_cartesian(None)
        self.min_neighbors = min_neighbors

        self._sublattices = SublatticeCatalog()
        self._hoppings = HoppingCatalog()

        if offset is not None:
            self.set_offset(offset)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def vectors(self) -> Tuple[np.ndarray, ...]:
        """Primitive vectors, each a read-only array of shape (3,)."""
        return self._vectors

    @property
    def ndim(self) -> int:
        return len(self._vectors)

    @property
    def offset(self) -> np.ndarray:
        return self._offset

    def set_offset(self, position: Sequence[float]) -> None:
        """
        Move the lattice origin.

        Raises
        ------
        InvalidArgumentError
            If the offset exceeds half a primitive vector (plus tolerance)
            along any lattice direction
        """
        position = to_cartesian(position)
        coordinates = self.translate_coordinates(position)
        if np.any(np.abs(coordinates) > OFFSET_LIMIT + OFFSET_ROUNDING):
            raise InvalidArgumentError(
                "Lattice origin must not be moved by more than half the length of a "
                f"primitive lattice vector (lattice coordinates {coordinates[:self.ndim]})"
            )
        self._offset = position

    def with_offset(self, position: Sequence[float]) -> 'Lattice':
        """Copy of this lattice with a different offset."""
        new_lattice = copy.deepcopy(self)
        new_lattice.set_offset(position)
        return new_lattice

    def with_min_neighbors(self, number: int) -> 'Lattice':
        """Copy of this lattice with a different ``min_neighbors``."""
        new_lattice = copy.deepcopy(self)
        new_lattice.min_neighbors = number
        return new_lattice

    def translate_coordinates(self, position: Sequence[float]) -> np.ndarray:
        """
        Convert a Cartesian position to lattice-vector coordinates.

        Returns
        -------
        coordinates : np.ndarray, shape (3,)
            Components beyond ``ndim`` are zero.
        """
        return translate_coordinates(self._vectors, position)

    def calc_position(self, index: Sequence[int], sublattice_name: str = "") -> np.ndarray:
        """
        Cartesian position of unit cell ``index``, including the offset.

        If ``sublattice_name`` is given, the position of that sublattice
        inside the cell is added.
        """
        sublattice_position = None
        if sublattice_name:
            sublattice_position = self._sublattices.by_name(sublattice_name).position
        return calc_position(self._vectors, self._offset, index, sublattice_position)

    def reciprocal_vectors(self) -> np.ndarray:
        """
        Reciprocal lattice vectors.

        Returns
        -------
        vectors : np.ndarray, shape (ndim, 3)
            Satisfies a_i · b_j = 2π δ_ij
        """
        return reciprocal_vectors(self._vectors)

    # ------------------------------------------------------------------
    # Sublattices
    # ------------------------------------------------------------------

    def add_sublattice(self, name: str, position: Sequence[float], onsite: EnergyLike = 0.0) -> Sublattice:
        """
        Register a sublattice.

        Parameters
        ----------
        name : str
            Unique name
        position : array_like
            Cartesian position inside the unit cell
        onsite : scalar, vector or square matrix
            Onsite energy. A vector gives a diagonal matrix. A matrix must
            have a real diagonal and be upper triangular or Hermitian.

        Returns
        -------
        sublattice : Sublattice
        """
        sublattice = self._sublattices.add(name, position, onsite)
        logger.debug("Added sublattice '%s' (id %d, %d orbitals)",
                     name, sublattice.unique_id, sublattice.num_orbitals)
        return sublattice

    def add_sublattices(self, *sublattices: Tuple) -> None:
        """Register several sublattices given as ``(name, position[, onsite])`` tuples."""
        for args in sublattices:
            self.add_sublattice(*args)

    def add_alias(self, alias_name: str, original_name: str, position: Sequence[float]) -> Sublattice:
        """
        Register a sublattice at ``position`` which is equivalent to ``original_name``.

        The alias gets its own id; its ``alias_id`` is the id of the original.
        """
        sublattice = self._sublattices.add_alias(alias_name, original_name, position)
        logger.debug("Added alias '%s' -> '%s'", alias_name, original_name)
        return sublattice

    def add_aliases(self, *aliases: Tuple) -> None:
        for args in aliases:
            self.add_alias(*args)

    def sublattice(self, key: Union[str, int]) -> Sublattice:
        """Look up a sublattice by name or by unique id."""
        return self._sublattices[key]

    @property
    def sublattices(self) -> SublatticeCatalog:
        return self._sublattices

    @property
    def nsub(self) -> int:
        return len(self._sublattices)

    def sub_name_map(self) -> Dict[str, int]:
        return self._sublattices.name_map()

    # ------------------------------------------------------------------
    # Hoppings
    # ------------------------------------------------------------------

    def register_hopping_energy(self, name: str, energy: EnergyLike) -> HoppingFamily:
        """
        Register a named hopping energy (scalar or matrix) with no terms.

        Raises
        ------
        InvalidArgumentError
            Blank name or malformed energy
        ConflictError
            If the name already exists
        CapacityExceededError
            If the hopping id space is exhausted
        """
        family = self._hoppings.register(name, energy)
        logger.debug("Registered hopping energy '%s' (id %d, shape %s)",
                     name, family.unique_id, family.shape)
        return family

    def register_hopping_energies(self, mapping: Dict[str, EnergyLike]) -> None:
        for name, energy in mapping.items():
            self.register_hopping_energy(name, energy)

    def add_hopping(self,
                    relative_index: Sequence[int],
                    from_sub: str,
                    to_sub: str,
                    hop: Union[str, EnergyLike]) -> HoppingTerm:
        """
        Add a hopping from ``from_sub`` in cell 0 to ``to_sub`` in cell ``relative_index``.

        Parameters
        ----------
        relative_index : array_like of int
            Lattice-vector displacement between the two unit cells
        from_sub, to_sub : str
            Sublattice names
        hop : str, scalar or matrix
            Name of a registered hopping energy, or the energy itself. An
            energy value reuses the first registered family with exactly
            the same value, or creates an anonymous one.

        Returns
        -------
        term : HoppingTerm

        Raises
        ------
        InvalidArgumentError
            Zero displacement between a sublattice and itself
        NotFoundError
            Unknown sublattice or hopping name
        HoppingSizeMismatchError
            Energy shape does not match the orbital counts of the endpoints
        DuplicateHoppingError
            If the bond, or its conjugate (-r, to, from), already exists
        """
        if isinstance(hop, str):
            return self._add_named_hopping(relative_index, from_sub, to_sub, hop)

        energy = to_hopping_matrix(hop)
        family = self._hoppings.find_by_energy(energy)
        if family is not None:
            return self._add_named_hopping(relative_index, from_sub, to_sub, family.name)

        name = f"{ANONYMOUS_PREFIX}{len(self._hoppings)}"
        index, from_, to = self._resolve_endpoints(relative_index, from_sub, to_sub)
        term = self._check_term(index, from_, to, energy, name)

        family = self.register_hopping_energy(name, energy)
        self._hoppings.append_term(family, term)
        return term

    def add_hoppings(self, *hoppings: Tuple) -> None:
        """Add several ``(relative_index, from_sub, to_sub, hop)`` hoppings."""
        for args in hoppings:
            self.add_hopping(*args)

    def _add_named_hopping(self, relative_index, from_sub: str, to_sub: str,
                           family_name: str) -> HoppingTerm:
        index, from_, to = self._resolve_endpoints(relative_index, from_sub, to_sub)
        family = self._hoppings.by_name(family_name)
        term = self._check_term(index, from_, to, family.energy, family_name)

        self._hoppings.append_term(family, term)
        return term

    def _resolve_endpoints(self, relative_index, from_sub: str,
                           to_sub: str) -> Tuple[Tuple[int, int, int], Sublattice, Sublattice]:
        index = to_index3d(relative_index)
        if from_sub == to_sub and index == (0, 0, 0):
            raise InvalidArgumentError(
                "Hoppings from/to the same sublattice must have a non-zero relative "
                "index in at least one direction. Don't define onsite energy here."
            )
        return index, self._sublattices.by_name(from_sub), self._sublattices.by_name(to_sub)

    def _check_term(self, index, from_: Sublattice, to: Sublattice,
                    energy: np.ndarray, family_name: str) -> HoppingTerm:
        rows, cols = energy.shape
        if from_.num_orbitals != rows or to.num_orbitals != cols:
            raise HoppingSizeMismatchError(from_.name, from_.num_orbitals, to.name,
                                           to.num_orbitals, family_name, rows, cols)

        term = HoppingTerm(index, from_.unique_id, to.unique_id)
        match = find_conjugate_match(self._hoppings, term)
        if match is not None:
            existing_family, existing = match
            logger.debug("Rejected hopping %s: conflicts with %s in '%s'",
                         term, existing, existing_family.name)
            raise DuplicateHoppingError(
                f"The specified hopping already exists: {index} from '{from_.name}' to "
                f"'{to.name}' (found in hopping '{existing_family.name}')"
            )
        return term

    def hopping_family(self, key: Union[str, int]) -> HoppingFamily:
        """Look up a hopping family by name or by unique id."""
        return self._hoppings[key]

    @property
    def hoppings(self) -> HoppingCatalog:
        return self._hoppings

    @property
    def nhop(self) -> int:
        return len(self._hoppings)

    def hop_name_map(self) -> Dict[str, int]:
        return self._hoppings.name_map()

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------

    def optimized_structure(self) -> OptimizedLatticeStructure:
        """
        Dense, bidirectional adjacency indexed by sublattice id.

        Every hopping term appears twice: as declared in its source entry,
        and negated with ``is_conjugate=True`` in its destination entry.
        """
        return build_optimized_structure(list(self._sublattices), self._hoppings)

    def max_hoppings(self) -> int:
        """Maximum number of scalar hoppings of any sublattice, onsite off-diagonals included."""
        return max_hoppings(self.optimized_structure(), self._sublattices, self._hoppings)

    def has_onsite_energy(self) -> bool:
        return any(np.any(np.diagonal(s.energy)) for s in self._sublattices)

    def has_multiple_orbitals(self) -> bool:
        return any(s.num_orbitals != 1 for s in self._sublattices)

    def has_complex_hoppings(self) -> bool:
        return any(np.any(np.imag(f.energy)) for f in self._hoppings)

    def __repr__(self) -> str:
        """String representation of the lattice."""
        return (f"Lattice(ndim={self.ndim}, sublattices={self.nsub}, "
                f"hoppings={self.nhop}, terms={self._hoppings.num_terms()})")

    def __str__(self) -> str:
        lines: List[str] = [
            "=" * 50,
            "Lattice",
            "=" * 50,
        ]
        for i, vector in enumerate(self._vectors, start=1):
            lines.append(f"a{i} = {vector}")
        lines.append(f"offset = {self._offset}")
        lines.append("")
        lines.append("Sublattices:")
        for s in self._sublattices:
            alias = f" (alias of {self._sublattices.by_id(s.alias_id).name})" if s.is_alias else ""
            lines.append(f"  {s.unique_id}: {s.name} at {s.position}{alias}")
        lines.append("")
        lines.append("Hoppings:")
        for f in self._hoppings:
            lines.append(f"  {f.unique_id}: {f.name} shape={f.shape} terms={len(f.terms)}")
        lines.append("=" * 50)
        return "\n".join(lines)
