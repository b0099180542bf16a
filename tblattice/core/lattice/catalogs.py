"""
Name-keyed catalogs of sublattices and hopping families.

Both catalogs are append-only: entries are stored in a list indexed by their
unique id, with an :class:`IdentityRegistry` providing the name → id map.
Lookup by id is therefore a plain list access.
"""

import logging
import numpy as np
import dataclasses
from dataclasses import dataclass
from typing import List, Dict, Iterator, Optional, Sequence, Tuple, Union

from ..errors import DuplicateHoppingError
from ..operators import (
    EnergyLike,
    to_onsite_matrix,
    to_hopping_matrix,
    validate_onsite,
    energies_equal,
)
from ...utils.constants import SUBLATTICE_ID_MAX, HOPPING_ID_MAX
from .coordinates import Index3D, to_cartesian, negate_index
from .canonical import find_conjugate_match
from .registry import IdentityRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Sublattice:
    """
    A named site of the unit cell.

    Attributes
    ----------
    name : str
        User-facing name
    position : np.ndarray, shape (3,)
        Cartesian position inside the unit cell
    energy : np.ndarray, shape (n, n), complex
        Onsite energy operator over the n orbitals of this site.
        Either Hermitian or upper triangular (lower triangle implied).
    unique_id : int
        Dense id, equal to the registration order
    alias_id : int
        ``unique_id`` of the sublattice this one is equivalent to.
        Equal to ``unique_id`` unless the site was added as an alias.
    """
    name: str
    position: np.ndarray
    energy: np.ndarray
    unique_id: int
    alias_id: int

    @property
    def num_orbitals(self) -> int:
        return self.energy.shape[0]

    @property
    def is_alias(self) -> bool:
        return self.alias_id != self.unique_id


@dataclass(frozen=True)
class HoppingTerm:
    """
    One geometric instance of a hopping family.

    The hopping goes from sublattice ``from_id`` in cell (0, 0, 0) to
    sublattice ``to_id`` in cell ``relative_index``.
    """
    relative_index: Index3D
    from_id: int
    to_id: int

    def conjugate(self) -> 'HoppingTerm':
        """The same bond seen from the other end."""
        return HoppingTerm(negate_index(self.relative_index), self.to_id, self.from_id)


@dataclass(frozen=True, eq=False)
class HoppingFamily:
    """
    A hopping energy operator shared by one or more hopping terms.

    ``energy`` has one row per orbital of the source sublattice and one
    column per orbital of the destination sublattice.

    Families are immutable snapshots. Adding a term stores a new family
    under the same id, so a reference taken earlier keeps its old terms.
    """
    name: str
    energy: np.ndarray
    unique_id: int
    terms: Tuple[HoppingTerm, ...] = ()

    @property
    def shape(self) -> Tuple[int, int]:
        return self.energy.shape


class SublatticeCatalog:
    """Append-only storage of :class:`Sublattice` entries."""

    def __init__(self, max_id: int = SUBLATTICE_ID_MAX):
        self._registry = IdentityRegistry('Sublattice', max_id)
        self._entries: List[Sublattice] = []

    def add(self, name: str, position: Sequence[float], onsite: EnergyLike = 0.0) -> Sublattice:
        """
        Validate and store a new sublattice.

        Parameters
        ----------
        name : str
            Unique, non-blank name
        position : array_like
            Cartesian position inside the unit cell
        onsite : scalar, vector or matrix
            Onsite energy. A vector is the diagonal of the onsite matrix.

        Raises
        ------
        InvalidOnsiteError
            If the onsite matrix is not square, has a complex diagonal,
            or is neither upper triangular nor Hermitian
        InvalidArgumentError, ConflictError, CapacityExceededError
            From the identity registry
        """
        energy = to_onsite_matrix(onsite)
        validate_onsite(energy)
        position = to_cartesian(position)

        unique_id = self._registry.register(name)
        sublattice = Sublattice(name, position, energy, unique_id, unique_id)
        self._store(sublattice)
        return sublattice

    def add_alias(self, alias_name: str, original_name: str, position: Sequence[float]) -> Sublattice:
        """
        Store a sublattice which shares the onsite energy of ``original_name``.

        The alias points at the immediate original, so an alias of an alias
        refers to the intermediate entry rather than the root.
        """
        original = self.by_name(original_name)
        position = to_cartesian(position)

        unique_id = self._registry.register(alias_name)
        sublattice = Sublattice(alias_name, position, original.energy, unique_id, original.unique_id)
        self._store(sublattice)
        return sublattice

    def _store(self, sublattice: Sublattice) -> None:
        self._registry.bind(sublattice.name, sublattice.unique_id)
        self._entries.append(sublattice)

    def by_name(self, name: str) -> Sublattice:
        return self._entries[self._registry.id_of(name)]

    def by_id(self, unique_id: int) -> Sublattice:
        self._registry.name_of(unique_id)  # raises NotFoundError
        return self._entries[unique_id]

    def __getitem__(self, key: Union[str, int]) -> Sublattice:
        if isinstance(key, str):
            return self.by_name(key)
        return self.by_id(key)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Sublattice]:
        return iter(self._entries)

    def name_map(self) -> Dict[str, int]:
        return self._registry.as_dict()


class HoppingCatalog:
    """
    Append-only storage of :class:`HoppingFamily` entries.

    Terms are appended to families by the owning lattice, which is the only
    place where both sublattice and hopping information is available.
    The catalog itself still rejects a term whose bond is already stored.
    """

    def __init__(self, max_id: int = HOPPING_ID_MAX):
        self._registry = IdentityRegistry('Hopping', max_id)
        self._entries: List[HoppingFamily] = []

    def register(self, name: str, energy: EnergyLike) -> HoppingFamily:
        matrix = to_hopping_matrix(energy)

        unique_id = self._registry.register(name)
        family = HoppingFamily(name, matrix, unique_id)
        self._registry.bind(name, unique_id)
        self._entries.append(family)
        return family

    def find_by_energy(self, energy: np.ndarray) -> Optional[HoppingFamily]:
        """First family (in id order) whose energy is exactly ``energy``."""
        for family in self._entries:
            if energies_equal(family.energy, energy):
                return family
        return None

    def append_term(self, family: HoppingFamily, term: HoppingTerm) -> HoppingFamily:
        """
        Add ``term`` to the family with the id of ``family``.

        Returns
        -------
        family : HoppingFamily
            The updated family, now stored in the catalog

        Raises
        ------
        DuplicateHoppingError
            If ``term`` or its conjugate is already stored in any family
        """
        match = find_conjugate_match(self._entries, term)
        if match is not None:
            raise DuplicateHoppingError(
                f"The specified hopping already exists: {term} (found in hopping '{match[0].name}')"
            )

        current = self.by_id(family.unique_id)
        updated = dataclasses.replace(current, terms=current.terms + (term,))
        self._entries[current.unique_id] = updated
        logger.debug("Added hopping %s to family '%s'", term, updated.name)
        return updated

    def by_name(self, name: str) -> HoppingFamily:
        return self._entries[self._registry.id_of(name)]

    def by_id(self, unique_id: int) -> HoppingFamily:
        self._registry.name_of(unique_id)
        return self._entries[unique_id]

    def __getitem__(self, key: Union[str, int]) -> HoppingFamily:
        if isinstance(key, str):
            return self.by_name(key)
        return self.by_id(key)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HoppingFamily]:
        return iter(self._entries)

    def num_terms(self) -> int:
        return sum(len(family.terms) for family in self._entries)

    def name_map(self) -> Dict[str, int]:
        return self._registry.as_dict()
