"""
Dense, id-indexed adjacency derived from the lattice catalogs.

The catalogs store every bond once, in the direction it was declared. The
Hamiltonian assembly stage wants the opposite: for each sublattice id, every
bond touching it, with its direction. :func:`build_optimized_structure`
performs that conversion.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from .catalogs import Sublattice, HoppingFamily
from .coordinates import Index3D, negate_index


@dataclass(frozen=True)
class Hopping:
    """
    Directed adjacency record.

    Attributes
    ----------
    relative_index : Tuple[int, int, int]
        Cell of the other sublattice, relative to this one
    sublattice : int
        unique_id of the other sublattice
    family_id : int
        unique_id of the hopping family providing the energy
    is_conjugate : bool
        True if the bond was declared from the other end, in which case
        the family energy must be used as its adjoint
    """
    relative_index: Index3D
    sublattice: int
    family_id: int
    is_conjugate: bool


@dataclass(frozen=True)
class OptimizedSublattice:
    position: Tuple[float, float, float]
    alias: int
    hoppings: Tuple[Hopping, ...]


@dataclass(frozen=True)
class OptimizedLatticeStructure:
    """Read-only sequence of :class:`OptimizedSublattice`, indexed by sublattice id."""
    sublattices: Tuple[OptimizedSublattice, ...]

    def __getitem__(self, unique_id: int) -> OptimizedSublattice:
        return self.sublattices[unique_id]

    def __len__(self) -> int:
        return len(self.sublattices)

    def __iter__(self) -> Iterator[OptimizedSublattice]:
        return iter(self.sublattices)

    def num_hoppings(self) -> int:
        """Total number of directed records (twice the number of terms)."""
        return sum(len(s.hoppings) for s in self.sublattices)


def build_optimized_structure(sublattices: Sequence[Sublattice],
                              families: Iterable[HoppingFamily]) -> OptimizedLatticeStructure:
    """
    Fold the catalogs into a per-sublattice adjacency list.

    Each hopping term (r, a, b) of family f is inserted twice:
    ``Hopping(r, b, f, False)`` into entry a and ``Hopping(-r, a, f, True)``
    into entry b. Records are ordered by family id, then by term order.

    Parameters
    ----------
    sublattices : sequence of Sublattice
        Must be ordered by unique_id (as stored by the catalog)
    families : iterable of HoppingFamily

    Returns
    -------
    structure : OptimizedLatticeStructure
    """
    adjacency: List[List[Hopping]] = [[] for _ in sublattices]

    for family in families:
        for term in family.terms:
            adjacency[term.from_id].append(
                Hopping(term.relative_index, term.to_id, family.unique_id, False)
            )
            adjacency[term.to_id].append(
                Hopping(negate_index(term.relative_index), term.from_id, family.unique_id, True)
            )

    entries = []
    for sublattice, hoppings in zip(sublattices, adjacency):
        position = tuple(float(x) for x in sublattice.position)
        entries.append(OptimizedSublattice(position, sublattice.alias_id, tuple(hoppings)))

    return OptimizedLatticeStructure(tuple(entries))


def max_hoppings(structure: OptimizedLatticeStructure,
                 sublattices: Sequence[Sublattice],
                 families: Sequence[HoppingFamily]) -> int:
    """
    Largest number of scalar hoppings touching a single orbital block.

    For each sublattice: the off-diagonal count of its onsite matrix
    (orbitals - 1) plus the column count of every hopping in its adjacency
    list. Used to size fixed-width hopping buffers.
    """
    result = 0
    for entry in structure:
        count = sublattices[entry.alias].num_orbitals - 1
        for hopping in entry.hoppings:
            count += families[hopping.family_id].shape[1]
        result = max(result, count)
    return result
