"""
Duplicate detection for hopping terms.

A bond (r, a, b) from sublattice a in cell 0 to sublattice b in cell r is the
same physical bond as (-r, b, a). The hopping graph keeps at most one term per
undirected bond across all families.
"""

from typing import TYPE_CHECKING, Iterable, Optional, Tuple

if TYPE_CHECKING:
    from .catalogs import HoppingFamily, HoppingTerm


def find_conjugate_match(families: Iterable['HoppingFamily'],
                         candidate: 'HoppingTerm') -> Optional[Tuple['HoppingFamily', 'HoppingTerm']]:
    """
    Find an existing term describing the same bond as ``candidate``.

    Parameters
    ----------
    families : iterable of HoppingFamily
        All families of the lattice
    candidate : HoppingTerm
        The term about to be added

    Returns
    -------
    match : (HoppingFamily, HoppingTerm) or None
        The family and term equal to ``candidate`` or to its conjugate
    """
    for family in families:
        for term in family.terms:
            if candidate == term or candidate == term.conjugate():
                return family, term
    return None


def is_duplicate(families: Iterable['HoppingFamily'], candidate: 'HoppingTerm') -> bool:
    return find_conjugate_match(families, candidate) is not None
