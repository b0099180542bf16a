"""
Lattice geometry and hopping graph.

This module provides the :class:`Lattice` aggregate and the pieces it is built
from:
- registry: dense identity allocation
- catalogs: sublattices and hopping families
- canonical: duplicate/conjugate bond detection
- coordinates: Cartesian ↔ lattice-vector conversions
- structure: optimized, id-indexed adjacency
- presets: chain, square, triangular and honeycomb lattices
"""

from .base import Lattice
from .catalogs import Sublattice, HoppingFamily, HoppingTerm, SublatticeCatalog, HoppingCatalog
from .registry import IdentityRegistry
from .structure import Hopping, OptimizedSublattice, OptimizedLatticeStructure
from .presets import (
    chain,
    square,
    triangular,
    honeycomb,
    LATTICE_REGISTRY,
    create_lattice
)

__all__ = [
    'Lattice',
    'Sublattice',
    'HoppingFamily',
    'HoppingTerm',
    'SublatticeCatalog',
    'HoppingCatalog',
    'IdentityRegistry',
    'Hopping',
    'OptimizedSublattice',
    'OptimizedLatticeStructure',
    'chain',
    'square',
    'triangular',
    'honeycomb',
    'LATTICE_REGISTRY',
    'create_lattice',
]
