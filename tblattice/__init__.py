"""
tblattice: canonical lattice graphs for tight-binding models

Builds the declarative description of a periodic crystal (primitive vectors,
sublattices with onsite energies, hopping terms) and derives the compact
adjacency structure used to assemble tight-binding Hamiltonians.

Main Components
---------------
core : Lattice, catalogs, optimized structure, error taxonomy
utils : Constants and logging setup

Quick Start
-----------
>>> from tblattice import Lattice
>>>
>>> # Square lattice, one orbital per site
>>> lattice = Lattice(a1=[1, 0], a2=[0, 1])
>>> lattice.add_sublattice('A', [0, 0], onsite=0.0)
>>> lattice.add_hoppings(
...     ([1, 0], 'A', 'A', -1.0),
...     ([0, 1], 'A', 'A', -1.0),
... )
>>> structure = lattice.optimized_structure()
>>> len(structure[0].hoppings)
4
"""

__version__ = "0.1.0"

from .core import (
    # Lattice
    Lattice,
    Sublattice,
    HoppingFamily,
    HoppingTerm,
    Hopping,
    OptimizedLatticeStructure,
    create_lattice,

    # Errors
    ErrorKind,
    LatticeError,
    InvalidArgumentError,
    InvalidOnsiteError,
    HoppingSizeMismatchError,
    ConflictError,
    DuplicateHoppingError,
    NotFoundError,
    CapacityExceededError,
)
from .utils import setup_logging

__all__ = [
    '__version__',
    'Lattice',
    'Sublattice',
    'HoppingFamily',
    'HoppingTerm',
    'Hopping',
    'OptimizedLatticeStructure',
    'create_lattice',
    'ErrorKind',
    'LatticeError',
    'InvalidArgumentError',
    'InvalidOnsiteError',
    'HoppingSizeMismatchError',
    'ConflictError',
    'DuplicateHoppingError',
    'NotFoundError',
    'CapacityExceededError',
    'setup_logging',
]
