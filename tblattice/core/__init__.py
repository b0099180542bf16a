"""
Core domain models for the tblattice package.

This module contains the fundamental abstractions:
- Lattice: unit cell, sublattices and hoppings
- OptimizedLatticeStructure: the adjacency handed to Hamiltonian assembly
- errors: the error taxonomy shared by all construction steps
"""

from .errors import (
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

from .lattice import (
    Lattice,
    Sublattice,
    HoppingFamily,
    HoppingTerm,
    Hopping,
    OptimizedSublattice,
    OptimizedLatticeStructure,
    LATTICE_REGISTRY,
    create_lattice
)

__all__ = [
    # Errors
    'ErrorKind',
    'LatticeError',
    'InvalidArgumentError',
    'InvalidOnsiteError',
    'HoppingSizeMismatchError',
    'ConflictError',
    'DuplicateHoppingError',
    'NotFoundError',
    'CapacityExceededError',

    # Lattice
    'Lattice',
    'Sublattice',
    'HoppingFamily',
    'HoppingTerm',
    'Hopping',
    'OptimizedSublattice',
    'OptimizedLatticeStructure',
    'LATTICE_REGISTRY',
    'create_lattice',
]
