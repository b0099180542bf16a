"""
Preset lattices for common tight-binding models.

This module provides ready-made :class:`Lattice` builders for:
- Linear chain
- Square lattice
- Triangular lattice
- Honeycomb lattice (graphene)
"""

import numpy as np

from .base import Lattice


def chain(a: float = 1.0, t: float = -1.0, onsite: float = 0.0) -> Lattice:
    """
    One-dimensional chain with a single site per cell.

    Parameters
    ----------
    a : float
        Lattice constant
    t : float
        Nearest-neighbor hopping energy
    onsite : float
        Onsite energy
    """
    _check_lattice_constant(a)

    lattice = Lattice(a1=[a, 0, 0])
    lattice.add_sublattice('A', [0, 0, 0], onsite)
    lattice.register_hopping_energy('t', t)
    lattice.add_hopping([1, 0, 0], 'A', 'A', 't')
    return lattice


def square(a: float = 1.0, t: float = -1.0, onsite: float = 0.0) -> Lattice:
    """
    Square lattice with nearest-neighbor hopping.

    Geometry
    --------
        a1 = a * [1, 0]
        a2 = a * [0, 1]

    Each site has 4 nearest neighbors, declared as 2 bonds per cell.
    """
    _check_lattice_constant(a)

    lattice = Lattice(a1=[a, 0], a2=[0, a])
    lattice.add_sublattice('A', [0, 0], onsite)
    lattice.register_hopping_energy('t', t)
    lattice.add_hoppings(
        ([1, 0], 'A', 'A', 't'),
        ([0, 1], 'A', 'A', 't'),
    )
    return lattice


def triangular(a: float = 1.0, t: float = -1.0, onsite: float = 0.0) -> Lattice:
    """
    Triangular (hexagonal) Bravais lattice.

    Geometry
    --------
    Primitive vectors (for lattice constant a):
        a1 = a * [1, 0]
        a2 = a * [1/2, √3/2]

    Each site has 6 nearest neighbors at distance a, declared as the 3 bonds
    (1, 0), (0, 1) and (1, -1); the other 3 are their conjugates.
    """
    _check_lattice_constant(a)

    lattice = Lattice(a1=[a, 0], a2=[a / 2, a * np.sqrt(3) / 2])
    lattice.add_sublattice('A', [0, 0], onsite)
    lattice.register_hopping_energy('t', t)
    lattice.add_hoppings(
        ([1, 0], 'A', 'A', 't'),
        ([0, 1], 'A', 'A', 't'),
        ([1, -1], 'A', 'A', 't'),
    )
    return lattice


def honeycomb(a: float = 0.24595, t: float = -2.8,
              onsite_a: float = 0.0, onsite_b: float = 0.0) -> Lattice:
    """
    Honeycomb lattice with two sublattices (monolayer graphene by default).

    Parameters
    ----------
    a : float
        Lattice constant in nm (graphene: 0.24595)
    t : float
        Nearest-neighbor hopping in eV (graphene: -2.8)
    onsite_a, onsite_b : float
        Onsite energies; a difference opens a gap (e.g. hBN-like models)

    Geometry
    --------
        a1 = a * [1/2, √3/2]
        a2 = a * [-1/2, √3/2]
        A at a_cc * [0, -1/2], B at a_cc * [0, 1/2] with a_cc = a/√3

    Every A site has 3 B neighbors, in cells (0, 0), (0, -1) and (-1, 0).
    """
    _check_lattice_constant(a)
    a_cc = a / np.sqrt(3)

    lattice = Lattice(a1=[a / 2, a * np.sqrt(3) / 2], a2=[-a / 2, a * np.sqrt(3) / 2])
    lattice.add_sublattices(
        ('A', [0, -a_cc / 2], onsite_a),
        ('B', [0, a_cc / 2], onsite_b),
    )
    lattice.register_hopping_energy('t', t)
    lattice.add_hoppings(
        ([0, 0], 'A', 'B', 't'),
        ([0, -1], 'A', 'B', 't'),
        ([-1, 0], 'A', 'B', 't'),
    )
    return lattice


def _check_lattice_constant(a: float) -> None:
    if a <= 0:
        raise ValueError("Lattice constant must be positive")


# Lattice registry for config-based construction
LATTICE_REGISTRY = {
    'chain': chain,
    'square': square,
    'triangular': triangular,
    'honeycomb': honeycomb,
}


def create_lattice(lattice_type: str, **kwargs) -> Lattice:
    """
    Factory function to create lattices from string names.

    Parameters
    ----------
    lattice_type : str
        Type of lattice ('chain', 'square', 'triangular', 'honeycomb')
    **kwargs
        Additional arguments passed to the builder
        (e.g., a=1.5, t=-2.0)

    Returns
    -------
    lattice : Lattice
        Fully built lattice

    Examples
    --------
    >>> lattice = create_lattice('honeycomb', t=-3.0)
    >>> lattice.nsub
    2

    Raises
    ------
    ValueError
        If lattice_type is not recognized
    """
    if lattice_type not in LATTICE_REGISTRY:
        available = ', '.join(LATTICE_REGISTRY.keys())
        raise ValueError(f"Unknown lattice type '{lattice_type}'. "
                         f"Available types: {available}")

    builder = LATTICE_REGISTRY[lattice_type]
    return builder(**kwargs)
