"""
Lattice Demo

This example demonstrates building tight-binding lattices:
- A graphene lattice from the preset registry
- A hand-built two-orbital square lattice
- The optimized structure handed to Hamiltonian assembly
"""

import numpy as np
import sys
from pathlib import Path

# Add tblattice to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tblattice import Lattice, create_lattice, setup_logging, DuplicateHoppingError


def example_graphene():
    """Example 1: graphene from the preset registry."""
    print("="*60)
    print("Example 1: Monolayer graphene")
    print("="*60)

    lattice = create_lattice('honeycomb')
    print(lattice)

    structure = lattice.optimized_structure()
    for sub_id, entry in enumerate(structure):
        print(f"\nSublattice {sub_id} at {entry.position}:")
        for hopping in entry.hoppings:
            print(f"  {hopping}")

    print(f"\nmax_hoppings = {lattice.max_hoppings()}")


def example_two_orbital():
    """Example 2: two orbitals per site, named hopping matrix."""
    print("\n" + "="*60)
    print("Example 2: Two-orbital square lattice")
    print("="*60)

    lattice = Lattice(a1=[1, 0], a2=[0, 1])
    lattice.add_sublattice('A', [0, 0], onsite=[[0.2, 0.1j], [0, -0.2]])
    lattice.register_hopping_energy('t', np.array([[-1.0, 0.3], [0.3, -0.5]]))
    lattice.add_hoppings(
        ([1, 0], 'A', 'A', 't'),
        ([0, 1], 'A', 'A', 't'),
    )
    print(repr(lattice))

    # The conjugate of an existing bond is rejected
    try:
        lattice.add_hopping([-1, 0], 'A', 'A', 't')
    except DuplicateHoppingError as e:
        print(f"Rejected: {e}")

    position = lattice.calc_position([2, 3], 'A')
    print(f"Cell (2, 3) is at {position}, "
          f"lattice coordinates {lattice.translate_coordinates(position)}")
    print(f"Reciprocal vectors:\n{lattice.reciprocal_vectors()}")


if __name__ == '__main__':
    setup_logging("INFO")
    example_graphene()
    example_two_orbital()
