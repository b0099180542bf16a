"""
Numeric limits and tolerances shared by the lattice builder.
"""

import numpy as np

# Identity widths: sublattice and hopping ids are stored as signed 8-bit ints
# by the Hamiltonian assembly stage.
SUBLATTICE_ID_DTYPE = np.int8
HOPPING_ID_DTYPE = np.int8

SUBLATTICE_ID_MAX = int(np.iinfo(SUBLATTICE_ID_DTYPE).max)  # 127
HOPPING_ID_MAX = int(np.iinfo(HOPPING_ID_DTYPE).max)        # 127

# Largest allowed |lattice coordinate| of the origin offset:
# half a primitive vector plus a small margin.
OFFSET_LIMIT = 0.55

# Round-off allowed on top of OFFSET_LIMIT after the least-squares solve,
# so an offset of exactly 0.55 along a skewed basis is still accepted.
OFFSET_ROUNDING = 1e-12

# Name prefix for hopping families created from a bare energy value
ANONYMOUS_PREFIX = "__anonymous__"

