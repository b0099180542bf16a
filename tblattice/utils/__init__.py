"""
Utilities: numeric constants and logging setup.
"""

from .constants import (
    SUBLATTICE_ID_MAX,
    HOPPING_ID_MAX,
    OFFSET_LIMIT,
    ANONYMOUS_PREFIX,
)
from .logging import setup_logging, LOGGER_NAME

__all__ = [
    'SUBLATTICE_ID_MAX',
    'HOPPING_ID_MAX',
    'OFFSET_LIMIT',
    'ANONYMOUS_PREFIX',
    'setup_logging',
    'LOGGER_NAME',
]
