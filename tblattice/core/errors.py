"""
Error taxonomy for lattice construction.

Every error carries a ``kind`` so callers can branch on the category without
matching class names:

- INVALID_ARGUMENT: blank names, bad onsite operators, size mismatches,
  zero-displacement self hoppings, out-of-range offsets
- CONFLICT: duplicate names, duplicate (or conjugate) hopping edges
- NOT_FOUND: lookups by unknown name or id
- CAPACITY_EXCEEDED: identity space exhausted

The classes also derive from the matching builtin (ValueError, LookupError,
OverflowError) so plain ``except ValueError`` keeps working.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    INVALID_ARGUMENT = "invalid_argument"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    CAPACITY_EXCEEDED = "capacity_exceeded"


class LatticeError(Exception):
    """Base class for all lattice construction errors."""
    kind: Optional[ErrorKind] = None


class InvalidArgumentError(LatticeError, ValueError):
    kind = ErrorKind.INVALID_ARGUMENT


class InvalidOnsiteError(InvalidArgumentError):
    """
    Onsite energy operator failed validation.

    Attributes
    ----------
    rule : str
        Which rule failed: 'square', 'real_diagonal' or 'hermitian'
    """

    def __init__(self, rule: str, message: str):
        super().__init__(message)
        self.rule = rule


class HoppingSizeMismatchError(InvalidArgumentError):
    """Hopping matrix shape does not match the orbital counts of its endpoints."""

    def __init__(self, from_name: str, from_size: int, to_name: str, to_size: int,
                 family_name: str, rows: int, cols: int):
        super().__init__(
            f"Hopping size mismatch: from '{from_name}' ({from_size}) to "
            f"'{to_name}' ({to_size}) with matrix '{family_name}' ({rows}, {cols})"
        )
        self.from_size = from_size
        self.to_size = to_size
        self.shape = (rows, cols)


class ConflictError(LatticeError, ValueError):
    kind = ErrorKind.CONFLICT


class DuplicateHoppingError(ConflictError):
    pass


class NotFoundError(LatticeError, LookupError):
    kind = ErrorKind.NOT_FOUND


class CapacityExceededError(LatticeError, OverflowError):
    kind = ErrorKind.CAPACITY_EXCEEDED
