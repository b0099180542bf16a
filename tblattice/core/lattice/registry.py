"""
Dense identity allocation for named lattice entities.

Sublattices and hopping families are referred to by name in user code and by
small integer ids in the Hamiltonian. Ids are handed out in registration order
(0, 1, 2, ...) and are never reused or renumbered.
"""

import logging
from typing import Dict, Iterator

from ..errors import InvalidArgumentError, ConflictError, CapacityExceededError, NotFoundError

logger = logging.getLogger(__name__)


class IdentityRegistry:
    """
    Name → id map with dense, insertion-ordered ids.

    Registration is split in two steps so that callers can finish validating
    an entry before anything is stored: :meth:`register` only computes the
    next id, :meth:`bind` records it.

    Parameters
    ----------
    kind : str
        Entity label used in error messages ('Sublattice', 'Hopping')
    max_id : int
        Largest representable id. Registration fails once the registry
        already holds more than ``max_id`` entries.
    """

    def __init__(self, kind: str, max_id: int):
        if max_id < 0:
            raise ValueError("max_id must be non-negative")

        self.kind = kind
        self.max_id = max_id
        self._ids: Dict[str, int] = {}
        self._names = []

    def register(self, name: str) -> int:
        """
        Validate ``name`` and return the id it would receive.

        Raises
        ------
        InvalidArgumentError
            If the name is blank
        CapacityExceededError
            If the id space is exhausted
        ConflictError
            If the name is already registered
        """
        if not name:
            raise InvalidArgumentError(f"{self.kind} name can't be blank")

        if len(self._ids) > self.max_id:
            raise CapacityExceededError(
                f"Exceeded maximum number of unique {self.kind.lower()}s: {self.max_id}"
            )

        if name in self._ids:
            raise ConflictError(f"{self.kind} '{name}' already exists")

        return len(self._ids)

    def bind(self, name: str, unique_id: int) -> None:
        """Record an id previously returned by :meth:`register`."""
        if unique_id != len(self._ids) or name in self._ids:
            raise ValueError(f"Stale registration for {self.kind.lower()} '{name}'")

        self._ids[name] = unique_id
        self._names.append(name)
        logger.debug("Registered %s '%s' with id %d", self.kind.lower(), name, unique_id)

    def id_of(self, name: str) -> int:
        try:
            return self._ids[name]
        except KeyError:
            raise NotFoundError(f"There is no {self.kind.lower()} named '{name}'") from None

    def name_of(self, unique_id: int) -> str:
        if not 0 <= unique_id < len(self._names):
            raise NotFoundError(f"There is no {self.kind.lower()} with ID = {unique_id}")
        return self._names[unique_id]

    def as_dict(self) -> Dict[str, int]:
        return dict(self._ids)

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)
