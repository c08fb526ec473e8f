"""
Pairing-Based Accumulator
=========================

A constant-size summary V in G1 of every element added so far.

Key Concepts:
-------------
- V starts at g1 (the empty accumulator)
- Add(sk, (x, X)) replaces V with X * V^alpha
- Only the holder of alpha can extend V; there is no deletion

Concurrency:
------------
Add both reads and writes V, so it runs under a lock. Witness generation and
verification should be given an AccumulatorSnapshot taken once, so that the
value used to build an artifact and the value used to check it are the same.

Notes
-----
The recurrence X * V^alpha coincides with g1^{prod(x_i + alpha)} only while a
single element has been added. Membership witnesses and proofs are therefore
only guaranteed to verify in that case.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from charm.toolbox.pairinggroup import G1

from .element import Element
from .groups import PairingBackend, get_backend, require_same_backend
from .keys import SecretKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class AccumulatorSnapshot:
    """Immutable point-in-time accumulator value."""

    value: G1
    size: int
    backend: PairingBackend = field(compare=False)

    def __eq__(self, other):
        if not isinstance(other, AccumulatorSnapshot) or other.backend.curve != self.backend.curve:
            return NotImplemented
        return self.size == other.size and self.backend.equal(self.value, other.value)

    def __hash__(self):
        return hash((self.backend.curve, self.size, self.backend.serialize(self.value)))


class Accumulator:
    """
    Mutable accumulator state owned by the authority.

    Parameters
    ----------
    backend : PairingBackend, optional
        Defaults to the configured curve.
    """

    def __init__(self, backend: Optional[PairingBackend] = None):
        self.backend = backend or get_backend()
        self._value = self.backend.g1
        self._size = 0
        self._lock = threading.Lock()

    def __repr__(self):
        return f"Accumulator(curve={self.backend.curve!r}, size={self._size})"

    @property
    def value(self) -> G1:
        return self._value

    @property
    def size(self) -> int:
        """Number of Add operations applied."""
        return self._size

    def add(self, sk: SecretKey, element: Element) -> G1:
        """
        Fold an element into the accumulator: V := X * V^alpha.

        Parameters
        ----------
        sk : SecretKey
            The trapdoor alpha
        element : Element
            The element (x, X) to add

        Returns
        -------
        G1
            The new accumulator value

        Raises
        ------
        ConfigurationError
            If sk or element belong to another backend.
        """
        require_same_backend(self.backend, sk.backend, element.backend)

        with self._lock:
            self._value = element.point * (self._value ** sk.alpha)
            self._size += 1
            new_value = self._value

        logger.debug("accumulator now holds %d element(s)", self._size)
        return new_value

    def snapshot(self) -> AccumulatorSnapshot:
        """Capture a consistent (value, size) pair."""
        with self._lock:
            return AccumulatorSnapshot(value=self._value, size=self._size, backend=self.backend)
