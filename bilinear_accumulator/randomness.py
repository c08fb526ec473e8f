"""
Randomness Source
=================

Cryptographically secure scalar sampling for key generation, non-membership
witness randomisation and proof commitments.

The source wraps the operating system CSPRNG. It re-initialises after a
``fork()`` so that parent and child never share RNG state, and it is guarded
by a lock so one instance can be shared between threads.
"""

import logging
import os
import secrets
import threading

from .exceptions import EntropyError

logger = logging.getLogger(__name__)


class RandomnessSource:
    """
    Fork-safe, thread-safe uniform sampler over ``[0, max_value)``.

    Examples
    --------
    >>> rng = RandomnessSource()
    >>> k = rng.randbelow(2**255)
    """

    def __init__(self):
        self._pid = os.getpid()
        self._rng = secrets.SystemRandom()
        self._lock = threading.Lock()

    def _reseed_after_fork(self):
        if os.getpid() != self._pid:
            self._pid = os.getpid()
            self._rng = secrets.SystemRandom()

    def randbelow(self, max_value: int) -> int:
        """
        Draw a uniform integer in ``[0, max_value)``.

        Raises
        ------
        ValueError
            If ``max_value`` is not positive.
        EntropyError
            If the operating system randomness source fails.
        """
        if max_value <= 0:
            raise ValueError(f"max_value must be positive, got {max_value}")

        with self._lock:
            self._reseed_after_fork()
            try:
                return self._rng.randrange(0, max_value)
            except (OSError, NotImplementedError) as exc:
                logger.error("secure randomness source failed: %s", exc)
                raise EntropyError("secure randomness unavailable") from exc


# Shared default source
default_source = RandomnessSource()
