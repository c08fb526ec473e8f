"""Randomness source tests."""

import pytest

from bilinear_accumulator import EntropyError
from bilinear_accumulator.randomness import RandomnessSource


class _Broken:
    def randrange(self, *args):
        raise NotImplementedError("no system randomness")


def test_values_in_range():
    rng = RandomnessSource()
    assert all(0 <= rng.randbelow(7) < 7 for _ in range(50))


def test_rejects_non_positive_bound():
    with pytest.raises(ValueError):
        RandomnessSource().randbelow(0)


def test_failure_raises_entropy_error():
    rng = RandomnessSource()
    rng._rng = _Broken()
    with pytest.raises(EntropyError):
        rng.randbelow(100)


def test_reinitialises_after_fork():
    rng = RandomnessSource()
    rng._rng = _Broken()
    rng._pid = -1  # pretend we are in a forked child
    assert 0 <= rng.randbelow(100) < 100
