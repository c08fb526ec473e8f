"""
Accumulator state tests.

Covers initialisation, the Add recurrence V' = X * V^alpha, snapshots,
backend mismatches and serialized concurrent adds.
"""

import threading

import pytest

from bilinear_accumulator import (
    Accumulator,
    ConfigurationError,
    SecretKey,
    encode_element,
    get_backend,
)


class TestAccumulator:

    def test_starts_at_g1(self, backend):
        acc = Accumulator(backend)
        assert backend.equal(acc.value, backend.g1)
        assert acc.size == 0

    def test_single_add_gives_g1_to_x_plus_alpha(self, backend):
        """Concrete scenario: empty accumulator + one element = g1^(x + alpha)."""
        sk = SecretKey.from_int(0x5EC12E7, backend)
        elem = encode_element(b"test_element", backend)
        acc = Accumulator(backend)

        acc.add(sk, elem)

        expected = backend.g1 ** backend.scalar(int(elem.x) + int(sk.alpha))
        assert backend.equal(acc.value, expected)
        assert acc.size == 1

    def test_second_add_follows_recurrence(self, setup_system):
        """V2 = Y * V1^alpha = g1^(y + alpha*(x + alpha))"""
        s = setup_system
        backend, sk, acc = s['backend'], s['sk'], s['acc']
        x, y, alpha = int(s['elem'].x), int(s['nonelem'].x), int(sk.alpha)

        acc.add(sk, s['elem'])
        acc.add(sk, s['nonelem'])

        expected = backend.g1 ** backend.scalar(y + alpha * (x + alpha))
        assert backend.equal(acc.value, expected)
        assert backend.is_member(acc.value)
        assert acc.size == 2

    def test_add_is_deterministic(self, setup_system):
        s = setup_system
        other = Accumulator(s['backend'])
        s['acc'].add(s['sk'], s['elem'])
        other.add(s['sk'], s['elem'])
        assert s['backend'].equal(s['acc'].value, other.value)

    def test_snapshot_is_detached(self, setup_system):
        s = setup_system
        acc = s['acc']
        acc.add(s['sk'], s['elem'])
        snap = acc.snapshot()

        acc.add(s['sk'], s['nonelem'])

        assert snap.size == 1
        assert not s['backend'].equal(snap.value, acc.value)
        assert acc.snapshot() != snap
        assert acc.snapshot() == acc.snapshot()

    def test_rejects_foreign_backend(self):
        bn = get_backend("BN254")
        mnt = get_backend("MNT224")
        acc = Accumulator(bn)
        with pytest.raises(ConfigurationError):
            acc.add(SecretKey.from_int(5, mnt), encode_element(b"m", bn))
        with pytest.raises(ConfigurationError):
            acc.add(SecretKey.from_int(5, bn), encode_element(b"m", mnt))
        assert acc.size == 0

    def test_concurrent_adds_are_not_lost(self, backend):
        sk = SecretKey.from_int(31337, backend)
        acc = Accumulator(backend)
        elems = [encode_element(f"device-{i}", backend) for i in range(8)]

        threads = [threading.Thread(target=acc.add, args=(sk, e)) for e in elems]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert acc.size == len(elems)
        assert backend.is_member(acc.value)
