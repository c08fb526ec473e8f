"""
Property-based tests using Hypothesis.

For any message m, on a fresh accumulator:
- Add(m) then GenerateWitness(m) gives W = g1, and the witness verifies
- a non-membership witness verifies for its own element and no other
- a proof verifies, and bumping its response by one breaks it
"""

from hypothesis import HealthCheck, given, settings, strategies as st

from bilinear_accumulator import (
    Accumulator,
    encode_element,
    generate_non_membership_witness,
    generate_witness,
)

# Pairings are slow; the backend and key fixtures are reused across examples
PAIRING_SETTINGS = settings(
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)


class TestAccumulatorProperties:

    @PAIRING_SETTINGS
    @given(message=st.binary(max_size=64))
    def test_single_add_round_trip(self, backend, keys, message):
        sk, pk = keys
        acc = Accumulator(backend)
        elem = encode_element(message, backend)

        acc.add(sk, elem)
        witness = generate_witness(acc, sk, elem)

        assert backend.equal(witness.value, backend.g1)
        assert witness.verify(acc, elem, pk)

    @PAIRING_SETTINGS
    @given(member=st.binary(max_size=64), outsider=st.binary(max_size=64))
    def test_non_membership_binds_its_element(self, backend, keys, member, outsider):
        sk, pk = keys
        acc = Accumulator(backend)
        acc.add(sk, encode_element(member, backend))

        elem = encode_element(outsider, backend)
        other = encode_element(outsider + b"\x00", backend)
        witness = generate_non_membership_witness(acc, sk, elem)

        assert witness.verify(acc, elem, pk)
        assert not witness.verify(acc, other, pk)

    @PAIRING_SETTINGS
    @given(message=st.binary(max_size=64))
    def test_bumped_response_fails(self, backend, keys, message):
        sk, pk = keys
        acc = Accumulator(backend)
        elem = encode_element(message, backend)
        acc.add(sk, elem)

        proof = generate_witness(acc, sk, elem).zk_proof(acc, elem, pk)
        bumped = proof.with_response(backend.scalar(int(proof.response) + 1))

        assert proof.verify(acc, elem, pk)
        assert not bumped.verify(acc, elem, pk)
