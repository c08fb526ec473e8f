"""
End-to-end tests through the authority and verifier roles.

Workflow:
1. Authority adds "test_element" and issues a membership witness
2. Verifier checks witness and ZK proof against the published snapshot
3. Non-member gets a non-membership witness
4. Adding the non-member invalidates earlier artifacts
"""

import pytest

from bilinear_accumulator import AccumulatorAuthority, SecretKey, Verifier


class TestAuthorityFlow:

    @pytest.fixture
    def roles(self, backend):
        authority = AccumulatorAuthority(backend)
        verifier = Verifier(authority.public_key)
        return authority, verifier

    def test_membership_flow(self, roles):
        authority, verifier = roles
        snapshot = authority.add(b"test_element")
        witness = authority.issue_witness(b"test_element", snapshot)

        assert verifier.verify_membership(snapshot, b"test_element", witness)
        assert not verifier.verify_membership(snapshot, b"non_member_element", witness)

    def test_proof_flow(self, roles):
        authority, verifier = roles
        snapshot = authority.add("test_element")
        witness = authority.issue_witness("test_element", snapshot)
        elem = verifier.element("test_element")

        proof = witness.zk_proof(snapshot, elem, verifier.public_key)

        assert verifier.verify_proof(snapshot, elem, proof)
        assert not verifier.verify_proof(snapshot, b"other", proof)

    def test_non_membership_flow(self, roles):
        authority, verifier = roles
        snapshot = authority.add(b"test_element")
        nmw = authority.issue_non_membership_witness(b"non_member_element", snapshot)

        assert verifier.verify_non_membership(snapshot, b"non_member_element", nmw)
        assert not verifier.verify_non_membership(snapshot, b"test_element", nmw)

        after = authority.add(b"non_member_element")
        assert not verifier.verify_non_membership(after, b"non_member_element", nmw)

    def test_snapshots_track_adds(self, roles):
        authority, _ = roles
        assert authority.snapshot().size == 0
        authority.add(b"a")
        authority.add(b"b")
        assert authority.snapshot().size == 2

    def test_default_snapshot_is_current(self, roles):
        authority, verifier = roles
        authority.add(b"test_element")
        witness = authority.issue_witness(b"test_element")
        assert verifier.verify_membership(authority.snapshot(), b"test_element", witness)

    def test_authority_from_existing_key(self, backend):
        sk = SecretKey.from_int(0xBEEF, backend)
        authority = AccumulatorAuthority(secret_key=sk)
        assert authority.backend is backend
        assert authority.public_key.matches(sk)

    def test_verifier_has_no_trapdoor(self, roles):
        _, verifier = roles
        assert not hasattr(verifier, "_sk")
        assert not hasattr(verifier, "secret_key")

    def test_verifier_rejects_unencodable_message(self, roles):
        authority, verifier = roles
        snapshot = authority.add(b"test_element")
        witness = authority.issue_witness(b"test_element", snapshot)
        nmw = authority.issue_non_membership_witness(b"non_member_element", snapshot)
        proof = witness.zk_proof(snapshot, verifier.element(b"test_element"), verifier.public_key)

        assert verifier.verify_membership(snapshot, 123, witness) is False
        assert verifier.verify_non_membership(snapshot, 123, nmw) is False
        assert verifier.verify_proof(snapshot, 123, proof) is False
