"""
Accumulator Authority and Verifier
==================================

Role objects wiring the protocol together.

AccumulatorAuthority:
---------------------
- Holds the trapdoor alpha and the mutable accumulator
- The only party able to add elements and issue witnesses
- Publishes the public key and point-in-time snapshots

Verifier:
---------
- Holds only the public key
- Checks witnesses and proofs against an explicit snapshot

Security Model:
---------------
- The authority is trusted to update the accumulator correctly
- The secret key never leaves the authority
"""

import logging
from typing import Optional, Union

from .accumulator import Accumulator, AccumulatorSnapshot
from .element import Element, encode_element
from .groups import PairingBackend, get_backend
from .keys import PublicKey, SecretKey, generate_key_pair
from .proofs import MembershipProof
from .witness import (
    MembershipWitness,
    NonMembershipWitness,
    generate_non_membership_witness,
    generate_witness,
)

logger = logging.getLogger(__name__)

Message = Union[bytes, str, Element]


class AccumulatorAuthority:
    """
    Owner of the secret key and the accumulator.

    Parameters
    ----------
    backend : PairingBackend, optional
        Defaults to the configured curve.
    secret_key : SecretKey, optional
        Existing trapdoor. A fresh one is generated if omitted.
    """

    def __init__(self, backend: Optional[PairingBackend] = None,
                 secret_key: Optional[SecretKey] = None):
        if secret_key is not None:
            backend = backend or secret_key.backend
            self._sk = secret_key
            self._pk = secret_key.public_key()
        else:
            backend = backend or get_backend()
            self._sk, self._pk = generate_key_pair(backend)

        self.backend = backend
        self.accumulator = Accumulator(backend)

    @property
    def public_key(self) -> PublicKey:
        return self._pk

    def element(self, message: Message) -> Element:
        if isinstance(message, Element):
            return message
        return encode_element(message, self.backend)

    def snapshot(self) -> AccumulatorSnapshot:
        return self.accumulator.snapshot()

    def add(self, message: Message) -> AccumulatorSnapshot:
        """Add an element and return the snapshot right after it."""
        self.accumulator.add(self._sk, self.element(message))
        return self.accumulator.snapshot()

    def issue_witness(self, message: Message,
                      snapshot: Optional[AccumulatorSnapshot] = None) -> MembershipWitness:
        """Membership witness against a snapshot (current value by default)."""
        snapshot = snapshot or self.snapshot()
        return generate_witness(snapshot, self._sk, self.element(message))

    def issue_non_membership_witness(self, message: Message,
                                     snapshot: Optional[AccumulatorSnapshot] = None) -> NonMembershipWitness:
        snapshot = snapshot or self.snapshot()
        return generate_non_membership_witness(snapshot, self._sk, self.element(message))


class Verifier:
    """Checks artifacts with public data only."""

    def __init__(self, public_key: PublicKey):
        self.public_key = public_key
        self.backend = public_key.backend

    def element(self, message: Message) -> Element:
        if isinstance(message, Element):
            return message
        return encode_element(message, self.backend)

    def _encode_for_check(self, message: Message) -> Optional[Element]:
        try:
            return self.element(message)
        except Exception as exc:
            logger.debug("cannot encode message for verification: %s", exc)
            return None

    def verify_membership(self, snapshot, message: Message, witness: MembershipWitness) -> bool:
        elem = self._encode_for_check(message)
        if elem is None:
            return False
        return witness.verify(snapshot, elem, self.public_key)

    def verify_non_membership(self, snapshot, message: Message, witness: NonMembershipWitness) -> bool:
        elem = self._encode_for_check(message)
        if elem is None:
            return False
        return witness.verify(snapshot, elem, self.public_key)

    def verify_proof(self, snapshot, message: Message, proof: MembershipProof) -> bool:
        """
        Check a zero-knowledge membership proof.

        Returns False rather than raising on any failure.
        """
        elem = self._encode_for_check(message)
        if elem is None:
            return False
        result = proof.verify(snapshot, elem, self.public_key)
        if not result:
            logger.debug("membership proof did not verify")
        return result
