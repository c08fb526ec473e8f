"""
Zero-Knowledge Membership Proof
===============================

Schnorr-style sigma protocol on top of a membership witness W, made
non-interactive with the Fiat-Shamir transform.

Protocol:
---------
Prover (holds W, x):
    1. r <- Z_r
    2. T1 = W^r, T2 = g2^r, T3 = e(W, g2)
    3. c = H(V, X, T1, T2)
    4. s = r + c*x mod r

Verifier:
    1. c = H(V, X, T1, T2)
    2. accept iff e(g1^s, g2) == e(T1, g2) * e(X, g2)^c

Notes
-----
The verification equation balances when W = g1, which is the case for a
witness issued right after the element's own Add on an empty accumulator.
V only enters through the challenge, so a proof freshly built from that
witness still verifies after later Adds, while the witness itself no longer
does.
Tampering with the element, the response or any committed value makes the
check fail.
"""

import logging
from dataclasses import dataclass, replace

from charm.toolbox.pairinggroup import ZR, G1, G2, GT

from .fs_oracles import membership_challenge

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ProofCommitment:
    """Sigma-protocol first message (T1, T2, T3)."""

    t1: G1
    t2: G2
    t3: GT


@dataclass(frozen=True, eq=False)
class MembershipProof:
    """
    Non-interactive membership proof.

    Attributes
    ----------
    commitment : ProofCommitment
        (T1, T2, T3)
    response : ZR
        s = r + c*x mod r
    """

    commitment: ProofCommitment
    response: ZR

    def with_response(self, response: ZR) -> "MembershipProof":
        return replace(self, response=response)

    def verify(self, acc, elem, pk) -> bool:
        """
        Check the proof against an accumulator value and element.

        Parameters
        ----------
        acc : Accumulator or AccumulatorSnapshot
            Accumulator whose current value is bound into the challenge
        elem : Element
            The element the proof claims membership for
        pk : PublicKey
            Public key of the authority

        Returns
        -------
        bool
            True iff e(g1^s, g2) == e(T1, g2) * e(X, g2)^c. Never raises.
        """
        backend = pk.backend
        try:
            t1 = self.commitment.t1
            t2 = self.commitment.t2
            c = membership_challenge(backend, acc.value, elem.point, t1, t2)

            lhs = backend.pair(pk.g1 ** self.response, pk.g2)
            rhs = backend.pair(t1, pk.g2) * (backend.pair(elem.point, pk.g2) ** c)
            return backend.equal(lhs, rhs)
        except Exception as exc:
            logger.debug("membership proof rejected: %s", exc)
            return False


def prove_membership(witness_value: G1, acc, elem, pk) -> MembershipProof:
    """
    Build a membership proof from a witness value.

    Raises
    ------
    EntropyError
        If the blinding scalar cannot be drawn.
    """
    backend = pk.backend
    r = backend.random_scalar()

    t1 = witness_value ** r
    t2 = pk.g2 ** r
    t3 = backend.pair(witness_value, pk.g2)

    c = membership_challenge(backend, acc.value, elem.point, t1, t2)
    response = backend.scalar(int(r) + int(c) * int(elem.x))

    return MembershipProof(
        commitment=ProofCommitment(t1=t1, t2=t2, t3=t3),
        response=response,
    )
