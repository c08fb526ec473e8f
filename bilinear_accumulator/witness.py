"""
Membership and Non-Membership Witnesses
=======================================

Membership:
-----------
    W = V^{1/(x + alpha)}
    verify: e(W, g2^alpha) * e(X, g2) == e(V, g2)

Non-membership:
---------------
    v <- Z_r
    D = (V * (g1^v)^{-1})^{1/(y + alpha)}
    verify: e(V, g2) == e(g1^v, g2) * e(D, g2^alpha * g2^y)

Both witnesses are computed by the authority (they need alpha) and verified
with the public key only. Verification is always against an explicit
accumulator value; a witness built for an older value fails.

Limitations:
------------
- The membership identity is only guaranteed by construction when
  V = g1^{x + alpha}, i.e. right after the element's own Add on an empty
  accumulator.
- Because v is free and D is solved from it, a valid (D, v) exists for any y
  with y + alpha invertible, members included. A non-membership witness shows
  knowledge of (D, v) consistent with y and V, not that y was never added.
"""

import logging
from dataclasses import dataclass

from charm.toolbox.pairinggroup import ZR, G1

from .element import Element
from .exceptions import NonInvertibleError, WitnessConstructionError
from .groups import require_same_backend
from .keys import PublicKey, SecretKey
from .proofs import MembershipProof, prove_membership

logger = logging.getLogger(__name__)


def _inverse_of_shifted(sk: SecretKey, elem: Element):
    """Return (s, s^-1) for s = x + alpha mod r."""
    backend = sk.backend
    s = backend.scalar(int(elem.x) + int(sk.alpha))
    s_inv = backend.inverse(s)
    if s_inv is None:
        raise NonInvertibleError("x + alpha is zero modulo the group order")
    return s, s_inv


@dataclass(frozen=True, eq=False)
class MembershipWitness:
    """Proof that an element was incorporated: W in G1."""

    value: G1

    def verify(self, acc, elem: Element, pk: PublicKey) -> bool:
        """
        Check e(W, g2^alpha) * e(X, g2) == e(V, g2) for the given V.

        Returns False on any mismatch, including a stale accumulator value.
        Never raises.
        """
        backend = pk.backend
        try:
            lhs = backend.pair(self.value, pk.alpha_g2) * backend.pair(elem.point, pk.g2)
            rhs = backend.pair(acc.value, pk.g2)
            return backend.equal(lhs, rhs)
        except Exception as exc:
            logger.debug("membership witness rejected: %s", exc)
            return False

    def zk_proof(self, acc, elem: Element, pk: PublicKey) -> MembershipProof:
        """
        Escalate the witness into a zero-knowledge membership proof.

        Raises
        ------
        EntropyError
            If the blinding scalar cannot be drawn.
        """
        return prove_membership(self.value, acc, elem, pk)


@dataclass(frozen=True, eq=False)
class NonMembershipWitness:
    """
    Proof artifact for an element outside the accumulator.

    Attributes
    ----------
    d : G1
        Helper point D
    v : ZR
        Helper scalar v
    """

    d: G1
    v: ZR

    def verify(self, acc, elem: Element, pk: PublicKey) -> bool:
        """Check e(V, g2) == e(g1^v, g2) * e(D, g2^alpha * g2^y). Never raises."""
        backend = pk.backend
        try:
            alpha_plus_y = pk.alpha_g2 * (pk.g2 ** elem.x)
            lhs = backend.pair(acc.value, pk.g2)
            rhs = backend.pair(pk.g1 ** self.v, pk.g2) * backend.pair(self.d, alpha_plus_y)
            return backend.equal(lhs, rhs)
        except Exception as exc:
            logger.debug("non-membership witness rejected: %s", exc)
            return False


def generate_witness(acc, sk: SecretKey, elem: Element) -> MembershipWitness:
    """
    Compute W = V^{1/(x + alpha)}.

    Parameters
    ----------
    acc : Accumulator or AccumulatorSnapshot
        The accumulator value the witness is tied to
    sk : SecretKey
        The trapdoor alpha
    elem : Element
        The element (x, X)

    Returns
    -------
    MembershipWitness

    Raises
    ------
    NonInvertibleError
        If x + alpha = 0 mod r.
    ConfigurationError
        If the inputs belong to different backends.
    """
    require_same_backend(acc.backend, sk.backend, elem.backend)
    _, s_inv = _inverse_of_shifted(sk, elem)

    witness = MembershipWitness(value=acc.value ** s_inv)
    logger.debug("issued membership witness")
    return witness


def generate_non_membership_witness(acc, sk: SecretKey, elem: Element) -> NonMembershipWitness:
    """
    Compute (D, v) with V = g1^v * D^{y + alpha}.

    Parameters
    ----------
    acc : Accumulator or AccumulatorSnapshot
        The accumulator value the witness is tied to
    sk : SecretKey
        The trapdoor alpha
    elem : Element
        The element y

    Returns
    -------
    NonMembershipWitness

    Raises
    ------
    NonInvertibleError
        If y + alpha = 0 mod r.
    EntropyError
        If v cannot be drawn.
    WitnessConstructionError
        If g1^v * D^{y + alpha} does not reproduce V.
    """
    backend = require_same_backend(acc.backend, sk.backend, elem.backend)
    s, s_inv = _inverse_of_shifted(sk, elem)

    v = backend.random_scalar()
    g1_v = backend.g1 ** v

    # D = (V / g1^v)^{1/s}
    d = (acc.value / g1_v) ** s_inv

    if not backend.equal(g1_v * (d ** s), acc.value):
        logger.error("non-membership witness failed its consistency check")
        raise WitnessConstructionError("g1^v * D^(y + alpha) does not equal V")

    logger.debug("issued non-membership witness")
    return NonMembershipWitness(d=d, v=v)
