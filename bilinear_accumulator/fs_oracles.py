"""
Fiat-Shamir Random Oracles
==========================

Challenge derivation for the non-interactive membership proof.

The challenge is

    c = HashToScalar(ser(V) || ser(X) || ser(T1) || ser(T2))

where ser() is the canonical encoding of the backend. Binding V, X, T1 and T2
makes the proof non-malleable: changing any of them changes c and breaks the
response check.
"""

from charm.toolbox.pairinggroup import ZR, G1, G2

from .groups import PairingBackend


def _serialize_for_hash(backend: PairingBackend, *elements) -> bytes:
    """Concatenate canonical encodings of group elements."""
    return b"".join(backend.serialize(elem) for elem in elements)


def membership_challenge(backend: PairingBackend, acc_value: G1, elem_point: G1,
                         t1: G1, t2: G2) -> ZR:
    """
    Random oracle for the membership proof.

    Parameters
    ----------
    backend : PairingBackend
        The pairing backend
    acc_value : G1
        Accumulator value V
    elem_point : G1
        Element point X = g1^x
    t1 : G1
        Commitment W^r
    t2 : G2
        Commitment g2^r

    Returns
    -------
    ZR
        The challenge c in Z_r
    """
    data = _serialize_for_hash(backend, acc_value, elem_point, t1, t2)
    return backend.hash_to_scalar(data)
