"""
Serialization
=============

Portable, JSON-compatible encodings for public artifacts: public keys,
elements, accumulator snapshots, witnesses, proof commitments and proofs.

Group elements are stored as base64 of their canonical encoding. The identity
of G1/G2 has a fixed tag. Every document carries a "type" and a "curve" field,
and decoding checks both, plus group membership of every point.

The secret key has no encoding here; it never leaves the authority.
"""

import base64
import binascii
import json
from typing import Any, Callable, Dict

from charm.toolbox.pairinggroup import ZR, G1, G2, GT

from .accumulator import AccumulatorSnapshot
from .element import Element
from .exceptions import ConfigurationError, SerializationError
from .groups import PairingBackend, get_backend
from .keys import PublicKey
from .proofs import MembershipProof, ProofCommitment
from .witness import MembershipWitness, NonMembershipWitness

IDENTITY_TAGS = {G1: "__IDENTITY_G1__", G2: "__IDENTITY_G2__"}


def serialize_elem(elem, kind, backend: PairingBackend) -> str:
    """Encode a group element or scalar as a base64 string."""
    if kind in IDENTITY_TAGS and elem == backend.identity(kind):
        return IDENTITY_TAGS[kind]
    return base64.b64encode(backend.serialize(elem)).decode("ascii")


def deserialize_elem(data: str, kind, backend: PairingBackend):
    """Decode a base64 string produced by serialize_elem."""
    if not isinstance(data, str):
        raise SerializationError("encoded element must be a string")
    if kind in IDENTITY_TAGS and data == IDENTITY_TAGS[kind]:
        return backend.identity(kind)
    try:
        raw = base64.b64decode(data.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise SerializationError("invalid base64 element encoding") from exc
    return backend.deserialize(raw, kind)


# ----------------------------------------------------------------------
# Artifact encoders
# ----------------------------------------------------------------------

def _public_key_to_dict(pk: PublicKey, b: PairingBackend) -> Dict[str, Any]:
    return {
        "g1": serialize_elem(pk.g1, G1, b),
        "g2": serialize_elem(pk.g2, G2, b),
        "alpha_g2": serialize_elem(pk.alpha_g2, G2, b),
    }


def _public_key_from_dict(d: Dict[str, Any], b: PairingBackend) -> PublicKey:
    return PublicKey(
        g1=deserialize_elem(d["g1"], G1, b),
        g2=deserialize_elem(d["g2"], G2, b),
        alpha_g2=deserialize_elem(d["alpha_g2"], G2, b),
        backend=b,
    )


def _element_to_dict(elem: Element, b: PairingBackend) -> Dict[str, Any]:
    return {"x": serialize_elem(elem.x, ZR, b), "point": serialize_elem(elem.point, G1, b)}


def _element_from_dict(d: Dict[str, Any], b: PairingBackend) -> Element:
    return Element(
        x=deserialize_elem(d["x"], ZR, b),
        point=deserialize_elem(d["point"], G1, b),
        backend=b,
    )


def _snapshot_to_dict(snap: AccumulatorSnapshot, b: PairingBackend) -> Dict[str, Any]:
    return {"value": serialize_elem(snap.value, G1, b), "size": snap.size}


def _snapshot_from_dict(d: Dict[str, Any], b: PairingBackend) -> AccumulatorSnapshot:
    size = d["size"]
    if not isinstance(size, int) or isinstance(size, bool) or size < 0:
        raise SerializationError("snapshot size must be a non-negative integer")
    return AccumulatorSnapshot(value=deserialize_elem(d["value"], G1, b), size=size, backend=b)


def _witness_to_dict(w: MembershipWitness, b: PairingBackend) -> Dict[str, Any]:
    return {"value": serialize_elem(w.value, G1, b)}


def _witness_from_dict(d: Dict[str, Any], b: PairingBackend) -> MembershipWitness:
    return MembershipWitness(value=deserialize_elem(d["value"], G1, b))


def _non_membership_to_dict(w: NonMembershipWitness, b: PairingBackend) -> Dict[str, Any]:
    return {"d": serialize_elem(w.d, G1, b), "v": serialize_elem(w.v, ZR, b)}


def _non_membership_from_dict(d: Dict[str, Any], b: PairingBackend) -> NonMembershipWitness:
    return NonMembershipWitness(
        d=deserialize_elem(d["d"], G1, b),
        v=deserialize_elem(d["v"], ZR, b),
    )


def _commitment_to_dict(c: ProofCommitment, b: PairingBackend) -> Dict[str, Any]:
    return {
        "t1": serialize_elem(c.t1, G1, b),
        "t2": serialize_elem(c.t2, G2, b),
        "t3": serialize_elem(c.t3, GT, b),
    }


def _commitment_from_dict(d: Dict[str, Any], b: PairingBackend) -> ProofCommitment:
    return ProofCommitment(
        t1=deserialize_elem(d["t1"], G1, b),
        t2=deserialize_elem(d["t2"], G2, b),
        t3=deserialize_elem(d["t3"], GT, b),
    )


def _proof_to_dict(p: MembershipProof, b: PairingBackend) -> Dict[str, Any]:
    doc = _commitment_to_dict(p.commitment, b)
    doc["response"] = serialize_elem(p.response, ZR, b)
    return doc


def _proof_from_dict(d: Dict[str, Any], b: PairingBackend) -> MembershipProof:
    return MembershipProof(
        commitment=_commitment_from_dict(d, b),
        response=deserialize_elem(d["response"], ZR, b),
    )


# type tag -> (class, encoder, decoder)
_CODECS: Dict[str, tuple] = {
    "public_key": (PublicKey, _public_key_to_dict, _public_key_from_dict),
    "element": (Element, _element_to_dict, _element_from_dict),
    "snapshot": (AccumulatorSnapshot, _snapshot_to_dict, _snapshot_from_dict),
    "membership_witness": (MembershipWitness, _witness_to_dict, _witness_from_dict),
    "non_membership_witness": (NonMembershipWitness, _non_membership_to_dict, _non_membership_from_dict),
    "proof_commitment": (ProofCommitment, _commitment_to_dict, _commitment_from_dict),
    "membership_proof": (MembershipProof, _proof_to_dict, _proof_from_dict),
}


def to_dict(obj, backend: PairingBackend = None) -> Dict[str, Any]:
    """
    Encode a public artifact as a JSON-compatible dict.

    Parameters
    ----------
    obj : PublicKey, Element, AccumulatorSnapshot, MembershipWitness,
          NonMembershipWitness, ProofCommitment or MembershipProof
    backend : PairingBackend, optional
        Needed for witnesses and proofs, which do not carry a backend.
        Objects that carry one use their own.

    Raises
    ------
    SerializationError
        If the object type has no encoding (e.g. SecretKey).
    """
    for type_tag, (cls, encode, _) in _CODECS.items():
        if isinstance(obj, cls):
            b = getattr(obj, "backend", None) or backend or get_backend()
            doc = {"type": type_tag, "curve": b.curve}
            doc.update(encode(obj, b))
            return doc
    raise SerializationError(f"no portable encoding for {type(obj).__name__}")


def from_dict(doc: Dict[str, Any], expected_type: str = None):
    """
    Decode a dict produced by to_dict.

    Raises
    ------
    SerializationError
        On unknown type, type mismatch, unsupported curve, missing field or
        invalid element encoding.
    """
    if not isinstance(doc, dict):
        raise SerializationError("encoded artifact must be a dict")

    type_tag = doc.get("type")
    if not isinstance(type_tag, str) or type_tag not in _CODECS:
        raise SerializationError(f"unknown artifact type {type_tag!r}")
    if expected_type is not None and type_tag != expected_type:
        raise SerializationError(f"expected {expected_type!r}, got {type_tag!r}")

    curve = doc.get("curve")
    if not isinstance(curve, str):
        raise SerializationError("artifact has no curve")
    try:
        backend = get_backend(curve)
    except ConfigurationError as exc:
        raise SerializationError(f"unsupported curve {curve!r}") from exc

    decode: Callable = _CODECS[type_tag][2]
    try:
        return decode(doc, backend)
    except KeyError as exc:
        raise SerializationError(f"missing field {exc.args[0]!r} in {type_tag}") from exc


def dumps(obj, backend: PairingBackend = None) -> str:
    """Encode a public artifact as a JSON string."""
    return json.dumps(to_dict(obj, backend), sort_keys=True)


def loads(data: str, expected_type: str = None):
    """Decode a JSON string produced by dumps."""
    try:
        doc = json.loads(data)
    except (TypeError, ValueError) as exc:
        raise SerializationError("artifact is not valid JSON") from exc
    return from_dict(doc, expected_type)
