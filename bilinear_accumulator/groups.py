"""
Pairing Backends
================

This module wraps a charm-crypto pairing group behind a single capability
interface used by every protocol module (keys, accumulator, witnesses, proofs).

Capability Interface:
---------------------
- order: the prime order r shared by G1, G2 and GT
- g1, g2: fixed generators of G1 and G2
- scalar / random_scalar / hash_to_scalar: elements of Z_r
- pair: the bilinear map e: G1 x G2 -> GT
- serialize / deserialize: canonical byte encodings
- equal: equality decided by canonical encodings

Two concrete backends are provided:
- BN254Backend: Barreto-Naehrig curve (default)
- MNT224Backend: Miyaji-Nakabayashi-Takano curve

The protocol is written once against PairingBackend, so every artifact built
on one backend verifies identically on a second instance of the same backend.

According to charm-crypto documentation:
- Group operations use * for multiplication, ** for exponentiation
- Pairing is computed as pair(g1_elem, g2_elem)
- group.serialize() produces a compressed, deterministic encoding
"""

import hashlib
import logging
import threading
from typing import Dict, Optional

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, G2, GT, pair

from .config import config
from .exceptions import ConfigurationError, SerializationError
from .randomness import RandomnessSource, default_source

logger = logging.getLogger(__name__)

# Domain tags for the fixed generators
G1_GENERATOR_TAG = b"bilinear-accumulator:g1"
G2_GENERATOR_TAG = b"bilinear-accumulator:g2"

KIND_NAMES = {ZR: "ZR", G1: "G1", G2: "G2", GT: "GT"}


class PairingBackend:
    """
    Bilinear group triple (G1, G2, GT) of prime order r.

    Subclasses only pick the curve; all arithmetic is shared.

    Parameters
    ----------
    rng : RandomnessSource, optional
        Source for random scalars. Defaults to the shared process source.
    """

    CURVE: str = ""

    def __init__(self, rng: Optional[RandomnessSource] = None):
        if not self.CURVE:
            raise ConfigurationError("PairingBackend requires a concrete curve")

        self.curve = self.CURVE
        self.group = PairingGroup(self.CURVE)
        self.order = int(self.group.order())
        self.rng = rng or default_source

        # Fixed generators, identical for every participant on this curve
        self.g1 = self.group.hash(G1_GENERATOR_TAG, G1)
        self.g2 = self.group.hash(G2_GENERATOR_TAG, G2)

        logger.debug("initialised %s backend (order has %d bits)",
                     self.curve, self.order.bit_length())

    def __repr__(self):
        return f"{type(self).__name__}(curve={self.curve!r})"

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def scalar(self, value: int) -> ZR:
        """Reduce an integer modulo r and lift it into Z_r."""
        return self.group.init(ZR, int(value) % self.order)

    def random_scalar(self) -> ZR:
        """
        Draw a uniform scalar in [0, r).

        Raises
        ------
        EntropyError
            If the secure randomness source is unavailable.
        """
        return self.scalar(self.rng.randbelow(self.order))

    def hash_to_scalar(self, data: bytes) -> ZR:
        """
        Map a byte string to Z_r as SHA-256(data) mod r.

        The digest is read big-endian. This is the only hash-to-scalar used by
        the protocol, so element encodings and Fiat-Shamir challenges agree
        across implementations.
        """
        if not isinstance(data, bytes):
            raise TypeError(f"data must be bytes, got {type(data).__name__}")
        digest = hashlib.sha256(data).digest()
        return self.scalar(int.from_bytes(digest, "big"))

    def inverse(self, value: ZR) -> Optional[ZR]:
        """Modular inverse of a scalar, or None if it is zero mod r."""
        v = int(value) % self.order
        if v == 0:
            return None
        return self.scalar(pow(v, -1, self.order))

    # ------------------------------------------------------------------
    # Group elements
    # ------------------------------------------------------------------

    def identity(self, kind) -> object:
        """Identity element of G1 or G2."""
        if kind == G1:
            return self.g1 ** self.scalar(0)
        if kind == G2:
            return self.g2 ** self.scalar(0)
        raise ValueError(f"identity is only defined here for G1 and G2, got {kind}")

    def pair(self, p, q) -> GT:
        """Bilinear map e(p, q) with p in G1 and q in G2."""
        return pair(p, q)

    def is_member(self, elem) -> bool:
        return bool(self.group.ismember(elem))

    # ------------------------------------------------------------------
    # Canonical encodings
    # ------------------------------------------------------------------

    def serialize(self, elem) -> bytes:
        """
        Canonical byte encoding of a group element or scalar.

        Equal elements always produce identical bytes, so the output can be
        hashed into challenges and compared for equality.
        """
        return self.group.serialize(elem)

    def deserialize(self, data: bytes, kind):
        """
        Decode canonical bytes into an element of the expected kind.

        Raises
        ------
        SerializationError
            If the bytes are malformed, of another kind, or not a group member.

        Notes
        -----
        Membership is checked for G1 and G2 points only. GT values (T3) are
        carried for the record and never enter a verification equation.
        """
        if not isinstance(data, bytes):
            raise SerializationError("encoded element must be bytes")

        prefix = data.split(b":", 1)[0]
        if prefix != str(kind).encode():
            raise SerializationError(
                f"expected {KIND_NAMES.get(kind, kind)} encoding, got prefix {prefix!r}"
            )

        try:
            elem = self.group.deserialize(data)
        except Exception as exc:
            raise SerializationError(f"cannot decode {KIND_NAMES.get(kind, kind)} element") from exc

        if elem is None or (kind in (G1, G2) and not self.is_member(elem)):
            raise SerializationError(f"decoded value is not a member of {KIND_NAMES.get(kind, kind)}")
        return elem

    def equal(self, a, b) -> bool:
        """Equality by canonical encoding, never by object identity."""
        return self.serialize(a) == self.serialize(b)


class BN254Backend(PairingBackend):
    """Barreto-Naehrig 254-bit curve."""

    CURVE = "BN254"


class MNT224Backend(PairingBackend):
    """Miyaji-Nakabayashi-Takano 224-bit curve."""

    CURVE = "MNT224"


BACKENDS = {
    BN254Backend.CURVE: BN254Backend,
    MNT224Backend.CURVE: MNT224Backend,
}

_instances: Dict[str, PairingBackend] = {}
_instances_lock = threading.Lock()


def get_backend(curve: Optional[str] = None) -> PairingBackend:
    """
    Return the shared backend instance for a curve name.

    Parameters
    ----------
    curve : str, optional
        'BN254' or 'MNT224'. Defaults to ``config.curve``.

    Raises
    ------
    ConfigurationError
        If the curve is not supported.
    """
    name = (curve or config.curve).upper()
    if name not in BACKENDS:
        raise ConfigurationError(
            f"unsupported curve {name!r}; choose one of {sorted(BACKENDS)}"
        )

    with _instances_lock:
        backend = _instances.get(name)
        if backend is None:
            backend = BACKENDS[name]()
            _instances[name] = backend
    return backend


def require_same_backend(*backends: PairingBackend) -> PairingBackend:
    """Check that all objects share one curve and return that backend."""
    first = backends[0]
    for other in backends[1:]:
        if other.curve != first.curve:
            raise ConfigurationError(
                f"objects bound to different curves: {first.curve} and {other.curve}"
            )
    return first
