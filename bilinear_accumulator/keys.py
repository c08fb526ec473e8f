"""
Key Material
============

The accumulator authority holds a secret trapdoor alpha in Z_r. Its public
commitment g2^alpha, together with the fixed generators g1 and g2, forms the
public key shared with all verifiers.

Security Notes:
---------------
- alpha must never be derivable from any public artifact
- SecretKey is never serialized and its repr does not show alpha
- Keys are immutable after creation
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from charm.toolbox.pairinggroup import ZR, G1, G2

from .groups import PairingBackend, get_backend

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PublicKey:
    """
    Public parameters (g1, g2, g2^alpha).

    Attributes
    ----------
    g1 : G1
        Fixed generator of G1
    g2 : G2
        Fixed generator of G2
    alpha_g2 : G2
        Commitment g2^alpha to the trapdoor
    backend : PairingBackend
        The pairing backend all three points belong to
    """

    g1: G1
    g2: G2
    alpha_g2: G2
    backend: PairingBackend = field(compare=False)

    def matches(self, secret_key: "SecretKey") -> bool:
        """True if alpha_g2 is g2 raised to the given secret key."""
        if secret_key.backend.curve != self.backend.curve:
            return False
        return self.backend.equal(self.g2 ** secret_key.alpha, self.alpha_g2)

    def __eq__(self, other):
        if not isinstance(other, PublicKey) or other.backend.curve != self.backend.curve:
            return NotImplemented
        eq = self.backend.equal
        return (eq(self.g1, other.g1) and eq(self.g2, other.g2)
                and eq(self.alpha_g2, other.alpha_g2))

    def __hash__(self):
        return hash((self.backend.curve, self.backend.serialize(self.alpha_g2)))


@dataclass(frozen=True, eq=False)
class SecretKey:
    """Trapdoor alpha. Held exclusively by the accumulator authority."""

    alpha: ZR
    backend: PairingBackend = field(compare=False)

    def __repr__(self):
        return f"SecretKey(curve={self.backend.curve!r}, alpha=<hidden>)"

    def public_key(self) -> PublicKey:
        """Derive (g1, g2, g2^alpha)."""
        b = self.backend
        return PublicKey(g1=b.g1, g2=b.g2, alpha_g2=b.g2 ** self.alpha, backend=b)

    @classmethod
    def from_int(cls, alpha: int, backend: Optional[PairingBackend] = None) -> "SecretKey":
        """Build a secret key from a known integer (tests, fixed vectors)."""
        backend = backend or get_backend()
        return cls(alpha=backend.scalar(alpha), backend=backend)


def generate_key_pair(backend: Optional[PairingBackend] = None) -> Tuple[SecretKey, PublicKey]:
    """
    Generate a fresh (SecretKey, PublicKey) pair.

    alpha is drawn uniformly from [0, r) with the backend's secure source.

    Parameters
    ----------
    backend : PairingBackend, optional
        Defaults to the configured curve.

    Returns
    -------
    sk : SecretKey
        The trapdoor, to be kept by the authority
    pk : PublicKey
        (g1, g2, g2^alpha), shared with verifiers

    Raises
    ------
    EntropyError
        If secure randomness is unavailable.
    """
    backend = backend or get_backend()
    sk = SecretKey(alpha=backend.random_scalar(), backend=backend)
    pk = sk.public_key()
    logger.debug("generated %s key pair", backend.curve)
    return sk, pk
