"""
Element Encoding
================

An application message is mapped to a pair (x, X) where
x = HashToScalar(message) and X = g1^x.

Two distinct messages that map to the same x are a hash collision, not a
protocol fault.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from charm.toolbox.pairinggroup import ZR, G1

from .groups import PairingBackend, get_backend


@dataclass(frozen=True, eq=False)
class Element:
    """
    Accumulated or candidate datum.

    Attributes
    ----------
    x : ZR
        Message digest in Z_r
    point : G1
        g1^x
    backend : PairingBackend
        Backend the element was encoded for

    Notes
    -----
    The constructor does not enforce point == g1^x; verification uses exactly
    what it is handed. Use is_consistent() to check an untrusted element.
    """

    x: ZR
    point: G1
    backend: PairingBackend = field(compare=False)

    @classmethod
    def from_scalar(cls, x: Union[int, ZR], backend: Optional[PairingBackend] = None) -> "Element":
        backend = backend or get_backend()
        x = backend.scalar(int(x))
        return cls(x=x, point=backend.g1 ** x, backend=backend)

    def is_consistent(self) -> bool:
        """True if point equals g1^x."""
        return self.backend.equal(self.backend.g1 ** self.x, self.point)

    def __eq__(self, other):
        if not isinstance(other, Element) or other.backend.curve != self.backend.curve:
            return NotImplemented
        return (int(self.x) == int(other.x)
                and self.backend.equal(self.point, other.point))

    def __hash__(self):
        return hash((self.backend.curve, int(self.x)))


def encode_element(message: Union[bytes, str], backend: Optional[PairingBackend] = None) -> Element:
    """
    Encode a message as an accumulator element.

    Parameters
    ----------
    message : bytes or str
        Application message. str is encoded as UTF-8.
    backend : PairingBackend, optional
        Defaults to the configured curve.

    Returns
    -------
    Element
        (x, g1^x) with x = SHA-256(message) mod r

    Examples
    --------
    >>> elem = encode_element(b"test_element")
    >>> elem.is_consistent()
    True
    """
    if isinstance(message, str):
        message = message.encode("utf-8")
    backend = backend or get_backend()
    return Element.from_scalar(backend.hash_to_scalar(message), backend)
