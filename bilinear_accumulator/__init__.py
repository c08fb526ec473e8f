"""
Bilinear Accumulator
====================

A pairing-based cryptographic accumulator with membership witnesses,
non-membership witnesses and a zero-knowledge membership proof, built on
charm-crypto asymmetric pairing groups.

Modules:
--------
- groups: Pairing backends (BN254, MNT224) and hash-to-scalar
- keys: Secret trapdoor and public key
- accumulator: Accumulator state and the Add rule
- element: Message encoding
- witness: Membership and non-membership witnesses
- proofs: Zero-knowledge membership proof
- fs_oracles: Fiat-Shamir challenge
- authority: Authority and verifier roles
- serialization: Portable encodings of public artifacts

Usage:
------
    from bilinear_accumulator import AccumulatorAuthority, Verifier

    authority = AccumulatorAuthority()
    snapshot = authority.add(b"test_element")
    witness = authority.issue_witness(b"test_element", snapshot)

    verifier = Verifier(authority.public_key)
    assert verifier.verify_membership(snapshot, b"test_element", witness)
"""

import logging

from .config import config
from .exceptions import (
    AccumulatorError,
    ConfigurationError,
    EntropyError,
    NonInvertibleError,
    SerializationError,
    WitnessConstructionError,
)
from .groups import BN254Backend, MNT224Backend, PairingBackend, get_backend
from .keys import PublicKey, SecretKey, generate_key_pair
from .element import Element, encode_element
from .accumulator import Accumulator, AccumulatorSnapshot
from .proofs import MembershipProof, ProofCommitment
from .witness import (
    MembershipWitness,
    NonMembershipWitness,
    generate_non_membership_witness,
    generate_witness,
)
from .authority import AccumulatorAuthority, Verifier

__version__ = "0.1.0"

_package_logger = logging.getLogger(__name__)
_package_logger.addHandler(logging.NullHandler())
_package_logger.setLevel(config.numeric_log_level)

__all__ = [
    'AccumulatorError', 'ConfigurationError', 'EntropyError', 'NonInvertibleError',
    'SerializationError', 'WitnessConstructionError',
    'BN254Backend', 'MNT224Backend', 'PairingBackend', 'get_backend',
    'PublicKey', 'SecretKey', 'generate_key_pair',
    'Element', 'encode_element',
    'Accumulator', 'AccumulatorSnapshot',
    'MembershipProof', 'ProofCommitment',
    'MembershipWitness', 'NonMembershipWitness',
    'generate_witness', 'generate_non_membership_witness',
    'AccumulatorAuthority', 'Verifier',
]
