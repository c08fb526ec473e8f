"""
Exceptions
==========

Error taxonomy for the accumulator protocol.

Construction-time failures (key generation, witness generation, decoding)
raise one of the exceptions below. Verification never raises: a ``False``
result is the only failure signal for witnesses and proofs.
"""


class AccumulatorError(Exception):
    """Base exception for all accumulator errors."""

    pass


class EntropyError(AccumulatorError):
    """The secure randomness source is unavailable. Not retried."""

    pass


class NonInvertibleError(AccumulatorError):
    """(x + alpha) is zero modulo the group order, so no inverse exists."""

    pass


class WitnessConstructionError(AccumulatorError):
    """A freshly built witness failed its own consistency check."""

    pass


class ConfigurationError(AccumulatorError):
    """Unknown curve, or objects bound to different pairing backends."""

    pass


class SerializationError(AccumulatorError):
    """Malformed, foreign-curve or non-member encoding."""

    pass
