"""
Common exception classes.
"""


class DLEQError(Exception):
    """Base class for all errors raised by this package."""


class InvalidParameters(DLEQError):
    """Group parameters do not describe a prime-order subgroup with two generators."""


class UnknownProfile(DLEQError):
    """The catalog has no group for the requested profile."""


class InvalidSecret(DLEQError):
    """Secret exponent is outside of [0, q)."""


class InvalidNonce(DLEQError):
    """Nonce is outside of [2, q)."""


class InvalidChallenge(DLEQError):
    """Challenge is outside of [2, q)."""


class NonceReuseError(DLEQError):
    """A nonce has already been used for a response."""


class ProtocolStateError(DLEQError):
    """A protocol step was invoked out of order or more than once."""
