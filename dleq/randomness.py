"""
Sources of uniformly random integers.

Protocol operations that need randomness take an optional ``rng`` argument. Anything that
implements :py:class:`RandomSource` can be passed, which allows substituting deterministic sources
in tests. When ``rng`` is ``None``, :py:data:`DEFAULT_RANDOM_SOURCE` is used.
"""

import abc

from dleq.utils import ensure_bn


class RandomSource(metaclass=abc.ABCMeta):
    """
    Abstract interface for producing uniformly random integers in a half-open range.
    """

    @abc.abstractmethod
    def randrange(self, lower, upper):
        """
        Draw a uniformly random integer from ``[lower, upper)``.

        Returns:
            petlib.bn.Bn: The random value.
        """
        pass


class SecureRandomSource(RandomSource):
    """
    Random source backed by the OpenSSL CSPRNG through :py:meth:`petlib.bn.Bn.random`.

    Holds no state, so a single instance can be shared between threads. Failures of the
    underlying generator propagate to the caller.

    >>> from petlib.bn import Bn
    >>> x = SecureRandomSource().randrange(2, 11)
    >>> Bn(2) <= x < Bn(11)
    True
    """

    def randrange(self, lower, upper):
        lower, upper = ensure_bn(lower), ensure_bn(upper)
        if upper <= lower:
            raise ValueError("Empty range [{}, {})".format(lower, upper))
        return lower + (upper - lower).random()


DEFAULT_RANDOM_SOURCE = SecureRandomSource()


def get_random_source(rng=None):
    if rng is None:
        return DEFAULT_RANDOM_SOURCE
    return rng
