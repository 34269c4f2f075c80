import pytest

from petlib.bn import Bn

from dleq.randomness import (
    RandomSource,
    SecureRandomSource,
    DEFAULT_RANDOM_SOURCE,
    get_random_source,
)
from dleq.prover import create_commitment, prove_nizk
from dleq.verifier import create_challenge


class FailingRandomSource(RandomSource):
    def randrange(self, lower, upper):
        raise RuntimeError("entropy source unavailable")


def test_random_source_is_abstract():
    with pytest.raises(TypeError):
        RandomSource()


def test_secure_random_source_range():
    rng = SecureRandomSource()
    for _ in range(100):
        x = rng.randrange(2, 5)
        assert isinstance(x, Bn)
        assert Bn(2) <= x < Bn(5)


def test_secure_random_source_big_range(group):
    x = SecureRandomSource().randrange(2, group.q)
    assert Bn(2) <= x < group.q


def test_secure_random_source_singleton_range():
    assert SecureRandomSource().randrange(7, 8) == Bn(7)


@pytest.mark.parametrize("lower,upper", [(5, 5), (6, 5)])
def test_secure_random_source_empty_range(lower, upper):
    with pytest.raises(ValueError):
        SecureRandomSource().randrange(lower, upper)


def test_default_random_source():
    assert get_random_source() is DEFAULT_RANDOM_SOURCE
    rng = FailingRandomSource()
    assert get_random_source(rng) is rng


def test_randomness_failures_propagate(small_group):
    rng = FailingRandomSource()
    with pytest.raises(RuntimeError):
        create_commitment(small_group, rng=rng)
    with pytest.raises(RuntimeError):
        create_challenge(small_group, rng=rng)
    with pytest.raises(RuntimeError):
        prove_nizk(3, small_group, rng=rng)
