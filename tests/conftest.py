import pytest

from petlib.bn import Bn

from dleq.consts import PROFILE_1024_160, PROFILE_2048_224, PROFILE_2048_256
from dleq.groups import GroupParameters, select_group
from dleq.randomness import RandomSource


class SequenceRandomSource(RandomSource):
    """Deterministic random source that replays a fixed list of values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randrange(self, lower, upper):
        value = Bn.from_decimal(str(self.values.pop(0)))
        self.calls.append((int(lower), int(upper)))
        assert Bn.from_decimal(str(int(lower))) <= value < upper
        return value


@pytest.fixture(params=[PROFILE_1024_160, PROFILE_2048_224, PROFILE_2048_256])
def group(request):
    return select_group(request.param)


@pytest.fixture
def smallest_group():
    return select_group(PROFILE_1024_160)


@pytest.fixture
def small_group():
    """Toy group: the squares modulo 23, of order 11."""
    return GroupParameters(p=23, q=11, g=4, h=9)


@pytest.fixture
def sequence_rng():
    return SequenceRandomSource
