import pytest

from petlib.bn import Bn

from dleq.base import Commitment, PublicValues
from dleq.exceptions import (
    InvalidSecret,
    InvalidNonce,
    InvalidChallenge,
    NonceReuseError,
    ProtocolStateError,
)
from dleq.prover import (
    DLEQProver,
    Nonce,
    create_public_values,
    create_commitment,
    create_response,
)
from dleq.verifier import create_challenge, verify


def test_public_values_small_group(small_group):
    # 4^3 = 18, 9^3 = 16 (mod 23)
    assert create_public_values(3, small_group) == PublicValues(y=18, z=16)


def test_public_values_accept_bn(small_group):
    assert create_public_values(Bn(3), small_group) == create_public_values(3, small_group)


def test_public_values_zero_secret(group):
    pv = create_public_values(0, group)
    assert pv.y == Bn(1)
    assert pv.z == Bn(1)


def test_public_values_big_secret(group):
    x = int(group.q) - 1
    pv = create_public_values(x, group)
    assert pv.y == group.g.mod_pow(group.q - Bn(1), group.p)
    assert pv.z == group.h.mod_pow(group.q - Bn(1), group.p)


@pytest.mark.parametrize("x", [-1, 11, 12, "3", 3.0, None])
def test_public_values_invalid_secret(small_group, x):
    with pytest.raises(InvalidSecret):
        create_public_values(x, small_group)


def test_commitment_small_group(small_group, sequence_rng):
    rng = sequence_rng([5])
    nonce, commitment = create_commitment(small_group, rng=rng)
    # 4^5 = 12, 9^5 = 8 (mod 23)
    assert commitment == Commitment(a=12, b=8)
    assert rng.calls == [(2, 11)]
    assert nonce.consume() == Bn(5)


def test_nonce_range(small_group):
    seen = set()
    for _ in range(300):
        nonce, _ = create_commitment(small_group)
        k = int(nonce.consume())
        assert 2 <= k < 11
        seen.add(k)
    assert seen == set(range(2, 11))


def test_nonce_freshness(group):
    x = group.q.random()
    public_values = create_public_values(x, group)

    nonce1, commitment1 = create_commitment(group)
    nonce2, commitment2 = create_commitment(group)
    assert commitment1 != commitment2

    for nonce, commitment in [(nonce1, commitment1), (nonce2, commitment2)]:
        challenge = create_challenge(group)
        response = create_response(nonce, x, challenge, group)
        assert verify(challenge, response, commitment, public_values, group)


def test_response_small_group(small_group):
    # (5 + 7 * 3) mod 11 = 4
    assert create_response(5, 3, 7, small_group) == Bn(4)


@pytest.mark.parametrize("challenge", [0, 1, 11, 12, -1])
def test_response_rejects_challenge(small_group, challenge):
    with pytest.raises(InvalidChallenge):
        create_response(5, 3, challenge, small_group)


def test_response_challenge_range_bounds(group):
    x = group.q.random()
    q = int(group.q)

    for challenge in [0, 1, q]:
        with pytest.raises(InvalidChallenge):
            create_response(Nonce(2), x, challenge, group)

    for challenge in [2, q - 1]:
        nonce, _ = create_commitment(group)
        create_response(nonce, x, challenge, group)


def test_response_rejects_secret(small_group):
    with pytest.raises(InvalidSecret):
        create_response(5, 11, 7, small_group)


@pytest.mark.parametrize("k", [0, 1, 11, "5"])
def test_response_rejects_raw_nonce(small_group, k):
    with pytest.raises(InvalidNonce):
        create_response(k, 3, 7, small_group)


def test_nonce_is_single_use(small_group):
    nonce, _ = create_commitment(small_group)
    create_response(nonce, 3, 7, small_group)
    assert nonce.consumed
    with pytest.raises(NonceReuseError):
        create_response(nonce, 3, 8, small_group)


def test_invalid_challenge_keeps_nonce(small_group):
    nonce, _ = create_commitment(small_group)
    with pytest.raises(InvalidChallenge):
        create_response(nonce, 3, 1, small_group)
    assert not nonce.consumed
    create_response(nonce, 3, 2, small_group)


def test_nonce_repr_hides_value():
    nonce = Nonce(123456789)
    assert "123456789" not in repr(nonce)


def test_nonce_reuse_leaks_secret(group):
    """Two responses with one nonce give away the secret, hence the single-use Nonce."""
    x = group.q.random()
    k = int(create_commitment(group)[0].consume())
    q = int(group.q)
    c1, c2 = 5, 9

    r1 = int(create_response(k, x, c1, group))
    r2 = int(create_response(k, x, c2, group))
    recovered = (r1 - r2) * pow(c1 - c2, -1, q) % q
    assert recovered == int(x)


def test_prover_session(group):
    x = group.q.random()
    prover = DLEQProver(group)
    commitment = prover.commit()
    assert prover.commitment is commitment

    challenge = create_challenge(group)
    response = prover.compute_response(x, challenge)
    assert verify(challenge, response, commitment, create_public_values(x, group), group)


def test_prover_session_commits_once(small_group):
    prover = DLEQProver(small_group)
    prover.commit()
    with pytest.raises(ProtocolStateError):
        prover.commit()


def test_prover_session_responds_after_commit(small_group):
    prover = DLEQProver(small_group)
    with pytest.raises(ProtocolStateError):
        prover.compute_response(3, 7)


def test_prover_session_responds_once(small_group):
    prover = DLEQProver(small_group)
    prover.commit()
    prover.compute_response(3, 7)
    with pytest.raises(ProtocolStateError):
        prover.compute_response(3, 8)


def test_prover_session_uses_injected_rng(small_group, sequence_rng):
    prover = DLEQProver(small_group, rng=sequence_rng([5]))
    assert prover.commit() == Commitment(a=12, b=8)
    assert prover.compute_response(3, 7) == Bn(4)
