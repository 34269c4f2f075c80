"""
Prover side of the Chaum-Pedersen protocol.

The module-level functions are pure: the secret is passed in as an argument every time and never
stored. :py:class:`DLEQProver` wraps them in a single-use session that enforces the order of the
protocol steps.
"""


from dleq.base import Commitment, PublicValues, NIZK, build_fiat_shamir_challenge
from dleq.consts import NONCE_LOWER_BOUND, CHALLENGE_LOWER_BOUND
from dleq.exceptions import (
    InvalidSecret,
    InvalidNonce,
    InvalidChallenge,
    NonceReuseError,
    ProtocolStateError,
)
from dleq.randomness import get_random_source
from dleq.utils import ensure_bn, in_range


class Nonce:
    """
    Single-use wrapper around the commitment randomness :math:`k`.

    The value can be read exactly once through :py:meth:`consume`. Responding twice with the
    same nonce to different challenges reveals the secret.
    """

    def __init__(self, value):
        self._value = ensure_bn(value)

    @property
    def consumed(self):
        return self._value is None

    def consume(self):
        if self._value is None:
            raise NonceReuseError("Nonce was already used for a response")
        value, self._value = self._value, None
        return value

    def __repr__(self):
        return "Nonce(consumed={})".format(self.consumed)


def _check_secret(x, params):
    try:
        x = ensure_bn(x)
    except TypeError as e:
        raise InvalidSecret(str(e)) from e
    if not in_range(x, 0, params.q):
        raise InvalidSecret("Secret must be in the range [0, q)")
    return x


def _check_challenge(challenge, params):
    try:
        challenge = ensure_bn(challenge)
    except TypeError as e:
        raise InvalidChallenge(str(e)) from e
    if not in_range(challenge, CHALLENGE_LOWER_BOUND, params.q):
        raise InvalidChallenge("Challenge must be in the range [2, q-1]")
    return challenge


def create_public_values(x, params):
    """
    Compute the public values :math:`y = g^x \\bmod p` and :math:`z = h^x \\bmod p`.

    Raises:
        InvalidSecret: If ``x`` is not in :math:`[0, q)`.
    """
    x = _check_secret(x, params)
    return PublicValues(y=params.g.mod_pow(x, params.p), z=params.h.mod_pow(x, params.p))


def create_commitment(params, rng=None):
    """
    Draw a fresh nonce :math:`k` from :math:`[2, q)` and commit to it.

    Returns:
        tuple: (:py:class:`Nonce`, :py:class:`dleq.base.Commitment`). The nonce has to be passed to
        :py:func:`create_response` and must not be used for anything else.
    """
    k = get_random_source(rng).randrange(NONCE_LOWER_BOUND, params.q)
    commitment = Commitment(a=params.g.mod_pow(k, params.p), b=params.h.mod_pow(k, params.p))
    return Nonce(k), commitment


def create_response(nonce, x, challenge, params):
    """
    Compute the response :math:`r = (k + c x) \\bmod q`.

    Args:
        nonce: :py:class:`Nonce` returned by :py:func:`create_commitment`, which gets consumed, or
            a raw integer :math:`k`.
        x: The secret.
        challenge: Verifier challenge, in :math:`[2, q)`.
        params: Group parameters.

    Raises:
        InvalidChallenge: If the challenge is outside of :math:`[2, q)`.
        InvalidSecret: If the secret is outside of :math:`[0, q)`.
        InvalidNonce: If a raw nonce is outside of :math:`[2, q)`.
        NonceReuseError: If the :py:class:`Nonce` was already consumed.
    """
    challenge = _check_challenge(challenge, params)
    x = _check_secret(x, params)

    if isinstance(nonce, Nonce):
        k = nonce.consume()
    else:
        try:
            k = ensure_bn(nonce)
        except TypeError as e:
            raise InvalidNonce(str(e)) from e
    if not in_range(k, NONCE_LOWER_BOUND, params.q):
        raise InvalidNonce("Nonce must be in the range [2, q)")

    q = params.q
    return k.mod_add(challenge.mod_mul(x, q), q)


def prove_nizk(x, params, message="", rng=None):
    """
    Construct a non-interactive proof using the Fiat-Shamir heuristic.

    The challenge is a hash of the group parameters, the public values, the commitment and the
    message.

    Args:
        x: The secret.
        params: Group parameters.
        message (str or bytes): Optional message to make a signature of knowledge.
        rng: Optional random source for the nonce.

    Returns:
        :py:class:`dleq.base.NIZK`
    """
    public_values = create_public_values(x, params)
    nonce, commitment = create_commitment(params, rng)
    challenge = build_fiat_shamir_challenge(params, public_values, commitment, message=message)
    response = create_response(nonce, x, challenge, params)
    return NIZK(challenge=challenge, response=response)


class DLEQProver:
    """
    Prover for one interactive proof instance.

    The instance produces exactly one commitment and one response. The secret is only passed to
    :py:meth:`compute_response`.

    Args:
        params: Group parameters.
        rng: Optional random source for the nonce.
    """

    def __init__(self, params, rng=None):
        self.params = params
        self.rng = rng
        self.commitment = None
        self._nonce = None

    def commit(self):
        """
        Construct the commitment.

        Raises:
            ProtocolStateError: If this prover has already committed.
        """
        if self.commitment is not None:
            raise ProtocolStateError("Prover has already committed")
        self._nonce, self.commitment = create_commitment(self.params, self.rng)
        return self.commitment

    def compute_response(self, x, challenge):
        """
        Compute the response to the verifier challenge.

        Raises:
            ProtocolStateError: If called before :py:meth:`commit` or more than once.
        """
        if self._nonce is None:
            raise ProtocolStateError("Prover has not committed yet")
        if self._nonce.consumed:
            raise ProtocolStateError("Prover has already responded")
        return create_response(self._nonce, x, challenge, self.params)
