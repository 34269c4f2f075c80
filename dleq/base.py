r"""
Messages exchanged in the Chaum-Pedersen protocol, and the computations shared by the prover and
the verifier.

The statement proven is

.. math::
    PK\{ (x): y = g^x \land z = h^x \}

in the order-:math:`q` subgroup of :math:`Z_p^*`. See "Wallet Databases with Observers" by Chaum
and Pedersen, CRYPTO 1992.

All records can be serialized with :py:func:`petlib.pack.encode` and restored with
:py:func:`petlib.pack.decode`.
"""

from hashlib import sha512

import attr
from petlib.bn import Bn
from petlib.pack import encode, decode, register_coders

from dleq.consts import FIAT_SHAMIR_DOMAIN, CHALLENGE_LOWER_BOUND
from dleq.randomness import get_random_source
from dleq.utils import ensure_bn, mod_pow_neg


@attr.s(frozen=True)
class PublicValues:
    """
    Images of the secret under both generators: :math:`y = g^x`, :math:`z = h^x`.
    """

    y = attr.ib(converter=ensure_bn)
    z = attr.ib(converter=ensure_bn)


@attr.s(frozen=True)
class Commitment:
    """
    Images of the nonce under both generators: :math:`a = g^k`, :math:`b = h^k`.
    """

    a = attr.ib(converter=ensure_bn)
    b = attr.ib(converter=ensure_bn)


@attr.s(frozen=True)
class Transcript:
    """
    Interactive proof transcript.
    """

    commitment = attr.ib()
    challenge = attr.ib(converter=ensure_bn)
    response = attr.ib(converter=ensure_bn)


@attr.s(frozen=True)
class NIZK:
    """
    Non-interactive zero-knowledge proof.

    The commitment is not included, as the verifier recomputes it from the challenge and the
    response.
    """

    challenge = attr.ib(converter=ensure_bn)
    response = attr.ib(converter=ensure_bn)


def prehash_statement(params, public_values):
    """
    Start a hash of the proof statement: the group parameters and the public values.

    Returns:
        Hash object to be updated with the commitment.
    """
    prehash = sha512(FIAT_SHAMIR_DOMAIN)
    prehash.update(
        encode([params.p, params.q, params.g, params.h, public_values.y, public_values.z])
    )
    return prehash


def build_fiat_shamir_challenge(params, public_values, commitment, message=""):
    """
    Generate a Fiat-Shamir challenge in :math:`[2, q)`.

    The challenge is a SHA-512 hash of the statement, the commitment and the message, reduced
    into the challenge range.

    >>> from dleq.groups import select_group
    >>> from dleq.consts import PROFILE_1024_160
    >>> params = select_group(PROFILE_1024_160)
    >>> pv = PublicValues(y=params.g, z=params.h)
    >>> c = build_fiat_shamir_challenge(params, pv, Commitment(a=params.g, b=params.h))
    >>> Bn(2) <= c < params.q
    True

    Args:
        params: Group parameters.
        public_values: Statement public values.
        commitment: Prover commitment, either sent or recomputed.
        message (str or bytes): Optional message to make a signature of knowledge.
    """
    prehash = prehash_statement(params, public_values)
    prehash.update(encode([commitment.a, commitment.b]))
    if isinstance(message, str):
        message = message.encode("utf-8")
    prehash.update(message)

    lower = Bn(CHALLENGE_LOWER_BOUND)
    digest = Bn.from_hex(prehash.hexdigest())
    return lower + digest % (params.q - lower)


def recompute_commitment(challenge, response, public_values, params):
    r"""
    Recompute the commitment from the verification identities.

    .. math::
        a = g^r y^{-c}, \quad b = h^r z^{-c}

    Public values must be subgroup elements.
    """
    p = params.p
    a = params.g.mod_pow(response, p).mod_mul(mod_pow_neg(public_values.y, challenge, params), p)
    b = params.h.mod_pow(response, p).mod_mul(mod_pow_neg(public_values.z, challenge, params), p)
    return Commitment(a=a, b=b)


def simulate_transcript(params, public_values, challenge=None, rng=None):
    """
    Produce an accepting transcript without knowing the secret.

    The response is drawn uniformly from :math:`[0, q)`, and the commitment is recomputed from it.
    The output is distributed as an honest transcript for the same challenge, which is what makes
    the protocol honest-verifier zero-knowledge.

    Args:
        params: Group parameters.
        public_values: Public values of the statement.
        challenge: Optional challenge to enforce. Drawn from :math:`[2, q)` otherwise.
        rng: Optional random source.
    """
    rng = get_random_source(rng)
    if challenge is None:
        challenge = rng.randrange(CHALLENGE_LOWER_BOUND, params.q)
    challenge = ensure_bn(challenge)

    response = rng.randrange(0, params.q)
    commitment = recompute_commitment(challenge, response, public_values, params)
    return Transcript(commitment=commitment, challenge=challenge, response=response)


def enc_PublicValues(obj):
    return encode([obj.y, obj.z])


def dec_PublicValues(data):
    y, z = decode(data)
    return PublicValues(y=y, z=z)


def enc_Commitment(obj):
    return encode([obj.a, obj.b])


def dec_Commitment(data):
    a, b = decode(data)
    return Commitment(a=a, b=b)


def enc_Transcript(obj):
    return encode([obj.commitment, obj.challenge, obj.response])


def dec_Transcript(data):
    commitment, challenge, response = decode(data)
    return Transcript(commitment=commitment, challenge=challenge, response=response)


def enc_NIZK(obj):
    return encode([obj.challenge, obj.response])


def dec_NIZK(data):
    challenge, response = decode(data)
    return NIZK(challenge=challenge, response=response)


register_coders(PublicValues, 21, enc_PublicValues, dec_PublicValues)
register_coders(Commitment, 22, enc_Commitment, dec_Commitment)
register_coders(Transcript, 23, enc_Transcript, dec_Transcript)
register_coders(NIZK, 24, enc_NIZK, dec_NIZK)
