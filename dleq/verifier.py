"""
Verifier side of the Chaum-Pedersen protocol.

A failed verification is an expected outcome: :py:func:`verify` and :py:func:`verify_nizk` return
``False`` for any proof that does not check out, including malformed values, and never raise.
"""

import enum


from dleq.base import Transcript, recompute_commitment, build_fiat_shamir_challenge
from dleq.consts import CHALLENGE_LOWER_BOUND
from dleq.exceptions import ProtocolStateError
from dleq.randomness import get_random_source
from dleq.utils import ensure_bn, in_range, is_subgroup_element


class ProofState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    COMMITMENT_PUBLISHED = "commitment-published"
    CHALLENGE_ISSUED = "challenge-issued"
    RESPONSE_PUBLISHED = "response-published"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


def create_challenge(params, rng=None):
    """
    Draw a challenge uniformly from :math:`[2, q)`.

    The challenge must be drawn after the commitment is received.
    """
    return get_random_source(rng).randrange(CHALLENGE_LOWER_BOUND, params.q)


def _statement_elements_valid(public_values, commitment, params):
    elements = (public_values.y, public_values.z, commitment.a, commitment.b)
    return all(is_subgroup_element(elem, params) for elem in elements)


def verify(challenge, response, commitment, public_values, params):
    r"""
    Check the verification identities

    .. math::
        g^r = a y^c \bmod p, \quad h^r = b z^c \bmod p

    with the same challenge and response in both.

    Values are also required to be canonical: the challenge in :math:`[2, q)`, the response in
    :math:`[0, q)`, and the public values and commitment elements in the order-:math:`q` subgroup.

    Returns:
        bool: True if the proof is accepted, False otherwise.
    """
    try:
        challenge, response = ensure_bn(challenge), ensure_bn(response)
        if not in_range(challenge, CHALLENGE_LOWER_BOUND, params.q):
            return False
        if not in_range(response, 0, params.q):
            return False
        if not _statement_elements_valid(public_values, commitment, params):
            return False
    except (TypeError, AttributeError):
        return False

    p = params.p
    lhs_g = params.g.mod_pow(response, p)
    rhs_g = commitment.a.mod_mul(public_values.y.mod_pow(challenge, p), p)
    lhs_h = params.h.mod_pow(response, p)
    rhs_h = commitment.b.mod_mul(public_values.z.mod_pow(challenge, p), p)
    return lhs_g == rhs_g and lhs_h == rhs_h


def verify_transcript(transcript, public_values, params):
    """
    Verify a bundled interactive transcript.
    """
    return verify(
        transcript.challenge,
        transcript.response,
        transcript.commitment,
        public_values,
        params,
    )


def verify_nizk(nizk, public_values, params, message=""):
    """
    Verify a non-interactive proof.

    Recomputes the commitment from the challenge and the response, rebuilds the Fiat-Shamir
    challenge from it, and compares with the challenge in the proof.

    Args:
        nizk (:py:class:`dleq.base.NIZK`): Non-interactive proof.
        public_values: Public values of the statement.
        params: Group parameters.
        message: The message, if the proof is a signature of knowledge.

    Returns:
        bool: True if verification succeeded, False otherwise.
    """
    try:
        challenge, response = ensure_bn(nizk.challenge), ensure_bn(nizk.response)
        if not in_range(challenge, CHALLENGE_LOWER_BOUND, params.q):
            return False
        if not in_range(response, 0, params.q):
            return False
        if not (
            is_subgroup_element(public_values.y, params)
            and is_subgroup_element(public_values.z, params)
        ):
            return False
    except (TypeError, AttributeError):
        return False

    commitment_prime = recompute_commitment(challenge, response, public_values, params)
    challenge_prime = build_fiat_shamir_challenge(
        params, public_values, commitment_prime, message=message
    )
    return challenge == challenge_prime


class DLEQVerifier:
    """
    Verifier for one interactive proof instance.

    Walks through ``UNINITIALIZED -> COMMITMENT_PUBLISHED -> CHALLENGE_ISSUED ->
    RESPONSE_PUBLISHED -> ACCEPTED | REJECTED``. Each step can be taken once, so a commitment is
    paired with exactly one challenge and one response.

    Args:
        params: Group parameters.
        public_values: Public values the prover claims to know the exponent of.
        rng: Optional random source for the challenge.
    """

    def __init__(self, params, public_values, rng=None):
        self.params = params
        self.public_values = public_values
        self.rng = rng
        self.state = ProofState.UNINITIALIZED
        self.commitment = None
        self.challenge = None
        self.response = None

    def _expect(self, state):
        if self.state != state:
            raise ProtocolStateError(
                "Expected state {}, verifier is in state {}".format(state.name, self.state.name)
            )

    def send_challenge(self, commitment):
        """
        Store the received commitment and generate a challenge.

        Raises:
            ProtocolStateError: If a commitment has already been received.
        """
        self._expect(ProofState.UNINITIALIZED)
        self.commitment = commitment
        self.state = ProofState.COMMITMENT_PUBLISHED

        self.challenge = create_challenge(self.params, self.rng)
        self.state = ProofState.CHALLENGE_ISSUED
        return self.challenge

    def verify(self, response):
        """
        Verify the response against the stored commitment and challenge.

        Raises:
            ProtocolStateError: If no challenge is pending.

        Returns:
            bool: True if verification succeeded, False otherwise.
        """
        self._expect(ProofState.CHALLENGE_ISSUED)
        self.response = response
        self.state = ProofState.RESPONSE_PUBLISHED

        accepted = verify(
            self.challenge, response, self.commitment, self.public_values, self.params
        )
        self.state = ProofState.ACCEPTED if accepted else ProofState.REJECTED
        return accepted

    @property
    def transcript(self):
        """Transcript of the finished proof, or None."""
        if self.state not in (ProofState.ACCEPTED, ProofState.REJECTED):
            return None
        return Transcript(
            commitment=self.commitment, challenge=self.challenge, response=self.response
        )
