__version__ = "0.1.0"
__title__ = "dleq"
__author__ = "Wouter Lueks, Bogdan Kulynych"
__email__ = "wouter.lueks@epfl.ch"
__license__ = "MIT"
__description__ = "Chaum-Pedersen proofs of equality of discrete logarithms over RFC 5114 groups."
__copyright__ = "2020, Wouter Lueks, Bogdan Kulynych (EPFL SPRING Lab)"


from dleq.groups import GroupParameters, select_group
from dleq.base import PublicValues, Commitment, Transcript, NIZK, simulate_transcript
from dleq.prover import (
    DLEQProver,
    Nonce,
    create_public_values,
    create_commitment,
    create_response,
    prove_nizk,
)
from dleq.verifier import (
    DLEQVerifier,
    ProofState,
    create_challenge,
    verify,
    verify_transcript,
    verify_nizk,
)
