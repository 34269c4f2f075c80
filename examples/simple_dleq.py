"""
Interactive proof of equality of two discrete logarithms:
PK{ (x): y = g^x & z = h^x }
"""

from dleq import select_group, create_public_values, DLEQProver, DLEQVerifier
from dleq.consts import PROFILE_1024_160

params = select_group(PROFILE_1024_160)

# The secret exponent. In practice it should be a random value in [0, q).
x = 2

# Public values, known to both parties.
public_values = create_public_values(x, params)

# Simulate the prover and the verifier interacting.
prover = DLEQProver(params)
verifier = DLEQVerifier(params, public_values)

commitment = prover.commit()
challenge = verifier.send_challenge(commitment)
response = prover.compute_response(x, challenge)
assert verifier.verify(response)
