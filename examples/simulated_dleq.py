"""
A transcript that verifies can be produced without the secret, given the challenge in advance.
This is why the interactive protocol is only convincing when the challenge is drawn after the
commitment is received.
"""

from dleq import select_group, create_public_values, simulate_transcript
from dleq.verifier import verify_transcript
from dleq.consts import PROFILE_1024_160

params = select_group(PROFILE_1024_160)
public_values = create_public_values(params.q.random(), params)

transcript = simulate_transcript(params, public_values)
assert verify_transcript(transcript, public_values, params)
