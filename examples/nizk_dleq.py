"""
Non-interactive proof of equality of two discrete logarithms, bound to a message:
PK{ (x): y = g^x & z = h^x }
"""

from petlib.pack import encode, decode

from dleq import select_group, create_public_values, prove_nizk, verify_nizk
from dleq.consts import PROFILE_2048_224

params = select_group(PROFILE_2048_224)

x = params.q.random()
public_values = create_public_values(x, params)

nizk = prove_nizk(x, params, message="vote #17")

# The proof can be shipped in any encoding; petlib's msgpack packer is one option.
received = decode(encode(nizk))
assert verify_nizk(received, public_values, params, message="vote #17")
assert not verify_nizk(received, public_values, params, message="vote #18")
