"""
Protocol-wide constants.
"""

# Catalog selectors. The names follow the modulus / subgroup-order bit lengths of the RFC 5114
# groups they select.
PROFILE_1024_160 = "1024_160"
PROFILE_2048_224 = "2048_224"
PROFILE_2048_256 = "2048_256"

DEFAULT_PROFILE = PROFILE_2048_256

# Nonces and challenges are drawn from the half-open range [LOWER_BOUND, q).
NONCE_LOWER_BOUND = 2
CHALLENGE_LOWER_BOUND = 2

# Policies for obtaining the secondary generator h.
H_POLICY_HASH = "hash"
H_POLICY_RANDOM = "random"
DEFAULT_H_POLICY = H_POLICY_HASH

# Domain separation tags.
H_DERIVATION_DOMAIN = b"dleq/v1/secondary-generator"
FIAT_SHAMIR_DOMAIN = b"dleq/v1/fiat-shamir"
