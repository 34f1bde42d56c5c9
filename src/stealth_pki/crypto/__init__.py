"""
stealth_pki.crypto — Group, scalar-field and hash primitives.

Provides:
- Ed25519 constants and the generator G
- Canonical scalar / compressed point encode/decode with validation
- Affine normalization and subgroup checks
- hash_to_scalar (point → scalar) and seed-based scalar derivation
"""

from stealth_pki.crypto.curve import (
    ED25519_L,
    ED25519_P,
    GENERATOR,
    POINT_SIZE,
    SCALAR_SIZE,
    RandomSource,
    decode_point,
    decode_scalar,
    encode_point,
    encode_scalar,
    in_prime_subgroup,
    negate_point,
    random_scalar,
    to_affine,
)
from stealth_pki.crypto.hashing import derive_scalar, hash_to_scalar

__all__ = [
    # Curve
    "ED25519_P",
    "ED25519_L",
    "GENERATOR",
    "POINT_SIZE",
    "SCALAR_SIZE",
    "RandomSource",
    "random_scalar",
    "encode_scalar",
    "decode_scalar",
    "encode_point",
    "decode_point",
    "in_prime_subgroup",
    "negate_point",
    "to_affine",
    # Hashing
    "hash_to_scalar",
    "derive_scalar",
]
