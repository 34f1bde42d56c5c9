"""
Basic key pair: a secret scalar s and its public image P = s·G.

These are the elementary building blocks. SecretSpendKey.sk_r returns a
SecretKey, and the pk_r half of a StealthAddress is a PublicKey, so a one-time
key recovered from a stealth address can be checked with
`sk_r.public_key() == stealth_address.pk_r`.
"""

from __future__ import annotations

from dataclasses import dataclass

import ecdsa.ellipticcurve as ec

from stealth_pki.core.codec import ConstantTimeEq, Serializable, ct_point_eq, ct_scalar_eq
from stealth_pki.crypto.curve import (
    GENERATOR,
    POINT_SIZE,
    SCALAR_SIZE,
    RandomSource,
    check_point,
    check_scalar,
    decode_point,
    decode_scalar,
    encode_point,
    encode_scalar,
    random_scalar,
)


@dataclass(frozen=True, eq=False, repr=False)
class SecretKey(ConstantTimeEq, Serializable):
    """
    A secret scalar s in [0, ℓ-1].

    Encoded as the 32-byte little-endian canonical scalar.
    """
    scalar: int

    SIZE = SCALAR_SIZE

    def __post_init__(self):
        check_scalar(self.scalar, "SecretKey scalar")

    @classmethod
    def random(cls, rng: RandomSource) -> SecretKey:
        """Create a SecretKey from a uniformly random nonzero scalar."""
        return cls(random_scalar(rng))

    def public_key(self) -> PublicKey:
        """Derive the matching PublicKey (s·G)."""
        return PublicKey.from_secret_key(self)

    def ct_eq(self, other: SecretKey) -> bool:
        return ct_scalar_eq(self.scalar, other.scalar)

    def to_bytes(self) -> bytes:
        return encode_scalar(self.scalar)

    @classmethod
    def _decode(cls, raw: bytes) -> SecretKey:
        return cls(decode_scalar(raw))

    def __repr__(self) -> str:
        return "SecretKey(<redacted>)"


@dataclass(frozen=True, eq=False, repr=False)
class PublicKey(ConstantTimeEq, Serializable):
    """
    A public curve point P.

    Either derived from a SecretKey (P = s·G) or wrapping an arbitrary
    subgroup point whose discrete log is unknown. Encoded as the 32-byte
    compressed point.
    """
    point: ec.PointEdwards

    SIZE = POINT_SIZE

    def __post_init__(self):
        check_point(self.point, "PublicKey point")

    @classmethod
    def from_secret_key(cls, secret_key: SecretKey) -> PublicKey:
        """Compute P = s·G."""
        return cls(secret_key.scalar * GENERATOR)

    def ct_eq(self, other: PublicKey) -> bool:
        return ct_point_eq(self.point, other.point)

    def to_bytes(self) -> bytes:
        return encode_point(self.point)

    @classmethod
    def _decode(cls, raw: bytes) -> PublicKey:
        return cls(decode_point(raw))
