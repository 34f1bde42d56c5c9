"""
SecretSpendKey: the strong capability (a, b).

Holds both secret scalars. It derives the public half (PublicSpendKey), the
scanning half (ViewKey), and for any stealth address sent to it the one-time
secret sk_r = H(a·R) + b whose public image is pk_r.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stealth_pki.core.codec import ConstantTimeEq, Serializable, ct_scalar_eq
from stealth_pki.core.keys import SecretKey
from stealth_pki.core.public_spend import PublicSpendKey
from stealth_pki.core.stealth import Ownable
from stealth_pki.core.view import ViewKey
from stealth_pki.crypto.curve import (
    ED25519_L,
    GENERATOR,
    SCALAR_SIZE,
    RandomSource,
    check_scalar,
    decode_scalar,
    encode_scalar,
    random_scalar,
)
from stealth_pki.crypto.hashing import derive_scalar, hash_to_scalar

logger = logging.getLogger("stealth_pki.secret_spend")


@dataclass(frozen=True, eq=False, repr=False)
class SecretSpendKey(ConstantTimeEq, Serializable):
    """
    Secret pair of scalars a and b, both nonzero so that a·G and b·G are
    usable public points.

    Encoded as a (32 bytes) ‖ b (32 bytes).
    """
    a: int
    b: int

    SIZE = 2 * SCALAR_SIZE

    def __post_init__(self):
        check_scalar(self.a, "a", nonzero=True)
        check_scalar(self.b, "b", nonzero=True)

    @classmethod
    def random(cls, rng: RandomSource) -> SecretSpendKey:
        """Sample independent random scalars a and b from rng."""
        a = random_scalar(rng)
        b = random_scalar(rng)
        return cls(a, b)

    @classmethod
    def from_seed(cls, seed: bytes) -> SecretSpendKey:
        """
        Deterministically derive a SecretSpendKey from seed bytes.

        The same seed always yields the same key. The seed must carry enough
        entropy on its own; nothing is stretched.

        Raises:
            InvalidParameters: If the seed is empty.
        """
        a = derive_scalar(seed, b"a")
        b = derive_scalar(seed, b"b")
        logger.debug("Derived secret spend key from seed")
        return cls(a, b)

    def public_spend_key(self) -> PublicSpendKey:
        """Derive PublicSpendKey (a·G, b·G)."""
        return PublicSpendKey(self.a * GENERATOR, self.b * GENERATOR)

    def view_key(self) -> ViewKey:
        """Derive ViewKey (a, b·G)."""
        return ViewKey(self.a, self.b * GENERATOR)

    def sk_r(self, owner: Ownable) -> SecretKey:
        """
        Compute the one-time secret key sk_r = H(a·R) + b for a stealth address.

        No check is made that the address belongs to this key; callers
        wanting to spend should first confirm sk_r.public_key() == sa.pk_r.
        """
        sa = owner.stealth_address()
        shared = hash_to_scalar(self.a * sa.R)
        return SecretKey((shared + self.b) % ED25519_L)

    def ct_eq(self, other: SecretSpendKey) -> bool:
        return ct_scalar_eq(self.a, other.a) & ct_scalar_eq(self.b, other.b)

    def to_bytes(self) -> bytes:
        return encode_scalar(self.a) + encode_scalar(self.b)

    @classmethod
    def _decode(cls, raw: bytes) -> SecretSpendKey:
        a = decode_scalar(raw[:SCALAR_SIZE])
        b = decode_scalar(raw[SCALAR_SIZE:])
        return cls(a, b)

    def __repr__(self) -> str:
        return "SecretSpendKey(<redacted>)"
