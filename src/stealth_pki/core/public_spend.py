"""
PublicSpendKey: the recipient's published pair (A, B) = (a·G, b·G).

Senders only ever need this half. gen_stealth_address turns it plus a fresh
ephemeral scalar r into a one-time StealthAddress.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import ecdsa.ellipticcurve as ec

from stealth_pki.core.codec import ConstantTimeEq, Serializable, ct_point_eq
from stealth_pki.core.keys import PublicKey
from stealth_pki.core.stealth import StealthAddress
from stealth_pki.crypto.curve import (
    GENERATOR,
    POINT_SIZE,
    RandomSource,
    check_point,
    check_scalar,
    decode_point,
    encode_point,
    random_scalar,
)
from stealth_pki.crypto.hashing import hash_to_scalar
from stealth_pki.errors import InvalidParameters

if TYPE_CHECKING:
    from stealth_pki.core.secret_spend import SecretSpendKey

logger = logging.getLogger("stealth_pki.public_spend")


@dataclass(frozen=True, eq=False, repr=False)
class PublicSpendKey(ConstantTimeEq, Serializable):
    """
    Public pair A = a·G, B = b·G.

    Nothing structural ties the pair to a SecretSpendKey: any two subgroup
    points form a valid PublicSpendKey. Encoded as A (32 bytes) ‖ B (32 bytes).
    """
    A: ec.PointEdwards
    B: ec.PointEdwards

    SIZE = 2 * POINT_SIZE

    def __post_init__(self):
        check_point(self.A, "A")
        check_point(self.B, "B")

    @classmethod
    def from_secret_spend_key(cls, secret: SecretSpendKey) -> PublicSpendKey:
        """Same as secret.public_spend_key()."""
        return secret.public_spend_key()

    def gen_stealth_address(self, r: int) -> StealthAddress:
        """
        Generate the one-time address for ephemeral scalar r.

            R    = r·G
            pk_r = H(r·A)·G + B

        r must be fresh for every address: reuse links the addresses and,
        together with a leaked sk_r, exposes b.

        Args:
            r: Ephemeral scalar in [1, ℓ-1].

        Raises:
            InvalidParameters: If r is out of range.
        """
        check_scalar(r, "r")
        if r == 0:
            raise InvalidParameters("r must be in [1, ℓ-1], got 0")

        R = r * GENERATOR
        shared = hash_to_scalar(r * self.A)
        pk_r = PublicKey(shared * GENERATOR + self.B)

        logger.debug(f"Generated stealth address R={encode_point(R).hex()[:16]}...")
        return StealthAddress(R, pk_r)

    def new_stealth_address(self, rng: RandomSource) -> StealthAddress:
        """Generate a stealth address with a fresh ephemeral r drawn from rng."""
        return self.gen_stealth_address(random_scalar(rng))

    def ct_eq(self, other: PublicSpendKey) -> bool:
        return ct_point_eq(self.A, other.A) & ct_point_eq(self.B, other.B)

    def to_bytes(self) -> bytes:
        return encode_point(self.A) + encode_point(self.B)

    @classmethod
    def _decode(cls, raw: bytes) -> PublicSpendKey:
        A = decode_point(raw[:POINT_SIZE])
        B = decode_point(raw[POINT_SIZE:])
        return cls(A, B)
