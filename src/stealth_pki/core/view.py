"""
ViewKey: the weak capability (a, B) used to scan for incoming stealth addresses.

Knowing a and B = b·G is enough to recompute pk_r = H(a·R)·G + B and so
recognize addresses sent to the owner, but not to compute sk_r, which needs b.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import ecdsa.ellipticcurve as ec

from stealth_pki.core.codec import ConstantTimeEq, Serializable, ct_point_eq, ct_scalar_eq
from stealth_pki.core.public_spend import PublicSpendKey
from stealth_pki.core.stealth import Ownable
from stealth_pki.crypto.curve import (
    GENERATOR,
    POINT_SIZE,
    SCALAR_SIZE,
    check_point,
    check_scalar,
    decode_point,
    decode_scalar,
    encode_point,
    encode_scalar,
)
from stealth_pki.crypto.hashing import hash_to_scalar

if TYPE_CHECKING:
    from stealth_pki.core.secret_spend import SecretSpendKey

logger = logging.getLogger("stealth_pki.view")


@dataclass(frozen=True, eq=False, repr=False)
class ViewKey(ConstantTimeEq, Serializable):
    """
    Pair of secret a and public B = b·G.

    a must be nonzero, otherwise a·R is the identity for every address.

    Encoded as a (32-byte scalar) ‖ B (32-byte compressed point).
    """
    a: int
    B: ec.PointEdwards

    SIZE = SCALAR_SIZE + POINT_SIZE

    def __post_init__(self):
        check_scalar(self.a, "a", nonzero=True)
        check_point(self.B, "B")

    @classmethod
    def from_secret_spend_key(cls, secret: SecretSpendKey) -> ViewKey:
        """Same as secret.view_key()."""
        return secret.view_key()

    def public_spend_key(self) -> PublicSpendKey:
        """Rebuild the owner's PublicSpendKey (a·G, B)."""
        return PublicSpendKey(self.a * GENERATOR, self.B)

    def owns(self, owner: Ownable) -> bool:
        """
        Check whether a stealth address was generated for this key's owner.

        Recomputes H(a·R)·G + B and compares it with pk_r.

        Args:
            owner: A StealthAddress, or any object exposing stealth_address().
        """
        sa = owner.stealth_address()
        shared = hash_to_scalar(self.a * sa.R)
        candidate = shared * GENERATOR + self.B
        owned = ct_point_eq(candidate, sa.address)
        logger.debug(f"Scanned stealth address R={encode_point(sa.R).hex()[:16]}... owned={owned}")
        return owned

    def ct_eq(self, other: ViewKey) -> bool:
        # Both components are compared; a is secret material.
        return ct_scalar_eq(self.a, other.a) & ct_point_eq(self.B, other.B)

    def to_bytes(self) -> bytes:
        return encode_scalar(self.a) + encode_point(self.B)

    @classmethod
    def _decode(cls, raw: bytes) -> ViewKey:
        a = decode_scalar(raw[:SCALAR_SIZE])
        B = decode_point(raw[SCALAR_SIZE:])
        return cls(a, B)

    def __repr__(self) -> str:
        return f"ViewKey(a=<redacted>, B={encode_point(self.B).hex()})"
