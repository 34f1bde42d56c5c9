"""
Stealth addresses: one-time public addresses unlinkable to the recipient.

A StealthAddress is the pair (R, pk_r):
    R    = r·G                 sender's ephemeral public point
    pk_r = H(r·A)·G + B        the one-time public key (the actual address)

where (A, B) is the recipient's PublicSpendKey and r is fresh per address.
Since r·A = a·R, the recipient recomputes the same H from its view key
(ViewKey.owns) and, holding b, the matching one-time secret
sk_r = H(a·R) + b (SecretSpendKey.sk_r).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import ecdsa.ellipticcurve as ec

from stealth_pki.core.codec import ConstantTimeEq, Serializable, ct_point_eq
from stealth_pki.core.keys import PublicKey
from stealth_pki.crypto.curve import POINT_SIZE, check_point, decode_point, encode_point


@runtime_checkable
class Ownable(Protocol):
    """Anything that carries a StealthAddress and can therefore be tested for ownership."""

    def stealth_address(self) -> StealthAddress: ...


@dataclass(frozen=True, eq=False, repr=False)
class StealthAddress(ConstantTimeEq, Serializable):
    """
    One-time address (R, pk_r).

    Encoded as R (32 bytes) ‖ pk_r (32 bytes).
    """
    R: ec.PointEdwards
    pk_r: PublicKey

    SIZE = 2 * POINT_SIZE

    def __post_init__(self):
        check_point(self.R, "R")
        if not isinstance(self.pk_r, PublicKey):
            raise TypeError(f"pk_r must be a PublicKey, got {type(self.pk_r).__name__}")

    @property
    def address(self) -> ec.PointEdwards:
        """The underlying point of pk_r."""
        return self.pk_r.point

    def stealth_address(self) -> StealthAddress:
        return self

    def ct_eq(self, other: StealthAddress) -> bool:
        return ct_point_eq(self.pk_r.point, other.pk_r.point) & ct_point_eq(self.R, other.R)

    def to_bytes(self) -> bytes:
        return encode_point(self.R) + self.pk_r.to_bytes()

    @classmethod
    def _decode(cls, raw: bytes) -> StealthAddress:
        R = decode_point(raw[:POINT_SIZE])
        pk_r = PublicKey(decode_point(raw[POINT_SIZE:]))
        return cls(R, pk_r)
