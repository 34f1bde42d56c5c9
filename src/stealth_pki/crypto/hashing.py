"""
Hash-to-scalar and seed derivation.

hash_to_scalar compresses a curve point into a scalar and is the shared-secret
step of the stealth address protocol:

    H(P) = int_le(BLAKE2b-512(x_le ‖ y_le, person="stealth-pki/h2s")) mod ℓ

The input is always the affine (x, y) pair. Points coming out of the ecdsa
arithmetic are held in extended coordinates, and the same logical point can
have many (X:Y:Z:T) representations; hashing anything but the affine form
would make H differ between equal points.

BLAKE2b is used throughout for protocol hashing; the 512-bit digest keeps the
modular reduction bias negligible.
"""

from __future__ import annotations

import hashlib

import ecdsa.ellipticcurve as ec

from stealth_pki.crypto.curve import reduce_scalar, to_affine
from stealth_pki.errors import InvalidParameters

HASH_PERSONALIZATION = b"stealth-pki/h2s"
SEED_PERSONALIZATION = b"stealth-pki/seed"


def hash_to_scalar(point: ec.AbstractPoint) -> int:
    """
    Deterministically map a point to a scalar via its affine coordinates.

    Args:
        point: Any ecdsa Edwards point (extended coordinates are normalized).

    Returns:
        Integer scalar in [0, ℓ-1].
    """
    x, y = to_affine(point)
    data = x.to_bytes(32, "little") + y.to_bytes(32, "little")
    digest = hashlib.blake2b(data, digest_size=64, person=HASH_PERSONALIZATION).digest()
    return reduce_scalar(digest)


def derive_scalar(seed: bytes, label: bytes) -> int:
    """
    Derive a scalar from seed material under a domain label.

    Distinct labels give independent scalars from the same seed.

    Raises:
        InvalidParameters: If the seed is empty.
    """
    if not seed:
        raise InvalidParameters("Seed must not be empty")
    digest = hashlib.blake2b(
        len(label).to_bytes(1, "little") + label + bytes(seed),
        digest_size=64,
        person=SEED_PERSONALIZATION,
    ).digest()
    return reduce_scalar(digest)
