"""
Ed25519 group and scalar-field primitives for spend/view keys and stealth addresses.

Provides:
- Curve constants (field prime, subgroup order, generator)
- Scalar sampling and canonical 32-byte scalar encode/decode
- Point encode/decode for 32-byte compressed Edwards points
- Affine normalization and prime-order subgroup membership

Mathematical foundation:
    -x² + y² = 1 + d·x²·y²  over GF(p),  p = 2^255 - 19
    G generates the prime-order subgroup of order
    ℓ = 2^252 + 27742317777372353535851937790883648493 (cofactor 8).

    A point is encoded as the 255-bit little-endian y coordinate with the
    low bit of x stored in the top bit of the last byte.
    Decoding recovers x from x² = (y² - 1) / (d·y² + 1).

References:
    [RFC8032] Josefsson & Liusvaara, "Edwards-Curve Digital Signature
              Algorithm (EdDSA)", §5.1.2 (encoding) and §5.1.3 (decoding).
"""

from __future__ import annotations

import logging
from typing import Protocol

import ecdsa.ellipticcurve as ec
from ecdsa.curves import Ed25519

from stealth_pki.errors import BadLength, InvalidParameters, InvalidPoint

logger = logging.getLogger("stealth_pki.curve")

# ==============================================================================
# Ed25519 curve constants
# ==============================================================================

# Field prime
ED25519_P = 2**255 - 19

# Prime subgroup order
ED25519_L = 2**252 + 27742317777372353535851937790883648493

# Edwards d = -121665/121666 mod p
ED25519_D = 37095705934669439343138083508754565189542113879843219016388785533085940283555

# sqrt(-1) mod p, used by the p ≡ 5 (mod 8) square root
_SQRT_M1 = pow(2, (ED25519_P - 1) // 4, ED25519_P)

SCALAR_SIZE = 32
POINT_SIZE = 32

# The Ed25519 curve object from the ecdsa library
_CURVE = Ed25519.curve
GENERATOR = Ed25519.generator


class RandomSource(Protocol):
    """Cryptographically secure random source, e.g. secrets.SystemRandom()."""

    def randrange(self, start: int, stop: int) -> int: ...


# ==============================================================================
# Scalars
# ==============================================================================


def random_scalar(rng: RandomSource) -> int:
    """
    Sample a uniformly random nonzero scalar in [1, ℓ-1].

    Args:
        rng: Caller-supplied random source. Must be cryptographically secure
             outside of tests.
    """
    return rng.randrange(1, ED25519_L)


def encode_scalar(scalar: int) -> bytes:
    """Encode a scalar as 32 little-endian bytes (reduced modulo ℓ)."""
    return (scalar % ED25519_L).to_bytes(SCALAR_SIZE, "little")


def decode_scalar(data: bytes) -> int:
    """
    Decode a canonical 32-byte little-endian scalar.

    Raises:
        BadLength: If data is not exactly 32 bytes.
        InvalidParameters: If the value is not reduced modulo ℓ.
    """
    if len(data) != SCALAR_SIZE:
        raise BadLength(found=len(data), expected=SCALAR_SIZE)
    value = int.from_bytes(data, "little")
    if value >= ED25519_L:
        raise InvalidParameters("Scalar is not in canonical form (value >= group order)")
    return value


def reduce_scalar(data: bytes) -> int:
    """Interpret arbitrary bytes as a little-endian integer reduced modulo ℓ."""
    return int.from_bytes(data, "little") % ED25519_L


def check_scalar(scalar: int, name: str = "scalar", nonzero: bool = False) -> int:
    """
    Validate that an integer is usable as a scalar in [0, ℓ-1].

    With nonzero=True the range is [1, ℓ-1], for scalars that multiply
    points which must stay off the identity.

    Raises:
        TypeError: If scalar is not an int.
        InvalidParameters: If scalar is out of range.
    """
    if isinstance(scalar, bool) or not isinstance(scalar, int):
        raise TypeError(f"{name} must be an int, got {type(scalar).__name__}")
    if scalar < 0 or scalar >= ED25519_L:
        raise InvalidParameters(f"{name} must be in [0, ℓ-1]")
    if nonzero and scalar == 0:
        raise InvalidParameters(f"{name} must be nonzero")
    return scalar


# ==============================================================================
# Points
# ==============================================================================


def to_affine(point: ec.AbstractPoint) -> tuple[int, int]:
    """
    Normalize a point held in extended coordinates to its affine (x, y).

    Equivalent points always produce identical affine coordinates, whatever
    projective representation the arithmetic left them in.
    """
    if point == ec.INFINITY:
        raise ValueError("The point at infinity has no affine coordinates")
    return int(point.x()), int(point.y())


def negate_point(point: ec.PointEdwards) -> ec.PointEdwards:
    """Return -P = (-x, y). PointEdwards has no unary minus of its own."""
    x, y = to_affine(point)
    return ec.PointEdwards(_CURVE, -x % ED25519_P, y, 1, -x * y % ED25519_P)


def in_prime_subgroup(point: ec.PointEdwards) -> bool:
    """
    Check that a point lies in the subgroup of order ℓ.

    Uses (ℓ-1)·P == -P rather than ℓ·P == O because the ecdsa library folds
    every x = 0 result (identity and the order-2 point) into INFINITY.
    """
    if point == ec.INFINITY:
        return False
    return (ED25519_L - 1) * point == negate_point(point)


def encode_point(pt: ec.AbstractPoint) -> bytes:
    """
    Encode a point as 32 compressed bytes.

    Args:
        pt: An ecdsa Edwards point.

    Returns:
        32 bytes: little-endian y with the parity of x in the top bit.

    Raises:
        ValueError: If the point is the identity (point at infinity).
    """
    if pt == ec.INFINITY:
        raise ValueError("Cannot encode the point at infinity")
    x, y = to_affine(pt)
    return (y | ((x & 1) << 255)).to_bytes(POINT_SIZE, "little")


def decode_point(data: bytes) -> ec.PointEdwards:
    """
    Decode 32 compressed bytes to an ecdsa Edwards point.

    Only canonical encodings of points in the prime-order subgroup are
    accepted: y must be reduced modulo p, x must be nonzero, and ℓ·P must be
    the identity.

    Raises:
        BadLength: If data is not exactly 32 bytes.
        InvalidPoint: If the bytes do not encode a valid subgroup point.
    """
    if len(data) != POINT_SIZE:
        raise BadLength(found=len(data), expected=POINT_SIZE)

    raw = int.from_bytes(data, "little")
    sign = raw >> 255
    y = raw & ((1 << 255) - 1)
    if y >= ED25519_P:
        raise InvalidPoint("y coordinate is not reduced modulo p")

    # x² = (y² - 1) / (d·y² + 1)
    y_sq = y * y % ED25519_P
    u = (y_sq - 1) % ED25519_P
    v = (ED25519_D * y_sq + 1) % ED25519_P
    x_sq = u * pow(v, ED25519_P - 2, ED25519_P) % ED25519_P

    x = pow(x_sq, (ED25519_P + 3) // 8, ED25519_P)
    if (x * x - x_sq) % ED25519_P != 0:
        x = x * _SQRT_M1 % ED25519_P
    if (x * x - x_sq) % ED25519_P != 0:
        raise InvalidPoint(f"y coordinate 0x{y:064x} does not correspond to a curve point")

    # Identity, the order-2 point and "negative zero" all have x = 0
    if x == 0:
        raise InvalidPoint("Small-order point (x = 0) is not a valid key")
    if (x & 1) != sign:
        x = ED25519_P - x

    point = ec.PointEdwards(_CURVE, x, y, 1, x * y % ED25519_P)
    if not in_prime_subgroup(point):
        logger.debug(f"Rejected point outside the prime-order subgroup: {data.hex()[:16]}...")
        raise InvalidPoint("Point is not in the prime-order subgroup")
    return point


def check_point(point: ec.AbstractPoint, name: str = "point") -> ec.PointEdwards:
    """
    Validate that an object is a usable (non-identity) Edwards point.

    Raises:
        TypeError: If point is not an ecdsa PointEdwards.
        InvalidPoint: If point is the identity.
    """
    if point is ec.INFINITY:
        raise InvalidPoint(f"{name} must not be the identity")
    if not isinstance(point, ec.PointEdwards):
        raise TypeError(f"{name} must be an ecdsa PointEdwards, got {type(point).__name__}")
    if point == ec.INFINITY:
        raise InvalidPoint(f"{name} must not be the identity")
    return point
