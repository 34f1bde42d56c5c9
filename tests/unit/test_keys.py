"""
Unit tests for key types — basic key pair, spend/view derivation, equality.
"""

import dataclasses
import random

import ecdsa.ellipticcurve as ec
import pytest

from stealth_pki import (
    InvalidParameters,
    InvalidPoint,
    PublicKey,
    PublicSpendKey,
    SecretKey,
    SecretSpendKey,
    StealthAddress,
    ViewKey,
)
from stealth_pki.crypto.curve import ED25519_L, ED25519_P, GENERATOR, to_affine
from stealth_pki.crypto.hashing import hash_to_scalar


def _with_z(point, z: int):
    """Return the same point held in extended coordinates with denominator z."""
    x, y = to_affine(point)
    p = ED25519_P
    return ec.PointEdwards(point.curve(), x * z % p, y * z % p, z, x * y * z % p)


# ==============================================================================
# Basic key pair
# ==============================================================================


class TestBasicKeyPair:
    """SecretKey / PublicKey."""

    def test_public_from_secret(self):
        """P = s·G."""
        sk = SecretKey(12345)
        assert PublicKey.from_secret_key(sk).point == 12345 * GENERATOR

    def test_public_key_shortcut(self):
        sk = SecretKey.random(random.Random(1))
        assert sk.public_key() == PublicKey.from_secret_key(sk)

    def test_random_keys_differ(self):
        rng = random.Random(2)
        assert SecretKey.random(rng) != SecretKey.random(rng)

    def test_public_key_from_arbitrary_point(self):
        """A PublicKey may wrap a point whose discrete log is unknown."""
        pk = PublicKey(7 * GENERATOR + 11 * GENERATOR)
        assert pk == PublicKey(18 * GENERATOR)

    def test_secret_key_out_of_range(self):
        with pytest.raises(InvalidParameters):
            SecretKey(ED25519_L)
        with pytest.raises(InvalidParameters):
            SecretKey(-1)

    def test_secret_key_wrong_type(self):
        with pytest.raises(TypeError):
            SecretKey("1")
        with pytest.raises(TypeError):
            SecretKey(True)

    def test_public_key_wrong_type(self):
        with pytest.raises(TypeError):
            PublicKey(b"\x00" * 32)

    def test_public_key_identity(self):
        with pytest.raises(InvalidPoint):
            PublicKey(ec.INFINITY)


# ==============================================================================
# Spend / view derivation
# ==============================================================================


class TestDerivation:
    """public_spend_key / view_key are pure functions of (a, b)."""

    def test_public_spend_key(self):
        ssk = SecretSpendKey(3, 4)
        psk = ssk.public_spend_key()
        assert psk.A == 3 * GENERATOR
        assert psk.B == 4 * GENERATOR

    def test_view_key(self):
        """The view key exposes a but only the image of b."""
        ssk = SecretSpendKey(3, 4)
        vk = ssk.view_key()
        assert vk.a == 3
        assert vk.B == 4 * GENERATOR

    def test_repeatable(self):
        """Deriving twice yields equal results."""
        ssk = SecretSpendKey.random(random.Random(10))
        assert ssk.public_spend_key() == ssk.public_spend_key()
        assert ssk.view_key() == ssk.view_key()

    def test_conversion_constructors_agree(self):
        ssk = SecretSpendKey.random(random.Random(11))
        assert PublicSpendKey.from_secret_spend_key(ssk) == ssk.public_spend_key()
        assert ViewKey.from_secret_spend_key(ssk) == ssk.view_key()

    def test_view_key_public_spend_key(self):
        """A view key can rebuild the public spend key it belongs to."""
        ssk = SecretSpendKey.random(random.Random(12))
        assert ssk.view_key().public_spend_key() == ssk.public_spend_key()

    def test_zero_scalars_rejected(self):
        """a = 0 or b = 0 would put an identity point in the derived keys."""
        B = 2 * GENERATOR
        with pytest.raises(InvalidParameters, match="a must be nonzero"):
            ViewKey(0, B)
        with pytest.raises(InvalidParameters, match="a must be nonzero"):
            SecretSpendKey(0, 5)
        with pytest.raises(InvalidParameters, match="b must be nonzero"):
            SecretSpendKey(5, 0)

    def test_zero_scalars_rejected_on_decode(self):
        """Zero scalars fail decoding with a typed error."""
        with pytest.raises(InvalidParameters):
            SecretSpendKey.from_bytes(b"\x00" * 64)
        B = PublicKey(2 * GENERATOR).to_bytes()
        with pytest.raises(InvalidParameters):
            ViewKey.from_bytes(b"\x00" * 32 + B)

    def test_equal_secrets_allowed(self):
        """a == b is not forbidden."""
        ssk = SecretSpendKey(9, 9)
        assert ssk.public_spend_key().A == ssk.public_spend_key().B


class TestFromSeed:
    """Deterministic SecretSpendKey derivation."""

    def test_same_seed_same_key(self):
        assert SecretSpendKey.from_seed(b"some bytes") == SecretSpendKey.from_seed(b"some bytes")

    def test_different_seeds(self):
        assert SecretSpendKey.from_seed(b"some bytes") != SecretSpendKey.from_seed(b"other bytes")

    def test_independent_scalars(self):
        ssk = SecretSpendKey.from_seed(b"some bytes")
        assert ssk.a != ssk.b

    def test_accepts_bytearray(self):
        assert SecretSpendKey.from_seed(bytearray(b"seed")) == SecretSpendKey.from_seed(b"seed")

    def test_empty_seed(self):
        with pytest.raises(InvalidParameters):
            SecretSpendKey.from_seed(b"")


# ==============================================================================
# Equality discipline
# ==============================================================================


class TestEquality:
    """Constant-time equality over canonical encodings."""

    def test_equal_iff_encodings_equal(self):
        rng = random.Random(20)
        k1 = SecretSpendKey.random(rng)
        k2 = SecretSpendKey.random(rng)
        assert k1 == SecretSpendKey(k1.a, k1.b)
        assert (k1 == k2) == (k1.to_bytes() == k2.to_bytes())

    def test_linear_combinations_equal(self):
        """2·G + 7·G and 4·G + 5·G compare equal and hash identically."""
        p1 = 2 * GENERATOR + 7 * GENERATOR
        p2 = 4 * GENERATOR + 5 * GENERATOR
        assert PublicKey(p1) == PublicKey(p2)
        assert PublicSpendKey(p1, GENERATOR) == PublicSpendKey(p2, GENERATOR)
        assert hash_to_scalar(p1) == hash_to_scalar(p2)

    def test_representation_independent(self):
        """Different extended coordinates of one point are equal keys."""
        pt = 1234 * GENERATOR
        other = _with_z(pt, 987654321)
        assert PublicKey(pt) == PublicKey(other)
        assert ViewKey(5, pt) == ViewKey(5, other)
        assert StealthAddress(pt, PublicKey(GENERATOR)) == StealthAddress(other, PublicKey(GENERATOR))

    def test_view_key_compares_a(self):
        """ViewKeys with the same B but different a are not equal."""
        B = 8 * GENERATOR
        assert ViewKey(1, B) != ViewKey(2, B)

    def test_stealth_address_compares_both_halves(self):
        pk_r = PublicKey(3 * GENERATOR)
        assert StealthAddress(GENERATOR, pk_r) != StealthAddress(2 * GENERATOR, pk_r)
        assert StealthAddress(GENERATOR, pk_r) != StealthAddress(GENERATOR, PublicKey(4 * GENERATOR))

    def test_ct_eq_method(self):
        ssk = SecretSpendKey(1, 2)
        assert ssk.ct_eq(SecretSpendKey(1, 2))
        assert not ssk.ct_eq(SecretSpendKey(1, 3))

    def test_cross_type_not_equal(self):
        """A view key and a secret spend key with the same a are different things."""
        ssk = SecretSpendKey(1, 2)
        assert ssk != ssk.view_key()
        assert ssk != ssk.to_bytes()

    def test_hashable(self):
        """Equal keys collapse in sets."""
        p1 = 2 * GENERATOR + 7 * GENERATOR
        p2 = 4 * GENERATOR + 5 * GENERATOR
        assert len({PublicKey(p1), PublicKey(p2)}) == 1
        assert len({SecretSpendKey(1, 2), SecretSpendKey(1, 2), SecretSpendKey(2, 1)}) == 2


# ==============================================================================
# Value semantics
# ==============================================================================


class TestValueSemantics:
    """Immutability and secret-safe repr."""

    def test_frozen(self):
        ssk = SecretSpendKey(1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ssk.a = 5

    def test_secret_repr_redacted(self):
        ssk = SecretSpendKey.from_seed(b"repr")
        assert "redacted" in repr(ssk)
        assert ssk.to_hex() not in repr(ssk)
        assert "redacted" in repr(SecretKey(ssk.a))
        assert str(ssk.a) not in repr(ssk.view_key())

    def test_public_repr_shows_hex(self):
        psk = SecretSpendKey(1, 2).public_spend_key()
        assert repr(psk) == f"PublicSpendKey({psk.to_hex()})"
