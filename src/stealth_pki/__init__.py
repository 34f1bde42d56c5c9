"""
stealth_pki — Spend/view key pairs and stealth addresses over Ed25519.

A recipient holds a SecretSpendKey (a, b) and publishes its PublicSpendKey
(A, B). Senders derive one-time StealthAddresses from the public key; the
recipient detects them with the weaker ViewKey (a, B) and recovers the
one-time secret with the SecretSpendKey.

    >>> import secrets
    >>> rng = secrets.SystemRandom()
    >>> ssk = SecretSpendKey.random(rng)
    >>> sa = ssk.public_spend_key().new_stealth_address(rng)
    >>> ssk.view_key().owns(sa)
    True
    >>> ssk.sk_r(sa).public_key() == sa.pk_r
    True
"""

from stealth_pki.config import PkiConfig
from stealth_pki.core import (
    Ownable,
    PublicKey,
    PublicSpendKey,
    SecretKey,
    SecretSpendKey,
    StealthAddress,
    ViewKey,
)
from stealth_pki.errors import BadLength, InvalidParameters, InvalidPoint, PkiError

__version__ = "0.1.0"

__all__ = [
    # Keys
    "SecretKey",
    "PublicKey",
    "SecretSpendKey",
    "PublicSpendKey",
    "ViewKey",
    # Stealth addresses
    "StealthAddress",
    "Ownable",
    # Errors
    "PkiError",
    "BadLength",
    "InvalidPoint",
    "InvalidParameters",
    # Config
    "PkiConfig",
]
