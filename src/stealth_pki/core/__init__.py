"""
stealth_pki.core — Key, spend/view key and stealth address types.
"""

from stealth_pki.core.keys import PublicKey, SecretKey
from stealth_pki.core.public_spend import PublicSpendKey
from stealth_pki.core.secret_spend import SecretSpendKey
from stealth_pki.core.stealth import Ownable, StealthAddress
from stealth_pki.core.view import ViewKey

__all__ = [
    "SecretKey",
    "PublicKey",
    "SecretSpendKey",
    "PublicSpendKey",
    "ViewKey",
    "StealthAddress",
    "Ownable",
]
