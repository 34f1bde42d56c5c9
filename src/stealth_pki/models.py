"""
Hex-encoded interchange models for keys and stealth addresses.

Every hex field is run through the matching byte decoder on validation, so a
constructed model always holds decodable key material. Hex is accepted in
either case with an optional 0x prefix.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from stealth_pki.config import PkiConfig
from stealth_pki.core.keys import PublicKey, SecretKey
from stealth_pki.core.public_spend import PublicSpendKey
from stealth_pki.core.secret_spend import SecretSpendKey
from stealth_pki.core.stealth import StealthAddress
from stealth_pki.core.view import ViewKey


class KeyBundle(BaseModel):
    """The three encodings of one recipient's keys."""

    secret_spend_key: str = Field(
        ..., description="64-byte secret spend key a‖b (hex). KEEP THIS SAFE."
    )
    view_key: str = Field(..., description="64-byte view key a‖B (hex). Allows scanning only.")
    public_spend_key: str = Field(..., description="64-byte public spend key A‖B (hex). Share with senders.")

    @field_validator("secret_spend_key")
    @classmethod
    def _check_secret_spend_key(cls, v: str) -> str:
        SecretSpendKey.from_hex(v)
        return v

    @field_validator("view_key")
    @classmethod
    def _check_view_key(cls, v: str) -> str:
        ViewKey.from_hex(v)
        return v

    @field_validator("public_spend_key")
    @classmethod
    def _check_public_spend_key(cls, v: str) -> str:
        PublicSpendKey.from_hex(v)
        return v

    @model_validator(mode="after")
    def _check_consistent(self) -> KeyBundle:
        ssk = self.load_secret_spend_key()
        if ssk.view_key() != ViewKey.from_hex(self.view_key):
            raise ValueError("view_key does not belong to secret_spend_key")
        if ssk.public_spend_key() != PublicSpendKey.from_hex(self.public_spend_key):
            raise ValueError("public_spend_key does not belong to secret_spend_key")
        return self

    @classmethod
    def from_secret_spend_key(cls, ssk: SecretSpendKey, config: PkiConfig | None = None) -> KeyBundle:
        config = config or PkiConfig()
        return cls(
            secret_spend_key=config.render(ssk.to_bytes()),
            view_key=config.render(ssk.view_key().to_bytes()),
            public_spend_key=config.render(ssk.public_spend_key().to_bytes()),
        )

    def load_secret_spend_key(self) -> SecretSpendKey:
        return SecretSpendKey.from_hex(self.secret_spend_key)


class StealthAddressRecord(BaseModel):
    """A stealth address, whole and split into its R / pk_r halves."""

    stealth_address: str = Field(..., description="64-byte stealth address R‖pk_r (hex)")
    R: str = Field(..., description="Sender's ephemeral point R = r·G (hex)")
    pk_r: str = Field(..., description="One-time public key pk_r (hex)")

    @field_validator("stealth_address")
    @classmethod
    def _check_stealth_address(cls, v: str) -> str:
        StealthAddress.from_hex(v)
        return v

    @field_validator("R", "pk_r")
    @classmethod
    def _check_point(cls, v: str) -> str:
        PublicKey.from_hex(v)
        return v

    @model_validator(mode="after")
    def _check_halves(self) -> StealthAddressRecord:
        sa = self.load()
        if PublicKey(sa.R) != PublicKey.from_hex(self.R) or sa.pk_r != PublicKey.from_hex(self.pk_r):
            raise ValueError("R / pk_r do not match stealth_address")
        return self

    @classmethod
    def from_stealth_address(
        cls, sa: StealthAddress, config: PkiConfig | None = None
    ) -> StealthAddressRecord:
        config = config or PkiConfig()
        raw = sa.to_bytes()
        return cls(
            stealth_address=config.render(raw),
            R=config.render(raw[:32]),
            pk_r=config.render(raw[32:]),
        )

    def load(self) -> StealthAddress:
        return StealthAddress.from_hex(self.stealth_address)


class ScanResult(BaseModel):
    """Outcome of testing a stealth address against a view or spend key."""

    owned: bool = Field(..., description="True if the address was generated for this key")
    sk_r: str | None = Field(
        None,
        description="One-time secret key (hex). Only present when recovered with a secret spend key.",
    )

    @field_validator("sk_r")
    @classmethod
    def _check_sk_r(cls, v: str | None) -> str | None:
        if v is not None:
            SecretKey.from_hex(v)
        return v
