#!/usr/bin/env python3
"""
Example 01: Stealth address round trip.

A recipient publishes a public spend key. A sender derives a one-time stealth
address from it, the recipient's view key recognizes the address, and the
secret spend key recovers the one-time secret key for spending.

Usage:
    python examples/01_stealth_roundtrip.py
"""

import secrets

from stealth_pki import PublicSpendKey, SecretSpendKey, StealthAddress

rng = secrets.SystemRandom()

# Recipient
ssk = SecretSpendKey.random(rng)
vk = ssk.view_key()
published = ssk.public_spend_key().to_hex()
print(f"Public spend key: {published}")

# Sender: only ever sees the published hex
psk = PublicSpendKey.from_hex(published)
sa = psk.new_stealth_address(rng)
wire = sa.to_hex()
print(f"Stealth address:  {wire}")

# Recipient scans with the view key...
incoming = StealthAddress.from_hex(wire)
print(f"Owned (view key): {vk.owns(incoming)}")

# ...and recovers the one-time secret with the spend key
sk_r = ssk.sk_r(incoming)
print(f"sk_r matches pk_r: {sk_r.public_key() == incoming.pk_r}")

# Anyone else sees nothing
stranger = SecretSpendKey.random(rng).view_key()
print(f"Owned (stranger): {stranger.owns(incoming)}")
