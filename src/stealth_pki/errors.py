"""
Error taxonomy for key and stealth-address decoding.

Every failure to turn external bytes (or hex) into a key or address raises a
subclass of PkiError. PkiError derives from ValueError so callers that already
treat malformed values as ValueError keep working. I/O errors raised by a
caller-supplied stream are never wrapped.
"""

from __future__ import annotations


class PkiError(ValueError):
    """Raised when bytes or hex cannot be decoded into a valid key or address."""
    pass


class BadLength(PkiError):
    """Raised when an input does not have the exact size a decoder expects."""

    def __init__(self, found: int, expected: int):
        self.found = found
        self.expected = expected
        super().__init__(f"Bad length: found {found}, expected {expected}")


class InvalidPoint(PkiError):
    """Raised when 32 bytes are not a valid compressed point of the prime-order subgroup."""
    pass


class InvalidParameters(PkiError):
    """Raised for non-canonical scalars, non-hex text and other out-of-domain values."""
    pass
