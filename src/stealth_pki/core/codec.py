"""
Shared byte/hex codec and constant-time equality for key and address types.

Every key and address type is a fixed-size value: it knows its SIZE and how to
turn itself into bytes and back. Serializable layers the hex form, stream
reading and the Python dunder protocol on top of that pair. ConstantTimeEq
makes == go through a per-type ct_eq that compares every component with
hmac.compare_digest over canonical encodings.
"""

from __future__ import annotations

import hmac
from typing import BinaryIO, ClassVar, TypeVar

import ecdsa.ellipticcurve as ec

from stealth_pki.crypto.curve import encode_point, encode_scalar
from stealth_pki.errors import BadLength, InvalidParameters

T = TypeVar("T", bound="Serializable")

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


# ==============================================================================
# Byte helpers
# ==============================================================================


def as_bytes(data: bytes | bytearray | memoryview) -> bytes:
    """Coerce a bytes-like input to bytes, rejecting anything else with TypeError."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected a bytes-like object, got {type(data).__name__}")


def check_length(data: bytes | bytearray | memoryview, expected: int) -> bytes:
    """
    Return data as bytes if it is exactly `expected` long.

    Raises:
        BadLength: On any other length.
    """
    raw = as_bytes(data)
    if len(raw) != expected:
        raise BadLength(found=len(raw), expected=expected)
    return raw


def parse_hex(text: str, size: int) -> bytes:
    """
    Parse a hex string (either case, optional 0x prefix) into exactly `size` bytes.

    The length is checked before any digit is interpreted.

    Raises:
        BadLength: If the string (prefix removed) is not 2·size characters.
        InvalidParameters: If it contains non-hex characters.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected a hex string, got {type(text).__name__}")
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    if len(text) != 2 * size:
        raise BadLength(found=len(text), expected=2 * size)
    if not _HEX_DIGITS.issuperset(text):
        raise InvalidParameters("Hex string contains non-hex characters")
    return bytes.fromhex(text)


def format_hex(data: bytes, uppercase: bool = False, prefix: bool = False) -> str:
    """Render bytes as hex, optionally upper-case and/or 0x-prefixed."""
    digits = data.hex()
    if uppercase:
        digits = digits.upper()
    return "0x" + digits if prefix else digits


# ==============================================================================
# Constant-time comparison
# ==============================================================================


def ct_bytes_eq(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in time independent of where they differ."""
    return hmac.compare_digest(a, b)


def ct_scalar_eq(a: int, b: int) -> bool:
    """Constant-time scalar equality over the canonical 32-byte encodings."""
    return ct_bytes_eq(encode_scalar(a), encode_scalar(b))


def ct_point_eq(p: ec.AbstractPoint, q: ec.AbstractPoint) -> bool:
    """
    Constant-time point equality over the compressed encodings.

    Encoding goes through affine coordinates, so two representations of the
    same point compare equal.
    """
    return ct_bytes_eq(encode_point(p), encode_point(q))


# ==============================================================================
# Capabilities
# ==============================================================================


class ConstantTimeEq:
    """
    Capability: equality decided by a constant-time comparison of every component.

    Implementers define ct_eq and combine per-component results with `&` so
    that no comparison is skipped.
    """

    def ct_eq(self, other) -> bool:
        raise NotImplementedError

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.ct_eq(other)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((type(self).__name__, self.to_bytes()))


class Serializable:
    """
    Capability: fixed-size byte encoding plus the hex and stream forms built on it.

    Subclasses set SIZE and implement to_bytes / _decode.
    """

    SIZE: ClassVar[int]

    def to_bytes(self) -> bytes:
        raise NotImplementedError

    @classmethod
    def _decode(cls: type[T], raw: bytes) -> T:
        raise NotImplementedError

    @classmethod
    def from_bytes(cls: type[T], data: bytes | bytearray | memoryview) -> T:
        """
        Decode exactly SIZE bytes.

        Raises:
            BadLength: If the input is not SIZE bytes.
            InvalidPoint / InvalidParameters: If a component is out of domain.
        """
        return cls._decode(check_length(data, cls.SIZE))

    @classmethod
    def from_hex(cls: type[T], text: str) -> T:
        """Decode from hex (either case, optional 0x prefix)."""
        return cls.from_bytes(parse_hex(text, cls.SIZE))

    @classmethod
    def read_from(cls: type[T], stream: BinaryIO) -> T:
        """
        Read and decode exactly SIZE bytes from a binary stream.

        A short read raises BadLength; OSError from the stream propagates.
        """
        return cls.from_bytes(stream.read(cls.SIZE))

    def to_hex(self, uppercase: bool = False, prefix: bool = False) -> str:
        return format_hex(self.to_bytes(), uppercase=uppercase, prefix=prefix)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return self.to_hex()

    def __format__(self, spec: str) -> str:
        if spec in ("", "x"):
            return self.to_hex()
        if spec == "X":
            return self.to_hex(uppercase=True)
        if spec == "#x":
            return self.to_hex(prefix=True)
        if spec == "#X":
            return self.to_hex(uppercase=True, prefix=True)
        raise ValueError(f"Unsupported format spec {spec!r} for {type(self).__name__}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_hex()})"
