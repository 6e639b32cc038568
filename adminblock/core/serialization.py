"""
Administrative Block Serialization Utilities

All multi-byte integers are BIG-ENDIAN. Every read is bounds-checked and
raises TruncatedInputError instead of returning a short slice.
"""

from __future__ import annotations
from typing import Tuple

from adminblock.constants import (
    BIG_ENDIAN,
    HASH_SIZE,
    U8_MAX,
    U8_SIZE,
    U32_MAX,
    U32_SIZE,
)
from adminblock.core.types import Hash
from adminblock.errors import InvalidParameterError, TruncatedInputError


# ==============================================================================
# Bounds Checking
# ==============================================================================

def require_bytes(data: bytes, offset: int, size: int, field: str = "bytes") -> None:
    """Raise TruncatedInputError unless `size` bytes are available at `offset`."""
    available = max(len(data) - offset, 0)
    if available < size:
        raise TruncatedInputError(field, size, available)


# ==============================================================================
# Integer Serialization (Big-Endian)
# ==============================================================================

def serialize_u8(value: int) -> bytes:
    """Serialize unsigned 8-bit integer."""
    if not 0 <= value <= U8_MAX:
        raise InvalidParameterError("u8", f"value out of range: {value}")
    return bytes([value])


def serialize_u32(value: int) -> bytes:
    """Serialize unsigned 32-bit integer (big-endian)."""
    if not 0 <= value <= U32_MAX:
        raise InvalidParameterError("u32", f"value out of range: {value}")
    return value.to_bytes(U32_SIZE, BIG_ENDIAN)


# ==============================================================================
# Integer Deserialization (Big-Endian)
# ==============================================================================

def deserialize_u8(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Deserialize unsigned 8-bit integer.
    Returns (value, bytes_consumed).
    """
    require_bytes(data, offset, U8_SIZE, "u8")
    return data[offset], U8_SIZE


def deserialize_u32(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Deserialize unsigned 32-bit integer (big-endian).
    Returns (value, bytes_consumed).
    """
    require_bytes(data, offset, U32_SIZE, "u32")
    return int.from_bytes(data[offset:offset + U32_SIZE], BIG_ENDIAN), U32_SIZE


# ==============================================================================
# Byte Array Serialization
# ==============================================================================

def serialize_fixed_bytes(data: bytes, size: int) -> bytes:
    """
    Serialize fixed-length byte array.

    Unlike variable-length fields there is no length prefix, so the
    input must already be exactly `size` bytes long.
    """
    if len(data) != size:
        raise InvalidParameterError(
            "fixed_bytes", f"expected {size} bytes, got {len(data)}"
        )
    return bytes(data)


def deserialize_fixed_bytes(data: bytes, size: int, offset: int = 0) -> Tuple[bytes, int]:
    """
    Deserialize fixed-length byte array.
    Returns (bytes_data, bytes_consumed).
    """
    require_bytes(data, offset, size, "fixed_bytes")
    return bytes(data[offset:offset + size]), size


class ByteReader:
    """
    Checked cursor for sequential deserialization.
    """

    def __init__(self, data: bytes, offset: int = 0):
        if offset < 0:
            raise InvalidParameterError("offset", f"negative offset: {offset}")
        self.data = data
        self.offset = offset

    def read_u8(self) -> int:
        value, size = deserialize_u8(self.data, self.offset)
        self.offset += size
        return value

    def peek_u8(self) -> int:
        """Read one byte without advancing the cursor."""
        value, _ = deserialize_u8(self.data, self.offset)
        return value

    def read_u32(self) -> int:
        value, size = deserialize_u32(self.data, self.offset)
        self.offset += size
        return value

    def read_fixed_bytes(self, size: int) -> bytes:
        """Read fixed-length byte array."""
        value, consumed = deserialize_fixed_bytes(self.data, size, self.offset)
        self.offset += consumed
        return value

    def read_hash(self) -> Hash:
        """Read a 32-byte hash."""
        value, consumed = Hash.deserialize(self.data, self.offset)
        self.offset += consumed
        return value


class ByteWriter:
    """
    Helper class for sequential serialization.
    """

    def __init__(self):
        self.buffer = bytearray()

    def write_u8(self, value: int) -> "ByteWriter":
        self.buffer.extend(serialize_u8(value))
        return self

    def write_u32(self, value: int) -> "ByteWriter":
        self.buffer.extend(serialize_u32(value))
        return self

    def write_fixed_bytes(self, data: bytes, size: int) -> "ByteWriter":
        """Write fixed-length byte array."""
        self.buffer.extend(serialize_fixed_bytes(data, size))
        return self

    def write_hash(self, value: Hash) -> "ByteWriter":
        """Write a 32-byte hash."""
        self.buffer.extend(serialize_fixed_bytes(value.serialize(), HASH_SIZE))
        return self

    def to_bytes(self) -> bytes:
        """Return the serialized bytes."""
        return bytes(self.buffer)
