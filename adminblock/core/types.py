"""
Administrative Block Hash Type

All multi-byte integers are BIG-ENDIAN unless noted.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from adminblock.constants import HASH_SIZE
from adminblock.errors import DigestCodecError


@dataclass(frozen=True, slots=True)
class Hash:
    """
    SHA-256 digest, also used as a chain or identity reference.

    SIZE: 32 bytes
    SERIALIZATION: raw bytes
    """
    data: bytes = field(default_factory=lambda: bytes(HASH_SIZE))

    def __post_init__(self):
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise DigestCodecError(type(self.data).__name__, HASH_SIZE)
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) != HASH_SIZE:
            raise DigestCodecError(len(self.data), HASH_SIZE)

    def __bytes__(self) -> bytes:
        return self.data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Hash):
            return self.data == other.data
        if isinstance(other, bytes):
            return self.data == other
        return False

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Hash({self.data.hex()[:16]}...)"

    def hex(self) -> str:
        return self.data.hex()

    def is_zero(self) -> bool:
        return self.data == bytes(HASH_SIZE)

    @classmethod
    def from_hex(cls, hex_string: str) -> Hash:
        return cls(bytes.fromhex(hex_string))

    @classmethod
    def zero(cls) -> Hash:
        return cls(bytes(HASH_SIZE))

    @classmethod
    def size(cls) -> int:
        """Return fixed size in bytes."""
        return HASH_SIZE

    def serialize(self) -> bytes:
        """Serialize to raw bytes."""
        return self.data

    @classmethod
    def deserialize(cls, data: bytes, offset: int = 0) -> tuple[Hash, int]:
        """
        Deserialize from bytes, return (Hash, bytes_consumed).

        Raises DigestCodecError if fewer than HASH_SIZE bytes remain.
        """
        available = max(len(data) - offset, 0)
        if available < HASH_SIZE:
            raise DigestCodecError(available, HASH_SIZE)
        return cls(bytes(data[offset:offset + HASH_SIZE])), HASH_SIZE
