"""
Administrative Block Header

Fixed-size header carried in front of every admin block body.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from adminblock.constants import HASH_SIZE, HEADER_SIZE, U32_SIZE
from adminblock.core.serialization import ByteReader, ByteWriter, require_bytes
from adminblock.core.types import Hash


@dataclass(slots=True)
class AdminBlockHeader:
    """
    Admin block header.

    SIZE: 76 bytes
    SERIALIZATION: chain_id || prev_hash || db_height || entry_count || body_size
    """
    chain_id: Hash = field(default_factory=Hash.zero)      # Admin chain identity
    prev_hash: Hash = field(default_factory=Hash.zero)     # Hash of previous admin block
    db_height: int = 0                  # u32 - Directory block height
    entry_count: int = 0                # u32 - Number of entries in body
    body_size: int = 0                  # u32 - Body size in bytes

    def serialize(self) -> bytes:
        """Serialize admin block header."""
        writer = ByteWriter()

        writer.write_hash(self.chain_id)
        writer.write_hash(self.prev_hash)
        writer.write_u32(self.db_height)
        writer.write_u32(self.entry_count)
        writer.write_u32(self.body_size)

        return writer.to_bytes()

    @classmethod
    def deserialize(cls, data: bytes, offset: int = 0) -> Tuple["AdminBlockHeader", int]:
        """Deserialize admin block header."""
        require_bytes(data, offset, HEADER_SIZE, "admin_block_header")
        reader = ByteReader(data, offset)

        chain_id = reader.read_hash()
        prev_hash = reader.read_hash()
        db_height = reader.read_u32()
        entry_count = reader.read_u32()
        body_size = reader.read_u32()

        return cls(
            chain_id=chain_id,
            prev_hash=prev_hash,
            db_height=db_height,
            entry_count=entry_count,
            body_size=body_size
        ), reader.offset - offset

    @classmethod
    def size(cls) -> int:
        """Return fixed size in bytes."""
        return HASH_SIZE + HASH_SIZE + U32_SIZE + U32_SIZE + U32_SIZE  # 76 bytes

    def to_dict(self) -> dict:
        return {
            "chain_id": self.chain_id.hex(),
            "prev_hash": self.prev_hash.hex(),
            "db_height": self.db_height,
            "entry_count": self.entry_count,
            "body_size": self.body_size,
        }
