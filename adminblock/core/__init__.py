"""
Administrative Block Core Data Structures
"""

from adminblock.core.types import Hash
from adminblock.core.serialization import (
    ByteReader,
    ByteWriter,
    serialize_u8,
    serialize_u32,
    deserialize_u8,
    deserialize_u32,
)
from adminblock.core.entries import (
    AdminBlockEntry,
    EndOfMinuteEntry,
    DBSignatureEntry,
    ENTRY_TYPES,
    deserialize_entry,
)
from adminblock.core.header import AdminBlockHeader
from adminblock.core.block import AdminBlock, block_hash
from adminblock.core.chain import AdminChain

__all__ = [
    # Types
    "Hash",
    # Serialization
    "ByteReader",
    "ByteWriter",
    "serialize_u8",
    "serialize_u32",
    "deserialize_u8",
    "deserialize_u32",
    # Entries
    "AdminBlockEntry",
    "EndOfMinuteEntry",
    "DBSignatureEntry",
    "ENTRY_TYPES",
    "deserialize_entry",
    # Blocks
    "AdminBlockHeader",
    "AdminBlock",
    "AdminChain",
    "block_hash",
]
