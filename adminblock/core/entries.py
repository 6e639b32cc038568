"""
Administrative Block Entries

Every entry serializes with its type tag as the first byte. Decoding peeks
at that byte, picks the variant from ENTRY_TYPES and lets the variant read
the rest. The set of variants is closed: a new entry kind means a new class
and a new row in ENTRY_TYPES.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Mapping, Tuple, Type

from adminblock.constants import (
    DB_SIGNATURE_ENTRY_SIZE,
    END_OF_MINUTE_ENTRY_SIZE,
    ENTRY_TYPE_NAMES,
    HASH_SIZE,
    SIG_LENGTH,
    TYPE_DB_SIGNATURE,
    TYPE_MINUTE_NUMBER,
    U8_MAX,
)
from adminblock.core.serialization import ByteReader, ByteWriter, require_bytes
from adminblock.core.types import Hash
from adminblock.errors import InvalidParameterError, UnknownEntryTypeError


class AdminBlockEntry(ABC):
    """
    Base class for admin block entries.

    Subclasses set `entry_type` and implement the codec methods.
    """
    entry_type: ClassVar[int]

    def type(self) -> int:
        """Return the entry type tag."""
        return self.entry_type

    @abstractmethod
    def serialize(self) -> bytes:
        """Serialize entry, type tag first."""

    @abstractmethod
    def size(self) -> int:
        """Return serialized size in bytes."""

    @classmethod
    @abstractmethod
    def deserialize(cls, data: bytes, offset: int = 0) -> Tuple["AdminBlockEntry", int]:
        """Deserialize entry, return (entry, bytes_consumed)."""

    @abstractmethod
    def to_dict(self) -> dict:
        """Export entry as dictionary."""

    @classmethod
    def _read_tag(cls, reader: ByteReader) -> None:
        start = reader.offset
        tag = reader.read_u8()
        if tag != cls.entry_type:
            raise UnknownEntryTypeError(tag, start)


@dataclass(slots=True)
class EndOfMinuteEntry(AdminBlockEntry):
    """
    End-of-minute marker.

    SIZE: 2 bytes
    SERIALIZATION: type || minute
    """
    entry_type: ClassVar[int] = TYPE_MINUTE_NUMBER

    minute: int = 0                     # u8 - Minute number

    def __post_init__(self):
        if not 0 <= self.minute <= U8_MAX:
            raise InvalidParameterError("minute", f"must fit in a byte, got {self.minute}")

    def serialize(self) -> bytes:
        """Serialize end-of-minute entry."""
        writer = ByteWriter()
        writer.write_u8(self.entry_type)
        writer.write_u8(self.minute)
        return writer.to_bytes()

    def size(self) -> int:
        return END_OF_MINUTE_ENTRY_SIZE

    @classmethod
    def deserialize(cls, data: bytes, offset: int = 0) -> Tuple["EndOfMinuteEntry", int]:
        """Deserialize end-of-minute entry."""
        require_bytes(data, offset, END_OF_MINUTE_ENTRY_SIZE, "end_of_minute_entry")
        reader = ByteReader(data, offset)
        cls._read_tag(reader)
        minute = reader.read_u8()
        return cls(minute=minute), reader.offset - offset

    def to_dict(self) -> dict:
        return {
            "type": ENTRY_TYPE_NAMES[self.entry_type],
            "minute": self.minute,
        }


@dataclass(slots=True)
class DBSignatureEntry(AdminBlockEntry):
    """
    Directory block signature by an authority server.

    SIZE: 129 bytes
    SERIALIZATION: type || identity_chain_id || pub_key || prev_db_sig
    """
    entry_type: ClassVar[int] = TYPE_DB_SIGNATURE

    identity_chain_id: Hash = field(default_factory=Hash.zero)
    pub_key: Hash = field(default_factory=Hash.zero)
    prev_db_sig: bytes = field(default_factory=lambda: bytes(SIG_LENGTH))

    def __post_init__(self):
        if len(self.prev_db_sig) != SIG_LENGTH:
            raise InvalidParameterError(
                "prev_db_sig", f"must be {SIG_LENGTH} bytes, got {len(self.prev_db_sig)}"
            )
        self.prev_db_sig = bytes(self.prev_db_sig)

    def serialize(self) -> bytes:
        """Serialize directory block signature entry."""
        writer = ByteWriter()
        writer.write_u8(self.entry_type)
        writer.write_hash(self.identity_chain_id)
        writer.write_hash(self.pub_key)
        writer.write_fixed_bytes(self.prev_db_sig, SIG_LENGTH)
        return writer.to_bytes()

    def size(self) -> int:
        return 1 + HASH_SIZE + HASH_SIZE + SIG_LENGTH

    @classmethod
    def deserialize(cls, data: bytes, offset: int = 0) -> Tuple["DBSignatureEntry", int]:
        """Deserialize directory block signature entry."""
        require_bytes(data, offset, DB_SIGNATURE_ENTRY_SIZE, "db_signature_entry")
        reader = ByteReader(data, offset)
        cls._read_tag(reader)
        identity_chain_id = reader.read_hash()
        pub_key = reader.read_hash()
        prev_db_sig = reader.read_fixed_bytes(SIG_LENGTH)

        return cls(
            identity_chain_id=identity_chain_id,
            pub_key=pub_key,
            prev_db_sig=prev_db_sig
        ), reader.offset - offset

    def to_dict(self) -> dict:
        return {
            "type": ENTRY_TYPE_NAMES[self.entry_type],
            "identity_chain_id": self.identity_chain_id.hex(),
            "pub_key": self.pub_key.hex(),
            "prev_db_sig": self.prev_db_sig.hex(),
        }


ENTRY_TYPES: Mapping[int, Type[AdminBlockEntry]] = MappingProxyType({
    TYPE_MINUTE_NUMBER: EndOfMinuteEntry,
    TYPE_DB_SIGNATURE: DBSignatureEntry,
})


def entry_class_for(entry_type: int, offset: int = 0) -> Type[AdminBlockEntry]:
    """Look up the entry class for a type tag."""
    try:
        return ENTRY_TYPES[entry_type]
    except KeyError:
        raise UnknownEntryTypeError(entry_type, offset) from None


def deserialize_entry(data: bytes, offset: int = 0) -> Tuple[AdminBlockEntry, int]:
    """
    Deserialize whichever entry starts at `offset`.

    The tag byte is peeked, not consumed; the chosen variant reads it again
    as part of its own encoding. Returns (entry, bytes_consumed).
    """
    reader = ByteReader(data, offset)
    entry_type = reader.peek_u8()
    entry_cls = entry_class_for(entry_type, offset)
    return entry_cls.deserialize(data, offset)
