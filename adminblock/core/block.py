"""
Administrative Block

A special block which accompanies each directory block. It carries the
signatures and organizational data needed to validate previous and future
directory blocks, and is linked to its predecessor by the SHA-256 of the
predecessor's serialized form.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from adminblock.constants import DEFAULT_ENTRY_CAPACITY
from adminblock.core.entries import AdminBlockEntry, EndOfMinuteEntry, deserialize_entry
from adminblock.core.header import AdminBlockHeader
from adminblock.core.types import Hash
from adminblock.crypto.hash import content_hash
from adminblock.errors import (
    BodySizeMismatchError,
    EntryCountMismatchError,
    InvalidChainLinkageError,
    InvalidParameterError,
)

if TYPE_CHECKING:
    from adminblock.core.chain import AdminChain

logger = logging.getLogger(__name__)


@dataclass
class AdminBlock:
    """
    Admin block: header plus ordered entries.

    The cached hash is not part of the serialized form. Adding an entry
    drops the cached hash, so a hash obtained after the last add_entry
    always matches the current content.
    """
    header: AdminBlockHeader = field(default_factory=AdminBlockHeader)
    entries: List[AdminBlockEntry] = field(default_factory=list)

    _ab_hash: Optional[Hash] = field(default=None, init=False, repr=False, compare=False)
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )

    @classmethod
    def create(
        cls,
        chain: "AdminChain",
        prev: Optional["AdminBlock"] = None,
        capacity: int = DEFAULT_ENTRY_CAPACITY,
    ) -> "AdminBlock":
        """
        Create an empty admin block as the successor of `prev`.

        Args:
            chain: Chain supplying chain id and next block height
            prev: Previous block, None for the origin block
            capacity: Expected entry count (advisory)

        Raises:
            InvalidChainLinkageError: If `prev` presence disagrees with the chain height
        """
        if capacity < 0:
            raise InvalidParameterError("capacity", f"must be non-negative, got {capacity}")

        height = chain.next_block_height
        if prev is None and height != 0:
            raise InvalidChainLinkageError("previous block cannot be None", height)
        if prev is not None and height == 0:
            raise InvalidChainLinkageError("origin block cannot have a parent block", height)

        if prev is None:
            prev_hash = Hash.zero()
        else:
            prev_hash = prev.block_hash()

        header = AdminBlockHeader(
            chain_id=chain.chain_id,
            prev_hash=prev_hash,
            db_height=height,
        )
        return cls(header=header)

    # --------------------------------------------------------------------------
    # Hashing
    # --------------------------------------------------------------------------

    @property
    def ab_hash(self) -> Optional[Hash]:
        """Cached block hash, or None if not built since the last change."""
        return self._ab_hash

    def build_ab_hash(self) -> Hash:
        """Hash the serialized block and cache the result."""
        with self._lock:
            self._ab_hash = content_hash(self.serialize())
            logger.debug(
                f"Built admin block hash at height {self.header.db_height}: "
                f"{self._ab_hash.hex()[:16]}..."
            )
            return self._ab_hash

    def block_hash(self) -> Hash:
        """Return the cached block hash, building it if needed."""
        with self._lock:
            if self._ab_hash is None:
                return self.build_ab_hash()
            return self._ab_hash

    # --------------------------------------------------------------------------
    # Entries
    # --------------------------------------------------------------------------

    def add_entry(self, entry: AdminBlockEntry) -> None:
        """Append an entry and keep the header counters in step."""
        if not isinstance(entry, AdminBlockEntry):
            raise InvalidParameterError("entry", f"not an admin block entry: {entry!r}")

        with self._lock:
            self.entries.append(entry)
            self.header.entry_count = len(self.entries)
            self.header.body_size += entry.size()
            self._ab_hash = None

    def add_end_of_minute_marker(self, minute: int) -> None:
        """Append an end-of-minute marker."""
        self.add_entry(EndOfMinuteEntry(minute=minute))

    # --------------------------------------------------------------------------
    # Serialization
    # --------------------------------------------------------------------------

    def serialize(self) -> bytes:
        """Serialize header followed by entries in order."""
        with self._lock:
            if self.header.entry_count != len(self.entries):
                raise EntryCountMismatchError(self.header.entry_count, len(self.entries))

            parts = [self.header.serialize()]
            parts.extend(entry.serialize() for entry in self.entries)
            return b"".join(parts)

    @classmethod
    def deserialize(
        cls,
        data: bytes,
        offset: int = 0,
        verify_body_size: bool = False,
    ) -> Tuple["AdminBlock", int]:
        """
        Deserialize admin block.

        Args:
            data: Buffer holding the block
            offset: Start of the block within `data`
            verify_body_size: Reject blocks whose declared body size differs
                from the decoded entries

        Returns:
            (block, bytes_consumed). The block hash is not set.
        """
        header, consumed = AdminBlockHeader.deserialize(data, offset)
        cursor = offset + consumed

        entries: List[AdminBlockEntry] = []
        for _ in range(header.entry_count):
            entry, consumed = deserialize_entry(data, cursor)
            entries.append(entry)
            cursor += consumed

        body_size = cursor - offset - AdminBlockHeader.size()
        if verify_body_size and header.body_size != body_size:
            raise BodySizeMismatchError(header.body_size, body_size)

        logger.debug(
            f"Decoded admin block {header.db_height} with {len(entries)} entries"
        )
        return cls(header=header, entries=entries), cursor - offset

    @classmethod
    def from_bytes(cls, data: bytes, verify_body_size: bool = False) -> "AdminBlock":
        """Deserialize a block from the start of `data`."""
        block, _ = cls.deserialize(data, verify_body_size=verify_body_size)
        return block

    def body_size(self) -> int:
        """Return the serialized size of the entries."""
        return sum(entry.size() for entry in self.entries)

    def size(self) -> int:
        """Return block size in bytes."""
        return AdminBlockHeader.size() + self.body_size()

    def to_dict(self) -> dict:
        """Export block as dictionary."""
        return {
            "header": self.header.to_dict(),
            "entries": [entry.to_dict() for entry in self.entries],
            "ab_hash": self._ab_hash.hex() if self._ab_hash is not None else None,
        }

    def __repr__(self) -> str:
        return (
            f"AdminBlock(height={self.header.db_height}, "
            f"entries={len(self.entries)}, "
            f"prev={self.header.prev_hash.hex()[:16]}...)"
        )


def block_hash(block: AdminBlock) -> Hash:
    """Compute admin block hash."""
    return block.block_hash()
