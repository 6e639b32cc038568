"""
Admin Block Tests
"""

import threading

import pytest

from adminblock.constants import (
    DB_SIGNATURE_ENTRY_SIZE,
    HEADER_SIZE,
    TYPE_DB_SIGNATURE,
    TYPE_MINUTE_NUMBER,
)
from adminblock.core.block import AdminBlock, block_hash
from adminblock.core.chain import AdminChain
from adminblock.core.entries import DBSignatureEntry, EndOfMinuteEntry
from adminblock.core.header import AdminBlockHeader
from adminblock.core.types import Hash
from adminblock.crypto.hash import sha256
from adminblock.errors import (
    BodySizeMismatchError,
    EntryCountMismatchError,
    InvalidChainLinkageError,
    InvalidParameterError,
    TruncatedInputError,
    UnknownEntryTypeError,
)


class TestCreate:
    """Tests for AdminBlock.create linkage rules."""

    def test_origin_block(self, chain, chain_id):
        """Test origin block has zero parent and height 0."""
        block = AdminBlock.create(chain, None)
        assert block.header.chain_id == chain_id
        assert block.header.prev_hash == Hash.zero()
        assert block.header.db_height == 0
        assert block.entries == []
        assert block.ab_hash is None

    def test_origin_with_parent_rejected(self, chain):
        """Test a parent is not allowed at height 0."""
        parent = AdminBlock.create(chain, None)
        with pytest.raises(InvalidChainLinkageError) as exc_info:
            AdminBlock.create(chain, parent)
        assert exc_info.value.details["next_height"] == 0

    def test_missing_parent_rejected(self, chain_id):
        """Test a parent is required above height 0."""
        chain = AdminChain(chain_id=chain_id, next_block_height=5)
        with pytest.raises(InvalidChainLinkageError):
            AdminBlock.create(chain, None)

    def test_parent_hash_built_lazily(self, chain_id, populated_block):
        """Test the parent's hash is computed when not cached."""
        assert populated_block.ab_hash is None
        chain = AdminChain(chain_id=chain_id, next_block_height=1)

        child = AdminBlock.create(chain, populated_block)

        assert populated_block.ab_hash == sha256(populated_block.serialize())
        assert child.header.prev_hash == populated_block.ab_hash
        assert child.header.db_height == 1

    def test_parent_hash_cached(self, chain_id, populated_block):
        """Test a cached parent hash is reused."""
        cached = populated_block.build_ab_hash()
        chain = AdminChain(chain_id=chain_id, next_block_height=1)
        child = AdminBlock.create(chain, populated_block)
        assert child.header.prev_hash is cached

    def test_negative_capacity(self, chain):
        """Test capacity hint must be non-negative."""
        with pytest.raises(InvalidParameterError):
            AdminBlock.create(chain, None, capacity=-1)


class TestEntries:
    """Tests for adding entries."""

    def test_add_entry_updates_header(self, chain, db_signature_entry):
        """Test entry count and body size follow added entries."""
        block = AdminBlock.create(chain, None)
        block.add_entry(db_signature_entry)
        block.add_end_of_minute_marker(4)

        assert block.header.entry_count == 2
        assert block.header.body_size == DB_SIGNATURE_ENTRY_SIZE + 2
        assert block.entries[-1] == EndOfMinuteEntry(minute=4)

    def test_insertion_order_kept(self, populated_block):
        """Test entries keep insertion order."""
        types = [entry.type() for entry in populated_block.entries]
        assert types == [TYPE_DB_SIGNATURE, TYPE_MINUTE_NUMBER, TYPE_MINUTE_NUMBER]

    def test_add_entry_invalidates_hash(self, populated_block):
        """Test adding an entry drops the cached hash."""
        first = populated_block.build_ab_hash()
        populated_block.add_end_of_minute_marker(3)
        assert populated_block.ab_hash is None
        assert populated_block.block_hash() != first

    def test_add_non_entry(self, chain):
        """Test arbitrary objects are rejected."""
        block = AdminBlock.create(chain, None)
        with pytest.raises(InvalidParameterError):
            block.add_entry(b"\x00\x01")

    @pytest.mark.timeout(30)
    def test_concurrent_appends_consistent(self, chain):
        """Test concurrent appends keep entry count and body size in step."""
        block = AdminBlock.create(chain, None)
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            for i in range(500):
                block.add_end_of_minute_marker(i % 256)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(block.entries) == 4000
        assert block.header.entry_count == len(block.entries)
        assert block.header.body_size == sum(entry.size() for entry in block.entries)
        assert block.header.body_size == 8000
        assert AdminBlock.from_bytes(block.serialize(), verify_body_size=True) == block


class TestSerialization:
    """Tests for whole-block encoding."""

    def test_origin_example(self, chain):
        """Test empty origin block encodes to the bare header, then grows by one marker."""
        block = chain.begin_next_block()
        data = block.serialize()
        assert len(data) == 76
        assert data[32:64] == bytes(32)

        block.add_end_of_minute_marker(0x01)
        data = block.serialize()
        assert len(data) == 78
        assert data[-2:] == bytes([TYPE_MINUTE_NUMBER, 0x01])
        assert data[68:72] == b"\x00\x00\x00\x01"
        assert data[72:76] == b"\x00\x00\x00\x02"

    def test_size_matches_serialize(self, populated_block):
        """Test size equals serialized length."""
        assert populated_block.size() == len(populated_block.serialize())
        assert populated_block.body_size() == populated_block.size() - HEADER_SIZE

    def test_roundtrip(self, populated_block):
        """Test decode reproduces header and ordered entries."""
        data = populated_block.serialize()
        decoded, consumed = AdminBlock.deserialize(data)

        assert consumed == len(data)
        assert decoded.header == populated_block.header
        assert decoded.entries == populated_block.entries
        assert decoded == populated_block
        assert decoded.ab_hash is None

    def test_roundtrip_hash_stable(self, populated_block):
        """Test decoded block hashes to the same value."""
        decoded = AdminBlock.from_bytes(populated_block.serialize())
        assert decoded.block_hash() == populated_block.block_hash()

    def test_deserialize_offset(self, populated_block):
        """Test decoding from inside a larger buffer."""
        data = b"\xee" * 3 + populated_block.serialize() + b"\xdd"
        decoded, consumed = AdminBlock.deserialize(data, 3)
        assert decoded == populated_block
        assert consumed == populated_block.size()

    def test_entry_count_mismatch(self, chain):
        """Test serializing with an inconsistent header fails."""
        block = AdminBlock.create(chain, None)
        block.entries.append(EndOfMinuteEntry(minute=1))
        with pytest.raises(EntryCountMismatchError):
            block.serialize()

    def test_truncated_mid_sequence(self, populated_block):
        """Test a buffer ending between entries is truncated input."""
        data = populated_block.serialize()[:-2]
        with pytest.raises(TruncatedInputError):
            AdminBlock.deserialize(data)

    def test_truncated_inside_entry(self, populated_block):
        """Test a buffer ending inside an entry is truncated input."""
        data = populated_block.serialize()[:HEADER_SIZE + 10]
        with pytest.raises(TruncatedInputError):
            AdminBlock.deserialize(data)

    def test_truncated_header(self, populated_block):
        """Test a short header is truncated input."""
        with pytest.raises(TruncatedInputError):
            AdminBlock.deserialize(populated_block.serialize()[:75])

    def test_unknown_entry_type(self, chain_id):
        """Test an unknown tag stops decoding."""
        header = AdminBlockHeader(chain_id=chain_id, entry_count=2, body_size=4)
        data = header.serialize() + b"\x7f\x00\x00\x01"
        with pytest.raises(UnknownEntryTypeError) as exc_info:
            AdminBlock.deserialize(data)
        assert exc_info.value.details["offset"] == HEADER_SIZE

    def test_declared_count_exceeds_data(self, chain_id):
        """Test a huge declared count with no body fails cleanly."""
        header = AdminBlockHeader(chain_id=chain_id, entry_count=0xFFFFFFFF)
        with pytest.raises(TruncatedInputError):
            AdminBlock.deserialize(header.serialize())

    def test_body_size_advisory_by_default(self, populated_block):
        """Test a wrong body size is accepted unless verification is requested."""
        populated_block.header.body_size += 1
        data = populated_block.serialize()

        decoded, _ = AdminBlock.deserialize(data)
        assert decoded.header.body_size == populated_block.header.body_size

        with pytest.raises(BodySizeMismatchError):
            AdminBlock.deserialize(data, verify_body_size=True)

    def test_body_size_verified(self, populated_block):
        """Test a consistent body size passes verification."""
        decoded = AdminBlock.from_bytes(populated_block.serialize(), verify_body_size=True)
        assert decoded.body_size() == populated_block.header.body_size


class TestHashing:
    """Tests for block hashing."""

    def test_build_ab_hash(self, populated_block):
        """Test block hash is SHA-256 of the serialized block."""
        expected = sha256(populated_block.serialize())
        assert populated_block.build_ab_hash() == expected
        assert populated_block.ab_hash == expected
        assert block_hash(populated_block) == expected

    def test_hash_idempotent(self, populated_block):
        """Test rebuilding without changes yields the same hash."""
        assert populated_block.build_ab_hash() == populated_block.build_ab_hash()

    def test_hash_depends_on_order(self, chain):
        """Test entry order changes the hash."""
        first = AdminBlock.create(chain, None)
        first.add_end_of_minute_marker(1)
        first.add_end_of_minute_marker(2)

        second = AdminBlock.create(chain, None)
        second.add_end_of_minute_marker(2)
        second.add_end_of_minute_marker(1)

        assert first.block_hash() != second.block_hash()

    def test_to_dict(self, populated_block):
        """Test dictionary export includes hash once built."""
        assert populated_block.to_dict()["ab_hash"] is None
        populated_block.build_ab_hash()
        exported = populated_block.to_dict()
        assert exported["ab_hash"] == populated_block.ab_hash.hex()
        assert len(exported["entries"]) == 3
        assert exported["header"]["entry_count"] == 3

    def test_repr(self, populated_block):
        """Test repr mentions height and entry count."""
        assert "height=0" in repr(populated_block)
        assert "entries=3" in repr(populated_block)


def test_signature_block_roundtrip(chain):
    """Test a block of several signature entries survives a round trip."""
    block = chain.begin_next_block()
    for i in range(5):
        block.add_entry(DBSignatureEntry(
            identity_chain_id=Hash(bytes([i] * 32)),
            pub_key=Hash(bytes([i + 1] * 32)),
            prev_db_sig=bytes([i + 2] * 64),
        ))
    decoded = AdminBlock.from_bytes(block.serialize())
    assert decoded.entries == block.entries
    assert decoded.size() == HEADER_SIZE + 5 * DB_SIGNATURE_ENTRY_SIZE
