"""
Admin Block Test Fixtures
"""

import pytest

from adminblock.constants import SIG_LENGTH
from adminblock.core.block import AdminBlock
from adminblock.core.chain import AdminChain
from adminblock.core.entries import DBSignatureEntry, EndOfMinuteEntry
from adminblock.core.types import Hash


@pytest.fixture
def mock_hash() -> Hash:
    """Create a mock hash for testing."""
    return Hash(bytes([i % 256 for i in range(32)]))


@pytest.fixture
def zero_hash() -> Hash:
    """Create a zero hash."""
    return Hash.zero()


@pytest.fixture
def chain_id() -> Hash:
    """Create a deterministic chain id."""
    return Hash(bytes([0xC0 + (i % 16) for i in range(32)]))


@pytest.fixture
def chain(chain_id) -> AdminChain:
    """Create a fresh chain at height 0."""
    return AdminChain(chain_id=chain_id, name=[b"admin"])


@pytest.fixture
def db_signature_entry() -> DBSignatureEntry:
    """Create a signature entry with recognizable field contents."""
    return DBSignatureEntry(
        identity_chain_id=Hash(bytes([0x11] * 32)),
        pub_key=Hash(bytes([(i + 100) % 256 for i in range(32)])),
        prev_db_sig=bytes([i % 256 for i in range(SIG_LENGTH)]),
    )


@pytest.fixture
def populated_block(chain, db_signature_entry) -> AdminBlock:
    """Create an origin block holding one entry of each kind."""
    block = chain.begin_next_block()
    block.add_entry(db_signature_entry)
    block.add_end_of_minute_marker(1)
    block.add_entry(EndOfMinuteEntry(minute=2))
    return block
