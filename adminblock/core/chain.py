"""
Administrative Chain

Tracks the height of the next admin block and serializes block creation.
"""

from __future__ import annotations
import logging
import threading
from typing import TYPE_CHECKING, List, Optional

from adminblock.constants import ADMIN_CHAIN_ID_HEX, DEFAULT_ENTRY_CAPACITY, U32_MAX
from adminblock.core.block import AdminBlock
from adminblock.core.types import Hash
from adminblock.errors import InvalidChainLinkageError, InvalidParameterError

if TYPE_CHECKING:
    from adminblock.config import ChainConfig

logger = logging.getLogger(__name__)


class AdminChain:
    """
    Administrative chain state.

    Thread-safe: reading the next height, checking linkage, building the
    header and advancing the height happen under one lock.
    """

    def __init__(
        self,
        chain_id: Optional[Hash] = None,
        name: Optional[List[bytes]] = None,
        next_block_height: int = 0,
        default_capacity: int = DEFAULT_ENTRY_CAPACITY,
    ):
        if not 0 <= next_block_height <= U32_MAX:
            raise InvalidParameterError(
                "next_block_height", f"out of u32 range: {next_block_height}"
            )
        self.chain_id = chain_id if chain_id is not None else Hash.from_hex(ADMIN_CHAIN_ID_HEX)
        self.name: List[bytes] = list(name) if name else []
        self.default_capacity = default_capacity
        self.next_block: Optional[AdminBlock] = None
        self._next_block_height = next_block_height
        self._lock = threading.Lock()

    @property
    def next_block_height(self) -> int:
        """Height that the next created block will receive."""
        return self._next_block_height

    @property
    def height(self) -> int:
        """Snapshot of the next block height, read under the chain lock."""
        with self._lock:
            return self._next_block_height

    def begin_next_block(
        self,
        prev: Optional[AdminBlock] = None,
        capacity: Optional[int] = None,
    ) -> AdminBlock:
        """
        Create the next empty block and advance the chain height.

        The height only advances when creation succeeds.

        Args:
            prev: Previous block, None for the origin block
            capacity: Expected entry count (advisory), defaults to the
                chain's default_capacity

        Raises:
            InvalidChainLinkageError: If `prev` presence disagrees with the chain height
            InvalidParameterError: If the height would overflow u32
        """
        if capacity is None:
            capacity = self.default_capacity

        with self._lock:
            if self._next_block_height > U32_MAX:
                raise InvalidParameterError("next_block_height", "chain height exhausted")

            try:
                block = AdminBlock.create(self, prev, capacity)
            except InvalidChainLinkageError as e:
                logger.warning(f"Rejected admin block creation: {e.message}")
                raise

            self.next_block = block
            self._next_block_height += 1

        logger.info(
            f"Started admin block {block.header.db_height} "
            f"(prev {block.header.prev_hash.hex()[:16]}...)"
        )
        return block

    @classmethod
    def from_config(cls, config: "ChainConfig") -> "AdminChain":
        """Create a chain from configuration."""
        return cls(
            chain_id=Hash.from_hex(config.chain_id),
            name=[part.encode("utf-8") for part in config.name],
            default_capacity=config.initial_capacity,
        )

    def __repr__(self) -> str:
        return (
            f"AdminChain(chain_id={self.chain_id.hex()[:16]}..., "
            f"next_height={self._next_block_height})"
        )
