"""
Administrative Block Hash Functions

SHA-256 per FIPS 180-4, used for block content hashes.
"""

from __future__ import annotations
import hashlib
from typing import Union

from adminblock.core.types import Hash


def sha256(data: Union[bytes, bytearray, memoryview]) -> Hash:
    """
    SHA-256 hash function.

    Args:
        data: Input data to hash

    Returns:
        Hash: 32-byte hash output wrapped in Hash type
    """
    hasher = hashlib.sha256()
    hasher.update(data)
    return Hash(hasher.digest())


# Content hash used to link a block to its successor.
content_hash = sha256
