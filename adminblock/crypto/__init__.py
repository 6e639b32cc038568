"""
Administrative Block Cryptographic Primitives
"""

from adminblock.crypto.hash import sha256, content_hash

__all__ = [
    "sha256",
    "content_hash",
]
