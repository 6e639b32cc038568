"""
Administrative Block Constants

All protocol constants defined here for single source of truth.
"""

from typing import Final

# ==============================================================================
# SERIALIZATION CONSTANTS
# ==============================================================================

# Field sizes in bytes
HASH_SIZE: Final[int] = 32
SIG_LENGTH: Final[int] = 64                     # ed25519 signature
U8_SIZE: Final[int] = 1
U32_SIZE: Final[int] = 4

U8_MAX: Final[int] = 0xFF
U32_MAX: Final[int] = 0xFFFFFFFF

# Byte order
BIG_ENDIAN: Final[str] = "big"

# ==============================================================================
# ADMIN BLOCK ENTRY TYPES
# ==============================================================================

TYPE_MINUTE_NUMBER: Final[int] = 0x00           # End-of-minute marker
TYPE_DB_SIGNATURE: Final[int] = 0x01            # Directory block signature

ENTRY_TYPE_NAMES: Final[dict] = {
    TYPE_MINUTE_NUMBER: "minute_number",
    TYPE_DB_SIGNATURE: "db_signature",
}

# ==============================================================================
# ADMIN BLOCK LAYOUT
# ==============================================================================

# chain_id (32) + prev_hash (32) + db_height (4) + entry_count (4) + body_size (4)
HEADER_SIZE: Final[int] = 2 * HASH_SIZE + 3 * U32_SIZE

# tag (1) + minute (1)
END_OF_MINUTE_ENTRY_SIZE: Final[int] = 2

# tag (1) + identity chain id (32) + pub key (32) + signature (64)
DB_SIGNATURE_ENTRY_SIZE: Final[int] = U8_SIZE + 2 * HASH_SIZE + SIG_LENGTH

DEFAULT_ENTRY_CAPACITY: Final[int] = 16

# ==============================================================================
# CHAIN IDENTITY
# ==============================================================================

ADMIN_CHAIN_ID_HEX: Final[str] = "00" * 31 + "0a"
ADMIN_CHAIN_NAME: Final[str] = "admin"
