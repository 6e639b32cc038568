"""
Administrative Block

Binary codec and chaining rules for the administrative block that
accompanies each directory block.
"""

__version__ = "0.1.0"
__author__ = "Admin Block Team"

from adminblock.constants import HEADER_SIZE, SIG_LENGTH, TYPE_DB_SIGNATURE, TYPE_MINUTE_NUMBER
from adminblock.core import (
    AdminBlock,
    AdminBlockEntry,
    AdminBlockHeader,
    AdminChain,
    DBSignatureEntry,
    EndOfMinuteEntry,
    Hash,
)

__all__ = [
    "HEADER_SIZE",
    "SIG_LENGTH",
    "TYPE_DB_SIGNATURE",
    "TYPE_MINUTE_NUMBER",
    "AdminBlock",
    "AdminBlockEntry",
    "AdminBlockHeader",
    "AdminChain",
    "DBSignatureEntry",
    "EndOfMinuteEntry",
    "Hash",
    "__version__",
]
