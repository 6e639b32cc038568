"""
Administrative Block Error Handling

All error codes and exception classes.
"""

from enum import IntEnum
from typing import Optional, Any, Union


class ErrorCode(IntEnum):
    """Admin block error codes."""

    # 1xxx - General errors
    INVALID_PARAMETER = 1001

    # 2xxx - Block and chain errors
    INVALID_CHAIN_LINKAGE = 2001
    ENTRY_COUNT_MISMATCH = 2002
    BODY_SIZE_MISMATCH = 2003

    # 3xxx - Codec errors
    TRUNCATED_INPUT = 3001
    UNKNOWN_ENTRY_TYPE = 3002
    DIGEST_CODEC_ERROR = 3003


class AdminBlockError(Exception):
    """Base exception for all admin block errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# General Errors (1xxx)
# ==============================================================================

class InvalidParameterError(AdminBlockError):
    def __init__(self, param: str, message: str = ""):
        msg = f"Invalid parameter: {param}"
        if message:
            msg += f" - {message}"
        super().__init__(ErrorCode.INVALID_PARAMETER, msg, {"parameter": param})


# ==============================================================================
# Block and Chain Errors (2xxx)
# ==============================================================================

class InvalidChainLinkageError(AdminBlockError):
    def __init__(self, reason: str, next_height: int):
        super().__init__(
            ErrorCode.INVALID_CHAIN_LINKAGE,
            f"Invalid chain linkage: {reason}",
            {"reason": reason, "next_height": next_height}
        )


class EntryCountMismatchError(AdminBlockError):
    def __init__(self, declared: int, actual: int):
        super().__init__(
            ErrorCode.ENTRY_COUNT_MISMATCH,
            f"Header entry count {declared} does not match {actual} entries",
            {"declared": declared, "actual": actual}
        )


class BodySizeMismatchError(AdminBlockError):
    def __init__(self, declared: int, actual: int):
        super().__init__(
            ErrorCode.BODY_SIZE_MISMATCH,
            f"Header body size {declared} does not match decoded body of {actual} bytes",
            {"declared": declared, "actual": actual}
        )


# ==============================================================================
# Codec Errors (3xxx)
# ==============================================================================

class TruncatedInputError(AdminBlockError):
    def __init__(self, field: str, needed: int, available: int):
        super().__init__(
            ErrorCode.TRUNCATED_INPUT,
            f"Truncated input reading {field}: need {needed} bytes, {available} available",
            {"field": field, "needed": needed, "available": available}
        )


class UnknownEntryTypeError(AdminBlockError):
    def __init__(self, entry_type: int, offset: int):
        super().__init__(
            ErrorCode.UNKNOWN_ENTRY_TYPE,
            f"Unknown admin block entry type 0x{entry_type:02x} at offset {offset}",
            {"entry_type": entry_type, "offset": offset}
        )


class DigestCodecError(AdminBlockError):
    def __init__(self, length: Union[int, str], expected: int):
        super().__init__(
            ErrorCode.DIGEST_CODEC_ERROR,
            f"Hash must be {expected} bytes, got {length}",
            {"length": length, "expected": expected}
        )
