"""
Administrative Block Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from adminblock.constants import (
    ADMIN_CHAIN_ID_HEX,
    ADMIN_CHAIN_NAME,
    DEFAULT_ENTRY_CAPACITY,
    HASH_SIZE,
)

logger = logging.getLogger(__name__)


@dataclass
class ChainConfig:
    """Admin chain configuration."""
    chain_id: str = ADMIN_CHAIN_ID_HEX
    name: List[str] = field(default_factory=lambda: [ADMIN_CHAIN_NAME])
    initial_capacity: int = DEFAULT_ENTRY_CAPACITY


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5


@dataclass
class AdminBlockConfig:
    """
    Complete configuration.

    All settings for building and decoding admin blocks.
    """
    chain: ChainConfig = field(default_factory=ChainConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        # Chain validation
        try:
            chain_id = bytes.fromhex(self.chain.chain_id)
        except ValueError:
            errors.append(f"chain_id is not valid hex: {self.chain.chain_id!r}")
        else:
            if len(chain_id) != HASH_SIZE:
                errors.append(f"chain_id must be {HASH_SIZE} bytes, got {len(chain_id)}")

        if self.chain.initial_capacity < 0:
            errors.append("initial_capacity cannot be negative")

        # Log validation
        if not isinstance(getattr(logging, self.log.level.upper(), None), int):
            errors.append(f"Unknown log level: {self.log.level}")

        if self.log.max_size_mb < 1:
            errors.append("max_size_mb must be at least 1")

        return errors

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "AdminBlockConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls()

        if "chain" in data:
            config.chain = ChainConfig(**data["chain"])

        if "log" in data:
            config.log = LogConfig(**data["log"])

        logger.info(f"Configuration loaded from {path}")
        return config

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "chain": asdict(self.chain),
            "log": asdict(self.log),
        }


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
