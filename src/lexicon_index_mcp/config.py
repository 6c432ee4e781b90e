"""
Configuration Management for Lexicon Index MCP

Following Linus's principle: "Good configuration is no configuration."
Provides sensible defaults with optional environment variable overrides.
"""

import logging
import math
import os
from typing import Optional


class LexiconConfig:
    """Lexicon service configuration"""

    # Rebuilds are rare and small, so the write bound is generous
    DEFAULT_WRITE_TIMEOUT_SECONDS = 30.0
    DEFAULT_READ_TIMEOUT_SECONDS = 30.0
    DEFAULT_MAX_QUERY_LENGTH = 256
    DEFAULT_MAX_TERM_LENGTH = 256
    DEFAULT_LOG_LEVEL = "ERROR"  # stdout carries the MCP stdio transport

    def __init__(self):
        # Load from environment variables with fallback to defaults
        self.write_timeout_seconds = self._get_float_env(
            "LEXICON_INDEX_WRITE_TIMEOUT_SECONDS", self.DEFAULT_WRITE_TIMEOUT_SECONDS
        )
        self.read_timeout_seconds = self._get_float_env(
            "LEXICON_INDEX_READ_TIMEOUT_SECONDS", self.DEFAULT_READ_TIMEOUT_SECONDS
        )
        self.max_query_length = self._get_int_env(
            "LEXICON_INDEX_MAX_QUERY_LENGTH", self.DEFAULT_MAX_QUERY_LENGTH
        )
        self.max_term_length = self._get_int_env(
            "LEXICON_INDEX_MAX_TERM_LENGTH", self.DEFAULT_MAX_TERM_LENGTH
        )
        self.dataset_path: Optional[str] = os.environ.get("LEXICON_INDEX_DATASET_PATH") or None
        self.log_level = os.environ.get("LEXICON_INDEX_LOG_LEVEL", self.DEFAULT_LOG_LEVEL).upper()

        # Validate configuration
        self._validate_config()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return int(value)
        except (ValueError, TypeError):
            pass
        return default

    def _get_float_env(self, key: str, default: float) -> float:
        """Get float from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return float(value)
        except (ValueError, TypeError):
            pass
        return default

    def _validate_config(self):
        """Validate configuration values"""
        if not math.isfinite(self.write_timeout_seconds) or self.write_timeout_seconds <= 0:
            raise ValueError("write_timeout_seconds must be a positive finite number")
        if not math.isfinite(self.read_timeout_seconds) or self.read_timeout_seconds <= 0:
            raise ValueError("read_timeout_seconds must be a positive finite number")
        if self.max_query_length <= 0:
            raise ValueError("max_query_length must be positive")
        if self.max_term_length <= 0:
            raise ValueError("max_term_length must be positive")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    def get_log_level(self) -> int:
        return logging.getLevelName(self.log_level)

    def __repr__(self) -> str:
        return (
            f"LexiconConfig("
            f"write_timeout_seconds={self.write_timeout_seconds}, "
            f"read_timeout_seconds={self.read_timeout_seconds}, "
            f"max_query_length={self.max_query_length}, "
            f"max_term_length={self.max_term_length}, "
            f"dataset_path={self.dataset_path!r}, "
            f"log_level={self.log_level})"
        )


# Global configuration instance
_config: Optional[LexiconConfig] = None


def get_config() -> LexiconConfig:
    """Get global lexicon configuration instance"""
    global _config
    if _config is None:
        _config = LexiconConfig()
    return _config


def reset_config():
    """Reset configuration (mainly for testing)"""
    global _config
    _config = None


# Environment documentation
CONFIG_DOCS = """
Lexicon Index Configuration Environment Variables:

- LEXICON_INDEX_WRITE_TIMEOUT_SECONDS: Max wait for exclusive access (default: 30)
- LEXICON_INDEX_READ_TIMEOUT_SECONDS: Max wait for a read permit (default: 30)
- LEXICON_INDEX_MAX_QUERY_LENGTH: Longest accepted normalized query (default: 256)
- LEXICON_INDEX_MAX_TERM_LENGTH: Longest accepted normalized term (default: 256)
- LEXICON_INDEX_DATASET_PATH: JSON dataset loaded at startup (default: bundled dataset)
- LEXICON_INDEX_LOG_LEVEL: Logging level written to stderr (default: ERROR)

Example usage:
    export LEXICON_INDEX_DATASET_PATH=/srv/lexicon/glossary.json
    export LEXICON_INDEX_WRITE_TIMEOUT_SECONDS=5
    export LEXICON_INDEX_LOG_LEVEL=INFO
"""
