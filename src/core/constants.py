"""
Constants and configuration for the VividMark backend.
Centralizes all magic numbers and configuration values.
Includes Pydantic validation for environment variables.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================================
# Project Paths
# ============================================================================

#: Project root directory (parent of src/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# ============================================================================
# Document Defaults
# ============================================================================

#: Display name used when a path has no extractable final segment
DEFAULT_DOCUMENT_NAME = "Untitled.md"

#: Text encoding for every read and write (no detection)
DOCUMENT_ENCODING = "utf-8"

#: Extensions the editor treats as markdown documents
MARKDOWN_EXTENSIONS: frozenset[str] = frozenset({".md", ".markdown", ".txt"})

# ============================================================================
# Error Messages (caller-facing)
# ============================================================================

ERROR_READ_PREFIX = "Failed to read file"
ERROR_SAVE_PREFIX = "Failed to save file"
ERROR_CREATE_DIR_PREFIX = "Failed to create directory"
ERROR_VERIFY_PREFIX = "Failed to verify saved file"

#: Hint logged when a write fails with an unclassified OS error
DISK_SPACE_HINT = "Unclassified write error - this may indicate insufficient disk space"

# ============================================================================
# Logging Configuration
# ============================================================================

#: Logger name shared by every backend module
LOGGER_NAME = "vividmark"

#: Maximum size for a single log file before rotation (10MB)
LOG_MAX_SIZE = 10 * 1024 * 1024

#: Number of rotated operation log files to keep
LOG_BACKUP_COUNT_OPERATIONS = 5

#: Number of rotated error log files to keep
LOG_BACKUP_COUNT_ERRORS = 3

#: Length of the per-process instance id injected into every record
INSTANCE_ID_LENGTH = 8

#: Characters of content shown in debug previews
LOG_PREVIEW_LENGTH = 50

# ============================================================================
# IPC Protocol
# ============================================================================

#: Binary protocol version spoken over stdin/stdout
PROTOCOL_VERSION = 2

#: Header flag marking a zlib-compressed payload
FLAG_COMPRESSED = 0x01

#: Payloads larger than this are compressed when it helps (1KB)
COMPRESSION_THRESHOLD = 1024

#: Hard ceiling for a single framed message (100MB)
MAX_MESSAGE_SIZE = 100 * 1024 * 1024

#: Backend version reported during protocol negotiation
SERVER_VERSION = "1.0.0"

MSG_TYPE_COMMAND = "command"
MSG_TYPE_COMMAND_RESPONSE = "command_response"
MSG_TYPE_PROTOCOL_NEGOTIATION = "protocol_negotiation"
MSG_TYPE_PROTOCOL_NEGOTIATION_RESPONSE = "protocol_negotiation_response"
MSG_TYPE_ERROR = "error"

COMMAND_READ_FILE = "read_file"
COMMAND_SAVE_FILE = "save_file"
COMMAND_FILE_EXISTS = "file_exists"

# ============================================================================
# Environment Configuration with Pydantic Validation
# ============================================================================


class Settings(BaseSettings):
    """Environment settings with validation.

    Loads from environment variables and .env file.
    Validates at startup to fail fast on configuration errors.
    """

    # Console verbosity
    debug: bool = Field(default=False, description="Enable debug logging on the console")

    # File log sink
    log_dir: str = Field(default="logs", description="Directory for JSON log files (relative to project root)")
    log_to_file: bool = Field(default=True, description="Attach rotating JSON file handlers")

    # Save integrity
    strict_write_verification: bool = Field(
        default=False,
        description="Fail a save when the on-disk size differs from the written content",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow both DEBUG and debug
        extra="ignore",  # Ignore extra environment variables
    )

    @field_validator("log_dir")
    @classmethod
    def validate_log_dir(cls, v: str) -> str:
        """Reject an empty log directory."""
        if not v.strip():
            raise ValueError("log_dir must not be empty")
        return v

    @property
    def log_path(self) -> Path:
        """Log directory resolved against the project root."""
        path = Path(self.log_dir).expanduser()
        return path if path.is_absolute() else PROJECT_ROOT / path


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to ensure we only load and validate settings once.
    This function will raise validation errors at startup if config is invalid.
    """
    return Settings()
